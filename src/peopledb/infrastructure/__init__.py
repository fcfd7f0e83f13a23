"""
Infrastructure layer package.

This package contains modules for interacting with the outside world:
- CSV file reading and atomic writing
- Logging configuration
- Path utilities

Modules here must not import GUI frameworks (PySide6, Qt, etc.).
"""
