"""Core domain logic package.

This package contains the record model, field validation, the CSV-backed
store and the command layer shared by the CLI and the GUI.
Modules here must not import GUI frameworks (PySide6, Qt, etc.).
"""
