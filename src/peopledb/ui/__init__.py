"""
Qt user interface package.

The only package allowed to import PySide6.
"""
