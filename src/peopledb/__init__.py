"""
peopledb - a small personal-records database.

This package provides a CSV-backed store of person records with a
command-line interface and a graphical table editor.
"""

__version__ = "0.1.0"
