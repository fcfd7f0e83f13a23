"""
Main application entry point.

This module initializes and runs the PySide6 application.
"""

import sys
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QApplication

from peopledb import __version__
from peopledb.config.settings import get_settings
from peopledb.infrastructure.logging_config import setup_logging, get_logger
from peopledb.ui.main_window import MainWindow


logger = get_logger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the GUI application.

    Args:
        argv: Command-line arguments without the program name. The first one,
            if present, is a people file to open.

    Returns:
        The Qt event loop exit code.
    """
    if argv is None:
        argv = sys.argv[1:]

    settings = get_settings()
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file_path,
        log_to_file=settings.log_to_file
    )

    logger.info("Starting peopledb application")

    app = QApplication([sys.argv[0]] + list(argv))
    app.setApplicationName("peopledb")
    app.setApplicationVersion(__version__)

    window = MainWindow()
    window.apply_theme(settings.theme)
    window.show()

    # Open the file given on the command line, else the last one used
    if argv:
        window.open_file(Path(argv[0]))
    elif settings.last_file and Path(settings.last_file).exists():
        window.open_file(Path(settings.last_file))

    logger.info("Main window displayed")

    exit_code = app.exec()

    logger.info(f"Application exiting with code {exit_code}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
