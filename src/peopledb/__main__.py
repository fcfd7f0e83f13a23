"""
Run peopledb with `python -m peopledb`.

With arguments this is the command-line interface; without, the GUI starts.
"""

import sys


def main() -> int:
    if len(sys.argv) > 1:
        from peopledb.cli.main import main as cli_main
        return cli_main()

    # Imported lazily so the CLI works without a display
    from peopledb.ui.app import main as gui_main
    return gui_main()


if __name__ == "__main__":
    sys.exit(main())
