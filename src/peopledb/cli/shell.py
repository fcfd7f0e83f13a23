"""
Interactive shell.

Started by `peopledb <file>` without a command. Every change is written to
the file immediately, so there is nothing to save on exit.
"""

import cmd
from typing import Optional

from ..core.commands import RecordRef, bind_command, execute
from ..core.errors import PeopleDBError
from ..core.models import PersonFields
from ..core.store import PeopleStore
from ..infrastructure.logging_config import get_logger
from .console import ask_fields, confirm, format_table, report_error


logger = get_logger(__name__)


class PeopleShell(cmd.Cmd):
    """Read-eval-print loop over the command layer."""

    intro = "peopledb interactive mode. Type 'help' for a list of commands."
    prompt = "> "

    def __init__(self, store: PeopleStore, stdin=None, stdout=None):
        """
        Initialize the shell.

        Args:
            store: Store to operate on.
            stdin: Input stream (defaults to sys.stdin).
            stdout: Output stream (defaults to sys.stdout).
        """
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            # cmd only honours a custom stdin when readline is off
            self.use_rawinput = False
        self.store = store

    def _print(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _input(self, prompt: str) -> str:
        if self.use_rawinput:
            return input(prompt)
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def _run(self, name: str, arguments: Optional[dict] = None) -> None:
        result = execute(self.store, bind_command(name, arguments))
        if result.operation == "print":
            self._print(format_table(result.records))
        else:
            self._print(result.message)

    def _parse_index(self, arg: str, usage: str) -> Optional[RecordRef]:
        try:
            return RecordRef.by_index(int(arg.strip()))
        except ValueError:
            self._print(f"Usage: {usage}")
            return None

    def onecmd(self, line: str) -> bool:
        try:
            return super().onecmd(line)
        except PeopleDBError as e:
            report_error(e, self.stdout)
        except EOFError:
            self._print()
            self._print("Cancelled")
        return False

    def emptyline(self) -> bool:
        # Do not repeat the previous command
        return False

    def default(self, line: str) -> bool:
        self._print(f"Unknown command: {line.split()[0]}. Type 'help' for a list of commands.")
        return False

    def do_print(self, arg: str) -> None:
        """Display all people."""
        self._run("print")

    def do_new(self, arg: str) -> None:
        """Add a new person."""
        self._print("Adding new person:")
        fields = ask_fields(input_func=self._input)
        self._run("new", fields.as_dict())

    def do_edit(self, arg: str) -> None:
        """Edit the person at an index: edit <index>"""
        target = self._parse_index(arg, "edit <index>")
        if target is None:
            return
        current = self.store.get(target.resolve(self.store))
        self._print(f"Editing person at index {target.value}: {current.full_name}")
        self._print("Leave a value blank to keep it.")
        fields = ask_fields(PersonFields.from_person(current), input_func=self._input)
        self._run("edit", dict(fields.as_dict(), target=target))

    def do_delete(self, arg: str) -> None:
        """Delete the person at an index: delete <index>"""
        target = self._parse_index(arg, "delete <index>")
        if target is None:
            return
        person = self.store.get(target.resolve(self.store))
        if confirm(f"Are you sure you want to delete {person.full_name}?", input_func=self._input):
            self._run("delete", {"target": target})

    def do_help(self, arg: str) -> None:
        """Show the command summary."""
        self._run("help")
        self._print("  exit, quit, q            - Exit the program")

    def do_exit(self, arg: str) -> bool:
        """Exit the program."""
        return True

    def do_EOF(self, arg: str) -> bool:
        self._print()
        return True

    # Short aliases, as listed by 'help'
    do_list = do_print
    do_p = do_print
    do_n = do_new
    do_e = do_edit
    do_d = do_delete
    do_h = do_help
    do_quit = do_exit
    do_q = do_exit
