"""
Tests for the command-line interface and the interactive shell.

The CLI is driven through main() with an argument list; prompts read from a
replaced sys.stdin.
"""

import io

import pytest

from peopledb.cli.console import ask_fields, format_table
from peopledb.cli.main import EXIT_ERROR, EXIT_OK, main
from peopledb.cli.shell import PeopleShell
from peopledb.core.models import PersonFields
from peopledb.core.store import PeopleStore


NEW_JOHN = [
    "new",
    "--first-name", "John",
    "--last-name", "Smith",
    "--date-of-birth", "1960-10-10",
    "--favorite-sport", "football",
]


def feed_stdin(monkeypatch, text: str) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(text))


class TestMain:
    """Test one-shot commands."""

    def test_new(self, csv_path, capsys):
        exit_code = main([str(csv_path)] + NEW_JOHN)

        assert exit_code == EXIT_OK
        assert "Added person 1" in capsys.readouterr().out
        assert csv_path.read_text(encoding="utf-8").splitlines()[1] == "1,John,Smith,1960-10-10,football"

    def test_new_missing_argument(self, csv_path, capsys):
        exit_code = main([str(csv_path), "new", "--date-of-birth", "1960-10-10", "--favorite-sport", "football"])

        err = capsys.readouterr().err
        assert exit_code == EXIT_ERROR
        assert "Error: Missing required argument: first_name" in err
        assert "Error: Missing required argument: last_name" in err
        assert err.count("Error:") == 2
        assert not csv_path.exists()

    def test_new_blank_argument_is_invalid(self, csv_path, capsys):
        argv = list(NEW_JOHN)
        argv[argv.index("John")] = ""

        exit_code = main([str(csv_path)] + argv)

        assert exit_code == EXIT_ERROR
        assert "Error: first_name: must not be empty" in capsys.readouterr().err
        assert not csv_path.exists()

    def test_edit_blank_flag_is_invalid(self, sample_csv, capsys):
        before = sample_csv.read_bytes()

        exit_code = main([str(sample_csv), "edit", "--id", "1", "--first-name", ""])

        assert exit_code == EXIT_ERROR
        assert "Error: first_name: must not be empty" in capsys.readouterr().err
        assert sample_csv.read_bytes() == before

    def test_interrupted_shell_exits_cleanly(self, sample_csv, monkeypatch, capsys):
        def interrupt(self, intro=None):
            raise KeyboardInterrupt

        monkeypatch.setattr(PeopleShell, "cmdloop", interrupt)

        exit_code = main([str(sample_csv)])

        assert exit_code == EXIT_ERROR
        assert "Aborted" in capsys.readouterr().err

    def test_new_reports_every_invalid_field(self, csv_path, capsys):
        exit_code = main([
            str(csv_path), "new",
            "--first-name", "John",
            "--last-name", "Smith",
            "--date-of-birth", "2999-01-01",
            "--favorite-sport", "chess",
        ])

        err = capsys.readouterr().err
        assert exit_code == EXIT_ERROR
        assert err.count("Error:") == 2
        assert "in the future" in err
        assert "unknown sport 'chess'" in err

    @pytest.mark.parametrize("command", ["print", "list"])
    def test_print(self, sample_csv, capsys, command):
        exit_code = main([str(sample_csv), command])

        out = capsys.readouterr().out
        assert exit_code == EXIT_OK
        assert "First Name" in out
        assert "Smith" in out
        assert "Water polo" in out

    def test_print_empty(self, csv_path, capsys):
        assert main([str(csv_path), "print"]) == EXIT_OK
        assert "No people loaded" in capsys.readouterr().out

    def test_help(self, csv_path, capsys):
        assert main([str(csv_path), "help"]) == EXIT_OK
        assert "Valid options:" in capsys.readouterr().out

    def test_edit_with_flags(self, sample_csv, capsys):
        exit_code = main([str(sample_csv), "edit", "--index", "2", "--last-name", "Dough"])

        assert exit_code == EXIT_OK
        assert "Updated person 2" in capsys.readouterr().out
        assert PeopleStore.load(sample_csv).get(2).last_name == "Dough"

    def test_edit_prompts(self, sample_csv, capsys, monkeypatch):
        feed_stdin(monkeypatch, "2\n\nDough\n\n\n")

        exit_code = main([str(sample_csv), "edit"])

        out = capsys.readouterr().out
        assert exit_code == EXIT_OK
        assert "Editing person 2: Jane Doe" in out
        person = PeopleStore.load(sample_csv).get(2)
        assert (person.first_name, person.last_name) == ("Jane", "Dough")

    def test_edit_invalid_index(self, sample_csv, capsys, monkeypatch):
        feed_stdin(monkeypatch, "two\n")

        assert main([str(sample_csv), "edit"]) == EXIT_ERROR
        assert "Invalid index" in capsys.readouterr().err

    def test_delete_by_id(self, sample_csv, capsys):
        exit_code = main([str(sample_csv), "delete", "--id", "3", "--yes"])

        assert exit_code == EXIT_OK
        assert "Deleted person 3" in capsys.readouterr().out
        assert [p.id for p in PeopleStore.load(sample_csv)] == [1, 2]

    def test_delete_confirmation_declined(self, sample_csv, capsys, monkeypatch):
        before = sample_csv.read_bytes()
        feed_stdin(monkeypatch, "1\nn\n")

        exit_code = main([str(sample_csv), "delete"])

        assert exit_code == EXIT_OK
        assert "Nothing deleted" in capsys.readouterr().out
        assert sample_csv.read_bytes() == before

    def test_delete_unknown_id(self, sample_csv, capsys):
        assert main([str(sample_csv), "delete", "--id", "99", "--yes"]) == EXIT_ERROR
        assert "No person with id 99" in capsys.readouterr().err

    def test_end_of_input_aborts(self, sample_csv, capsys, monkeypatch):
        feed_stdin(monkeypatch, "")

        assert main([str(sample_csv), "delete"]) == EXIT_ERROR
        assert "Aborted" in capsys.readouterr().err

    def test_corrupt_file(self, csv_path, capsys):
        csv_path.write_text("id,first_name\n1,John\n", encoding="utf-8")

        assert main([str(csv_path), "print"]) == EXIT_ERROR
        assert "Corrupt row at line 1" in capsys.readouterr().err

    def test_usage_errors_exit_with_two(self, csv_path):
        with pytest.raises(SystemExit) as exc_info:
            main([str(csv_path), "explode"])

        assert exc_info.value.code == 2

    def test_without_command_starts_shell(self, sample_csv, capsys, monkeypatch):
        feed_stdin(monkeypatch, "print\nexit\n")

        assert main([str(sample_csv)]) == EXIT_OK
        assert "Jane" in capsys.readouterr().out


class TestShell:
    """Test the interactive shell."""

    def run_shell(self, store: PeopleStore, script: str) -> str:
        stdout = io.StringIO()
        PeopleShell(store, stdin=io.StringIO(script), stdout=stdout).cmdloop()
        return stdout.getvalue()

    def test_session(self, sample_store):
        script = (
            "new\nAda\nLovelace\n1815-12-10\nother\n"
            "edit 4\n\nByron\n\n\n"
            "delete 1\ny\n"
            "print\n"
            "exit\n"
        )

        out = self.run_shell(sample_store, script)

        assert "Added person 4" in out
        assert "Updated person 4" in out
        assert "Deleted person 1" in out
        assert [p.id for p in sample_store] == [2, 3, 4]
        assert sample_store.get(4).last_name == "Byron"

    def test_errors_do_not_end_session(self, sample_store):
        out = self.run_shell(sample_store, "delete 9\nbogus\nedit\nhelp\nq\n")

        assert "Error: Index 9 out of range" in out
        assert "Unknown command: bogus" in out
        assert "Usage: edit <index>" in out
        assert "Available commands:" in out

    def test_invalid_new_lists_every_problem(self, sample_store):
        out = self.run_shell(sample_store, "n\nAda\nLovelace\n10/12/1815\nchess\nexit\n")

        assert out.count("Error:") == 2
        assert len(sample_store) == 3

    def test_declined_delete(self, sample_store):
        self.run_shell(sample_store, "d 1\nno\nexit\n")

        assert len(sample_store) == 3

    def test_end_of_input_cancels_prompt(self, sample_store):
        out = self.run_shell(sample_store, "new\nAda\n")

        assert "Cancelled" in out
        assert len(sample_store) == 3


class TestConsole:
    """Test prompting and table helpers."""

    def test_ask_fields_blank_keeps_none(self):
        answers = iter(["", "Jones", " ", "golf"])

        fields = ask_fields(PersonFields("John", "Smith", "1960-10-10", "football"), lambda prompt: next(answers))

        assert fields == PersonFields(None, "Jones", None, "golf")

    def test_ask_fields_shows_current_values(self):
        prompts = []

        def fake_input(prompt):
            prompts.append(prompt)
            return ""

        ask_fields(PersonFields("John", "Smith", "1960-10-10", "football"), fake_input)

        assert prompts[0] == "First name [John]: "
        assert "[1960-10-10]" in prompts[2]

    def test_format_table(self, sample_store, today):
        lines = format_table(sample_store.list_records(), today).splitlines()

        assert lines[0].split() == ["#", "ID", "First", "Name", "Last", "Name", "Age", "Favorite", "Sport"]
        assert lines[2].split()[:5] == ["1", "1", "John", "Smith", "63"]
        assert len(lines) == 5
