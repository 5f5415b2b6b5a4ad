"""
Integration tests for the command-line entry point.
"""

import pytest

from calendar_engine.__main__ import main


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep stray calendars.yaml / .env files out of the run."""
    monkeypatch.chdir(tmp_path)


def write_commands(tmp_path, text):
    path = tmp_path / "commands.txt"
    path.write_text(text, encoding="utf-8")
    return path


class TestMain:
    """Tests for main()."""

    def test_headless_run(self, tmp_path, capsys):
        commands = write_commands(
            tmp_path,
            "create calendar --name Work --timezone UTC\n"
            "use calendar --name Work\n"
            "create event Call from 2025-06-10T10:00 to 2025-06-10T11:00\n"
            "print all events\n"
            "exit\n",
        )

        assert main(["--mode", "headless", str(commands)]) == 0

        out = capsys.readouterr().out
        assert "Created calendar: Work" in out
        assert "- Call starting on 2025-06-10 at 10:00, ending on 2025-06-10 at 11:00" in out

    def test_headless_without_exit(self, tmp_path, capsys):
        commands = write_commands(tmp_path, "print all events\n")

        assert main(["--mode", "headless", str(commands)]) == 1
        assert "must end with 'exit'" in capsys.readouterr().out

    def test_headless_requires_file(self):
        assert main(["--mode", "headless"]) == 1

    def test_unreadable_file(self, tmp_path):
        assert main(["--mode", "headless", str(tmp_path / "missing.txt")]) == 1

    def test_calendars_file(self, tmp_path, capsys):
        calendars = tmp_path / "cals.yaml"
        calendars.write_text("calendars:\n  - name: Team\n    timezone: Europe/Paris\nuse: Team\n")
        commands = write_commands(
            tmp_path,
            "create event Call on 2025-06-10\nprint events on 2025-06-10\nexit\n",
        )

        assert main(["--mode", "headless", str(commands), "--calendars", str(calendars)]) == 0
        assert "- Call starting on 2025-06-10 at 08:00" in capsys.readouterr().out

    def test_mode_is_case_insensitive(self, tmp_path):
        commands = write_commands(tmp_path, "exit\n")
        assert main(["--mode", "HEADLESS", str(commands)]) == 0

    def test_unknown_mode(self):
        with pytest.raises(SystemExit):
            main(["--mode", "batch"])
