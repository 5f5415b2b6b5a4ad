"""
Integration tests running command scripts through the controller.
"""

import io

import pytest

from calendar_engine.calendars.manager import CalendarManager
from calendar_engine.controller import PROMPT, Controller
from calendar_engine.view import ConsoleView


def run_script(script, interactive=False, manager=None):
    """Run a command script; returns (finished_with_exit, output lines, manager)."""
    manager = manager or CalendarManager()
    out = io.StringIO()
    controller = Controller(
        manager,
        ConsoleView(out=out),
        io.StringIO(script),
        interactive=interactive,
    )
    finished = controller.run()
    return finished, out.getvalue().splitlines(), manager


SETUP = (
    "create calendar --name Work --timezone America/New_York\n"
    "use calendar --name Work\n"
)


class TestHeadlessSession:
    """End-to-end command sessions."""

    def test_create_query_and_status(self):
        finished, lines, _ = run_script(
            SETUP
            + 'create event "Team Sync" from 2025-06-10T10:00 to 2025-06-10T11:00\n'
            + "show status on 2025-06-10T10:30\n"
            + "show status on 2025-06-10T11:00\n"
            + "print events on 2025-06-10\n"
            + "exit\n"
        )

        assert finished
        assert "busy" in lines
        assert "available" in lines
        assert (
            "- Team Sync starting on 2025-06-10 at 10:00, ending on 2025-06-10 at 11:00"
            in lines
        )

    def test_duplicate_is_reported_and_loop_continues(self):
        create = "create event Sync from 2025-06-10T10:00 to 2025-06-10T11:00\n"
        finished, lines, manager = run_script(
            SETUP + create + create + "print all events\nexit\n"
        )

        assert finished
        assert any(line.startswith("ERROR: Failed to create event") for line in lines)
        assert len(manager.current.store) == 1
        assert lines[-1].startswith("- Sync starting on 2025-06-10")

    def test_invalid_command_does_not_stop_session(self):
        finished, lines, _ = run_script(SETUP + "delete everything\nprint all events\nexit\n")

        assert finished
        assert "ERROR: Invalid command: delete everything" in lines
        assert lines[-1] == "No events found."

    def test_event_command_without_calendar(self):
        finished, lines, _ = run_script("print all events\nexit\n")

        assert finished
        assert lines[0].startswith("ERROR: No calendar selected")

    def test_commands_after_exit_are_ignored(self):
        _, lines, manager = run_script(
            SETUP + "exit\ncreate event Late from 2025-06-10T10:00 to 2025-06-10T11:00\n"
        )
        assert len(manager.current.store) == 0

    def test_missing_exit_reported(self):
        finished, lines, _ = run_script(SETUP)

        assert not finished
        assert lines[-1] == "ERROR: Commands file must end with 'exit' command"

    def test_interactive_prompt(self):
        finished, lines, _ = run_script("exit\n", interactive=True)
        assert finished
        assert lines[0] == PROMPT


class TestSeriesCommands:
    """Series creation and scoped edits through the command language."""

    SERIES = SETUP + "create event Sync from 2025-06-09T09:00 to 2025-06-09T09:30 repeats M for 3 times\n"

    def test_edit_events_splits_forward(self):
        _, lines, manager = run_script(
            self.SERIES
            + "edit events start Sync from 2025-06-16T09:00 with 2025-06-16T08:30\n"
            + "exit\n"
        )

        assert "Events edited successfully" in lines
        events = manager.current.store.get_all()
        assert [(e.start.hour, e.start.minute) for e in events] == [(9, 0), (8, 30), (8, 30)]
        assert events[0].series_id is not None
        assert events[1].series_id is None and events[2].series_id is None

    def test_edit_series_location(self):
        _, lines, manager = run_script(
            self.SERIES
            + 'edit series location Sync from 2025-06-09T09:00 with "Room 4"\n'
            + "print events on 2025-06-23\n"
            + "exit\n"
        )

        assert "Series edited successfully" in lines
        assert lines[-1].endswith(", location: Room 4")
        assert all(e.location == "Room 4" for e in manager.current.store.get_all())

    def test_edit_series_by_any_subject_match(self):
        """A start that no member has still reaches the series by subject."""
        _, lines, manager = run_script(
            self.SERIES
            + "edit series subject Sync from 2025-06-10T09:00 with Standup\n"
            + "exit\n"
        )

        assert "Series edited successfully" in lines
        assert {e.subject for e in manager.current.store.get_all()} == {"Standup"}

    def test_edit_single_event(self):
        _, lines, manager = run_script(
            self.SERIES
            + "edit event status Sync from 2025-06-16T09:00 to 2025-06-16T09:30 with private\n"
            + "exit\n"
        )

        assert "Event edited successfully" in lines
        assert [e.is_private for e in manager.current.store.get_all()] == [False, True, False]

    def test_edit_unknown_event(self):
        _, lines, _ = run_script(
            SETUP + "edit event subject Ghost from 2025-06-10T09:00 to 2025-06-10T10:00 with X\nexit\n"
        )
        assert "ERROR: Event not found: Ghost at 2025-06-10T09:00" in lines

    def test_single_all_day_event(self):
        _, lines, manager = run_script(SETUP + "create event Holiday on 2025-07-04\nexit\n")

        assert "Created event: Holiday" in lines
        (event,) = manager.current.store.get_all()
        assert event.is_all_day
        assert event.start_date == event.end_date

    def test_all_day_series_until(self):
        _, _, manager = run_script(
            SETUP + "create event Gym on 2025-06-09 repeats MW until 2025-06-18\nexit\n"
        )

        events = manager.current.store.get_all()
        assert len(events) == 4
        assert all(e.is_all_day for e in events)


class TestCalendarCommands:
    """Calendar management, copy and export through the command language."""

    def test_copy_day_across_timezones(self):
        _, lines, manager = run_script(
            SETUP
            + "create calendar --name Home --timezone America/Los_Angeles\n"
            + "create event Call from 2025-06-10T10:00 to 2025-06-10T11:00\n"
            + "copy events on 2025-06-10 --target Home to 2025-06-20\n"
            + "use calendar --name Home\n"
            + "print events on 2025-06-20\n"
            + "exit\n"
        )

        assert "Copied 1 event(s), 0 failed" in lines
        assert lines[-1] == "- Call starting on 2025-06-20 at 07:00, ending on 2025-06-20 at 08:00"

    def test_copy_to_unknown_calendar(self):
        _, lines, _ = run_script(
            SETUP + "copy events on 2025-06-10 --target Nowhere to 2025-06-20\nexit\n"
        )
        assert "ERROR: Target calendar not found: Nowhere" in lines

    def test_rename_and_timezone_edit(self):
        _, lines, manager = run_script(
            SETUP
            + "edit calendar --name Work --property name Office\n"
            + "edit calendar --name Office --property timezone Europe/Paris\n"
            + "edit calendar --name Office --property color blue\n"
            + "exit\n"
        )

        assert manager.current.name == "Office"
        assert manager.current.timezone == "Europe/Paris"
        assert any(line.startswith("ERROR: Invalid calendar property") for line in lines)

    def test_invalid_timezone_reported(self):
        _, lines, manager = run_script("create calendar --name Bad --timezone Mars/Base\nexit\n")
        assert lines[0].startswith("ERROR: Invalid timezone 'Mars/Base'")
        assert manager.list_calendars() == []

    @pytest.mark.parametrize("filename", ["work.csv", "work.ics"])
    def test_export(self, tmp_path, filename):
        target = tmp_path / filename
        _, lines, _ = run_script(
            SETUP
            + "create event Call from 2025-06-10T10:00 to 2025-06-10T11:00\n"
            + f"export cal {target}\n"
            + "exit\n"
        )

        assert f"Calendar exported to: {target.resolve()}" in lines
        assert "Call" in target.read_text(encoding="utf-8")

    def test_export_unsupported_format(self, tmp_path):
        _, lines, _ = run_script(SETUP + f"export cal {tmp_path / 'work.txt'}\nexit\n")
        assert "ERROR: Unsupported file format. Use .csv or .ical extension." in lines
