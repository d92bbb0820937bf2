"""
Tests for the session transcript viewer.
"""

import json
from io import StringIO

import pytest
from rich.console import Console

from src.nntp.protocol import Response
from src.nntp.session import SessionRecorder
from src.tui.replay import SessionReplay, list_sessions_command, main


def make_console():
    return Console(file=StringIO(), width=160, color_system=None)


@pytest.fixture
def session_file(tmp_path):
    recorder = SessionRecorder("replay_session", server="news.example.com:119")
    recorder.record_event("connection", "Connected to news.example.com:119")
    recorder.record_request("body <a@example.com>")
    recorder.record_response(Response(222, "222 0 <a@example.com> body"))
    recorder.record_body("Hello world\r\n")
    recorder.record_request("stat <gone@example.com>")
    recorder.record_response(Response(430, "430 no such article"))
    recorder.record_event("error", "430 no such article found")
    return recorder.save_session(str(tmp_path))


class TestSessionReplay:
    """Test cases for SessionReplay."""

    def test_loads_interactions(self, session_file):
        replay = SessionReplay(session_file, make_console())
        assert len(replay.interactions) == 7
        assert replay.session_data["session_id"] == "replay_session"

    def test_untyped_entries_are_skipped(self, tmp_path):
        transcript = tmp_path / "hand_edited.json"
        transcript.write_text(json.dumps({
            "session_id": "hand_edited",
            "interactions": [{"type": "request", "command": "quit"}, {"command": "orphan"}, "junk"],
        }))

        replay = SessionReplay(str(transcript), make_console())

        assert replay.interactions == [{"type": "request", "command": "quit"}]

    def test_show_renders_transcript(self, session_file):
        console = make_console()
        SessionReplay(session_file, console).show()

        output = console.file.getvalue()
        assert "NNTP SESSION TRANSCRIPT" in output
        assert "news.example.com:119" in output
        assert "→ body <a@example.com>" in output
        assert "← 430 no such article" in output
        assert "[13 chars]" in output

    def test_describe_interaction_styles(self):
        error_line = SessionReplay.describe_interaction({"type": "response", "code": 430, "line": "430 gone"})
        ok_line = SessionReplay.describe_interaction({"type": "response", "code": 211, "line": "211 ok"})
        event = SessionReplay.describe_interaction({"type": "event", "event_type": "error", "description": "boom"})

        assert str(error_line.style) == "red"
        assert str(ok_line.style) == "green"
        assert event.plain == "• error: boom"

    def test_long_payload_truncated(self):
        text = SessionReplay.describe_interaction(
            {"type": "body", "payload_length": 500, "payload": "y" * 500}
        )
        assert text.plain.endswith("...")


class TestListSessions:
    """Test cases for the session listing."""

    def test_list_sessions(self, session_file, tmp_path):
        console = make_console()
        list_sessions_command(str(tmp_path), console)

        output = console.file.getvalue()
        assert "replay_session" in output
        assert "news.example.com:119" in output

    def test_list_sessions_empty(self, tmp_path):
        console = make_console()
        list_sessions_command(str(tmp_path), console)
        assert "No session files found" in console.file.getvalue()


class TestMain:
    """Test cases for the viewer entry point."""

    def test_main_with_session(self, session_file, capsys):
        assert main(["--session", session_file]) == 0
        assert "replay_session" in capsys.readouterr().out

    def test_main_list(self, session_file, tmp_path):
        assert main(["--list", "--sessions-dir", str(tmp_path)]) == 0

    def test_main_no_arguments(self, capsys):
        assert main([]) == 1
        assert "No session file specified" in capsys.readouterr().out

    def test_main_missing_file(self):
        assert main(["--session", "does_not_exist.json"]) == 1

    def test_main_invalid_json(self, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("not json")
        assert main(["--session", str(broken)]) == 1

    def test_saved_file_is_valid_json(self, session_file):
        with open(session_file, encoding="utf-8") as f:
            assert json.load(f)["total_interactions"] == 7
