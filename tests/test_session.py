"""
Tests for session transcript recording.
"""

import json
import tempfile
from pathlib import Path

import pytest

from src.nntp.protocol import Response
from src.nntp.session import PAYLOAD_PREVIEW, SessionLoader, SessionRecorder


class TestSessionRecorder:
    """Test cases for SessionRecorder class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.recorder = SessionRecorder("test_session", server="news.example.com:119")

    def test_recorder_initialization(self):
        assert self.recorder.session_id == "test_session"
        assert self.recorder.server == "news.example.com:119"
        assert self.recorder.interactions == []

    def test_generated_session_id(self):
        recorder = SessionRecorder()
        assert recorder.session_id.startswith("session_")

    def test_record_request_and_response(self):
        self.recorder.record_request("group misc.test")
        self.recorder.record_response(Response(211, "211 3 1 3 misc.test"))

        request, response = self.recorder.interactions
        assert request["type"] == "request"
        assert request["command"] == "group misc.test"
        assert request["direction"] == "client -> server"
        assert response["type"] == "response"
        assert response["code"] == 211
        assert response["line"] == "211 3 1 3 misc.test"
        assert response["relative_time"] >= 0

    def test_record_body_keeps_preview(self):
        payload = "x" * (PAYLOAD_PREVIEW * 2)
        self.recorder.record_body(payload)

        body = self.recorder.interactions[0]
        assert body["payload_length"] == len(payload)
        assert len(body["payload"]) == PAYLOAD_PREVIEW

    def test_record_event(self):
        self.recorder.record_event("connection", "Connected", {"welcome": "200 ready"})

        event = self.recorder.interactions[0]
        assert event["type"] == "event"
        assert event["event_type"] == "connection"
        assert event["details"] == {"welcome": "200 ready"}

    def test_session_summary(self):
        self.recorder.record_request("next")
        self.recorder.record_response(Response(421, "421 no next article"))
        self.recorder.record_event("disconnection", "Client disconnected")

        summary = self.recorder.get_session_summary()

        assert summary["total_interactions"] == 3
        assert summary["requests"] == 1
        assert summary["responses"] == 1
        assert summary["events"] == 1
        assert summary["commands_sent"] == ["next"]
        assert summary["codes_received"] == [421]

    def test_save_session(self):
        self.recorder.record_request("list active")
        self.recorder.record_response(Response(215, "215 list follows"))

        with tempfile.TemporaryDirectory() as temp_dir:
            filepath = self.recorder.save_session(temp_dir)

            assert filepath.endswith("test_session.json")
            with open(filepath, 'r') as f:
                data = json.load(f)

        assert data["session_id"] == "test_session"
        assert data["server"] == "news.example.com:119"
        assert data["total_interactions"] == 2
        assert "recorded_at" in data["metadata"]

    def test_save_session_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "sessions"
        filepath = self.recorder.save_session(str(target))
        assert Path(filepath).exists()


class TestSessionLoader:
    """Test cases for SessionLoader class."""

    def write_session(self, directory: Path, name: str, data: dict) -> str:
        filepath = directory / name
        filepath.write_text(json.dumps(data), encoding="utf-8")
        return str(filepath)

    def test_load_session_round_trip(self, tmp_path):
        recorder = SessionRecorder("round_trip")
        recorder.record_request("stat <a@example.com>")
        filepath = recorder.save_session(str(tmp_path))

        interactions = SessionLoader.get_session_interactions(SessionLoader.load_session(filepath))

        assert interactions[0]["command"] == "stat <a@example.com>"

    def test_load_session_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            SessionLoader.load_session("non_existent_file.json")

    def test_load_session_invalid_json(self, tmp_path):
        filepath = tmp_path / "invalid.json"
        filepath.write_text("invalid json content")
        with pytest.raises(json.JSONDecodeError):
            SessionLoader.load_session(str(filepath))

    def test_list_sessions_non_existent_directory(self):
        assert SessionLoader.list_sessions("non_existent_directory") == []

    def test_list_sessions_newest_first(self, tmp_path):
        self.write_session(tmp_path, "session_1.json", {
            "session_id": "session_1", "server": "a:119", "start_time": 1234567890,
            "duration": 5.0, "total_interactions": 3,
            "metadata": {"recorded_at": "2023-01-01T12:00:00"}
        })
        self.write_session(tmp_path, "session_2.json", {
            "session_id": "session_2", "server": "b:119", "start_time": 1234567900,
            "duration": 8.0, "total_interactions": 5,
            "metadata": {"recorded_at": "2023-01-01T12:01:00"}
        })
        (tmp_path / "broken.json").write_text("{not json")
        (tmp_path / "notes.txt").write_text("not a session")

        sessions = SessionLoader.list_sessions(str(tmp_path))

        assert [s["session_id"] for s in sessions] == ["session_2", "session_1"]
        assert sessions[0]["filename"] == "session_2.json"
        assert sessions[0]["server"] == "b:119"
        assert sessions[0]["recorded_at"] == "2023-01-01T12:01:00"
