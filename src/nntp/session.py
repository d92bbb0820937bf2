"""
Session transcript recording for the NNTP client.

This module captures every command, status line and body exchanged during a
session so that it can be saved and viewed later.
"""

import json
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any, Optional

from .protocol import Response


PAYLOAD_PREVIEW = 200


class SessionRecorder:
    """
    Records all client-server exchanges during an NNTP session.
    """

    def __init__(self, session_id: Optional[str] = None, server: str = ""):
        self.session_id = session_id or self._generate_session_id()
        self.server = server
        self.interactions: List[Dict[str, Any]] = []
        self.start_time = time.time()

    def _generate_session_id(self) -> str:
        """Generate a unique session ID based on timestamp."""
        return f"session_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

    def _timing(self) -> Dict[str, float]:
        now = time.time()
        return {"timestamp": now, "relative_time": now - self.start_time}

    def record_request(self, command: str) -> None:
        """Record a command sent by the client."""
        self.interactions.append({
            **self._timing(),
            "type": "request",
            "direction": "client -> server",
            "command": command,
        })

    def record_response(self, response: Response) -> None:
        """Record a status line received from the server."""
        self.interactions.append({
            **self._timing(),
            "type": "response",
            "direction": "server -> client",
            "code": response.code,
            "line": response.line,
        })

    def record_body(self, payload: str) -> None:
        """Record a multi-line body; only a preview of the text is kept."""
        self.interactions.append({
            **self._timing(),
            "type": "body",
            "direction": "server -> client",
            "payload_length": len(payload),
            "payload": payload[:PAYLOAD_PREVIEW],
        })

    def record_event(self, event_type: str, description: str, details: Dict[str, Any] = None) -> None:
        """
        Record a general event (connection, disconnection, error, etc.).

        Args:
            event_type: Type of event
            description: Description of the event
            details: Additional event details
        """
        self.interactions.append({
            **self._timing(),
            "type": "event",
            "event_type": event_type,
            "description": description,
            "details": details or {},
        })

    def save_session(self, output_dir: str = "sessions") -> str:
        """
        Save the recorded session to a JSON file.

        Returns:
            str: Path to the saved session file
        """
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        session_data = {
            "session_id": self.session_id,
            "server": self.server,
            "start_time": self.start_time,
            "end_time": time.time(),
            "duration": time.time() - self.start_time,
            "total_interactions": len(self.interactions),
            "metadata": {
                "protocol": "NNTP (RFC 3977, reader subset)",
                "recorded_at": datetime.now().isoformat(),
            },
            "interactions": self.interactions,
        }

        filepath = output_path / f"{self.session_id}.json"
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(session_data, f, indent=2, ensure_ascii=False)

        return str(filepath)

    def get_session_summary(self) -> Dict[str, Any]:
        """Get a summary of the current session."""
        requests = [i for i in self.interactions if i.get("type") == "request"]
        responses = [i for i in self.interactions if i.get("type") == "response"]
        events = [i for i in self.interactions if i.get("type") == "event"]

        return {
            "session_id": self.session_id,
            "duration": time.time() - self.start_time,
            "total_interactions": len(self.interactions),
            "requests": len(requests),
            "responses": len(responses),
            "events": len(events),
            "commands_sent": [r.get("command") for r in requests],
            "codes_received": [r.get("code") for r in responses],
        }


class SessionLoader:
    """
    Loads and provides access to recorded sessions.
    """

    @staticmethod
    def load_session(filepath: str) -> Dict[str, Any]:
        """
        Load a session from a JSON file.

        Raises:
            FileNotFoundError: If session file doesn't exist
            json.JSONDecodeError: If session file is invalid JSON
        """
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)

    @staticmethod
    def list_sessions(sessions_dir: str = "sessions") -> List[Dict[str, Any]]:
        """List metadata of all saved sessions, newest first."""
        sessions_path = Path(sessions_dir)
        if not sessions_path.exists():
            return []

        sessions = []
        for session_file in sessions_path.glob("*.json"):
            try:
                session_data = SessionLoader.load_session(str(session_file))
            except json.JSONDecodeError:
                # Skip invalid session files
                continue
            sessions.append({
                "filename": session_file.name,
                "filepath": str(session_file),
                "session_id": session_data.get("session_id"),
                "server": session_data.get("server"),
                "start_time": session_data.get("start_time"),
                "duration": session_data.get("duration"),
                "total_interactions": session_data.get("total_interactions"),
                "recorded_at": session_data.get("metadata", {}).get("recorded_at"),
            })

        sessions.sort(key=lambda x: x.get("start_time") or 0, reverse=True)
        return sessions

    @staticmethod
    def get_session_interactions(session_data: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Interactions of a loaded session, skipping entries without a type."""
        return [i for i in session_data.get("interactions", []) if isinstance(i, dict) and i.get("type")]
