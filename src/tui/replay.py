"""
Session transcript viewer

This module renders recorded NNTP session transcripts in the terminal, either
as a full exchange table or as a listing of saved sessions.
"""

import argparse
import json
import sys
from datetime import datetime
from typing import Any, Dict, List

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..nntp.session import SessionLoader


PREVIEW_WIDTH = 100


def _truncate(value: str, width: int = PREVIEW_WIDTH) -> str:
    value = value.replace("\r\n", " ⏎ ")
    if len(value) > width:
        return value[:width - 3] + "..."
    return value


class SessionReplay:
    """
    Renders one recorded NNTP session.
    """

    def __init__(self, session_file: str, console: Console = None):
        self.session_file = session_file
        self.console = console or Console()
        self.session_data: Dict[str, Any] = SessionLoader.load_session(session_file)
        self.interactions: List[Dict[str, Any]] = SessionLoader.get_session_interactions(self.session_data)

    def create_header_panel(self) -> Panel:
        """Create the header panel with session information."""
        start_time = self.session_data.get("start_time", 0)
        start_time_str = datetime.fromtimestamp(start_time).strftime("%Y-%m-%d %H:%M:%S")

        header_text = Text()
        header_text.append("NNTP SESSION TRANSCRIPT\n", style="bold red")
        header_text.append(f"Session ID: {self.session_data.get('session_id', 'Unknown')}\n", style="cyan")
        header_text.append(f"Server: {self.session_data.get('server', 'Unknown')}\n", style="white")
        header_text.append(f"Start Time: {start_time_str}\n", style="white")
        header_text.append(f"Duration: {self.session_data.get('duration', 0):.2f}s\n", style="white")
        header_text.append(f"Total Interactions: {len(self.interactions)}", style="white")

        return Panel(header_text, title="Session Information", border_style="blue")

    @staticmethod
    def describe_interaction(interaction: Dict[str, Any]) -> Text:
        """One-line description of an interaction, styled by its type."""
        interaction_type = interaction.get("type", "unknown")

        if interaction_type == "request":
            return Text(f"→ {interaction.get('command', '')}", style="blue")
        if interaction_type == "response":
            code = interaction.get("code", 0)
            style = "red" if code == 0 or code >= 400 else "green"
            return Text(f"← {_truncate(interaction.get('line', ''))}", style=style)
        if interaction_type == "body":
            length = interaction.get("payload_length", 0)
            return Text(f"← [{length} chars] {_truncate(interaction.get('payload', ''))}", style="white")

        event_type = interaction.get("event_type", "event")
        style = "red" if "error" in event_type.lower() else "yellow"
        return Text(f"• {event_type}: {interaction.get('description', '')}", style=style)

    def create_transcript_table(self) -> Table:
        """Create the table listing every interaction in order."""
        table = Table(show_header=True, header_style="bold magenta", box=box.ROUNDED)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Time", style="cyan", justify="right")
        table.add_column("Exchange")

        for index, interaction in enumerate(self.interactions, start=1):
            table.add_row(
                str(index),
                f"{interaction.get('relative_time', 0):.3f}s",
                self.describe_interaction(interaction)
            )
        return table

    def render(self) -> Group:
        return Group(self.create_header_panel(), self.create_transcript_table())

    def show(self) -> None:
        self.console.print(self.render())


def list_sessions_command(sessions_dir: str = "sessions", console: Console = None) -> None:
    """List available session files."""
    console = console or Console()
    sessions = SessionLoader.list_sessions(sessions_dir)

    if not sessions:
        console.print(f"[yellow]No session files found in {sessions_dir}[/yellow]")
        return

    table = Table(title="Available Sessions", show_header=True, header_style="bold magenta")
    table.add_column("Session ID", style="cyan")
    table.add_column("Server", style="white")
    table.add_column("Recorded At", style="white")
    table.add_column("Duration", style="green")
    table.add_column("Interactions", style="yellow")
    table.add_column("File", style="blue")

    for session in sessions:
        duration = session.get("duration")
        duration_str = f"{duration:.2f}s" if duration else "Unknown"

        recorded_at = session.get("recorded_at") or "Unknown"
        if recorded_at != "Unknown":
            try:
                recorded_at = datetime.fromisoformat(recorded_at).strftime("%Y-%m-%d %H:%M:%S")
            except ValueError:
                pass

        table.add_row(
            session.get("session_id") or "Unknown",
            session.get("server") or "",
            recorded_at,
            duration_str,
            str(session.get("total_interactions", 0)),
            session.get("filename", "")
        )

    console.print(table)


def main(argv: List[str] = None) -> int:
    """Main entry point for the transcript viewer."""
    parser = argparse.ArgumentParser(description="NNTP session transcript viewer")
    parser.add_argument("--session", "-s", help="Session file to show")
    parser.add_argument("--list", "-l", action="store_true", help="List available sessions")
    parser.add_argument("--sessions-dir", default="sessions", help="Directory containing session files")

    args = parser.parse_args(argv)
    console = Console()

    if args.list:
        list_sessions_command(args.sessions_dir, console)
        return 0

    if not args.session:
        console.print("[red]Error: No session file specified[/red]")
        console.print("Use --session <file> to specify a session file")
        console.print("Use --list to see available sessions")
        return 1

    try:
        SessionReplay(args.session, console).show()
        return 0
    except FileNotFoundError:
        console.print(f"[red]Session file not found: {args.session}[/red]")
        return 1
    except json.JSONDecodeError:
        console.print(f"[red]Invalid JSON in session file: {args.session}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
