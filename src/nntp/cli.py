"""
Command-line news reader built on the NNTP client.

Without ``--groups`` the server's group list is printed; otherwise every
article of each requested group is printed in turn.
"""

import argparse
import re
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..utils.logging import configure_cli_logging
from .client import NNTPClient
from .exceptions import NNTPError
from .protocol import ContentMode


CANCEL_PATTERN = re.compile(r"^(control:\s*cancel\b|subject:\s*cmsg cancel\b)", re.IGNORECASE | re.MULTILINE)


def is_article_canceled(article: str) -> bool:
    """
    Detect a cancel control message from its headers.

    A body fetched on its own carries no headers, so its cancel goes unnoticed.
    """
    return bool(CANCEL_PATTERN.search(article))


def print_groups(console: Console, news: NNTPClient) -> None:
    groups = news.list_groups()
    table = Table(title=f"Groups on {news.server}", show_header=True, header_style="bold magenta")
    table.add_column("Group", style="cyan")
    table.add_column("Articles", style="yellow", justify="right")
    for name in sorted(groups):
        table.add_row(name, str(groups[name]))
    console.print(table)


def print_articles(console: Console, news: NNTPClient, groups: List[str], show_canceled: bool) -> int:
    printed = 0
    for group in groups:
        for article in news.iter_articles(group):
            if is_article_canceled(article) and not show_canceled:
                continue
            console.print(article, markup=False, highlight=False)
            console.rule(style="dim")
            printed += 1
    return printed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NNTP news reader")
    parser.add_argument("--server", required=True, help="IP / address of the NNTP server")
    parser.add_argument("--port", default="nntp", help="Port number or service name (default: nntp)")
    parser.add_argument("--groups", help="Comma-separated list of groups; not set = show group list")
    parser.add_argument("--content", choices=[mode.value for mode in ContentMode],
                        default=ContentMode.BODY.value, help="Content of articles (default: body)")
    parser.add_argument("--canceled", action="store_true",
                        help="Show canceled articles; cancel messages are only recognized "
                             "with --content full or --content header")
    parser.add_argument("--timeout", type=float, help="Socket timeout in seconds (default: none)")
    parser.add_argument("--unescape-dots", action="store_true", help="Remove dot-stuffing from bodies")
    parser.add_argument("--record", action="store_true", help="Record the session transcript")
    parser.add_argument("--sessions-dir", default="sessions", help="Directory for session transcripts")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the news reader."""
    args = build_parser().parse_args(argv)
    console = Console()
    logger = configure_cli_logging(args.verbose, sys.stderr)

    port = int(args.port) if args.port.isdigit() else args.port
    news = NNTPClient(
        args.server, port, timeout=args.timeout, logger=logger,
        record_session=args.record, unescape_dots=args.unescape_dots
    )
    news.content = ContentMode(args.content)

    try:
        with news:
            if args.groups:
                groups = [group.strip() for group in args.groups.split(",") if group.strip()]
                print_articles(console, news, groups, args.canceled)
            else:
                print_groups(console, news)
        return 0

    except KeyboardInterrupt:
        console.print("\nAborted by user")
        return 1
    except NNTPError as e:
        console.print(f"[red]FAILED: {e}[/red]")
        return 1
    finally:
        if news.session_recorder:
            session_file = news.session_recorder.save_session(args.sessions_dir)
            summary = news.session_recorder.get_session_summary()
            logger.info(f"Session saved to: {session_file}")
            console.print(
                f"[dim]Session saved to {session_file} (commands sent: {summary['requests']}, "
                f"{summary['duration']:.2f}s)[/dim]",
                soft_wrap=True
            )


if __name__ == "__main__":
    sys.exit(main())
