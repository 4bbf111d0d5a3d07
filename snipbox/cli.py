"""Command-line interface for snipbox.

One invocation runs one store operation. Output goes through Rich consoles;
``--no-color`` swaps in plain ones.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

from .config import FILE_ENV_VAR, StoreConfig
from .exception_handler import (
    ClipboardError,
    MalformedStoreError,
    SnippetNotFoundError,
    setup_logging,
)
from .snippet import Snippet, SnippetStore
from .utils.clipboard import Clipboard, SystemClipboard

logger = logging.getLogger("snipbox")

START_HINT = 'Use the "add" command to start saving snippets!'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snipbox",
        description="Save, search and reuse code snippets from the terminal",
    )
    parser.add_argument(
        "--file",
        dest="file",
        default=None,
        help=f"Snippets file to use (defaults to {FILE_ENV_VAR} or ~/.snippets.json)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Logging level for diagnostics on stderr (default: WARNING)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    add_parser = subparsers.add_parser("add", help="Add a new snippet")
    add_parser.add_argument("--title", help="Snippet title")
    add_parser.add_argument("--code", help="Snippet code")
    add_parser.add_argument("--tags", help="Comma-separated tags (e.g., python,cli)")

    list_parser = subparsers.add_parser("list", help="List all snippets or filter by tag")
    list_parser.add_argument("--tag", help="Filter by tag")

    search_parser = subparsers.add_parser("search", help="Search snippets by title or code")
    search_parser.add_argument("query", help="Text to look for (case-insensitive)")

    show_parser = subparsers.add_parser("show", help="Show a single snippet by ID")
    show_parser.add_argument("id", type=int, help="Snippet ID")

    copy_parser = subparsers.add_parser("copy", help="Copy a snippet to the clipboard")
    copy_parser.add_argument("id", type=int, help="Snippet ID")

    delete_parser = subparsers.add_parser("delete", help="Delete a snippet by ID")
    delete_parser.add_argument("id", type=int, help="Snippet ID")

    return parser


def render_snippet(console: Console, snippet: Snippet) -> None:
    console.print(Text(f"ID: {snippet.id} | Title: {snippet.title}", style="cyan"))
    console.print(Text.assemble("Code: ", (snippet.code, "bright_black")))
    tags = ", ".join(snippet.tags) or "None"
    console.print(Text(f"Tags: {tags} | Created: {snippet.created.isoformat()}"))
    console.print(Text("---"))


def render_snippets(console: Console, heading: str, snippets: Sequence[Snippet]) -> None:
    if not snippets:
        console.print(Text("No snippets found.", style="yellow"))
        return
    console.print(Text(heading, style="blue"))
    for snippet in snippets:
        render_snippet(console, snippet)


def prompt_for_missing(args: argparse.Namespace, console: Console) -> tuple[str, str, str | None]:
    """Ask for title/code when either flag is missing.

    The tags question is always asked in that case; a --tags value still wins.
    """
    title, code, tags = args.title, args.code, args.tags
    if title and code:
        return title, code, tags

    answered_title = answered_code = None
    if not title:
        answered_title = Prompt.ask("Enter snippet title", console=console, default="", show_default=False)
    if not code:
        answered_code = Prompt.ask("Enter snippet code", console=console, default="", show_default=False)
    answered_tags = Prompt.ask(
        "Enter tags (comma-separated, optional)", console=console, default="", show_default=False
    )

    return title or answered_title or "", code or answered_code or "", tags or answered_tags


def cmd_add(args: argparse.Namespace, store: SnippetStore, console: Console) -> int:
    title, code, tags = prompt_for_missing(args, console)
    snippet = store.add(title, code, tags)
    console.print(Text(f'Snippet "{snippet.title}" added with ID: {snippet.id}', style="green"))
    return 0


def cmd_list(args: argparse.Namespace, store: SnippetStore, console: Console) -> int:
    render_snippets(console, "Snippets:", store.list(args.tag))
    return 0


def cmd_search(args: argparse.Namespace, store: SnippetStore, console: Console) -> int:
    render_snippets(console, "Search Results:", store.search(args.query))
    return 0


def cmd_show(args: argparse.Namespace, store: SnippetStore, console: Console) -> int:
    snippet = store.get(args.id)
    if snippet is None:
        raise SnippetNotFoundError(args.id)
    render_snippet(console, snippet)
    return 0


def cmd_copy(
    args: argparse.Namespace,
    store: SnippetStore,
    console: Console,
    clipboard: Clipboard,
) -> int:
    snippet = store.copy(args.id, clipboard)
    console.print(Text(f'Snippet "{snippet.title}" copied to clipboard!', style="green"))
    return 0


def cmd_delete(args: argparse.Namespace, store: SnippetStore, console: Console) -> int:
    snippet = store.delete(args.id)
    console.print(Text(f'Snippet "{snippet.title}" deleted.', style="green"))
    return 0


def main(argv: Sequence[str] | None = None, *, clipboard: Clipboard | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console(no_color=args.no_color, highlight=False, soft_wrap=True)
    err_console = Console(stderr=True, no_color=args.no_color, highlight=False, soft_wrap=True)

    if not args.command:
        parser.print_help()
        console.print(Text(START_HINT, style="cyan"))
        return 0

    config = StoreConfig.from_env(path=args.file, log_level=args.log_level)
    setup_logging(config.log_level)
    store = SnippetStore(config.path)
    logger.debug("Running %s against %s", args.command, config.path)

    try:
        if args.command == "add":
            return cmd_add(args, store, console)
        if args.command == "list":
            return cmd_list(args, store, console)
        if args.command == "search":
            return cmd_search(args, store, console)
        if args.command == "show":
            return cmd_show(args, store, console)
        if args.command == "copy":
            return cmd_copy(args, store, console, clipboard or SystemClipboard())
        if args.command == "delete":
            return cmd_delete(args, store, console)
    except SnippetNotFoundError as exc:
        console.print(Text(str(exc), style="red"))
        return 1
    except ClipboardError as exc:
        err_console.print(Text(f"Could not copy to clipboard: {exc}", style="red"))
        return 1
    except MalformedStoreError as exc:
        logger.debug("Malformed store at %s", exc.path)
        err_console.print(Text(f"Error: {exc}", style="red"))
        return 1
    except KeyboardInterrupt:
        err_console.print(Text("\nInterrupted", style="yellow"))
        return 130
    except EOFError:
        err_console.print(Text("\nNo input available; pass --title and --code instead.", style="red"))
        return 1
    except Exception:
        logger.exception("Fatal error while running %s", args.command)
        err_console.print(Text("Fatal error occurred. See log for details.", style="red"))
        return 1

    parser.error(f"unknown command: {args.command}")


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
