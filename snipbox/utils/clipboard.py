"""System clipboard access through the platform's helper commands."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
import tempfile
from typing import List, Protocol, Sequence

from ..exception_handler import ClipboardError

logger = logging.getLogger("snipbox")


class Clipboard(Protocol):
    def write(self, text: str) -> None: ...


def candidate_commands(platform: str | None = None) -> List[Sequence[str]]:
    """Helper commands that accept clipboard text on stdin, in preference order."""
    platform = platform or sys.platform
    if platform == "darwin":
        return [["pbcopy"]]
    if platform.startswith("win") or platform == "cygwin":
        return [["clip"]]

    commands: List[Sequence[str]] = []
    if os.getenv("WAYLAND_DISPLAY"):
        commands.append(["wl-copy"])
    commands.extend(
        [
            ["xclip", "-selection", "clipboard"],
            ["xsel", "--clipboard", "--input"],
        ]
    )
    return commands


class SystemClipboard:
    """Write text to the desktop clipboard by piping it to a helper command."""

    def __init__(self, commands: Sequence[Sequence[str]] | None = None, *, timeout: float = 5.0) -> None:
        self.commands = list(commands) if commands is not None else candidate_commands()
        self.timeout = timeout

    def resolve_command(self) -> Sequence[str]:
        for command in self.commands:
            if shutil.which(command[0]):
                return command
        names = ", ".join(command[0] for command in self.commands) or "none"
        raise ClipboardError(f"No clipboard helper found (tried: {names})")

    def write(self, text: str) -> None:
        command = self.resolve_command()
        logger.debug("Copying %d characters with %s", len(text), command[0])
        # xclip and wl-copy fork a child that keeps the selection alive; it
        # inherits stderr, so stderr must not be a pipe or run() waits for it.
        with tempfile.TemporaryFile() as stderr_file:
            try:
                result = subprocess.run(
                    list(command),
                    input=text.encode("utf-8"),
                    stdout=subprocess.DEVNULL,
                    stderr=stderr_file,
                    timeout=self.timeout,
                    check=False,
                )
            except (OSError, subprocess.TimeoutExpired) as exc:
                raise ClipboardError(f"Clipboard helper {command[0]} failed: {exc}") from exc

            stderr_file.seek(0)
            detail = stderr_file.read().decode("utf-8", errors="replace").strip()

        if result.returncode != 0:
            raise ClipboardError(
                f"Clipboard helper {command[0]} exited with {result.returncode}"
                + (f": {detail}" if detail else "")
            )


__all__ = ["Clipboard", "SystemClipboard", "candidate_commands"]
