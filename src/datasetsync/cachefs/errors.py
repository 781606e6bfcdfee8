"""Errors raised by cache filesystem operations."""

from __future__ import annotations


class ScanError(Exception):
    """Base exception for cache filesystem scan and query failures."""


class MetadataQueryError(ScanError):
    """Failed to read a value from a backed up metadata-info file."""


class CommandError(ScanError):
    """A command executed in the cache master pod failed.

    Attributes:
        command: The command that was executed.
        returncode: Exit code of the command (None if it timed out).
        stderr: Captured standard error.
    """

    def __init__(
        self,
        command: list[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        status = "timed out" if returncode is None else f"exited with {returncode}"
        super().__init__(f"Command {' '.join(command)!r} {status}: {stderr.strip()}")
