"""Error kinds raised by the vault core.

Core modules raise these; the tool boundary in ``tools/tracker_tools.py``
turns them into structured ``{"error": ...}`` results.
"""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for tracker operations."""


class NotInitialized(TrackerError):
    """No vault path configured (neither persisted nor in the environment)."""

    def __init__(self) -> None:
        super().__init__(
            "Obsidian Tracker not initialized. "
            "Please run initVault first with your Obsidian vault path."
        )


class InvalidVaultPath(TrackerError):
    """Configured vault path is missing or not a directory."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f'Vault path "{path}" does not exist or is not a directory. '
            "Please run initVault with a valid path."
        )


class ProjectNotFound(TrackerError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Project "{name}" not found in vault')


class ProjectExists(TrackerError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Project "{name}" already exists (dashboard present)')


class MissingArgument(TrackerError):
    def __init__(self, name: str) -> None:
        self.argument = name
        super().__init__(f"Missing required argument: {name}")


class InvalidArgument(TrackerError):
    """Argument present but outside its allowed values."""


class InvalidName(TrackerError):
    """Project name or bug title cannot be used as a file name."""


class IOFailure(TrackerError):
    """Underlying filesystem error; message is passed through verbatim."""
