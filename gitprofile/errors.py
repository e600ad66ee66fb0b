from __future__ import annotations

from pathlib import Path


class GitProfileError(Exception):
    pass


class ProfileStoreError(GitProfileError):
    """The profile file could not be located, read or written."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class ProfileParseError(ProfileStoreError):
    pass


class ProfileExistsError(GitProfileError):
    pass


class ProfileNotFoundError(GitProfileError, LookupError):
    pass


class TemplateError(GitProfileError, ValueError):
    pass


class GitCommandError(RuntimeError):
    pass


class EditorError(GitProfileError):
    pass
