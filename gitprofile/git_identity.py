"""
git_identity.py — Reading and writing git's user.name / user.email.

Resolution and the `use` command only talk to the GitIdentity interface, so
tests swap in MemoryIdentity instead of touching the real git configuration.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod

from .errors import GitCommandError

logger = logging.getLogger("gitprofile.git_identity")

SCOPES = ("global", "local")


class GitIdentity(ABC):
    @abstractmethod
    def get_email(self) -> str | None:
        """Currently effective user.email, or None when unset."""
        ...

    @abstractmethod
    def set_name(self, name: str) -> None:
        ...

    @abstractmethod
    def set_email(self, email: str) -> None:
        ...


class GitConfigIdentity(GitIdentity):
    """Identity stored in git config, read and written through the git binary."""

    def __init__(self, git_binary: str = "git", scope: str = "global", cwd: str | None = None):
        if scope not in SCOPES:
            raise ValueError(f"unknown git config scope: {scope!r} (expected one of {', '.join(SCOPES)})")
        self.git_binary = git_binary
        self.scope = scope
        self.cwd = cwd

    def get_email(self) -> str | None:
        result = self._run_git("config", "--get", "user.email")
        # exit status 1 means the key is unset
        if result.returncode != 0:
            logger.debug("git user.email is not set (exit %d)", result.returncode)
            return None
        return result.stdout.strip() or None

    def set_name(self, name: str) -> None:
        self._set("user.name", name)

    def set_email(self, email: str) -> None:
        self._set("user.email", email)

    def _set(self, key: str, value: str) -> None:
        result = self._run_git("config", f"--{self.scope}", key, value)
        if result.returncode != 0:
            raise GitCommandError(
                f"git config {key} failed: {result.stderr.strip() or result.stdout.strip()}"
            )
        logger.info("Set %s git %s to %r", self.scope, key, value)

    def _run_git(self, *args: str) -> subprocess.CompletedProcess[str]:
        cmd = [self.git_binary, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(cmd, cwd=self.cwd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise GitCommandError(f"git executable not found: {self.git_binary}") from e


class MemoryIdentity(GitIdentity):
    """In-memory identity; records every write in `writes`."""

    def __init__(self, name: str | None = None, email: str | None = None):
        self.name = name
        self.email = email
        self.writes: list[tuple[str, str]] = []

    def get_email(self) -> str | None:
        return self.email

    def set_name(self, name: str) -> None:
        self.writes.append(("user.name", name))
        self.name = name

    def set_email(self, email: str) -> None:
        self.writes.append(("user.email", email))
        self.email = email
