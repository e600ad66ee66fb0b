from __future__ import annotations

import logging
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .errors import ProfileExistsError, ProfileParseError, ProfileStoreError
from .models import Profile

logger = logging.getLogger("gitprofile.storage")

PROFILES_FILENAME = ".git_profiles"


def default_profiles_path() -> Path:
    try:
        home = Path.home()
    except RuntimeError as e:
        raise ProfileStoreError(f"cannot resolve home directory for the profile file: {e}") from e
    return home / PROFILES_FILENAME


class ProfileStore:
    """All profiles from one TOML file, kept in load order.

    Each top-level key of the document is a profile name and its value is a
    table of profile fields.  The file is always rewritten whole; there is no
    locking, so two processes saving at once means the last writer wins.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self.profiles: list[Profile] = []

    def __len__(self) -> int:
        return len(self.profiles)

    def __iter__(self):
        return iter(self.profiles)

    def load(self) -> list[Profile]:
        if not self.path.exists():
            logger.debug("Profile file %s does not exist, starting empty", self.path)
            self.profiles = []
            return self.profiles

        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ProfileParseError(f"{self.path} is not valid UTF-8: {e}", self.path) from e
        except OSError as e:
            raise ProfileStoreError(f"cannot read {self.path}: {e}", self.path) from e

        self.profiles = self.parse(text, self.path)
        logger.debug("Loaded %d profiles from %s", len(self.profiles), self.path)
        return self.profiles

    @staticmethod
    def parse(text: str, path: Path | None = None) -> list[Profile]:
        where = path or "<string>"
        try:
            raw = tomlkit.parse(text).unwrap()
        except TOMLKitError as e:
            raise ProfileParseError(f"malformed profile file {where}: {e}", path) from e

        profiles: list[Profile] = []
        for name, table in raw.items():
            try:
                profiles.append(Profile.from_dict(name, table))
            except ProfileParseError as e:
                raise ProfileParseError(f"{where}: {e}", path) from e
        return profiles

    def save(self, profiles: list[Profile] | None = None) -> None:
        # the in-memory set only changes once the file has been written
        profiles = list(self.profiles if profiles is None else profiles)

        doc = tomlkit.document()
        for profile in profiles:
            table = tomlkit.table()
            table.update(profile.to_dict())
            doc.add(profile.name, table)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(tomlkit.dumps(doc), encoding="utf-8")
        except OSError as e:
            raise ProfileStoreError(f"cannot write {self.path}: {e}", self.path) from e
        self.profiles = profiles
        logger.info("Saved %d profiles to %s", len(self.profiles), self.path)

    def with_profile(self, profile: Profile, replace: bool = False) -> list[Profile]:
        """Copy of the profile list with `profile` added, leaving the store untouched."""
        profiles = list(self.profiles)
        for i, existing in enumerate(profiles):
            if existing.name != profile.name:
                continue
            if not replace:
                raise ProfileExistsError(f"profile already exists: {profile.name}")
            profiles[i] = profile
            return profiles
        profiles.append(profile)
        return profiles

    def add(self, profile: Profile, replace: bool = False) -> None:
        self.profiles = self.with_profile(profile, replace)

    def names(self) -> list[str]:
        return [p.name for p in self.profiles]

    def find_by_name(self, name: str) -> Profile | None:
        return next((p for p in self.profiles if p.name == name), None)

    def find_by_email(self, email: str) -> Profile | None:
        return next((p for p in self.profiles if p.email == email), None)
