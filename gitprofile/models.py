"""
Profile record shared by the store, the resolver and the command handlers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import ProfileParseError

REQUIRED_FIELDS = ("author", "email")
OPTIONAL_FIELDS = ("username", "url")


@dataclass
class Profile:
    name: str                        # table key in the profile file, never a field
    author: str
    email: str
    username: str | None = None
    url: str | None = None           # remote template; None means the default template

    def author_string(self) -> str:
        return f"{self.author} <{self.email}>"

    def render_fields(self, project: str) -> dict[str, str]:
        return {"username": self.username or "", "project": project}

    def to_dict(self) -> dict[str, str]:
        data = {"author": self.author, "email": self.email}
        if self.username is not None:
            data["username"] = self.username
        if self.url is not None:
            data["url"] = self.url
        return data

    @classmethod
    def from_dict(cls, name: str, d: Any) -> "Profile":
        if not isinstance(d, dict):
            raise ProfileParseError(f"profile {name!r}: expected a table, got {type(d).__name__}")

        for key in REQUIRED_FIELDS:
            if key not in d:
                raise ProfileParseError(f"profile {name!r}: missing required field {key!r}")
        for key in REQUIRED_FIELDS + OPTIONAL_FIELDS:
            if key in d and not isinstance(d[key], str):
                raise ProfileParseError(
                    f"profile {name!r}: field {key!r} must be a string, got {type(d[key]).__name__}"
                )

        return cls(
            name=name,
            author=str(d["author"]),
            email=str(d["email"]),
            username=str(d["username"]) if "username" in d else None,
            url=str(d["url"]) if "url" in d else None,
        )
