"""
config.py — Configuration loading from config.yaml + .env.

The configuration file is optional.  Without one every setting keeps its
default and the profile file lives at ~/.git_profiles.  Environment
variables from a .env file next to config.yaml are loaded before the
environment overrides (GIT_PROFILE_FILE) are applied.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .storage import default_profiles_path
from .template import DEFAULT_URL_TEMPLATE

CONFIG_ENV_VAR = "GIT_PROFILE_CONFIG"
PROFILES_ENV_VAR = "GIT_PROFILE_FILE"


def default_config_path() -> Path:
    return Path.home() / ".config" / "gitprofile" / "config.yaml"


@dataclass
class Config:
    profiles_path: str = ""                # empty: ~/.git_profiles
    default_url_template: str = DEFAULT_URL_TEMPLATE
    editor: str = "vim"                    # used when neither --editor nor $EDITOR is set
    git_binary: str = "git"
    git_scope: str = "global"              # global | local
    log_level: str = "WARNING"
    log_file: str = ""

    def resolved_profiles_path(self) -> Path:
        if self.profiles_path:
            return Path(self.profiles_path).expanduser()
        return default_profiles_path()


def _section(raw: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"{path}: '{name}' must be a mapping")
    return section


def load_config(config_path: str | None = None) -> Config:
    """Load config.yaml and an optional .env file next to it.

    An explicitly given path (argument or $GIT_PROFILE_CONFIG) must exist;
    the default location under ~/.config is optional.
    """
    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    path = Path(explicit).expanduser() if explicit else default_config_path()

    raw: dict[str, Any] = {}
    if path.exists():
        load_dotenv(path.parent / ".env", override=False)  # real env vars win
        with open(path, encoding="utf-8") as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"{path}: invalid YAML: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
    elif explicit:
        raise FileNotFoundError(f"config file not found at {path}")

    git = _section(raw, "git", path)
    logging_section = _section(raw, "logging", path)

    cfg = Config(
        profiles_path=str(raw.get("profiles_path", "")),
        default_url_template=raw.get("default_url_template", DEFAULT_URL_TEMPLATE),
        editor=raw.get("editor", "vim"),
        git_binary=git.get("binary", "git"),
        git_scope=git.get("scope", "global"),
        log_level=str(logging_section.get("level", "WARNING")).upper(),
        log_file=logging_section.get("file", ""),
    )

    env_profiles = os.environ.get(PROFILES_ENV_VAR)
    if env_profiles:
        cfg.profiles_path = env_profiles
    return cfg
