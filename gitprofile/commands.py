"""
commands.py — Handlers for the git-profile subcommands.

Every handler receives an AppContext holding the loaded store, the git
identity backend and the configuration, and returns the process exit status.
Console output goes to ctx.out so tests can capture it.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from dataclasses import dataclass, field
from typing import TextIO

from .config import Config
from .errors import EditorError, GitProfileError, ProfileNotFoundError, TemplateError
from .git_identity import GitIdentity
from .models import Profile
from .resolver import active_profile, resolve
from .storage import ProfileStore
from .template import render_url
from .utils import pick_editor

logger = logging.getLogger("gitprofile.commands")

NOT_FOUND_MESSAGE = "Couldn't find specified profile, or work out a default"


@dataclass
class AppContext:
    store: ProfileStore
    identity: GitIdentity
    config: Config = field(default_factory=Config)
    out: TextIO = field(default_factory=lambda: sys.stdout)

    def echo(self, text: str = "") -> None:
        print(text, file=self.out)


def cmd_list(ctx: AppContext) -> int:
    if not ctx.store.profiles:
        ctx.echo("No profiles defined")
        return 0

    active = active_profile(ctx.store, ctx.identity)
    for profile in ctx.store.profiles:
        marker = " *" if profile is active else ""
        ctx.echo(f"{profile.name}{marker}")
    return 0


def cmd_new(
    ctx: AppContext,
    name: str,
    author: str,
    email: str,
    username: str | None = None,
    url: str | None = None,
    force: bool = False,
) -> int:
    profile = Profile(name=name, author=author, email=email, username=username, url=url)
    try:
        ctx.store.save(ctx.store.with_profile(profile, replace=force))
    except GitProfileError as e:
        logger.warning("Creating profile %s failed: %s", name, e)
        ctx.echo(f"Profile create failed: {e}")
        return 1
    ctx.echo(f"Profile {name} created")
    return 0


def cmd_use(ctx: AppContext, name: str) -> int:
    profile = ctx.store.find_by_name(name)
    if profile is None:
        raise ProfileNotFoundError(f"Could not find target profile: {name}")

    # Two separate writes: if the second fails, git is left with the new
    # name and the old email.
    ctx.identity.set_name(profile.author)
    ctx.identity.set_email(profile.email)
    ctx.echo(f"Switched to profile {profile.name}")
    return 0


def cmd_url(ctx: AppContext, project: str, name: str | None = None) -> int:
    profile = resolve(ctx.store, ctx.identity, name)
    if profile is None:
        ctx.echo(NOT_FOUND_MESSAGE)
        return 0

    try:
        url = render_url(profile, project, ctx.config.default_url_template)
    except TemplateError as e:
        ctx.echo(f"Invalid url template for profile {profile.name}: {e}")
        return 1
    ctx.echo(url)
    return 0


def cmd_author(ctx: AppContext, name: str | None = None) -> int:
    profile = resolve(ctx.store, ctx.identity, name)
    if profile is None:
        ctx.echo(NOT_FOUND_MESSAGE)
        return 0
    ctx.echo(profile.author_string())
    return 0


def cmd_edit(ctx: AppContext, editor: str | None = None) -> int:
    program = pick_editor(editor, ctx.config.editor)
    cmd = [*shlex.split(program), str(ctx.store.path)]
    logger.info("Launching editor: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd)
    except OSError as e:
        raise EditorError(f"could not launch editor {program!r}: {e}") from e

    if result.returncode == 0:
        ctx.echo("Edit success!")
        return 0
    ctx.echo("Edit failed")
    return result.returncode
