"""Command-line entry point for git-profile."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .commands import AppContext, cmd_author, cmd_edit, cmd_list, cmd_new, cmd_url, cmd_use
from .config import load_config
from .errors import GitCommandError, GitProfileError
from .git_identity import GitConfigIdentity
from .storage import ProfileStore
from .utils import setup_logging, verbosity_to_level

logger = logging.getLogger("gitprofile.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-profile",
        description="Easy multi-identity profiles for git",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--profiles", help="Path to the profile file (default ~/.git_profiles)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")

    sub = parser.add_subparsers(dest="command")

    new = sub.add_parser("new", help="Create new profile")
    new.add_argument("name", metavar="PROFILE", help="Name of profile to create")
    new.add_argument("author", metavar="AUTHOR")
    new.add_argument("email", metavar="EMAIL")
    new.add_argument("-u", "--username")
    new.add_argument("-r", "--remote", help="Remote url template, e.g. git@host:{{username}}/{{project}}")
    new.add_argument("--force", action="store_true", help="Replace an existing profile with the same name")

    sub.add_parser("list", aliases=["ls"], help="List profiles")

    use = sub.add_parser("use", help="Switch profile")
    use.add_argument("name", metavar="PROFILE", help="Profile to operate on")
    use.add_argument("--local", action="store_true", help="Write to the current repository's config instead")

    url = sub.add_parser("url", help="Generate remote url")
    url.add_argument("project", metavar="PROJECT", help="Project name")
    url.add_argument("-p", "--profile", help="Profile to use")

    author = sub.add_parser("author", help="Get profile's author string in git format")
    author.add_argument("-p", "--profile", help="Profile to use")

    edit = sub.add_parser("edit", help="Edit profiles")
    edit.add_argument("--editor")

    return parser


def dispatch(ctx: AppContext, args: argparse.Namespace) -> int:
    if args.command in ("list", "ls"):
        return cmd_list(ctx)
    if args.command == "new":
        return cmd_new(ctx, args.name, args.author, args.email, args.username, args.remote, args.force)
    if args.command == "use":
        return cmd_use(ctx, args.name)
    if args.command == "url":
        return cmd_url(ctx, args.project, args.profile)
    if args.command == "author":
        return cmd_author(ctx, args.profile)
    if args.command == "edit":
        return cmd_edit(ctx, args.editor)
    raise ValueError(f"unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_usage()
        return 0

    try:
        cfg = load_config(args.config)
        # unknown level names raise ValueError
        setup_logging(verbosity_to_level(args.verbose, cfg.log_level), cfg.log_file)
    except (OSError, ValueError) as e:
        print(f"error: failed to load config: {e}", file=sys.stderr)
        return 2

    try:
        path = Path(args.profiles).expanduser() if args.profiles else cfg.resolved_profiles_path()
        store = ProfileStore(path)
        store.load()
    except GitProfileError as e:
        logger.error("Profile loading failed: %s", e)
        print(f"error: profile loading failed, check your profile config: {e}", file=sys.stderr)
        return 2

    scope = "local" if getattr(args, "local", False) else cfg.git_scope
    try:
        identity = GitConfigIdentity(cfg.git_binary, scope)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    ctx = AppContext(store=store, identity=identity, config=cfg)

    try:
        return dispatch(ctx, args)
    except (GitProfileError, GitCommandError) as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
