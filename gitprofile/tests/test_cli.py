"""Tests for gitprofile/cli.py — end to end through main() with git replaced by MemoryIdentity."""

from __future__ import annotations

import pytest

from gitprofile.cli import build_parser, main
from gitprofile.git_identity import MemoryIdentity
from gitprofile.storage import ProfileStore


PROFILES = """\
[work]
author = "Alice Smith"
email = "alice@corp.example"
username = "asmith"
"""


# ──────────────────────────────────────────────────────────────────────────────
# Fixtures
# ──────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def identity(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("GIT_PROFILE_CONFIG", raising=False)
    monkeypatch.delenv("GIT_PROFILE_FILE", raising=False)

    fake = MemoryIdentity(email="alice@corp.example")
    scopes: list[str] = []

    def _factory(git_binary="git", scope="global"):
        scopes.append(scope)
        return fake

    monkeypatch.setattr("gitprofile.cli.GitConfigIdentity", _factory)
    fake.scopes = scopes
    return fake


@pytest.fixture
def profiles(tmp_path):
    path = tmp_path / ".git_profiles"
    path.write_text(PROFILES, encoding="utf-8")
    return path


# ──────────────────────────────────────────────────────────────────────────────
# TestParser
# ──────────────────────────────────────────────────────────────────────────────

class TestParser:
    def test_ls_alias(self):
        assert build_parser().parse_args(["ls"]).command == "ls"

    def test_new_options(self):
        args = build_parser().parse_args(["new", "oss", "Alice", "a@x.example", "-u", "al", "-r", "git@x:{{project}}"])
        assert (args.name, args.author, args.email) == ("oss", "Alice", "a@x.example")
        assert args.username == "al"
        assert args.remote == "git@x:{{project}}"
        assert args.force is False

    def test_url_requires_project(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["url"])


# ──────────────────────────────────────────────────────────────────────────────
# TestMain
# ──────────────────────────────────────────────────────────────────────────────

class TestMain:
    def test_no_command_prints_usage(self, identity, capsys):
        assert main([]) == 0
        assert "usage:" in capsys.readouterr().out

    def test_list_uses_home_profiles(self, identity, profiles, capsys):
        assert main(["list"]) == 0
        assert capsys.readouterr().out.splitlines() == ["work *"]

    def test_profiles_flag(self, identity, tmp_path, capsys):
        other = tmp_path / "other.toml"
        assert main(["--profiles", str(other), "new", "ci", "CI", "ci@example.com"]) == 0
        store = ProfileStore(other)
        store.load()
        assert store.names() == ["ci"]

    def test_author(self, identity, profiles, capsys):
        assert main(["author"]) == 0
        assert capsys.readouterr().out.strip() == "Alice Smith <alice@corp.example>"

    def test_url(self, identity, profiles, capsys):
        assert main(["url", "tool", "--profile", "work"]) == 0
        assert capsys.readouterr().out.strip() == "git@github.com:asmith/tool"

    def test_use_global_by_default(self, identity, profiles):
        assert main(["use", "work"]) == 0
        assert identity.scopes == ["global"]
        assert identity.writes == [("user.name", "Alice Smith"), ("user.email", "alice@corp.example")]

    def test_use_local_flag(self, identity, profiles):
        main(["use", "work", "--local"])
        assert identity.scopes == ["local"]

    def test_use_missing_profile_exits_nonzero(self, identity, profiles, capsys):
        assert main(["use", "nope"]) == 1
        assert "nope" in capsys.readouterr().err
        assert identity.writes == []

    def test_malformed_store_aborts_before_command(self, identity, tmp_path, capsys):
        (tmp_path / ".git_profiles").write_text("[work\n", encoding="utf-8")
        assert main(["use", "work"]) == 2
        assert "profile loading failed" in capsys.readouterr().err
        assert identity.writes == []

    def test_missing_config_file(self, identity, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "nope.yaml"), "list"]) == 2
        assert "config" in capsys.readouterr().err

    def test_non_utf8_store_aborts_before_command(self, identity, tmp_path, capsys):
        (tmp_path / ".git_profiles").write_bytes(b'[w]\nauthor = "\xff"\nemail = "a@example.com"\n')
        assert main(["list"]) == 2
        assert "UTF-8" in capsys.readouterr().err

    def test_config_section_not_a_mapping(self, identity, tmp_path, capsys):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("git: local\n")
        assert main(["--config", str(cfg), "list"]) == 2
        assert "'git' must be a mapping" in capsys.readouterr().err
