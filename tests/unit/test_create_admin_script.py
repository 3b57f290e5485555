from __future__ import annotations

import runpy
from pathlib import Path

import pytest

from portfolio.utils.passwords import verify_password

MODULE_GLOBALS = runpy.run_path(str(Path(__file__).resolve().parents[2] / "scripts" / "create_admin.py"))
MAIN = MODULE_GLOBALS["main"]


def test_creates_admin_when_missing(memory_repo, capsys):
    exit_code = MAIN(["--username", "owner", "--password", "s3cret"], repo=memory_repo)

    assert exit_code == 0
    user = memory_repo.get_user_by_username("owner")
    assert user.is_admin is True
    assert verify_password("s3cret", user.password)
    assert "created" in capsys.readouterr().out


def test_resets_password_and_grants_admin(memory_repo, capsys):
    from portfolio.db import schemas

    memory_repo.create_user(schemas.UserCreate(username="owner", password="old-hash", is_admin=False))

    exit_code = MAIN(["--username", "owner", "--password", "n3w"], repo=memory_repo)

    assert exit_code == 0
    user = memory_repo.get_user_by_username("owner")
    assert user.is_admin is True
    assert verify_password("n3w", user.password)
    assert memory_repo.get_user(2) is None
    assert "updated" in capsys.readouterr().out


def test_prompts_when_no_password_is_configured(memory_repo, monkeypatch):
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
    prompts = []

    def fake_getpass(prompt):
        prompts.append(prompt)
        return "typed-in"

    monkeypatch.setattr("getpass.getpass", fake_getpass)

    assert MAIN(["--username", "owner"], repo=memory_repo) == 0
    assert prompts == ["Password for owner: "]
    user = memory_repo.get_user_by_username("owner")
    assert verify_password("typed-in", user.password)
    assert not verify_password("admin123", user.password)


def test_uses_admin_password_from_environment(memory_repo, monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", "from-env")
    monkeypatch.setattr("getpass.getpass", lambda prompt: pytest.fail("unexpected prompt"))

    assert MAIN(["--username", "owner"], repo=memory_repo) == 0
    assert verify_password("from-env", memory_repo.get_user_by_username("owner").password)
