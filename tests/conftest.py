"""
Pytest configuration and fixtures for batch-users tests.
"""

import os
import tempfile
from collections import defaultdict
from pathlib import Path

import pytest

from batchusers.creator import AccountCreator
from batchusers.errors import InvalidUsernameError
from batchusers.settings import BatchUserSettings


class FakeSystem:
    """In-memory stand-in for SystemAccounts.

    Home directories are real directories under home_root so preference
    files and modes can be checked on disk. Ownership changes are recorded
    instead of applied.
    """

    def __init__(self, home_root: Path):
        self.home_root = home_root
        self.users = {}
        self.passwords = {}
        self.groups = defaultdict(set)
        self.installed = set()
        self.invalid_names = set()
        self.chowned = []
        self.calls = []

    def add_existing(self, username: str, password: str = "original") -> None:
        home = self.home_root / username
        home.mkdir(parents=True, exist_ok=True)
        self.users[username] = {"shell": "/bin/sh", "home": home}
        self.passwords[username] = password
        self.groups[username].add(username)

    def user_exists(self, username):
        self.calls.append(("user_exists", username))
        return username in self.users

    def home_directory(self, username):
        return self.users[username]["home"]

    def create_user(self, username, shell):
        self.calls.append(("create_user", username, shell))
        if username in self.invalid_names:
            raise InvalidUsernameError(
                ["useradd", "-s", shell, "-m", username],
                3,
                stderr=f"useradd: invalid user name '{username}'",
            )
        home = self.home_root / username
        home.mkdir(parents=True, exist_ok=True)
        self.users[username] = {"shell": shell, "home": home}
        self.groups[username].add(username)

    def set_password(self, chpasswd_line):
        self.calls.append(("set_password", chpasswd_line))
        username, _, password = chpasswd_line.partition(":")
        self.passwords[username] = password

    def add_to_group(self, username, group):
        self.calls.append(("add_to_group", username, group))
        self.groups[group].add(username)

    def is_installed(self, binary):
        return binary in self.installed

    def add_to_daemon_group(self, username, group):
        self.calls.append(("add_to_daemon_group", username, group))
        self.groups[group].add(username)

    def chown_recursive(self, path, owner, group):
        self.calls.append(("chown_recursive", owner, group))
        self.chowned.append((path, owner, group))

    def chmod(self, path, mode):
        self.calls.append(("chmod", mode))
        os.chmod(path, mode)

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def settings(monkeypatch):
    """Default settings, isolated from the host environment and .env files."""
    monkeypatch.delenv("BATCH_USER_CREATION", raising=False)
    for name in list(os.environ):
        if name.upper().startswith("BU_"):
            monkeypatch.delenv(name, raising=False)
    return BatchUserSettings(_env_file=None)


@pytest.fixture
def fake_system(temp_dir):
    """Provide an empty fake account database rooted in a temp directory."""
    return FakeSystem(temp_dir / "home")


@pytest.fixture
def creator(fake_system, settings):
    """Provide an AccountCreator wired to the fake system."""
    return AccountCreator(system=fake_system, settings=settings)
