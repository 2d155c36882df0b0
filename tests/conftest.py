"""Test fixtures for stalwart_preinst tests."""

from __future__ import annotations

import grp
import logging
import os
import pwd
from typing import Dict, List, Optional, Set, Tuple

import pytest

from stalwart_preinst import logging_utils
from stalwart_preinst.errors import (
    DuplicateAccountError,
    FilesystemConflictError,
    PrivilegeError,
    UnresolvedIdentityError,
)


class FakeHost:
    """In-memory host: records every call and mimics the real failure modes."""

    def __init__(self, *, privileged: bool = True) -> None:
        self.privileged = privileged
        self.accounts: Dict[str, Dict[str, object]] = {}
        self.dirs: Set[str] = set()
        self.files: Set[str] = set()
        self.owners: Dict[str, Tuple[str, str]] = {}
        self.modes: Dict[str, int] = {}
        self.calls: List[Tuple[str, str]] = []

    def _require_privilege(self, op: str, target: str) -> None:
        if not self.privileged:
            raise PrivilegeError(f"{op} {target}: permission denied", exit_code=1)

    def ensure_account(
        self,
        name: str,
        *,
        shell: str,
        create_home: bool = False,
        allow_existing: bool = False,
    ) -> bool:
        self.calls.append(("ensure_account", name))
        if name in self.accounts:
            if allow_existing:
                return False
            raise DuplicateAccountError(
                f"Account {name} already exists",
                detail=f"useradd: user '{name}' already exists",
                exit_code=9,
            )
        self._require_privilege("useradd", name)
        self.accounts[name] = {"shell": shell, "create_home": create_home}
        return True

    def ensure_directory(self, path: str) -> bool:
        self.calls.append(("ensure_directory", path))
        if path in self.files:
            raise FilesystemConflictError(f"mkdir {path}: not a directory")
        if path in self.dirs:
            return False
        self._require_privilege("mkdir", path)
        self.dirs.add(path)
        return True

    def _tree(self, path: str) -> List[str]:
        prefix = path.rstrip("/") + "/"
        return sorted(p for p in self.dirs | self.files if p == path or p.startswith(prefix))

    def set_owner_recursive(self, path: str, user: str, group: str) -> None:
        self.calls.append(("set_owner_recursive", path))
        if user not in self.accounts or group not in self.accounts:
            raise UnresolvedIdentityError(f"Cannot resolve {user}:{group}")
        self._require_privilege("chown", path)
        for p in self._tree(path):
            self.owners[p] = (user, group)

    def set_mode_recursive(self, path: str, mode: int) -> None:
        self.calls.append(("set_mode_recursive", path))
        self._require_privilege("chmod", path)
        for p in self._tree(path):
            self.modes[p] = mode

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def unprivileged_host() -> FakeHost:
    return FakeHost(privileged=False)


def _current_identity() -> Optional[Tuple[str, str]]:
    try:
        user = pwd.getpwuid(os.getuid()).pw_name
        group = grp.getgrgid(os.getgid()).gr_name
    except KeyError:
        return None
    return user, group


@pytest.fixture
def current_identity() -> Tuple[str, str]:
    """Return (user, group) names of the running process."""
    ident = _current_identity()
    if ident is None:
        pytest.skip("running uid/gid has no passwd/group entry")
    return ident


@pytest.fixture
def reset_root_logger(monkeypatch):
    monkeypatch.setattr(logging_utils, "_active_log_path", None)
    root = logging.getLogger()
    saved = list(root.handlers)
    yield root
    for h in list(root.handlers):
        if h not in saved:
            root.removeHandler(h)
            h.close()
