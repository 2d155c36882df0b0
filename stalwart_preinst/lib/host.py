from __future__ import annotations

import grp
import logging
import os
import pwd
from pathlib import Path
from typing import Iterator, Protocol

from ..errors import (
    CommandError,
    DuplicateAccountError,
    FilesystemConflictError,
    PrivilegeError,
    ProvisionError,
    UnresolvedIdentityError,
)
from .command import run_cmd

logger = logging.getLogger(__name__)

# useradd(8) exit statuses.
USERADD_CANT_UPDATE_PASSWD = 1
USERADD_NAME_IN_USE = 9
USERADD_CANT_UPDATE_GROUP = 10


class Host(Protocol):
    """The host OS operations the pre-install hook needs."""

    def ensure_account(
        self,
        name: str,
        *,
        shell: str,
        create_home: bool = False,
        allow_existing: bool = False,
    ) -> bool:
        ...

    def ensure_directory(self, path: str) -> bool:
        ...

    def set_owner_recursive(self, path: str, user: str, group: str) -> None:
        ...

    def set_mode_recursive(self, path: str, mode: int) -> None:
        ...


def account_exists(name: str) -> bool:
    try:
        pwd.getpwnam(name)
    except KeyError:
        return False
    return True


def _os_error(op: str, path: str, e: OSError) -> ProvisionError:
    detail = f"{op}: {e}"
    if isinstance(e, PermissionError):
        return PrivilegeError(f"{op} {path}: permission denied", detail=detail)
    if isinstance(e, (FileExistsError, NotADirectoryError)):
        return FilesystemConflictError(f"{op} {path}: not a directory", detail=detail)
    return ProvisionError(f"{op} {path} failed", detail=detail)


def _raise(e: OSError) -> None:
    raise e


def _walk_tree(root: str) -> Iterator[str]:
    """Yield root and everything below it without following symlinks."""

    yield root
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        for name in dirnames + filenames:
            yield os.path.join(dirpath, name)


class SystemHost:
    """Host implementation backed by the running system."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def ensure_account(
        self,
        name: str,
        *,
        shell: str,
        create_home: bool = False,
        allow_existing: bool = False,
    ) -> bool:
        """Create a system account (and its same-named group).

        Returns True when the account was created. An existing account is an
        error unless allow_existing is set.
        """

        if account_exists(name):
            if allow_existing:
                logger.info("Account %s already exists; leaving it unchanged", name)
                return False
            if self.dry_run:
                # useradd is not run in dry-run, so report what it would say.
                raise DuplicateAccountError(
                    f"Account {name} already exists",
                    detail=f"useradd: user '{name}' already exists\n",
                    exit_code=USERADD_NAME_IN_USE,
                )

        argv = [
            "useradd",
            "--system",
            "--user-group",
            "--shell",
            shell,
            "--create-home" if create_home else "--no-create-home",
            name,
        ]
        try:
            run_cmd(argv, dry_run=self.dry_run)
        except CommandError as e:
            if e.returncode == USERADD_NAME_IN_USE:
                raise DuplicateAccountError(
                    f"Account {name} already exists", detail=e.stderr, exit_code=e.returncode
                ) from e
            if e.returncode in (USERADD_CANT_UPDATE_PASSWD, USERADD_CANT_UPDATE_GROUP):
                raise PrivilegeError(
                    f"Cannot create account {name}", detail=e.stderr, exit_code=e.returncode
                ) from e
            raise
        if not self.dry_run:
            logger.info("Created system account %s (shell=%s)", name, shell)
        return True

    def ensure_directory(self, path: str) -> bool:
        """mkdir -p; returns True when the directory did not exist before."""

        p = Path(path)
        if self.dry_run:
            logger.info("Would create directory %s", path)
            return not p.is_dir()

        existed = p.is_dir()
        try:
            p.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise _os_error("mkdir", path, e) from e
        if not existed:
            logger.info("Created directory %s", path)
        return not existed

    def set_owner_recursive(self, path: str, user: str, group: str) -> None:
        if self.dry_run:
            # Nothing was created by useradd, so the account need not resolve yet.
            logger.info("Would chown -R %s:%s %s", user, group, path)
            return

        try:
            uid = pwd.getpwnam(user).pw_uid
            gid = grp.getgrnam(group).gr_gid
        except KeyError as e:
            raise UnresolvedIdentityError(
                f"Cannot resolve {user}:{group}",
                detail=f"chown: invalid user: '{user}:{group}'",
            ) from e

        count = 0
        try:
            for p in _walk_tree(path):
                os.chown(p, uid, gid, follow_symlinks=False)
                count += 1
        except OSError as e:
            raise _os_error("chown", path, e) from e
        logger.info("Set owner %s:%s on %s (%d entries)", user, group, path, count)

    def set_mode_recursive(self, path: str, mode: int) -> None:
        if self.dry_run:
            logger.info("Would chmod -R %o %s", mode, path)
            return

        count = 0
        try:
            for p in _walk_tree(path):
                # chmod on a symlink would change its target.
                if os.path.islink(p):
                    continue
                os.chmod(p, mode)
                count += 1
        except OSError as e:
            raise _os_error("chmod", path, e) from e
        logger.info("Set mode %o on %s (%d entries)", mode, path, count)
