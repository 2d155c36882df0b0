from __future__ import annotations


class ProvisionError(RuntimeError):
    """A host operation failed; the pre-install hook must abort.

    ``exit_code`` is what the hook returns to the package manager and
    ``detail`` is the underlying OS or command error text.
    """

    exit_code: int = 1

    def __init__(self, message: str, *, detail: str = "", exit_code: int | None = None) -> None:
        super().__init__(message)
        self.detail = detail or message
        if exit_code is not None:
            self.exit_code = exit_code


class DuplicateAccountError(ProvisionError):
    pass


class PrivilegeError(ProvisionError):
    pass


class FilesystemConflictError(ProvisionError):
    pass


class UnresolvedIdentityError(ProvisionError):
    pass


class CommandError(ProvisionError):
    def __init__(self, argv: list[str], returncode: int, stderr: str) -> None:
        super().__init__(
            f"Command failed ({returncode}): {' '.join(argv)}",
            detail=stderr,
            exit_code=returncode,
        )
        self.argv = argv
        self.returncode = returncode
        self.stderr = stderr
