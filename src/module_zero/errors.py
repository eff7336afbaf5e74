"""Error taxonomy.

Every error raised by module-zero derives from ModuleZeroError and carries
the ``module-zero:`` prefix, so callers can tell them apart from the
underlying OSError / subprocess failures they wrap.
"""

from __future__ import annotations

from module_zero import ERROR_PREFIX


class ModuleZeroError(Exception):
    """Base class for all module-zero failures."""

    def __init__(self, message: str) -> None:
        self.detail = message
        super().__init__(f"{ERROR_PREFIX}: {message}")


class ConfigurationError(ModuleZeroError):
    """Fatal setup problem. Raised before anything is written."""


class UnknownExtension(ConfigurationError):
    """A block target whose extension has no comment style."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"no comment style mapped for '{key}'")


class IOFailure(ModuleZeroError):
    """One or more per-path copy/remove/read/write operations failed."""

    def __init__(self, failures: list[tuple[str, BaseException]]) -> None:
        self.failures = failures
        lines = [f"{len(failures)} file operation(s) failed"]
        for path, err in failures:
            lines.append(f"  {path}: {err}")
        super().__init__("\n".join(lines))


class ExternalCommandFailure(ModuleZeroError):
    """The package-manager command could not be spawned or exited non-zero."""

    def __init__(self, command: str, returncode: int | None, reason: str = "") -> None:
        self.command = command
        self.returncode = returncode
        if returncode is None:
            message = f"could not run '{command}': {reason}"
        else:
            message = f"'{command}' exited with status {returncode}"
        super().__init__(message)
