"""Error taxonomy for bundle installation.

Every error raised by the installer derives from InstallError so the CLI
error boundary can report it without a stack trace.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bundle_kit.models.installation import InstallStage


class InstallError(Exception):
    """Base class for installer failures.

    failed_stage is set by install_bundle to the step that was running when
    the error was raised; it stays None for errors raised outside a run.
    """

    failed_stage: "InstallStage | None" = None


class BundleLoadError(InstallError):
    """Raised when a bundle source tree cannot be read."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot load bundle at {path}: {detail}")


class MalformedExistingConfigError(InstallError):
    """Raised when the target config exists but is not a JSON object."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Existing config {path} is not valid JSON object data: {detail}")


class BackupWriteError(InstallError):
    """Raised when the pre-merge backup could not be persisted."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write backup {path}: {cause}")


class UnsupportedPermissionModeError(InstallError, ValueError):
    """Raised when the permission mode selector is not recognized."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"Unsupported permission mode: {value!r} (expected none, broad or from-command)"
        )


class UnsupportedPermissionMappingError(InstallError):
    """Raised when from-command mode cannot translate a tool restriction."""

    def __init__(self, command: str, entry: str, reason: str) -> None:
        self.command = command
        self.entry = entry
        self.reason = reason
        super().__init__(
            f"Command '{command}': allowed tool {entry!r} has no permission equivalent ({reason})"
        )


@dataclass(frozen=True)
class ArtifactWriteFailure:
    """A single artifact that failed to write."""

    artifact_type: str
    name: str
    destination: Path
    error: str


class CommandWriteError(InstallError):
    """Raised after WRITE_COMMANDS when one or more artifacts failed."""

    def __init__(self, failures: list[ArtifactWriteFailure]) -> None:
        self.failures = failures
        lines = [f"{len(failures)} artifact(s) failed to write; config left untouched:"]
        for failure in failures:
            lines.append(
                f"  {failure.artifact_type} '{failure.name}' -> {failure.destination}: "
                f"{failure.error}"
            )
        super().__init__("\n".join(lines))


class ConfigWriteError(InstallError):
    """Raised when the merged config could not be written."""

    def __init__(self, path: Path, backup_path: Path | None, cause: OSError) -> None:
        self.path = path
        self.backup_path = backup_path
        self.cause = cause
        if backup_path is None:
            backup_note = "no backup was needed (config did not exist before)"
        else:
            backup_note = f"original config is preserved in {backup_path}"
        super().__init__(f"Failed to write config {path}: {cause}; {backup_note}")
