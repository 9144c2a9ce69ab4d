"""Installation target and result models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from bundle_kit.models.config import ConfigDocument

DEFAULT_CONFIG_FILENAME = "settings.json"


class InstallStage(Enum):
    """Steps of an install run, in execution order."""

    START = "start"
    READ_EXISTING = "read_existing"
    BACKUP = "backup"
    MERGE = "merge"
    WRITE_COMMANDS = "write_commands"
    WRITE_CONFIG = "write_config"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class InstallContext:
    """Resolved destination paths for an install run."""

    config_path: Path
    commands_dir: Path
    agents_dir: Path
    skills_dir: Path
    backup_dir: Path

    @staticmethod
    def for_target(
        target_dir: Path,
        config_path: Path | None = None,
        commands_dir: Path | None = None,
        agents_dir: Path | None = None,
        skills_dir: Path | None = None,
        backup_dir: Path | None = None,
    ) -> "InstallContext":
        """Create a context rooted at target_dir with optional overrides.

        Args:
            target_dir: Host configuration directory (e.g. ~/.claude)
            config_path: Config file path (defaults to target_dir/settings.json)
            commands_dir: Commands directory (defaults to target_dir/commands)
            agents_dir: Agents directory (defaults to target_dir/agents)
            skills_dir: Skills directory (defaults to target_dir/skills)
            backup_dir: Backup directory (defaults to the config file's directory)

        Returns:
            InstallContext with every path resolved
        """
        resolved_config = (
            config_path if config_path is not None else target_dir / DEFAULT_CONFIG_FILENAME
        )
        return InstallContext(
            config_path=resolved_config,
            commands_dir=commands_dir if commands_dir is not None else target_dir / "commands",
            agents_dir=agents_dir if agents_dir is not None else target_dir / "agents",
            skills_dir=skills_dir if skills_dir is not None else target_dir / "skills",
            backup_dir=backup_dir if backup_dir is not None else resolved_config.parent,
        )


@dataclass(frozen=True)
class InstallResult:
    """Outcome of a completed (or dry) install run.

    added_keys and kept_keys are dotted config paths: keys the plugin
    introduced, and keys where the existing value shadowed a differing
    plugin value.
    """

    stage: InstallStage
    merged_config: ConfigDocument
    backup_path: Path | None
    command_paths: list[Path] = field(default_factory=list)
    agent_paths: list[Path] = field(default_factory=list)
    skill_paths: list[Path] = field(default_factory=list)
    added_keys: list[str] = field(default_factory=list)
    kept_keys: list[str] = field(default_factory=list)
    config_written: bool = False
    dry_run: bool = False
