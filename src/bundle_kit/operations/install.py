"""Install orchestration.

Runs a bundle install as a fixed sequence of steps:

    READ_EXISTING -> BACKUP -> MERGE -> WRITE_COMMANDS -> WRITE_CONFIG

Each step either completes or raises an InstallError, which ends the run.
The config file is written last so that a failed artifact write never
leaves a config referencing files that do not exist.
"""

import logging
from datetime import datetime
from pathlib import Path

from bundle_kit.errors import BackupWriteError, CommandWriteError, ConfigWriteError, InstallError
from bundle_kit.io.config_json import load_config, save_config, write_backup
from bundle_kit.models.bundle import Bundle
from bundle_kit.models.config import ConfigDocument
from bundle_kit.models.installation import InstallContext, InstallResult, InstallStage
from bundle_kit.models.permissions import PermissionMode
from bundle_kit.operations.artifacts import command_destination, write_artifacts
from bundle_kit.operations.config_merge import merge, merge_report
from bundle_kit.operations.permissions import build_permission_fragment

logger = logging.getLogger(__name__)


def build_incoming(bundle: Bundle, mode: PermissionMode) -> ConfigDocument:
    """Combine the bundle's plugin keys with the permission fragment.

    Static plugin keys take precedence over the generated fragment.
    """
    fragment = build_permission_fragment(bundle.commands, mode)
    return merge(bundle.plugin_keys, fragment)


def install_bundle(
    bundle: Bundle,
    context: InstallContext,
    mode: PermissionMode = PermissionMode.NONE,
    *,
    dry_run: bool = False,
    timestamp: datetime | None = None,
) -> InstallResult:
    """Install a bundle into the target described by context.

    Args:
        bundle: Loaded bundle
        context: Destination paths
        mode: Permission mode for translating allowed tools
        dry_run: Compute the merged config without touching disk
        timestamp: Run timestamp used to tag the backup (defaults to now)

    Returns:
        InstallResult describing what was written and which config keys were
        added or kept

    Raises:
        UnsupportedPermissionMappingError: Before any I/O, in from-command mode
        MalformedExistingConfigError: Existing config is unparseable
        BackupWriteError: Backup could not be written
        CommandWriteError: One or more artifacts failed; config not written
        ConfigWriteError: Final config write failed

    Raised errors have failed_stage set to the step that was running.
    """
    stage = InstallStage.START
    try:
        incoming = build_incoming(bundle, mode)

        stage = InstallStage.READ_EXISTING
        logger.debug("Reading existing config %s", context.config_path)
        existing = load_config(context.config_path)

        if dry_run:
            return _dry_run_result(bundle, context, existing, incoming)

        stage = InstallStage.BACKUP
        backup_path: Path | None = None
        if existing is not None:
            try:
                backup_path = write_backup(context.config_path, context.backup_dir, timestamp)
            except OSError as e:
                raise BackupWriteError(context.backup_dir, e) from e
            logger.debug("Backed up %s to %s", context.config_path, backup_path)

        stage = InstallStage.MERGE
        merged = merge(existing, incoming)
        report = merge_report(existing, incoming)

        stage = InstallStage.WRITE_COMMANDS
        outcome = write_artifacts(bundle, context)
        if outcome.failures:
            raise CommandWriteError(outcome.failures)

        stage = InstallStage.WRITE_CONFIG
        try:
            save_config(context.config_path, merged)
        except OSError as e:
            raise ConfigWriteError(context.config_path, backup_path, e) from e
    except InstallError as e:
        e.failed_stage = stage
        logger.debug("Install %s during %s", InstallStage.FAILED.value, stage.value)
        raise

    logger.debug("Installed %s into %s", bundle.manifest.name, context.config_path.parent)
    return InstallResult(
        stage=InstallStage.DONE,
        merged_config=merged,
        backup_path=backup_path,
        command_paths=outcome.command_paths,
        agent_paths=outcome.agent_paths,
        skill_paths=outcome.skill_paths,
        added_keys=report.added,
        kept_keys=report.kept,
        config_written=True,
    )


def _dry_run_result(
    bundle: Bundle,
    context: InstallContext,
    existing: ConfigDocument | None,
    incoming: ConfigDocument,
) -> InstallResult:
    report = merge_report(existing, incoming)
    return InstallResult(
        stage=InstallStage.DONE,
        merged_config=merge(existing, incoming),
        backup_path=None,
        command_paths=[command_destination(context.commands_dir, c) for c in bundle.commands],
        agent_paths=[context.agents_dir / a.relative_path for a in bundle.agents],
        skill_paths=[context.skills_dir / s.name for s in bundle.skills],
        added_keys=report.added,
        kept_keys=report.kept,
        config_written=False,
        dry_run=True,
    )
