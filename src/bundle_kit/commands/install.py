"""Install command for installing a plugin bundle."""

import json
from pathlib import Path

import click

from bundle_kit.cli.error_boundary import cli_error_boundary
from bundle_kit.cli.output import machine_output, user_output
from bundle_kit.io.bundle import load_bundle
from bundle_kit.models.installation import InstallContext
from bundle_kit.models.permissions import DEFAULT_PERMISSION_MODE, parse_permission_mode
from bundle_kit.operations.install import install_bundle


@click.command()
@click.argument(
    "bundle-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--target-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Host configuration directory (default: ~/.claude)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to merge into (default: <target-dir>/settings.json)",
)
@click.option(
    "--commands-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for command files (default: <target-dir>/commands)",
)
@click.option(
    "--agents-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for agent files (default: <target-dir>/agents)",
)
@click.option(
    "--skills-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for skill directories (default: <target-dir>/skills)",
)
@click.option(
    "--backup-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for config backups (default: next to the config file)",
)
@click.option(
    "--permissions",
    "permission_mode",
    default=DEFAULT_PERMISSION_MODE.value,
    show_default=True,
    help="How command allowed-tools become global permissions: none, broad or from-command",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the merged config without writing anything",
)
@cli_error_boundary
def install(
    bundle_dir: Path,
    target_dir: Path | None,
    config_path: Path | None,
    commands_dir: Path | None,
    agents_dir: Path | None,
    skills_dir: Path | None,
    backup_dir: Path | None,
    permission_mode: str,
    dry_run: bool,
) -> None:
    """Install a plugin bundle without clobbering existing configuration.

    Commands, agents and skills are written as individual files. Plugin
    config keys are merged into the existing config file; any value you
    have already set is kept.

    Examples:

        # Install into ~/.claude
        bundle-kit install ./plugins/compound-engineering

        # Grant every tool the commands declare
        bundle-kit install ./plugins/compound-engineering --permissions broad
    """
    # Validate the selector before touching the filesystem
    mode = parse_permission_mode(permission_mode)

    if target_dir is None:
        target_dir = Path.home() / ".claude"
    context = InstallContext.for_target(
        target_dir,
        config_path=config_path,
        commands_dir=commands_dir,
        agents_dir=agents_dir,
        skills_dir=skills_dir,
        backup_dir=backup_dir,
    )

    bundle = load_bundle(bundle_dir)
    version = f" v{bundle.manifest.version}" if bundle.manifest.version else ""

    if dry_run:
        result = install_bundle(bundle, context, mode, dry_run=True)
        user_output(f"Dry run: {bundle.manifest.name}{version} -> {context.config_path}")
        for path in result.command_paths + result.agent_paths + result.skill_paths:
            user_output(f"  would write {path}")
        machine_output(json.dumps(result.merged_config, indent=2, ensure_ascii=False))
        return

    user_output(f"Installing {bundle.manifest.name}{version} to {target_dir}...")
    result = install_bundle(bundle, context, mode)

    if result.backup_path is not None:
        user_output(f"  Backup: {result.backup_path}")
    user_output(
        f"✓ Installed {len(result.command_paths)} command(s), "
        f"{len(result.agent_paths)} agent(s), {len(result.skill_paths)} skill(s)"
    )
    if result.added_keys:
        user_output(f"  Added config keys: {', '.join(result.added_keys)}")
    if result.kept_keys:
        user_output(f"  Kept your existing values for: {', '.join(result.kept_keys)}")
    user_output(f"  Config: {context.config_path}")
