"""Show command for inspecting a bundle before installing it."""

import json
from pathlib import Path

import click

from bundle_kit.cli.error_boundary import cli_error_boundary
from bundle_kit.cli.output import machine_output, user_output
from bundle_kit.io.bundle import load_bundle
from bundle_kit.models.bundle import Bundle


def _bundle_to_dict(bundle: Bundle) -> dict[str, object]:
    return {
        "name": bundle.manifest.name,
        "version": bundle.manifest.version,
        "description": bundle.manifest.description,
        "commands": [
            {"name": c.name, "allowed_tools": list(c.allowed_tools)} for c in bundle.commands
        ],
        "agents": [a.name for a in bundle.agents],
        "skills": [s.name for s in bundle.skills],
        "plugin_keys": list(bundle.plugin_keys),
    }


@click.command()
@click.argument(
    "bundle-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@cli_error_boundary
def show(bundle_dir: Path, as_json: bool) -> None:
    """Show the artifacts a bundle would install."""
    bundle = load_bundle(bundle_dir)

    if as_json:
        machine_output(json.dumps(_bundle_to_dict(bundle), indent=2))
        return

    manifest = bundle.manifest
    header = manifest.name if manifest.version is None else f"{manifest.name} v{manifest.version}"
    user_output(header)
    if manifest.description:
        user_output(f"  {manifest.description}")

    user_output(f"\nCommands ({len(bundle.commands)}):")
    for command in bundle.commands:
        tools = f" [{', '.join(command.allowed_tools)}]" if command.allowed_tools else ""
        user_output(f"  /{command.name}{tools}")

    user_output(f"\nAgents ({len(bundle.agents)}):")
    for agent in bundle.agents:
        user_output(f"  {agent.name}")

    user_output(f"\nSkills ({len(bundle.skills)}):")
    for skill in bundle.skills:
        user_output(f"  {skill.name}")

    if bundle.plugin_keys:
        user_output(f"\nPlugin config keys: {', '.join(bundle.plugin_keys)}")
