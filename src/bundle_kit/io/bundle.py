"""Bundle source reader.

Reads a plugin source tree laid out as:

    <bundle>/
        .claude-plugin/plugin.json
        .mcp.json
        config.json
        commands/**/*.md
        agents/**/*.md
        skills/<name>/SKILL.md
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from bundle_kit.errors import BundleLoadError
from bundle_kit.io.frontmatter import normalize_allowed_tools, parse_frontmatter
from bundle_kit.models.bundle import (
    AgentArtifact,
    Bundle,
    CommandArtifact,
    PluginManifest,
    SkillArtifact,
)
from bundle_kit.models.config import ConfigDocument, validate_config_document
from bundle_kit.operations.config_merge import merge

logger = logging.getLogger(__name__)

MANIFEST_RELATIVE_PATH = Path(".claude-plugin") / "plugin.json"
MCP_CONFIG_FILENAME = ".mcp.json"
PLUGIN_CONFIG_FILENAME = "config.json"


def load_bundle(bundle_dir: Path) -> Bundle:
    """Load every installable artifact from a bundle source tree.

    Args:
        bundle_dir: Root directory of the plugin bundle

    Returns:
        Bundle with manifest, commands, agents, skills and plugin keys

    Raises:
        BundleLoadError: If the directory is missing or any bundle file is invalid
    """
    if not bundle_dir.is_dir():
        raise BundleLoadError(bundle_dir, "not a directory")

    manifest = load_manifest(bundle_dir)
    commands = load_commands(bundle_dir / "commands")
    agents = load_agents(bundle_dir / "agents")
    skills = load_skills(bundle_dir / "skills")
    plugin_keys = load_plugin_keys(bundle_dir)

    logger.debug(
        "Loaded bundle %s: %d commands, %d agents, %d skills, plugin keys %s",
        manifest.name,
        len(commands),
        len(agents),
        len(skills),
        list(plugin_keys),
    )

    return Bundle(
        root=bundle_dir,
        manifest=manifest,
        commands=commands,
        agents=agents,
        skills=skills,
        plugin_keys=plugin_keys,
    )


def load_manifest(bundle_dir: Path) -> PluginManifest:
    """Load .claude-plugin/plugin.json, falling back to the directory name."""
    manifest_path = bundle_dir / MANIFEST_RELATIVE_PATH
    if not manifest_path.exists():
        return PluginManifest(name=bundle_dir.resolve().name)

    try:
        return PluginManifest.model_validate_json(manifest_path.read_bytes())
    except ValidationError as e:
        raise BundleLoadError(manifest_path, str(e)) from e
    except OSError as e:
        raise BundleLoadError(manifest_path, f"unreadable: {e.strerror or e}") from e


def _command_name(relative_path: Path) -> str:
    return ":".join(relative_path.with_suffix("").parts)


def load_commands(commands_dir: Path) -> tuple[CommandArtifact, ...]:
    """Load command markdown files, sorted by relative path."""
    if not commands_dir.is_dir():
        return ()

    commands: list[CommandArtifact] = []
    for path in sorted(commands_dir.rglob("*.md")):
        if not path.is_file():
            continue
        relative_path = path.relative_to(commands_dir)
        try:
            body = path.read_text(encoding="utf-8")
            metadata = parse_frontmatter(body)
            allowed_tools = normalize_allowed_tools(metadata.get("allowed-tools"))
        except UnicodeDecodeError as e:
            raise BundleLoadError(path, f"not UTF-8 text: {e.reason}") from e
        except (OSError, ValueError) as e:
            raise BundleLoadError(path, str(e)) from e

        description = metadata.get("description")
        commands.append(
            CommandArtifact(
                name=_command_name(relative_path),
                relative_path=relative_path,
                body=body,
                description=str(description) if description is not None else None,
                allowed_tools=allowed_tools,
            )
        )
    return tuple(commands)


def load_agents(agents_dir: Path) -> tuple[AgentArtifact, ...]:
    """List agent markdown files, sorted by relative path."""
    if not agents_dir.is_dir():
        return ()

    agents: list[AgentArtifact] = []
    for path in sorted(agents_dir.rglob("*.md")):
        if not path.is_file():
            continue
        relative_path = path.relative_to(agents_dir)
        agents.append(
            AgentArtifact(name=path.stem, relative_path=relative_path, source_path=path)
        )
    return tuple(agents)


def load_skills(skills_dir: Path) -> tuple[SkillArtifact, ...]:
    """List skill directories, i.e. direct children containing SKILL.md."""
    if not skills_dir.is_dir():
        return ()

    skills: list[SkillArtifact] = []
    for item in sorted(skills_dir.iterdir()):
        if item.is_dir() and (item / "SKILL.md").is_file():
            skills.append(SkillArtifact(name=item.name, source_dir=item))
        elif item.is_dir():
            logger.debug("Skipping %s: no SKILL.md", item)
    return tuple(skills)


def _read_json_object(path: Path) -> ConfigDocument:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise BundleLoadError(path, f"invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise BundleLoadError(path, f"not UTF-8 text: {e.reason}") from e
    except OSError as e:
        raise BundleLoadError(path, f"unreadable: {e.strerror or e}") from e
    try:
        return validate_config_document(data)
    except ValidationError as e:
        raise BundleLoadError(path, "top level must be a JSON object") from e


def load_plugin_keys(bundle_dir: Path) -> ConfigDocument:
    """Assemble the PluginKeySet from .mcp.json and config.json.

    .mcp.json may either contain {"mcpServers": {...}} or the server mapping
    itself. Keys from .mcp.json take precedence over config.json.
    """
    plugin_keys: ConfigDocument = {}

    mcp_path = bundle_dir / MCP_CONFIG_FILENAME
    if mcp_path.exists():
        mcp_data = _read_json_object(mcp_path)
        if "mcpServers" in mcp_data:
            plugin_keys = mcp_data
        else:
            plugin_keys = {"mcpServers": mcp_data}

    config_path = bundle_dir / PLUGIN_CONFIG_FILENAME
    if config_path.exists():
        plugin_keys = merge(plugin_keys, _read_json_object(config_path))

    return plugin_keys
