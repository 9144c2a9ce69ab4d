"""Models for the artifacts shipped in a plugin bundle."""

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from bundle_kit.models.config import ConfigDocument


class PluginManifest(BaseModel):
    """The bundle's .claude-plugin/plugin.json.

    Uses extra="allow" so author, keywords and similar fields are tolerated.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = Field(..., min_length=1)
    version: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class CommandArtifact:
    """One installable command.

    Attributes:
        name: Identifier, nested directories joined by ":" (e.g. "workflows:review")
        relative_path: Path under commands/, used as the destination file path
        body: Full file content, frontmatter included
        description: Frontmatter description, if any
        allowed_tools: Declared tool restriction list, in file order
    """

    name: str
    relative_path: Path
    body: str
    description: str | None = None
    allowed_tools: tuple[str, ...] = ()


@dataclass(frozen=True)
class AgentArtifact:
    """An agent definition file."""

    name: str
    relative_path: Path
    source_path: Path


@dataclass(frozen=True)
class SkillArtifact:
    """A skill directory containing SKILL.md."""

    name: str
    source_dir: Path


@dataclass(frozen=True)
class Bundle:
    """Everything the installer needs from a plugin source tree."""

    root: Path
    manifest: PluginManifest
    commands: tuple[CommandArtifact, ...] = ()
    agents: tuple[AgentArtifact, ...] = ()
    skills: tuple[SkillArtifact, ...] = ()
    plugin_keys: ConfigDocument = field(default_factory=dict)  # read-only after load
