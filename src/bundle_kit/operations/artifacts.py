"""Write bundle artifacts (commands, agents, skills) into the target directory.

Each artifact is written independently with overwrite semantics. Failures
are collected rather than raised so every artifact gets an attempt.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from bundle_kit.errors import ArtifactWriteFailure
from bundle_kit.models.bundle import Bundle, CommandArtifact
from bundle_kit.models.installation import InstallContext

logger = logging.getLogger(__name__)


@dataclass
class ArtifactWriteOutcome:
    """Paths written and failures collected during WRITE_COMMANDS."""

    command_paths: list[Path] = field(default_factory=list)
    agent_paths: list[Path] = field(default_factory=list)
    skill_paths: list[Path] = field(default_factory=list)
    failures: list[ArtifactWriteFailure] = field(default_factory=list)


def command_destination(commands_dir: Path, command: CommandArtifact) -> Path:
    """Get the file a command is installed to, keyed by its identifier."""
    return commands_dir / command.relative_path


def write_command(commands_dir: Path, command: CommandArtifact) -> Path:
    """Write one command file, replacing any previous content."""
    destination = command_destination(commands_dir, command)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(command.body, encoding="utf-8")
    return destination


def write_artifacts(bundle: Bundle, context: InstallContext) -> ArtifactWriteOutcome:
    """Write every command, agent and skill in the bundle.

    Args:
        bundle: Loaded bundle
        context: Destination paths

    Returns:
        ArtifactWriteOutcome listing written paths and any failures
    """
    outcome = ArtifactWriteOutcome()

    for command in bundle.commands:
        try:
            outcome.command_paths.append(write_command(context.commands_dir, command))
        except OSError as e:
            logger.debug("Failed to write command %s: %s", command.name, e)
            outcome.failures.append(
                ArtifactWriteFailure(
                    artifact_type="command",
                    name=command.name,
                    destination=command_destination(context.commands_dir, command),
                    error=str(e),
                )
            )

    for agent in bundle.agents:
        destination = context.agents_dir / agent.relative_path
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(agent.source_path, destination)
            outcome.agent_paths.append(destination)
        except OSError as e:
            logger.debug("Failed to write agent %s: %s", agent.name, e)
            outcome.failures.append(
                ArtifactWriteFailure(
                    artifact_type="agent", name=agent.name, destination=destination, error=str(e)
                )
            )

    for skill in bundle.skills:
        destination = context.skills_dir / skill.name
        try:
            shutil.copytree(skill.source_dir, destination, dirs_exist_ok=True)
            outcome.skill_paths.append(destination)
        except OSError as e:
            logger.debug("Failed to write skill %s: %s", skill.name, e)
            outcome.failures.append(
                ArtifactWriteFailure(
                    artifact_type="skill", name=skill.name, destination=destination, error=str(e)
                )
            )

    return outcome
