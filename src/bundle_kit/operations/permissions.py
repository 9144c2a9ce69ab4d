"""Translate per-command allowed tools into a global permission fragment.

The destination config has a single global `permissions.allow` list of
rules. A rule is a tool name (`Read`), a tool name with a scope specifier
(`Bash(git status:*)`), or an MCP tool name (`mcp__server__tool`). There is
no per-command scope, so each mode decides how much of the per-command
restriction data turns into global grants.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from bundle_kit.errors import UnsupportedPermissionMappingError
from bundle_kit.models.bundle import CommandArtifact
from bundle_kit.models.config import ConfigDocument
from bundle_kit.models.permissions import PermissionMode

# Tools the destination permission model knows about.
KNOWN_TOOLS = frozenset(
    {
        "Bash",
        "Edit",
        "Glob",
        "Grep",
        "LS",
        "MultiEdit",
        "NotebookEdit",
        "NotebookRead",
        "Read",
        "Task",
        "TodoWrite",
        "WebFetch",
        "WebSearch",
        "Write",
    }
)

# Subset of KNOWN_TOOLS whose rules accept a parenthesised specifier.
SCOPED_TOOLS = frozenset({"Bash", "Edit", "MultiEdit", "Read", "WebFetch", "Write"})

RULE_PATTERN = re.compile(r"^(?P<tool>[A-Za-z_][A-Za-z0-9_]*)(?:\((?P<specifier>.*)\))?$")
MCP_TOOL_PATTERN = re.compile(r"^mcp__[A-Za-z0-9_-]+(__[A-Za-z0-9_-]+)?$")


@dataclass(frozen=True)
class ParsedRule:
    """An allowed-tools entry split into tool name and optional specifier."""

    tool: str
    specifier: str | None


def parse_rule(entry: str) -> ParsedRule | None:
    """Split an allowed-tools entry, or return None if it is not rule-shaped."""
    match = RULE_PATTERN.match(entry.strip())
    if match is None:
        return None
    return ParsedRule(tool=match.group("tool"), specifier=match.group("specifier"))


def translate_rule(command: CommandArtifact, entry: str) -> str:
    """Translate one allowed-tools entry into a destination rule.

    Raises:
        UnsupportedPermissionMappingError: If the destination has no equivalent
    """
    stripped = entry.strip()
    if MCP_TOOL_PATTERN.match(stripped):
        return stripped

    rule = parse_rule(stripped)
    if rule is None:
        raise UnsupportedPermissionMappingError(command.name, entry, "not a tool rule")
    if rule.tool not in KNOWN_TOOLS:
        raise UnsupportedPermissionMappingError(command.name, entry, f"unknown tool {rule.tool}")
    if rule.specifier is None:
        return rule.tool
    if rule.tool not in SCOPED_TOOLS:
        raise UnsupportedPermissionMappingError(
            command.name, entry, f"{rule.tool} rules cannot be scoped"
        )
    if not rule.specifier.strip():
        raise UnsupportedPermissionMappingError(command.name, entry, "empty scope")
    return f"{rule.tool}({rule.specifier.strip()})"


def _allow_fragment(rules: list[str]) -> ConfigDocument:
    if not rules:
        return {}
    return {"permissions": {"allow": rules}}


def _build_none(commands: Sequence[CommandArtifact]) -> ConfigDocument:
    return {}


def _build_broad(commands: Sequence[CommandArtifact]) -> ConfigDocument:
    union = {entry.strip() for command in commands for entry in command.allowed_tools}
    return _allow_fragment(sorted(union))


def _build_from_command(commands: Sequence[CommandArtifact]) -> ConfigDocument:
    rules: list[str] = []
    seen: set[str] = set()
    for command in commands:
        for entry in command.allowed_tools:
            rule = translate_rule(command, entry)
            if rule not in seen:
                seen.add(rule)
                rules.append(rule)
    return _allow_fragment(rules)


_MODE_HANDLERS: dict[PermissionMode, Callable[[Sequence[CommandArtifact]], ConfigDocument]] = {
    PermissionMode.NONE: _build_none,
    PermissionMode.BROAD: _build_broad,
    PermissionMode.FROM_COMMAND: _build_from_command,
}


def build_permission_fragment(
    commands: Sequence[CommandArtifact],
    mode: PermissionMode = PermissionMode.NONE,
) -> ConfigDocument:
    """Build the permission fragment for the selected mode.

    Args:
        commands: Commands from the bundle
        mode: Permission mode

    Returns:
        Fragment to merge into the config; empty for mode none or when no
        command declares allowed tools

    Raises:
        UnsupportedPermissionMappingError: In from-command mode, if an entry
            has no destination equivalent
    """
    return _MODE_HANDLERS[mode](commands)
