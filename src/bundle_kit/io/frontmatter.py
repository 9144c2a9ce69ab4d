"""Frontmatter parsing for command and agent markdown files."""

from typing import Any

import frontmatter
import yaml


def parse_frontmatter(content: str) -> dict[str, Any]:
    """Extract the YAML frontmatter mapping from markdown content.

    Returns an empty dict when there is no frontmatter block.

    Raises:
        ValueError: If the frontmatter is not valid YAML or not a mapping
    """
    # Gracefully handle YAML parsing errors (third-party API exception handling)
    try:
        post = frontmatter.loads(content)
    except yaml.YAMLError as e:
        raise ValueError(f"invalid YAML frontmatter: {e}") from e

    if not isinstance(post.metadata, dict):
        raise ValueError("frontmatter must be a mapping")
    return dict(post.metadata)


def split_tool_list(value: str) -> list[str]:
    """Split a comma-separated tool list, ignoring commas inside parentheses.

    Example:
        >>> split_tool_list("Bash(git add:*), Read, Bash(ls a,b)")
        ['Bash(git add:*)', 'Read', 'Bash(ls a,b)']
    """
    entries: list[str] = []
    current: list[str] = []
    depth = 0
    for char in value:
        if char == "(":
            depth += 1
        elif char == ")" and depth > 0:
            depth -= 1
        if char == "," and depth == 0:
            entries.append("".join(current))
            current = []
            continue
        current.append(char)
    entries.append("".join(current))
    return [entry.strip() for entry in entries if entry.strip()]


def normalize_allowed_tools(value: object) -> tuple[str, ...]:
    """Normalize an allowed-tools frontmatter value to a tuple of entries.

    Accepts a YAML list of strings or a comma-separated string; None means
    no restriction list was declared.

    Raises:
        ValueError: If the value has any other shape
    """
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(split_tool_list(value))
    if isinstance(value, list):
        entries: list[str] = []
        for item in value:
            if not isinstance(item, str):
                raise ValueError(f"allowed-tools entries must be strings, got {item!r}")
            if item.strip():
                entries.append(item.strip())
        return tuple(entries)
    raise ValueError(f"allowed-tools must be a list or string, got {type(value).__name__}")
