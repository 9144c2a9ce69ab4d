"""I/O operations for bundle-kit."""

from bundle_kit.io.bundle import load_bundle
from bundle_kit.io.config_json import (
    load_config,
    save_config,
    serialize_config,
    write_backup,
)
from bundle_kit.io.frontmatter import normalize_allowed_tools, parse_frontmatter

__all__ = [
    "load_bundle",
    "load_config",
    "normalize_allowed_tools",
    "parse_frontmatter",
    "save_config",
    "serialize_config",
    "write_backup",
]
