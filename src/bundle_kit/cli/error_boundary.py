"""Error boundary for CLI commands.

Installer failures are expected outcomes (bad config, unwritable paths,
unsupported permission mappings), so they are reported as a one-line
message and exit code 1 instead of a stack trace.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from bundle_kit.errors import InstallError

T = TypeVar("T", bound=Callable[..., Any])

EXPECTED_ERRORS: tuple[type[Exception], ...] = (
    InstallError,
    FileNotFoundError,
    PermissionError,
    ValueError,
)


def cli_error_boundary(func: T) -> T:
    """Report expected errors as `Error: <message>` on stderr and exit 1.

    Anything not in EXPECTED_ERRORS propagates with its full traceback.

    Example:
        @click.command()
        @cli_error_boundary
        def my_command():
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except EXPECTED_ERRORS as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
