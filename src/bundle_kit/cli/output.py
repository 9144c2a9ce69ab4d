"""Output helpers that keep user messages and machine output separate."""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Print a message for the user (stderr)."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Print output meant for other programs (stdout)."""
    click.echo(message, nl=nl)
