"""
Truelist CLI - verify email addresses from the command line.

Usage:
    truelist --help                     Show all commands
    truelist verify user@example.com    Print the verdict
    truelist verify user@example.com --json
"""

import asyncio
import json
from dataclasses import replace

import typer

from truelist.config import get_config
from truelist.core.logging import setup_logging
from truelist.verification import (
    AuthenticationError,
    TruelistClient,
    TruelistError,
    ValidationResult,
    build_cache_backend,
)

app = typer.Typer(
    name="truelist",
    help="Truelist CLI - email deliverability verification",
    no_args_is_help=True,
)

EXIT_UNDELIVERABLE = 1
EXIT_AUTH_ERROR = 2
EXIT_API_ERROR = 3


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


def _describe(result: ValidationResult) -> str:
    if result.is_error():
        return "unknown (verification failed, treated as pass)"
    label = result.state.value
    if result.sub_state:
        label = f"{label} ({result.sub_state})"
    return label


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Verbose logging to stderr"),
) -> None:
    """Configure logging for every command."""
    setup_logging(debug=debug or None)


@app.command()
def verify(
    email: str = typer.Argument(..., help="Email address to verify"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
    raise_on_error: bool = typer.Option(
        False, "--raise-on-error", help="Fail instead of returning an unknown result"
    ),
):
    """Verify a single email address."""
    config = get_config()
    if raise_on_error:
        config = replace(config, raise_on_error=True)

    client = TruelistClient(config, cache_backend=build_cache_backend())

    try:
        result = asyncio.run(client.validate(email))
    except AuthenticationError as e:
        _print_error(str(e))
        raise typer.Exit(EXIT_AUTH_ERROR) from e
    except TruelistError as e:
        _print_error(f"Verification failed: {e}")
        raise typer.Exit(EXIT_API_ERROR) from e

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        typer.echo(f"{result.email}: {_describe(result)}")
        if result.suggestion:
            typer.echo(f"  Did you mean {result.suggestion}?")

    if result.is_invalid():
        raise typer.Exit(EXIT_UNDELIVERABLE)


if __name__ == "__main__":
    app()
