from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

app = typer.Typer(name="verdict", help="Inspect verdict assertion options")


@app.command()
def schema(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Write the JSON schema here instead of stdout"
    ),
):
    """Print the JSON schema of the options file."""
    from verdict.config import VerdictOptions

    text = json.dumps(VerdictOptions.model_json_schema(), indent=2) + "\n"
    if output is None:
        typer.echo(text, nl=False)
        return

    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    typer.echo(f"Wrote {path}")


@app.command("check-config")
def check_config(
    config: str = typer.Argument(help="Path to a verdict options YAML file"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
):
    """Validate an options file and print the resolved options."""
    from pydantic import ValidationError

    from verdict.config import load_options
    from verdict.verbose import setup_logger

    if verbose:
        logger = setup_logger(None, verbose=True, logger_name="verdict")
    else:
        logger = logging.getLogger("verdict")
    logger.debug(f"Loading options from {config}")

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        options = load_options(config_path)
    except (ValidationError, ValueError) as e:
        typer.echo(f"Error: invalid options in {config}:\n{e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps(options.model_dump(), indent=2))


if __name__ == "__main__":
    app()
