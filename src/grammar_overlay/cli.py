from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml

from .annotations import AnnotationParseError, load_annotations
from .client import (
    GrammarServiceClient,
    GrammarServiceError,
    SessionExpiredError,
)
from .config import GrammarOverlayConfig, load_config
from .models import CheckResult
from .pipeline import render_preview
from .rendering import RENDERER_NAMES
from .session import resolve_token, store_from_settings

app = typer.Typer(help="Grammar Overlay CLI.", no_args_is_help=True)


@app.callback()
def configure_logging(
    log_level: str = typer.Option(
        "WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Check text with a remote grammar service and highlight flagged words."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def login(
    username: str = typer.Option(..., "--username", "-u", prompt=True),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Log in and store the session token."""
    cfg = _load_cli_config(config)
    client = GrammarServiceClient(cfg.service)
    try:
        token = client.login(username, password)
    except GrammarServiceError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    store = store_from_settings(cfg.service)
    store.save(token)
    typer.echo(f"Logged in as {username}.")


@app.command()
def logout(config: Path | None = typer.Option(None, "--config", "-c")) -> None:
    """Forget the stored session token."""
    cfg = _load_cli_config(config)
    if store_from_settings(cfg.service).clear():
        typer.echo("Logged out.")
    else:
        typer.echo("No active session.")


@app.command()
def check(
    text: str | None = typer.Option(None, "--text", "-t", help="Text to check."),
    input_path: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="File to check."
    ),
    output_format: str | None = typer.Option(
        None, "--format", "-f", help=f"One of: {', '.join(RENDERER_NAMES)}."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Send text to the grammar service and print the highlighted preview."""
    cfg = _load_cli_config(config)
    fmt = _resolve_format(cfg, output_format)
    source = _read_text(text, input_path)
    store = store_from_settings(cfg.service)
    token = resolve_token(cfg.service, store)
    if not token:
        typer.echo("Not logged in. Run 'login' first.", err=True)
        raise typer.Exit(code=1)

    client = GrammarServiceClient(cfg.service)
    try:
        result = client.check_grammar(source, token)
    except SessionExpiredError as exc:
        # Mirror a logout so the next run prompts for credentials again.
        store.clear()
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    except GrammarServiceError as exc:
        typer.echo(f"Grammar check error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(render_preview(source, result, cfg, fmt))


@app.command()
def render(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, help="Original text file."
    ),
    annotations: Path = typer.Option(
        ...,
        exists=True,
        readable=True,
        dir_okay=False,
        help="JSON file with a list of {word, position} records.",
    ),
    output_format: str | None = typer.Option(
        None, "--format", "-f", help=f"One of: {', '.join(RENDERER_NAMES)}."
    ),
    tolerance: int | None = typer.Option(
        None, "--tolerance", min=0, help="Backward search window in characters."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Overlay previously saved annotations onto a text file without the service."""
    cfg = _load_cli_config(config)
    if tolerance is not None:
        cfg.tolerance = tolerance
    fmt = _resolve_format(cfg, output_format)
    source = _read_file(input_path)
    try:
        records = load_annotations(annotations)
    except AnnotationParseError as exc:
        raise typer.BadParameter(str(exc), param_hint="--annotations") from exc
    result = CheckResult(text=source, annotations=records)
    typer.echo(render_preview(source, result, cfg, fmt))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = GrammarOverlayConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _load_cli_config(path: Path | None) -> GrammarOverlayConfig:
    """Load configuration, reporting bad files as a CLI usage error."""
    try:
        return load_config(path)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(
            f"{path} is not UTF-8 encoded.", param_hint="--input-path"
        ) from exc


def _resolve_format(config: GrammarOverlayConfig, output_format: str | None) -> str:
    fmt = (output_format or config.output_format).lower().strip()
    if fmt not in RENDERER_NAMES:
        raise typer.BadParameter(
            f"Unknown output format '{fmt}'.", param_hint="--format"
        )
    return fmt


def _read_text(text: str | None, input_path: Path | None) -> str:
    """Pick the text to check from --text, --input-path or stdin."""
    if text is not None and input_path is not None:
        raise typer.BadParameter("Use either --text or --input-path, not both.")
    if text is not None:
        return text
    if input_path is not None:
        return _read_file(input_path)
    return typer.get_text_stream("stdin").read()


if __name__ == "__main__":
    main()
