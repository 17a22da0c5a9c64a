"""CLI entry points: space-captions extract, summarize, init, status."""

from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path

import click

from .config import Config
from .logging_setup import setup_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit log records as JSON")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, json_logs: bool) -> None:
    """Rebuild readable transcripts from Space chat-history logs."""
    ctx.ensure_object(dict)
    setup_logging(verbose, json_logs)
    Config().load_env_file()  # Seed os.environ before constructing final config
    ctx.obj["config"] = Config()


@cli.command()
@click.argument("input_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Transcript path (default: INPUT.txt)")
@click.option("--started-at", type=float, help="Session start time in epoch milliseconds")
@click.option("--summary/--no-summary", default=None, help="Override SPACE_CAPTIONS_SUMMARY_ENABLED")
@click.pass_context
def extract(ctx: click.Context, input_path: Path, output: Path | None, started_at: float | None, summary: bool | None) -> None:
    """Extract finalized captions from a chat-history log."""
    from .extract import extract_captions

    config = ctx.obj["config"]
    if summary is not None:
        config = replace(config, summary_enabled=summary)

    try:
        result = extract_captions(input_path, output, started_at, config)
    except OSError as e:
        raise click.ClickException(f"Extraction failed: {e}") from e

    if result is None:
        click.echo(f"Input file not found: {input_path}")
    else:
        click.echo(f"Transcript: {result}")


@cli.command()
@click.argument("transcript", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def summarize(ctx: click.Context, transcript: Path) -> None:
    """Summarize an existing transcript with the configured LLM."""
    from .summarize import summarize_transcript

    config = ctx.obj["config"]
    try:
        result = summarize_transcript(transcript, config)
    except Exception as e:
        raise click.ClickException(f"Summary generation failed: {e}") from e

    if result is None:
        click.echo("Transcript is empty, nothing to summarize.")
    else:
        click.echo(f"Summary: {result}")


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create the env file used for API keys and settings."""
    config = ctx.obj["config"]
    if config.ensure_env_file():
        click.echo(f"Created {config.env_file}")
        click.echo(f"  Add your API key: {config.env_file}")
    else:
        click.echo(f"Env file: {config.env_file} (already exists)")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the active configuration."""
    config = ctx.obj["config"]

    click.echo("space-captions status")
    click.echo("=" * 40)

    click.echo(f"\nEnv file: {config.env_file}")
    click.echo(f"  Exists: {'yes' if config.env_file.exists() else 'no (run space-captions init to create)'}")

    click.echo(f"\nSummary: {'enabled' if config.summary_enabled else 'disabled'}")
    click.echo(f"  Endpoint: {config.summary_api_endpoint or 'provider default'}")
    click.echo(f"  Summary API key: {'set' if config.summary_api_key else 'not set'}")
    click.echo(f"Anthropic API key: {'set' if os.environ.get('ANTHROPIC_API_KEY') else 'not set'}")
    click.echo(f"OpenAI API key: {'set' if os.environ.get('OPENAI_API_KEY') else 'not set'}")

    try:
        click.echo(f"Provider: {config.detect_provider()}")
    except RuntimeError:
        click.echo("Provider: none (no API key found)")
