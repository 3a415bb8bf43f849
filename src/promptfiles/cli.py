"""Command-line interface for promptfiles."""

import json
import logging
from pathlib import Path
from typing import Optional

import click
import yaml

from promptfiles.code_generator import FileGeneratorAgent, GenerationError
from promptfiles.components.models import ModelRegistry
from promptfiles.config import build_settings
from promptfiles.constants import API_KEY_ENV, PROMPT_CUE
from promptfiles.materializer import FileMaterializer, MaterializeError
from promptfiles.prompts import build_request


def setup_logging(log_level: str) -> None:
    """Set up logging configuration."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def format_response(response_text: str) -> str:
    """Pretty-print a response for display, falling back to the raw text."""
    try:
        return json.dumps(json.loads(response_text), indent=2, ensure_ascii=False)
    except json.JSONDecodeError:
        return response_text


def read_prompt() -> str:
    """Print the prompt cue and read one line from standard input.

    End of input yields whatever was read, possibly an empty prompt.
    """
    click.echo(f"{PROMPT_CUE}: ", nl=False)
    line = click.get_text_stream("stdin").readline()
    return line.rstrip("\r\n")


def print_models(registry: ModelRegistry) -> None:
    models = registry.list_models()

    # Find the longest name for alignment
    max_name_length = max(len(name) for name in models)

    click.echo("\nAvailable Models:")
    click.echo("=" * (max_name_length + 40))

    for name, config in models.items():
        click.echo(f"{name:<{max_name_length}}    {config['provider']:<10}    {config['model_id']}")


@click.command()
@click.option("-key", "--key", "api_key", envvar=API_KEY_ENV, help=f"API key for the generative AI service (or ${API_KEY_ENV}).")
@click.option("-output", "--output", "output_dir", type=click.Path(file_okay=False, path_type=Path), help="Output directory for generated files [default: output].")
@click.option("--model", "model_name", help="Configured model to generate with [default: gemini-2.0-flash].")
@click.option("--timeout", type=float, help="Deadline for the API call in seconds, 0 to wait indefinitely [default: 120].")
@click.option("--prompt", help="Prompt text; read from standard input when omitted.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with default settings and extra model definitions.",
)
@click.option("--show-response/--hide-response", default=None, help="Print the raw API response.")
@click.option("--list-models", is_flag=True, help="List configured models and exit.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Set the logging level.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    api_key: Optional[str],
    output_dir: Optional[Path],
    model_name: Optional[str],
    timeout: Optional[float],
    prompt: Optional[str],
    config_path: Optional[Path],
    show_response: Optional[bool],
    list_models: bool,
    log_level: str,
) -> None:
    """Generate source files from a natural-language prompt.

    The prompt is sent to a generative AI model that answers with a list of
    files, which are then written under the output directory.
    """
    setup_logging(log_level)

    try:
        registry = ModelRegistry(config_path)
    except (OSError, KeyError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Error loading config: {e}", err=True)
        ctx.exit(1)

    if list_models:
        print_models(registry)
        return

    if not api_key:
        click.echo("API key is required", err=True)
        ctx.exit(1)

    try:
        settings = build_settings(
            config_path,
            api_key=api_key,
            output_dir=output_dir,
            model_name=model_name,
            timeout=timeout,
            show_response=show_response,
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Error loading config: {e}", err=True)
        ctx.exit(1)

    if prompt is None:
        prompt = read_prompt()

    agent = FileGeneratorAgent(registry, settings.model_name, settings.api_key, settings.timeout)
    try:
        response_text = agent.generate(build_request(prompt))
    except (GenerationError, ValueError) as e:
        click.echo(str(e), err=True)
        ctx.exit(1)

    if settings.show_response:
        click.echo("\nAPI Response:")
        click.echo(format_response(response_text))

    materializer = FileMaterializer(settings.output_dir)
    try:
        result = materializer.materialize(response_text)
    except MaterializeError as e:
        click.echo(str(e), err=True)
        ctx.exit(1)

    if result.parse_error is not None:
        click.echo(f"Error parsing response: {result.parse_error}", err=True)
        ctx.exit(1)

    click.echo(f"\nSuccessfully parsed {result.attempted} file(s)")
    for outcome in result.outcomes:
        if outcome.ok:
            click.echo(f"\nFile {outcome.index}: {outcome.name} written to {outcome.path}")
        else:
            click.echo(f"Error writing file {outcome.name}: {outcome.error}", err=True)

    click.echo(f"\nWrote {len(result.written)} of {result.attempted} file(s) to the '{settings.output_dir}' directory")

    if result.failures:
        ctx.exit(1)


if __name__ == "__main__":
    cli()
