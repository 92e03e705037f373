"""Main CLI entry point for the Swagger API Explorer.

This module provides the command-line interface for serving loaded
Swagger/OpenAPI specifications to AI agents over MCP and for inspecting a
specification from the terminal.
"""

import asyncio
import sys
import traceback
from typing import Dict, Optional, Tuple

import click

from . import __version__
from .config.logging import configure_logging, get_logger
from .config.settings import Settings
from .exceptions import MCPServerError
from .server.api_explorer import ApiExplorer
from .server.formatting import dump_json
from .server.mcp_server import SwaggerExplorerServer
from .search.summarizer import summarize

logger = get_logger(__name__)

INSPECT_API_ID = "inspect"


class CLIError(Exception):
    """Base CLI error with user-friendly messages."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)


class CLIContext:
    """Global CLI context management."""

    def __init__(self, verbose: bool = False, quiet: bool = False):
        self.verbose = verbose
        self.quiet = quiet
        self.settings = Settings()

    @property
    def log_level(self) -> str:
        if self.verbose:
            return "DEBUG"
        if self.quiet:
            return "ERROR"
        return self.settings.logging.level


def handle_cli_error(error: Exception, ctx: Optional[click.Context] = None):
    """Report an error to the user and exit with status 1."""
    if isinstance(error, CLIError):
        click.echo(f"Error: {error.message}", err=True)
        if error.suggestion:
            click.echo(f"Suggestion: {error.suggestion}", err=True)
    elif isinstance(error, click.ClickException):
        error.show()
    else:
        verbose = bool(ctx and ctx.obj and ctx.obj.get("verbose"))
        click.echo(f"Unexpected error: {error}", err=True)
        if verbose:
            click.echo(traceback.format_exc(), err=True)
        else:
            click.echo(
                "Run with --verbose for detailed error information", err=True
            )

    sys.exit(1)


def parse_load_option(value: str) -> Tuple[str, str]:
    """Split an ``ID=SOURCE`` preload option."""
    api_id, separator, source = value.partition("=")
    if not separator or not api_id or not source:
        raise click.BadParameter(
            f"'{value}' is not of the form ID=SOURCE", param_hint="--load"
        )
    return api_id, source


@click.group()
@click.version_option(version=__version__, prog_name="swagger-api-explorer")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output with detailed logging",
)
@click.option(
    "--quiet", "-q", is_flag=True, help="Enable quiet mode with minimal output"
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool):
    """Swagger API Explorer

    Load OpenAPI/Swagger specifications and let AI agents discover endpoints,
    inspect operation details and search by keyword over MCP.

    \b
    Examples:
      swagger-api-explorer serve
      swagger-api-explorer serve --load petstore=https://petstore3.swagger.io/api/v3/openapi.json
      swagger-api-explorer inspect ./openapi.yaml --pattern pet
    """
    if verbose and quiet:
        raise click.BadParameter("Cannot use both --verbose and --quiet options")

    ctx.ensure_object(dict)
    cli_context = CLIContext(verbose=verbose, quiet=quiet)

    ctx.obj["cli_context"] = cli_context
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    configure_logging(
        level=cli_context.log_level,
        log_file=cli_context.settings.logging.file_path,
        json_logs=cli_context.settings.logging.json_format,
    )


@cli.command()
@click.option(
    "--load",
    "-l",
    "loads",
    multiple=True,
    metavar="ID=SOURCE",
    help="Specification to load before serving (repeatable)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def serve(ctx: click.Context, loads: Tuple[str, ...], debug: bool):
    """Start the MCP server on stdio.

    The server exposes four tools (load_api, get_endpoint_details, list_apis,
    search_endpoints) and read-only swagger:// resources. Specifications
    passed with --load are available as soon as the server starts; one that
    fails to load is logged and skipped.

    \b
    Examples:
      swagger-api-explorer serve
      swagger-api-explorer serve --load petstore=./petstore.yaml --load github=https://example.com/api.json
    """
    cli_context: CLIContext = ctx.obj["cli_context"]
    sources: Dict[str, str] = dict(parse_load_option(value) for value in loads)

    settings = cli_context.settings
    if debug:
        settings.debug = True
        settings.logging.level = "DEBUG"
        configure_logging(
            level="DEBUG",
            log_file=settings.logging.file_path,
            json_logs=settings.logging.json_format,
        )

    server = SwaggerExplorerServer(settings)

    async def _serve() -> None:
        await server.preload(sources)
        await server.run_stdio()

    try:
        asyncio.run(_serve())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as error:
        handle_cli_error(error, ctx)


@cli.command()
@click.argument("source")
@click.option(
    "--pattern", "-p", help="Only show endpoints whose path, summary or description contains PATTERN"
)
@click.option(
    "--natural", "-n", is_flag=True, help="Describe each endpoint in plain prose"
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def inspect(
    ctx: click.Context,
    source: str,
    pattern: Optional[str],
    natural: bool,
    output_format: str,
):
    """Load a specification and print its endpoints.

    SOURCE is a URL or file path to an OpenAPI/Swagger document (JSON or YAML).

    \b
    Examples:
      swagger-api-explorer inspect ./openapi.yaml
      swagger-api-explorer inspect ./openapi.yaml --pattern user --natural
      swagger-api-explorer inspect https://example.com/openapi.json --format json
    """
    cli_context: CLIContext = ctx.obj["cli_context"]
    explorer = ApiExplorer(settings=cli_context.settings)

    try:
        result = asyncio.run(explorer.load_api(INSPECT_API_ID, source))
    except MCPServerError as e:
        handle_cli_error(
            CLIError(e.message, "Check that SOURCE is a reachable OpenAPI/Swagger document"),
            ctx,
        )
        return

    records = explorer.search_endpoints(INSPECT_API_ID, pattern or "")

    if output_format == "json":
        if natural:
            payload = [summarize(record) for record in records]
        else:
            payload = [record.to_dict() for record in records]
        click.echo(dump_json(payload))
        return

    if not cli_context.quiet:
        click.echo(result.describe())
        click.echo()

    if not records:
        if pattern:
            click.echo(f"No endpoints found matching pattern: {pattern}")
        else:
            click.echo("No endpoints defined")
        return

    for record in records:
        if natural:
            click.echo(summarize(record))
        else:
            line = f"{record.method:<8} {record.path}"
            if record.summary:
                line += f"  {record.summary}"
            click.echo(line)


if __name__ == "__main__":
    cli()
