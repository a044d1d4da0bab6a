"""ValidForge CLI entry point."""

import click

from validforge.config import Settings, configure_logging


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Enable logging at this level (debug, info, warning, error).",
)
def cli(log_level: str | None):
    """ValidForge: declarative object validation CLI."""
    if log_level:
        configure_logging(log_level)


@cli.command()
@click.option("--host", default=None, help="Bind address (default: VALIDFORGE_HOST or 127.0.0.1).")
@click.option("--port", default=None, type=int, help="Port (default: VALIDFORGE_PORT or 3000).")
def serve(host: str | None, port: int | None):
    """Run the HTTP status responder."""
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(
        "validforge.api:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level,
    )


# Register subcommands
from validforge.cli.task_cmd import task  # noqa: E402
from validforge.cli.validate_cmd import describe, validate  # noqa: E402

cli.add_command(validate)
cli.add_command(describe)
cli.add_command(task)
