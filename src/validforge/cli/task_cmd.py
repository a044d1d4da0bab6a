"""Task CLI commands: print and scan."""

import click

from validforge.dispatch import (
    PRINT,
    SCAN,
    TaskDispatcher,
    TaskProviderRegistry,
    UnsupportedTaskError,
    register_builtin_providers,
)


def _run(task_name: str, device: str, target: str) -> None:
    register_builtin_providers()
    if not TaskProviderRegistry.is_registered(device):
        click.echo(
            f"Error: unknown device '{device}'. "
            f"Available: {', '.join(TaskProviderRegistry.list_registered())}",
            err=True,
        )
        raise SystemExit(2)

    try:
        message = TaskDispatcher().dispatch(task_name, device, target)
    except UnsupportedTaskError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)
    click.echo(message)


@click.group()
def task():
    """Dispatch print and scan tasks to a device."""
    pass


@task.command("print")
@click.argument("document_path")
@click.option("--device", default="printer", show_default=True, help="Registered device name.")
def print_cmd(document_path: str, device: str):
    """Print DOCUMENT_PATH."""
    _run(PRINT, device, document_path)


@task.command("scan")
@click.argument("image_path")
@click.option("--device", default="scanner", show_default=True, help="Registered device name.")
def scan_cmd(image_path: str, device: str):
    """Scan IMAGE_PATH."""
    _run(SCAN, device, image_path)
