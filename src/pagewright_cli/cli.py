"""Command line interface for Pagewright."""

from typing import Annotated, Optional

import typer
from importlib.metadata import version as metadata_version

from pagewright_cli.console.console import Console
from pagewright_cli.commands.pdf import app as pdf_command
from pagewright_cli.commands.service import app as service_command


# Create typer app
app = typer.Typer(
    name='pagewright',
    help='Pagewright PDF merge and split service.',
    no_args_is_help=True,
    add_completion=False,
    pretty_exceptions_enable=False,
)

console = Console()


def version_callback(value: bool):
    if value:
        try:
            pagewright_version = metadata_version('pagewright')
        except Exception:
            pagewright_version = 'Development version'

        console.info(f'Version: {pagewright_version}')
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            '--version',
            callback=version_callback,
            is_eager=True,
            help='Show Pagewright version',
        ),
    ] = None,
):
    """Define the common command options"""
    pass


app.add_typer(pdf_command)
app.add_typer(service_command)


if __name__ == '__main__':
    app()
