"""Commands operating the HTTP service and its output directory."""

from datetime import timedelta
from typing import Annotated

import typer

from pagewright_cli.console.console import Console
from pagewright_core.logging import create_config_logger
from pagewright_core.models.config import PagewrightConfig
from pagewright_core.services import ArtifactStore, ExpiryScheduler

app = typer.Typer()

console = Console()


@app.command(name='sweep', help='Delete expired artifacts from the output directory')
def sweep():
    config = PagewrightConfig()
    logger = create_config_logger(config, console=False)
    store = ArtifactStore(
        config.output_dir,
        scheduler=ExpiryScheduler(logger=logger),
        retention=timedelta(seconds=config.retention_seconds),
        logger=logger,
    )

    removed = store.sweep()

    if removed:
        console.success(f'Removed {len(removed)} expired artifact{"s" if len(removed) > 1 else ""} from {config.output_dir}')
    else:
        console.info(f'No expired artifacts in {config.output_dir}')


@app.command(name='serve', help='Run the HTTP API')
def serve(
    host: Annotated[str, typer.Option('--host', help='Interface to bind.')] = '127.0.0.1',
    port: Annotated[int, typer.Option('--port', help='Port to listen on.')] = 3000,
):
    import uvicorn

    console.action(f'Serving Pagewright on http://{host}:{port}')
    uvicorn.run('pagewright_api.main:app', host=host, port=port)
