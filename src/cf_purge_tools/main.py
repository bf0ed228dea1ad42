import logging

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from cf_purge_tools import cf, config
from cf_purge_tools.models.settings import EnvSettings
from cf_purge_tools.utils.logs import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True)
app.add_typer(cf.app, name="cf")
app.add_typer(config.app, name="config")


@app.callback()
def main(verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False):
    """Cloudflare cache purge tools."""
    try:
        env_verbose = EnvSettings().verbose
    except ValidationError as e:
        setup_logging(verbose)
        logger.warning("Invalid environment settings: %s", e)
        return

    setup_logging(verbose or env_verbose)
