"""Cloudflare cache purge triggers."""
import typer
from rich import print as cp
from rich.console import Console
from typer import Option
from typing_extensions import Annotated

from cf_purge_tools.utils.cf_cache import PurgeCoordinator

app = typer.Typer(no_args_is_help=True)
console = Console()

ConfirmType = Annotated[bool, Option("--yes", "-y", help="Confirm action")]


def get_coordinator() -> PurgeCoordinator:
    return PurgeCoordinator()


@app.command()
def purge(confirm: ConfirmType = False):
    """Manually purge everything from Cloudflare's cache."""
    if not confirm and not typer.confirm("Purge the entire Cloudflare cache?"):
        raise typer.Abort()

    coordinator = get_coordinator()
    with console.status("Purging Cloudflare cache..."):
        purged = coordinator.purge()

    if purged:
        cp("✅  Cloudflare cache purged successfully!")
    else:
        cp("❌  Failed to purge Cloudflare cache. Please check your credentials and try again.")
        raise SystemExit(1)


@app.command()
def cache_cleared():
    """Hook for a cache-cleared event. Purges Cloudflare's cache, result is only logged."""
    get_coordinator().on_cache_cleared()
