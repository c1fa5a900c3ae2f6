"""Scene catalog commands."""
import time

import click

from iabroker.config import config
from iabroker.cli.common import console, get_catalog
from iabroker.errors import CatalogError


@click.group(name="catalog")
def catalog_group():
    """Collection-1 scene catalog commands."""
    pass


@catalog_group.command(name="refresh")
@click.option("--landsat-host", default=None, help="Override the scene list host")
def refresh(landsat_host):
    """Download the scene list once and report its size."""
    catalog = get_catalog(landsat_host)
    try:
        catalog.refresh()
    except CatalogError as e:
        console.print(f"[red]Failed to update scene catalog: {e}[/red]")
        raise click.Abort()
    finally:
        catalog.close()

    console.print(f"[green]Scene catalog loaded:[/green] {catalog.size:,} scenes")


@catalog_group.command(name="lookup")
@click.argument("scene_id")
@click.option("--landsat-host", default=None, help="Override the scene list host")
def lookup(scene_id, landsat_host):
    """Look up the storage folder of a Collection-1 scene."""
    catalog = get_catalog(landsat_host)
    try:
        catalog.refresh()
        entry = catalog.entry_for(scene_id)
    except CatalogError as e:
        console.print(f"[red]{e}[/red]")
        raise click.Abort()
    finally:
        catalog.close()

    console.print(f"[bold]Scene:[/bold] {entry.scene_id}")
    console.print(f"[bold]Folder:[/bold] {entry.folder_url}")
    console.print(f"[bold]File prefix:[/bold] {entry.file_prefix}")


@catalog_group.command(name="watch")
@click.option("--interval", type=float, default=None, help="Seconds between refreshes")
@click.option("--landsat-host", default=None, help="Override the scene list host")
def watch(interval, landsat_host):
    """Keep the scene catalog refreshed until interrupted."""
    interval = interval or config.catalog_refresh_interval
    catalog = get_catalog(landsat_host)
    console.print(f"[bold]Refreshing scene catalog every {interval:g}s (Ctrl+C to stop)[/bold]")
    catalog.schedule_periodic_refresh(interval)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        console.print("[yellow]Stopping catalog refresh[/yellow]")
    finally:
        catalog.close()
