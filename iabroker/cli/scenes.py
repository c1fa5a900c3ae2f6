"""Scene resolution commands."""
import click

from iabroker.config import config
from iabroker.cli.common import (
    console,
    get_catalog,
    get_planet_client,
    get_resolver,
    get_tide_client,
    print_asset,
    print_bands,
    print_scene,
)
from iabroker.errors import BrokerError
from iabroker.scenes.identifiers import IdentifierConvention, parse_identifier, recognized_convention


def _warm_catalog(catalog, timeout):
    console.print("[dim]Loading Collection-1 scene catalog...[/dim]")
    if not catalog.warm_up(timeout):
        console.print("[yellow]Scene catalog is not ready yet[/yellow]")


@click.command(name="resolve")
@click.argument("scene_id")
@click.option("--data-type", default=None, help="Landsat data type qualifier (e.g. L1T, L1TP)")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the scene catalog")
@click.option("--landsat-host", default=None, help="Override the scene list host")
def resolve(scene_id, data_type, timeout, landsat_host):
    """Print the storage folder and band URLs of a Landsat or Sentinel-2 scene."""
    catalog = get_catalog(landsat_host)
    resolver = get_resolver(catalog)

    try:
        parsed = parse_identifier(scene_id)
        if parsed.convention is IdentifierConvention.COLLECTION_ONE_LANDSAT:
            _warm_catalog(catalog, timeout if timeout is not None else config.catalog_warm_up_timeout)
        resolved = resolver.resolve(scene_id, data_type)
    except BrokerError as e:
        console.print(f"[red]{e}[/red]")
        raise click.Abort()
    finally:
        catalog.close()

    console.print(f"[bold]Scene:[/bold] {resolved.scene_id}")
    console.print(f"[bold]Convention:[/bold] {resolved.convention.label}")
    console.print(f"[bold]Folder:[/bold] {resolved.folder_url}")
    console.print("[bold]Bands:[/bold]")
    print_bands(resolved.bands)


@click.command(name="metadata")
@click.argument("item_type")
@click.argument("scene_id")
@click.option("--tides", is_flag=True, help="Incorporate tide predictions")
@click.option("--api-key", default=None, help="Planet API Key (default: from env)")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the scene catalog")
def metadata(item_type, scene_id, tides, api_key, timeout):
    """Show metadata and band URLs for a single scene."""
    catalog = get_catalog()
    resolver = get_resolver(catalog)

    try:
        planet = get_planet_client(api_key)
        scene = planet.get_scene(item_type, scene_id)
        asset = planet.get_asset(item_type, scene_id)
        if tides:
            scene = get_tide_client().enrich([scene])[0]
        if recognized_convention(scene.scene_id) is IdentifierConvention.COLLECTION_ONE_LANDSAT:
            _warm_catalog(catalog, timeout if timeout is not None else config.catalog_warm_up_timeout)
        scene = resolver.attach_bands(scene)
    except (BrokerError, ValueError) as e:
        console.print(f"[red]Failed to get scene metadata: {e}[/red]")
        raise click.Abort()
    finally:
        catalog.close()

    print_scene(scene)
    print_asset(asset)
    if scene.bands:
        console.print("[bold]Bands:[/bold]")
        print_bands(scene.bands)


@click.command(name="activate")
@click.argument("item_type")
@click.argument("scene_id")
@click.option("--api-key", default=None, help="Planet API Key (default: from env)")
def activate(item_type, scene_id, api_key):
    """Request activation of the analytic asset of a scene."""
    try:
        asset = get_planet_client(api_key).activate(item_type, scene_id)
    except (BrokerError, ValueError) as e:
        console.print(f"[red]Failed to activate scene: {e}[/red]")
        raise click.Abort()

    console.print(f"[green]Activation requested for {scene_id}[/green]")
    print_asset(asset)
