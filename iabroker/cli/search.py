"""Scene discovery and best-scene selection commands."""
import click

from iabroker.cli.common import (
    bbox_option,
    console,
    get_planet_client,
    get_tide_client,
    load_candidates,
)
from iabroker.errors import BrokerError
from iabroker.scenes.scoring import rank_scenes


def search_options(func):
    """Options shared by the search and best-scene commands."""
    options = [
        click.option("--item-type", default="planetscope", help="Item type (rapideye, planetscope, landsat, sentinel)"),
        click.option("--bbox", callback=bbox_option, default=None, help="west,south,east,north"),
        click.option("--start-date", default=None, help="Earliest acquisition (RFC 3339)"),
        click.option("--end-date", default=None, help="Latest acquisition (RFC 3339)"),
        click.option("--cloud-cover", type=float, default=None, help="Maximum cloud cover percent"),
        click.option("--tides", is_flag=True, help="Incorporate tide predictions"),
        click.option("--api-key", default=None, help="Planet API Key (default: from env)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _discover(item_type, bbox, start_date, end_date, cloud_cover, tides, api_key):
    planet = get_planet_client(api_key)
    scenes = planet.search_scenes(
        item_type,
        bbox=bbox,
        acquired_date=start_date,
        max_acquired_date=end_date,
        cloud_cover=cloud_cover,
    )
    if tides and scenes:
        scenes = get_tide_client().enrich(scenes)
    return scenes


@click.command(name="search")
@search_options
def search(item_type, bbox, start_date, end_date, cloud_cover, tides, api_key):
    """Search for scenes."""
    console.print("[bold]Searching for scenes...[/bold]")
    try:
        scenes = _discover(item_type, bbox, start_date, end_date, cloud_cover, tides, api_key)
    except (BrokerError, ValueError) as e:
        console.print(f"[red]Failed to search for scenes: {e}[/red]")
        raise click.Abort()

    if not scenes:
        console.print("[yellow]No scenes found.[/yellow]")
        return

    console.print(f"[bold]Found {len(scenes)} scenes[/bold]")
    for scene in scenes:
        cloud = f"{scene.cloud_cover:.1f}%" if scene.cloud_cover is not None else "N/A"
        console.print(f"  {scene.acquired[:10]} | ID: {scene.scene_id} | Cloud: {cloud}")


@click.command(name="best-scene")
@click.option("--candidates", type=click.Path(exists=True), default=None, help="GeoJSON FeatureCollection of scenes")
@click.option("--top", type=int, default=5, help="Number of ranked scenes to show")
@search_options
def best_scene(candidates, top, item_type, bbox, start_date, end_date, cloud_cover, tides, api_key):
    """Pick the best scene by cloud cover, age and tide."""
    try:
        if candidates:
            scenes = load_candidates(candidates)
            if tides:
                scenes = get_tide_client().enrich(scenes)
        else:
            scenes = _discover(item_type, bbox, start_date, end_date, cloud_cover, tides, api_key)
    except (BrokerError, ValueError, OSError) as e:
        console.print(f"[red]Failed to load candidate scenes: {e}[/red]")
        raise click.Abort()

    ranked_scenes = rank_scenes(scenes)
    if not ranked_scenes:
        console.print("[yellow]No candidate scenes.[/yellow]")
        return

    console.print(f"[green]Best scene:[/green] {ranked_scenes[0].scene_id}")
    for ranked in ranked_scenes[:top]:
        console.print(f"  {ranked.score:+.4f} | {ranked.scene_id}")
