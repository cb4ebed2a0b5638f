"""Command-line interface for the area geocoder."""

import json
import sys

import click

from area_geocoder.core.config import settings
from area_geocoder.core.geocoding.boundaries import (
    BoundaryLoadError,
    BoundaryStore,
)
from area_geocoder.core.geocoding.service import GeocodingService
from area_geocoder.core.logging import configure_logging

boundaries_option = click.option(
    "--boundaries",
    "-b",
    type=click.Path(dir_okay=False),
    default=None,
    help="Boundary GeoJSON file (defaults to BOUNDARY_FILE)",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Point-in-area reverse geocoder."""
    configure_logging(
        level="debug" if verbose else settings.LOG_LEVEL,
        json_logs=settings.JSON_LOGS,
    )


@cli.command()
def serve() -> None:
    """Start the HTTP and HTTPS listeners."""
    from area_geocoder.server import run

    run(settings)


@cli.command()
@click.option("--lat", required=True, type=float, help="Latitude")
@click.option("--lng", required=True, type=float, help="Longitude")
@boundaries_option
def locate(lat: float, lng: float, boundaries: str | None) -> None:
    """Print the geocoding response for one coordinate."""
    store = BoundaryStore(boundaries or settings.BOUNDARY_FILE)
    service = GeocodingService(
        store,
        locality_name=settings.LOCALITY_NAME,
        fallback_name=settings.FALLBACK_NAME,
        fallback_place_id=settings.FALLBACK_PLACE_ID,
    )
    response = service.reverse_geocode(lat, lng)
    click.echo(json.dumps(response.model_dump(), indent=2, ensure_ascii=False))


@cli.command()
@boundaries_option
def check(boundaries: str | None) -> None:
    """Validate the boundary dataset and list its regions."""
    store = BoundaryStore(boundaries or settings.BOUNDARY_FILE)
    try:
        regions = store.read_dataset()
    except BoundaryLoadError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    degenerate = 0
    for region in regions:
        flag = ""
        if region.is_degenerate:
            degenerate += 1
            flag = "  (degenerate, never matches)"
        click.echo(
            f"{region.name}\t{region.id or '-'}\t{len(region.boundary)} vertices{flag}"
        )
    click.echo(f"{len(regions)} region(s), {degenerate} degenerate")


if __name__ == "__main__":
    cli()
