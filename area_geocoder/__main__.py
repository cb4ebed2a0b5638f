"""Entry point for running the area geocoder as a module."""

from area_geocoder.cli import cli

if __name__ == "__main__":
    cli()
