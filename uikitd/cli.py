"""uikit CLI.

Bundle a component from the command line or start the daemon.
"""

import asyncio
import sys
from pathlib import Path

import click

from uikit_library.bundler import BundlerError
from uikit_library.bundler import create_bundler
from uikit_library.config import BundlerSettings
from uikit_library.config import load_config
from uikit_library.models.bundles import ProcessMode


async def _bundle_once(settings: BundlerSettings, entry: str) -> tuple[str, str | None]:
    bundler = create_bundler(settings)
    try:
        script = await bundler.bundle_component(entry)
        return script, bundler.status().backend
    finally:
        await bundler.aclose()


@click.group()
def cli():
    """uikit - bundle UI components into self-contained scripts."""
    pass


@cli.command()
@click.argument("entry", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ProcessMode]),
    default=None,
    help="Build mode (default: from configuration)",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), help="Write bundle to file")
@click.option("--esbuild", "esbuild_binary", default=None, help="esbuild executable to try first")
def bundle(entry: str, mode: str | None, output: str | None, esbuild_binary: str | None):
    """Bundle ENTRY and print the script (or write it to --output)."""
    settings = load_config()
    overrides: dict[str, object] = {}
    if mode is not None:
        overrides["mode"] = ProcessMode(mode)
    if esbuild_binary is not None:
        overrides["esbuild_binary"] = esbuild_binary
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        script, backend = asyncio.run(_bundle_once(settings, str(Path(entry).resolve())))
    except BundlerError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(script, encoding="utf-8")
        click.echo(f"Wrote {len(script.encode('utf-8'))} bytes to {output} ({backend} backend)", err=True)
    else:
        click.echo(script, nl=False)


@cli.command()
def components():
    """List components registered in the configuration."""
    settings = load_config()
    if not settings.components:
        click.echo("No components configured")
        return
    for name, entry_path in sorted(settings.components.items()):
        click.echo(f"{name}: {entry_path}")


@cli.command()
def serve():
    """Start the daemon in the foreground."""
    from .__main__ import main

    main()


if __name__ == "__main__":
    cli()
