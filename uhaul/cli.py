"""Click CLI: relocate an ELF binary and its shared libraries to a prefix."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from uhaul import __version__
from uhaul.errors import UhaulError
from uhaul.models import DEFAULT_MAX_DEPTH, DEFAULT_PREFIX, MAX_DEPTH_LIMIT, RelocateConfig
from uhaul.pipeline import run_relocate

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


@click.command()
@click.version_option(version=__version__)
@click.argument("binary")
@click.option("--prefix", "-p", default=DEFAULT_PREFIX, show_default=True, help="Installation prefix")
@click.option("--out", "-o", "output_dir", type=click.Path(file_okay=False, path_type=Path),
              default="./out", show_default=True, help="Output directory")
@click.option("--clean/--no-clean", "-c", default=True, show_default=True, help="Clean output directory")
@click.option("--exclude", "-x", multiple=True, help="Glob of library file names not to bundle")
@click.option("--max-depth", type=click.IntRange(1, MAX_DEPTH_LIMIT), default=DEFAULT_MAX_DEPTH,
              show_default=True, help="Deepest dependency chain to follow")
@click.option("--ldd", default="ldd", envvar="UHAUL_LDD", show_default=True, help="ldd executable")
@click.option("--patchelf", default="patchelf", envvar="UHAUL_PATCHELF", show_default=True,
              help="patchelf executable")
@click.option("--verbose", "-v", count=True, help="-v for progress, -vv for debug output")
def cli(
    binary: str,
    prefix: str,
    output_dir: Path,
    clean: bool,
    exclude: tuple[str, ...],
    max_depth: int,
    ldd: str,
    patchelf: str,
    verbose: int,
):
    """uhaul: Relocate ELF binaries to a custom prefix, bringing dynamic
    libraries with you for the ride."""
    logging.basicConfig(
        level=_LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = RelocateConfig(
        binary=binary,
        prefix=prefix,
        output_dir=output_dir,
        clean=clean,
        exclude=list(exclude),
        max_depth=max_depth,
        ldd=ldd,
        patchelf=patchelf,
    )

    def progress(stage: str, current: int, total: int):
        if verbose:
            click.echo(f"  {stage}: {current}/{total}", err=True)

    try:
        result = run_relocate(config, progress=progress)
    except UhaulError as e:
        raise click.ClickException(str(e))

    click.echo(result.graph.summary())
    click.echo(f"{result.root} has {len(result.closure)} dynamic dependencies")
    for lib in sorted(result.closure):
        click.echo(f"  {lib}")

    bundle = result.layout
    click.echo(f"\nDone! Bundled into {click.style(str(bundle.root), fg='cyan')}")
    click.echo(f"  {bundle.binary}")
    for lib in bundle.libraries:
        click.echo(f"  {lib}")


if __name__ == "__main__":
    cli()
