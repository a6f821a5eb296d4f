"""
bagfixity CLI.

Command-line interface for manifest generation, tag file management and
fixity checks.
"""

import logging
from pathlib import Path

import click

from bagfixity import __version__
from bagfixity.core.config import ManifestSelector


def _open_manifests(ctx: click.Context, root: str):
    from bagfixity.core.config import BagConfig
    from bagfixity.manifest.bag_manifests import BagManifests

    config_path = ctx.obj.get("config")
    if config_path:
        config = BagConfig.from_yaml(config_path, root=root)
    else:
        config = BagConfig(root=Path(root))
    return BagManifests.from_config(config)


def _print_tracked(tracked: list[Path], root: str) -> None:
    from bagfixity.core.path_codec import encode_path, relative_bag_path

    click.echo(f"Tracked tag files ({len(tracked)}):")
    for path in tracked:
        click.echo(f"  {encode_path(relative_bag_path(root, path))}")


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True), help="Bag config YAML")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """bagfixity: Bag manifests and fixity checks."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("root", type=click.Path(file_okay=False))
@click.option("--info", "-i", multiple=True, help="bag-info field as KEY=VALUE")
def init(root: str, info: tuple[str, ...]) -> None:
    """Create a bag directory with its declaration files."""
    from bagfixity.core.bag import DirectoryBag
    from bagfixity.core.config import BagConfig

    fields = {}
    for item in info:
        if "=" not in item:
            click.echo(f"Error: Invalid --info value (expected KEY=VALUE): {item}", err=True)
            raise SystemExit(1)
        key, value = item.split("=", 1)
        fields[key.strip()] = value.strip()

    DirectoryBag.create(BagConfig(root=Path(root)), info=fields)
    click.echo(f"Created bag at {root}")


@main.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice([s.value for s in ManifestSelector]),
    help="Manifest algorithm selector (defaults to the configured one)",
)
@click.pass_context
def manifest(ctx: click.Context, root: str, algorithm: str | None) -> None:
    """Regenerate payload and tag manifests."""
    from bagfixity.core.errors import BagError

    manifests = _open_manifests(ctx, root)
    try:
        manifests.manifest(algorithm)
    except (BagError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    for path in manifests.manifest_files() + manifests.tagmanifest_files():
        click.echo(f"Wrote {path.name}")


@main.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.pass_context
def tagmanifest(ctx: click.Context, root: str) -> None:
    """Regenerate tag manifests from the tracked tag files."""
    from bagfixity.core.errors import BagError

    manifests = _open_manifests(ctx, root)
    try:
        tracked = manifests.tagmanifest()
    except (BagError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    _print_tracked(tracked, root)


@main.command("add-tag")
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.argument("path")
@click.option("--source", "-s", type=click.Path(exists=True, dir_okay=False), help="File to copy in")
@click.option("--text", "-t", help="Content for a new tag file")
@click.pass_context
def add_tag(
    ctx: click.Context,
    root: str,
    path: str,
    source: str | None,
    text: str | None,
) -> None:
    """Add a tag file to the tag manifests."""
    from bagfixity.core.errors import BagError

    writer = None
    if text is not None:
        content = text if text.endswith("\n") else text + "\n"

        def writer(f):
            f.write(content)

    manifests = _open_manifests(ctx, root)
    try:
        tracked = manifests.add_tag_file(path, source_path=source, content_writer=writer)
    except (BagError, OSError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    _print_tracked(tracked, root)


@main.command("remove-tag")
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.argument("path")
@click.pass_context
def remove_tag(ctx: click.Context, root: str, path: str) -> None:
    """Remove a tag file from the tag manifests, keeping it on disk."""
    from bagfixity.core.errors import BagError

    manifests = _open_manifests(ctx, root)
    try:
        tracked = manifests.remove_tag_file(path)
    except (BagError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    _print_tracked(tracked, root)


@main.command("delete-tag")
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.argument("path")
@click.pass_context
def delete_tag(ctx: click.Context, root: str, path: str) -> None:
    """Remove a tag file from the tag manifests and delete it."""
    from bagfixity.core.errors import BagError

    manifests = _open_manifests(ctx, root)
    try:
        tracked = manifests.delete_tag_file(path)
    except (BagError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"Deleted {path}")
    _print_tracked(tracked, root)


@main.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.pass_context
def check(ctx: click.Context, root: str) -> None:
    """Verify every recorded checksum. Exits 1 if the bag is not fixed."""
    from rich.console import Console
    from rich.table import Table

    manifests = _open_manifests(ctx, root)
    report = manifests.check()

    click.echo(
        f"Checked {report.records_checked} record(s) in "
        f"{len(report.checked_files)} manifest file(s)"
    )
    for skipped in report.skipped_files:
        click.echo(f"Skipped {skipped.name} (unknown algorithm)")

    if report.ok:
        click.echo("Bag is fixed")
        return

    table = Table(title="Fixity failures")
    table.add_column("Manifest", style="cyan")
    table.add_column("Problem", style="red")
    table.add_column("Path")
    table.add_column("Detail")
    for failure in report.failures:
        detail = failure.reason or f"expected {failure.expected}, got {failure.actual}"
        table.add_row(failure.manifest.name, failure.kind.value, failure.path or "", detail)

    Console().print(table)
    raise SystemExit(1)


@main.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.pass_context
def status(ctx: click.Context, root: str) -> None:
    """Show manifest files, tracked tag files and the manifest fingerprint."""
    manifests = _open_manifests(ctx, root)

    click.echo("=== Manifests ===")
    for path in manifests.manifest_files() + manifests.tagmanifest_files():
        click.echo(f"  {path.name}")
    click.echo(f"Fingerprint: {manifests.fingerprint()}")

    _print_tracked(manifests.bag.tag_files(), root)


if __name__ == "__main__":
    main()
