"""
CLI commands for bwtpress.
"""

import sys
import time
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bwtpress.config import CompressionOptions, Settings, parse_stage_list
from bwtpress.context.serialization.container import parse, read_container
from bwtpress.exceptions import BWTPressError, ItemNotFoundError
from bwtpress.models import META_COMPRESSED_SIZE, META_ERROR, META_FILENAME, META_PIPELINE
from bwtpress.services.benchmark import benchmark_bytes
from bwtpress.services.io import compress_file, read_file_bytes
from bwtpress.services.pipeline import decompress as decompress_bytes
from bwtpress.services.pipeline import get_compression_stats
from bwtpress.services.store import ArchiveStore


def _fail(message: str):
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _require_file(path: str) -> Path:
    input_path = Path(path)
    if not input_path.is_file():
        _fail(f"Input file not found: {path}")
    return input_path


def _store(ctx: click.Context, store_dir) -> ArchiveStore:
    if store_dir:
        return ArchiveStore(Path(store_dir).expanduser())
    settings = ctx.obj if isinstance(ctx.obj, Settings) else Settings.from_env()
    return ArchiveStore(settings.store_dir)


def _stages_option(ctx, param, value):
    if value is None:
        return CompressionOptions()
    try:
        return CompressionOptions(parse_stage_list(value))
    except ValueError as e:
        raise click.BadParameter(str(e))


@click.command()
@click.option('--input', '-i', 'input_file', required=True, help='Input file path')
@click.option('--output', '-o', 'output_file', required=True, help='Output container path')
@click.option('--stages', '-s', callback=_stages_option, default=None,
              help='Comma separated stages to apply (default: bwt,mtf,rle)')
@click.option('--measure', '-m', is_flag=True, help='Measure and display compression metrics')
def compress(input_file, output_file, stages, measure):
    """
    Compress a file into a BWTJS1 container.

    Example:
        bwtpress compress -i notes.txt -o notes.bwtz -m
    """
    input_path = _require_file(input_file)
    output_path = Path(output_file)

    original_size = input_path.stat().st_size
    click.echo(f"Compressing {input_path.name} ({original_size:,} bytes)...")

    start = time.time()
    try:
        blob, meta = compress_file(input_path, stages)
    except BWTPressError as e:
        _fail(str(e))
    elapsed = time.time() - start

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(blob)

    if META_ERROR in meta:
        click.echo(f"Warning: compression fell back to pass-through ({meta[META_ERROR]})", err=True)

    if measure:
        stats = get_compression_stats(original_size, len(blob))
        click.echo("\n=== Compression Results ===")
        click.echo(f"Original size: {stats.original_size:,} bytes")
        click.echo(f"Payload size: {meta[META_COMPRESSED_SIZE]:,} bytes")
        click.echo(f"Container size: {stats.compressed_size:,} bytes")
        click.echo(f"Compression ratio: {stats.compression_ratio:.3f}")
        click.echo(f"Space saved: {stats.reduction_percent:.1f}%")
        click.echo(f"Stages: {', '.join(meta[META_PIPELINE])}")
        click.echo(f"Processing time: {elapsed:.2f}s")

    click.echo(f"\n✓ Compressed to {output_path}")


@click.command()
@click.option('--input', '-i', 'input_file', required=True, help='Input container path')
@click.option('--output', '-o', 'output_file', required=True, help='Output file path')
def decompress(input_file, output_file):
    """
    Restore the original file from a BWTJS1 container.

    Example:
        bwtpress decompress -i notes.bwtz -o notes.txt
    """
    input_path = _require_file(input_file)
    output_path = Path(output_file)

    try:
        container = read_container(input_path)
        data = decompress_bytes(container.payload, container.metadata)
    except BWTPressError as e:
        _fail(str(e))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(data)
    click.echo(f"✓ Decompressed {len(data):,} bytes to {output_path}")


@click.command()
@click.option('--input', '-i', 'input_file', required=True, help='Container path')
def info(input_file):
    """Show the metadata stored in a container."""
    input_path = _require_file(input_file)
    try:
        container = read_container(input_path)
    except BWTPressError as e:
        _fail(str(e))

    table = Table(title=input_path.name)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for field, value in container.metadata.items():
        table.add_row(str(field), str(value))
    table.add_row("payload bytes", f"{len(container.payload):,}")
    Console().print(table)


@click.command()
@click.option('--input', '-i', 'input_file', required=True, help='Input file path')
def bench(input_file):
    """Compare the pipeline against zstd and gzip on one file."""
    input_path = _require_file(input_file)
    results = benchmark_bytes(read_file_bytes(input_path), input_path.name)

    table = Table(title=f"{results['label']} ({results['original_size']:,} bytes)")
    table.add_column("Method", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Ratio", justify="right")
    table.add_column("Time (s)", justify="right")
    for name, method in results['methods'].items():
        table.add_row(
            name,
            f"{method['compressed_size']:,}",
            f"{method['compression_ratio']:.3f}",
            f"{method['compression_time']:.3f}",
        )
    Console().print(table)

    if not results['roundtrip_ok']:
        _fail("pipeline round trip mismatch")


@click.command()
@click.option('--input', '-i', 'input_file', required=True, help='Container to save')
@click.option('--key', '-k', required=True, help='Store key')
@click.option('--store-dir', default=None, help='Store directory (default: $BWTPRESS_STORE_DIR)')
@click.pass_context
def save(ctx, input_file, key, store_dir):
    """Save a container in the archive store."""
    input_path = _require_file(input_file)
    blob = read_file_bytes(input_path)
    try:
        container = parse(blob)
        item = _store(ctx, store_dir).save(key, blob, container.metadata)
    except (BWTPressError, ValueError) as e:
        _fail(str(e))
    click.echo(f"✓ Saved {item.key} ({item.size:,} bytes)")


@click.command(name='list')
@click.option('--store-dir', default=None, help='Store directory (default: $BWTPRESS_STORE_DIR)')
@click.pass_context
def list_items(ctx, store_dir):
    """List saved containers, newest first."""
    items = _store(ctx, store_dir).list_items()
    if not items:
        click.echo("No saved items.")
        return

    table = Table()
    table.add_column("Key", style="cyan")
    table.add_column("File")
    table.add_column("Size", justify="right")
    table.add_column("Saved at")
    for item in items:
        table.add_row(item.key, str(item.meta.get(META_FILENAME, '')), f"{item.size:,}", item.saved_at)
    Console().print(table)


@click.command()
@click.option('--key', '-k', required=True, help='Store key')
@click.option('--output', '-o', 'output_file', required=True, help='Output container path')
@click.option('--store-dir', default=None, help='Store directory (default: $BWTPRESS_STORE_DIR)')
@click.pass_context
def load(ctx, key, output_file, store_dir):
    """Write a saved container back to a file."""
    try:
        blob, _ = _store(ctx, store_dir).load(key)
    except ItemNotFoundError:
        _fail(f"No saved item named {key}")
    except (BWTPressError, ValueError) as e:
        _fail(str(e))

    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(blob)
    click.echo(f"✓ Wrote {key} to {output_path}")


@click.command()
@click.option('--key', '-k', required=True, help='Store key')
@click.option('--store-dir', default=None, help='Store directory (default: $BWTPRESS_STORE_DIR)')
@click.pass_context
def delete(ctx, key, store_dir):
    """Delete a saved container."""
    try:
        removed = _store(ctx, store_dir).delete(key)
    except ValueError as e:
        _fail(str(e))
    click.echo(f"✓ Deleted {key}" if removed else f"Nothing saved under {key}")
