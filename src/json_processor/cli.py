"""Command-line interface for the JSON Processor."""

import importlib
import logging
from pathlib import Path
from typing import Optional, Union

import click

from . import __version__
from .io import JSONReader, JSONWriter
from .json_processor import JSONProcessor
from .profiler import ConversionProfiler
from .tree import JSONArray, JSONObject, JSONTreeError
from .types import JSONProcessorError

_FAILURES = (JSONProcessorError, JSONTreeError, OSError)


def _resolve_class(ctx: click.Context, param: click.Parameter, value: str) -> type:
    """Import a class given as ``package.module:ClassName``."""
    module_name, _, qualname = value.partition(":")
    if not module_name or not qualname:
        raise click.BadParameter("expected MODULE:CLASS", ctx=ctx, param=param)
    try:
        target = importlib.import_module(module_name)
        for part in qualname.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(f"cannot import {value}: {e}", ctx=ctx, param=param) from e
    if not isinstance(target, type):
        raise click.BadParameter(f"{value} is not a class", ctx=ctx, param=param)
    return target


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _emit(node: Union[JSONObject, JSONArray], output: Optional[str], indent: int) -> None:
    if output:
        info = JSONWriter().write(node, output, indent=indent)
        click.echo(f"✅ Wrote {info['size']} bytes to {info['path']}")
    else:
        click.echo(node.to_json(indent=indent))


def _report_profile(profiler: Optional[ConversionProfiler]) -> None:
    if profiler is None:
        return
    summary = profiler.get_performance_summary()
    click.echo(f"📊 {summary['total_operations']} operations, "
               f"{summary.get('total_duration', 0.0) * 1000:.2f}ms total, "
               f"peak memory {summary.get('memory_peak_mb', 0.0):.1f} MB", err=True)


@click.group()
@click.version_option(version=__version__)
def main():
    """JSON Processor - Convert annotated Python objects to JSON and back."""
    pass


@main.command()
@click.argument('target', metavar='MODULE:CLASS', callback=_resolve_class)
def describe(target: type):
    """Print the processable fields of a class."""
    try:
        fields = JSONProcessor().describe(target)
    except JSONProcessorError as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"{target.__module__}.{target.__qualname__}")
    for field in fields:
        line = f"  {field['name']:<20} {field['type']:<28} {field['kind']:<10}"
        line += f" nullable={str(field['nullable']).lower()} enum={field['enum_format']} mapper={field['mapper']}"
        if "container_type" in field:
            line += f" container={field['container_type']}"
        click.echo(line)


@main.command()
@click.argument('target', metavar='MODULE:CLASS', callback=_resolve_class)
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', help='Output JSON file path (default: stdout)')
@click.option('--indent', default=2, show_default=True, help='Indentation width of the output')
@click.option('--profile', is_flag=True, help='Report duration and memory usage')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def roundtrip(target: type, input_file: Path, output: Optional[str], indent: int,
              profile: bool, verbose: bool):
    """Deserialize a document into a class and serialize it back."""
    _configure_logging(verbose)
    profiler = ConversionProfiler() if profile else None
    processor = JSONProcessor(profiler=profiler)

    try:
        tree = JSONReader().read_json_object(input_file)
        instance = processor.deserialize(target, tree)
        result = processor.serialize(instance)
    except _FAILURES as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)

    _emit(result, output, indent)
    _report_profile(profiler)


@main.command(name='convert-all')
@click.argument('target', metavar='MODULE:CLASS', callback=_resolve_class)
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', help='Output JSON file path (default: stdout)')
@click.option('--indent', default=2, show_default=True, help='Indentation width of the output')
@click.option('--profile', is_flag=True, help='Report duration and memory usage')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def convert_all(target: type, input_file: Path, output: Optional[str], indent: int,
                profile: bool, verbose: bool):
    """Round-trip an array or object of documents through a class."""
    _configure_logging(verbose)
    profiler = ConversionProfiler() if profile else None
    processor = JSONProcessor(profiler=profiler)
    reader = JSONReader()

    try:
        text = reader.read_text(input_file)
        if text.lstrip().startswith("["):
            tree = JSONArray.parse(text)
        else:
            tree = JSONObject.parse(text)
        instances = processor.deserialize_all(target, tree)
        result = processor.serialize_all(instances)
    except _FAILURES as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)

    _emit(result, output, indent)
    _report_profile(profiler)


if __name__ == '__main__':
    main()
