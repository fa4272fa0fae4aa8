"""``design-tokens`` command group.

A thin host adapter over the engine: ``build`` runs discovery and writes
the JSON source document, ``show`` renders a previously built document
without re-parsing any source, ``classify`` runs the value classifier on
a single literal.
"""

import json
import time
from pathlib import Path
from typing import Any

import click

from .. import __version__
from ..catalog import (
    SOURCE_DOCUMENT_KEYS,
    build_source_document,
    catalog_from_source_document,
    load_source_document,
    write_source_document,
)
from ..classifier import classify as classify_value
from ..config import ConfigLoader
from ..discovery import discover_token_files, load_token_files
from ..models import Catalog
from ..parsers.base import create_registry
from ..token_logging import get_logger, setup_logging
from .errors import (
    OutputWriteError,
    ProjectNotFoundError,
    SourceDocumentError,
    ValidationError,
    handle_exception,
)
from .output import OutputConfig, OutputManager

logger = get_logger()


def _fail(ctx: click.Context, error: Exception) -> None:
    output: OutputManager = ctx.obj["output"]
    message, exit_code = handle_exception(
        error, use_color=output.config.use_color, verbose=output.config.verbose
    )
    click.echo(message, err=True)
    ctx.exit(exit_code)


@click.group()
@click.version_option(version=__version__, prog_name="design-tokens")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Log record format on stderr",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write all log records, debug included, to this rotating file",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    log_format: str | None,
    log_file: Path | None,
) -> None:
    """Design token catalog - extract tokens from stylesheets, icons and images."""
    if quiet and verbose:
        raise click.UsageError("--quiet and --verbose are mutually exclusive")

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["log_format"] = log_format
    ctx.obj["log_file"] = log_file
    ctx.obj["output"] = OutputManager(
        OutputConfig.from_flags(verbose=verbose, quiet=quiet, no_color=no_color)
    )
    setup_logging(
        quiet=quiet,
        verbose=verbose,
        log_file=log_file,
        log_format=log_format or "text",
    )


@cli.command()
@click.argument("project", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the source document (default: inside PROJECT)",
)
@click.option(
    "--all-stylesheets",
    is_flag=True,
    help="Parse stylesheets even when they contain no @tokens marker",
)
@click.option(
    "--workers",
    type=click.IntRange(1, 64),
    default=None,
    help="Parallel per-file parse workers",
)
@click.pass_context
def build(
    ctx: click.Context,
    project: Path,
    output_file: Path | None,
    all_stylesheets: bool,
    workers: int | None,
) -> None:
    """Scan PROJECT and write its design token source document."""
    output: OutputManager = ctx.obj["output"]
    try:
        if not project.is_dir():
            raise ProjectNotFoundError(str(project))
        project_path = project.resolve()

        config = ConfigLoader(project_path).load(
            max_workers=workers,
            require_sentinel=False if all_stylesheets else None,
            log_format=ctx.obj["log_format"],
        )
        setup_logging(
            level=config.log_level,
            quiet=ctx.obj["quiet"],
            verbose=ctx.obj["verbose"],
            log_file=ctx.obj["log_file"],
            log_format=config.log_format,
        )

        start = time.time()
        paths = discover_token_files(project_path, config)
        files = load_token_files(paths, config, root=project_path)
        output.debug(f"Discovered {len(paths)} files, loaded {len(files)}")

        registry = create_registry(config.image_extensions)
        document = build_source_document(files, registry, config.max_workers)

        target = output_file or project_path / config.output_filename
        try:
            size = write_source_document(document, target)
        except OSError as e:
            raise OutputWriteError(str(target), str(e)) from e
        duration_ms = (time.time() - start) * 1000

        catalog = catalog_from_source_document(document)
        output.success(f"Wrote {target} ({size} bytes)")
        for source_type, key in SOURCE_DOCUMENT_KEYS.items():
            group = catalog.get_group(source_type)
            if group is not None:
                output.info(f"{key}: {len(group.tokens)} tokens")
        if catalog.hard_coded_values:
            output.warning(f"{len(catalog.hard_coded_values)} hard-coded values found")
        output.summary(
            total=len(paths),
            loaded=len(files),
            skipped=len(paths) - len(files),
            duration_ms=duration_ms,
        )
    except Exception as e:
        _fail(ctx, e)


@cli.command()
@click.argument("source_json", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the merged catalog as JSON")
@click.option(
    "--hard-coded/--no-hard-coded",
    default=True,
    help="Include hard-coded values in the summary",
)
@click.pass_context
def show(ctx: click.Context, source_json: Path, as_json: bool, hard_coded: bool) -> None:
    """Render the catalog stored in SOURCE_JSON."""
    output: OutputManager = ctx.obj["output"]
    try:
        catalog = _read_catalog(source_json)
    except Exception as e:
        _fail(ctx, e)
        return

    if as_json:
        click.echo(json.dumps(catalog.to_dict(), indent=2, ensure_ascii=False))
        return

    _print_catalog(output, catalog, hard_coded)


@cli.command()
@click.argument("value")
@click.option("--name", default=None, help="Declared token name used as a hint")
@click.pass_context
def classify(ctx: click.Context, value: str, name: str | None) -> None:
    """Classify a single VALUE and print its kind and normalized form."""
    output: OutputManager = ctx.obj["output"]
    if not value.strip():
        _fail(ctx, ValidationError("VALUE must not be empty"))
        return

    result = classify_value(value, name)
    output.plain(f"kind:  {result.kind.value}", force=True)
    output.plain(f"value: {result.value}", force=True)


def _read_catalog(path: Path) -> Catalog:
    try:
        document = load_source_document(path)
    except OSError as e:
        raise SourceDocumentError(f"Cannot read source document: {e}", str(path)) from e
    except ValueError as e:
        raise SourceDocumentError(f"Invalid source document: {e}", str(path)) from e

    try:
        return catalog_from_source_document(document)
    except (KeyError, TypeError, ValueError) as e:
        raise SourceDocumentError(f"Malformed source document: {e}", str(path)) from e


def _print_catalog(output: OutputManager, catalog: Catalog, hard_coded: bool) -> None:
    if not catalog.token_groups:
        output.warning("No tokens found")

    for group in catalog.token_groups:
        output.header(f"{group.type.value.upper()} tokens ({len(group.tokens)})")
        rows: list[list[Any]] = [
            [
                token.name,
                token.kind.value,
                f"-> {token.alias_of}" if token.is_alias else token.value,
                token.category or "",
            ]
            for token in group.tokens
        ]
        output.table(["Name", "Kind", "Value", "Category"], rows)
        output.newline()

    if hard_coded and catalog.hard_coded_values:
        output.header(f"Hard-coded values ({len(catalog.hard_coded_values)})")
        output.table(
            ["Location", "Kind", "Value", "Property"],
            [
                [str(hcv.location), hcv.kind.value, hcv.value, hcv.property_name or ""]
                for hcv in catalog.hard_coded_values
            ],
        )
        output.newline()

    if catalog.keyframes:
        output.info(f"Keyframes: {len(catalog.keyframes.splitlines())} lines")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
