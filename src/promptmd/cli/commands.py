"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger
from pydantic import ValidationError

from promptmd.config import Settings, load_config
from promptmd.core.models import Document
from promptmd.core.parse import parse_markdown
from promptmd.core.serialize import serialize_document
from promptmd.core.validate import check_roundtrip, function_stats
from promptmd.logging_config import configure_logging
from promptmd.registry import EMPTY_REGISTRY, FunctionRegistry, load_registry


InputFile = Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Input file")]
RegistryOpt = Annotated[Optional[str], typer.Option("--registry", help="Function catalog (YAML/JSON)")]
GrammarOpt = Annotated[Optional[str], typer.Option("--id-grammar", help="Placeholder id grammar: permissive or uuid")]
OutOpt = Annotated[Optional[Path], typer.Option("--out", "-o", help="Write output here instead of stdout")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def _registry(settings: Settings) -> FunctionRegistry:
    """Load the configured catalog; a missing file yields an empty registry."""
    path = Path(settings.registry_path)
    if not path.exists():
        logger.warning(f"Function registry {path} not found; all placeholders stay literal")
        return EMPTY_REGISTRY
    try:
        return load_registry(path)
    except ValueError as e:
        _fail("Could not load function registry", e)


def _emit(text: str, out: Optional[Path]) -> None:
    if out is None:
        typer.echo(text)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {out}")


def parse_cmd(path: InputFile, registry: RegistryOpt = None, grammar: GrammarOpt = None, out: OutOpt = None):
    """Parse a markdown prompt script into a JSON document tree."""
    settings = _settings(overrides={"registry_path": registry, "id_grammar": grammar})
    doc = parse_markdown(path.read_text(encoding="utf-8"), _registry(settings), settings.id_grammar)
    _emit(json.dumps(doc.model_dump(mode="json", by_alias=True, exclude_none=True), indent=settings.json_indent), out)


def render_cmd(path: InputFile, out: OutOpt = None):
    """Serialize a JSON document tree back to markdown."""
    _settings()
    try:
        doc = Document.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        _fail(f"Invalid document tree in {path}", e)
    _emit(serialize_document(doc), out)


def check_cmd(path: InputFile, registry: RegistryOpt = None, grammar: GrammarOpt = None):
    """Report function placeholder usage; exit 1 if any id is unknown."""
    settings = _settings(overrides={"registry_path": registry, "id_grammar": grammar})
    stats = function_stats(path.read_text(encoding="utf-8"), _registry(settings), settings.id_grammar)

    for function_id, count in stats.function_counts.items():
        typer.echo(f"  {function_id}: {count}")
    typer.echo(f"{stats.total_placeholders} placeholder(s), {stats.unique_functions} unique function(s)")

    invalid = stats.validation.invalid_ids
    if invalid:
        typer.echo(f"{len(invalid)} invalid function reference(s): {', '.join(dict.fromkeys(invalid))}", err=True)
        raise typer.Exit(1)


def roundtrip_cmd(path: InputFile, registry: RegistryOpt = None, grammar: GrammarOpt = None):
    """Parse and re-serialize a script; print the diff and exit 1 if it is lossy."""
    settings = _settings(overrides={"registry_path": registry, "id_grammar": grammar})
    report = check_roundtrip(path.read_text(encoding="utf-8"), _registry(settings), settings.id_grammar)
    if report.lossless:
        typer.echo("Round trip is lossless.")
        return

    typer.echo("".join(report.diff), nl=False)
    typer.echo(f"Round trip changed the script - {report.added} line(s) added, {report.deleted} deleted")
    raise typer.Exit(1)


def functions_cmd(
    registry: RegistryOpt = None,
    query: Annotated[Optional[str], typer.Option("--query", "-q", help="Filter by name or description")] = None,
    limit: Annotated[int, typer.Option("--limit", help="Max results when filtering")] = 10,
    ):
    """List the functions in the catalog, optionally filtered."""
    settings = _settings(overrides={"registry_path": registry})
    catalog = _registry(settings)
    specs = catalog.search(query, limit) if query else list(catalog)
    if not specs:
        typer.echo("No functions found.")
        raise typer.Exit(1)
    for spec in specs:
        typer.echo(f"{spec.id}  {spec.display_name}  ({spec.internal_id})")
