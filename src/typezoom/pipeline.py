"""Orchestrator: load program → select entries → collect → serialize."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from typezoom.classifier import ArrayDetection
from typezoom.collector import collect_dependencies
from typezoom.entries import select_entries
from typezoom.errors import TypezoomError
from typezoom.filters import EntryFilter
from typezoom.host.base import SourceProvider, TypeHost
from typezoom.host.typescript import create_program
from typezoom.model import EntryResult, FileResult, Symbol
from typezoom.serializer import DecoratorSerializer, EntitySerializer

logger = logging.getLogger(__name__)


@dataclass
class SerializerOptions:
    """Knobs for :func:`collect`.

    Without an *entry_filter* no entries are selected at all.
    """

    entry_filter: EntryFilter | None = None
    decorator_serializer: DecoratorSerializer | None = None
    source_provider: SourceProvider | None = None
    array_detection: ArrayDetection = ArrayDetection.PATH
    skip_failed_entries: bool = False


def collect(
    root_file_paths: list[str] | list[Path],
    options: SerializerOptions | None = None,
) -> list[FileResult]:
    """Load *root_file_paths* and serialize every selected entry with its dependencies."""
    options = options or SerializerOptions()
    host = create_program(root_file_paths, options.source_provider)
    return collect_program(host, options)


def collect_program(host: TypeHost, options: SerializerOptions | None = None) -> list[FileResult]:
    """Like :func:`collect`, over an already loaded *host*."""
    options = options or SerializerOptions()
    serializer = EntitySerializer(
        host,
        decorator_serializer=options.decorator_serializer,
        array_detection=options.array_detection,
    )

    file_results: list[FileResult] = []
    for source_file in host.get_source_files():
        if source_file.is_declaration_file:
            continue
        file_result = FileResult(file_name=source_file.file_name)
        for decl in select_entries(source_file, options.entry_filter):
            symbol = host.get_symbol_of_declaration(decl)
            if symbol is None:
                logger.debug("No symbol for %s in %s", decl.name, decl.file_name)
                continue
            try:
                file_result.results.append(_collect_entry(symbol, host, serializer, options))
            except TypezoomError as exc:
                if not options.skip_failed_entries:
                    raise
                logger.warning("Skipping %s: %s", symbol.name, exc)
        if file_result.results:
            file_results.append(file_result)

    logger.debug(
        "Serialized %d entries from %d files",
        sum(len(f.results) for f in file_results),
        len(file_results),
    )
    return file_results


def _collect_entry(
    symbol: Symbol,
    host: TypeHost,
    serializer: EntitySerializer,
    options: SerializerOptions,
) -> EntryResult:
    dependencies = collect_dependencies(symbol, host, array_detection=options.array_detection)
    logger.debug("%s: %d dependencies", symbol.name, len(dependencies))
    return EntryResult(
        root=serializer.serialize_class(symbol),
        dependencies=[serializer.serialize_dependency(item) for item in dependencies.values()],
    )
