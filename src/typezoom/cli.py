"""Command-line interface for typezoom."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from typezoom.classifier import ArrayDetection
from typezoom.config import load_config
from typezoom.decorators import serialize_literal_decorator
from typezoom.errors import TypezoomError
from typezoom.filters import is_decorated_by
from typezoom.pipeline import SerializerOptions, collect
from typezoom.renderer.json import render_json
from typezoom.vue import collect_vue_files

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="typezoom",
        description="Serialize decorated TypeScript classes and every type they depend on as JSON.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Root source files (.ts, .tsx, or .vue with --vue)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output JSON file path (default: stdout)",
    )
    parser.add_argument(
        "--entry-decorator",
        action="append",
        dest="entry_decorators",
        metavar="NAME",
        help="Select classes decorated with NAME as entries (repeatable; default: Component)",
    )
    parser.add_argument(
        "--decorator",
        action="append",
        dest="serialize_decorators",
        metavar="NAME",
        help="Include decorators named NAME in the output (repeatable)",
    )
    parser.add_argument(
        "--vue",
        action="store_true",
        help="Read <script lang=\"ts\"> blocks of .vue single-file components",
    )
    parser.add_argument(
        "--structural-arrays",
        action="store_true",
        help="Detect arrays by shape (length + numeric index) instead of by declaring file",
    )
    parser.add_argument(
        "--skip-failed",
        action="store_true",
        help="Log and skip entries whose types cannot be resolved",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path.cwd(),
        metavar="DIR",
        help="Directory holding .typezoom.toml or pyproject.toml (default: current directory)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("typezoom").setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
        entry_decorators = args.entry_decorators or config.entry_decorators
        serialize_decorators = args.serialize_decorators or config.serialize_decorators
        options = SerializerOptions(
            entry_filter=is_decorated_by(*entry_decorators),
            decorator_serializer=(
                serialize_literal_decorator(serialize_decorators)
                if serialize_decorators
                else None
            ),
            array_detection=(
                ArrayDetection.STRUCTURAL if args.structural_arrays else config.array_detection
            ),
            skip_failed_entries=args.skip_failed or config.skip_failed_entries,
        )
        if args.vue:
            results = collect_vue_files(args.files, options)
        else:
            results = collect(args.files, options)
    except TypezoomError as e:
        logger.error("typezoom: %s", e)
        sys.exit(1)

    text = render_json(results, args.output)
    if args.output is None:
        sys.stdout.write(text + "\n")
    else:
        logger.info("Wrote %s", args.output)
