"""Single-file component (``.vue``) support.

A component ``Foo.vue`` is presented to the program as the virtual file
``Foo.vue.ts`` whose text is the component's ``<script lang="ts">`` block.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from pathlib import Path

from typezoom.filters import is_decorated_by
from typezoom.host.base import SourceProvider
from typezoom.model import FileResult
from typezoom.pipeline import SerializerOptions, collect

logger = logging.getLogger(__name__)

VIRTUAL_SUFFIX = ".vue.ts"

_SCRIPT_RE = re.compile(
    r"""<script\b[^>]*\blang=["']ts["'][^>]*>(.*?)</script>""",
    re.DOTALL | re.IGNORECASE,
)


def is_virtual_vue_file(file_name: str) -> bool:
    return file_name.endswith(VIRTUAL_SUFFIX)


def extract_script(content: str) -> str | None:
    """Return the body of the first ``<script lang="ts">`` block of *content*."""
    match = _SCRIPT_RE.search(content)
    return match.group(1) if match else None


def vue_source_provider(file_name: str) -> str | None:
    """Source provider answering virtual ``.vue.ts`` paths; None for anything else."""
    if not is_virtual_vue_file(file_name):
        return None
    component = Path(file_name[: -len(".ts")])
    try:
        content = component.read_text(encoding="utf-8")
    except OSError as e:
        logger.debug("Could not read %s: %s", component, e)
        return None
    script = extract_script(content)
    if script is None:
        logger.warning('No <script lang="ts"> block in %s', component)
    return script


def prepare_root_names(paths: list[str] | list[Path]) -> list[str]:
    """Map ``X.vue`` to its virtual ``X.vue.ts`` name, leaving other paths alone."""
    return [f"{p}.ts" if str(p).endswith(".vue") else str(p) for p in paths]


def collect_vue_files(
    paths: list[str] | list[Path],
    options: SerializerOptions | None = None,
) -> list[FileResult]:
    """Run :func:`~typezoom.pipeline.collect` over components and plain files.

    Entries default to classes decorated with ``@Component``.
    """
    options = options or SerializerOptions()
    if options.entry_filter is None:
        options = replace(options, entry_filter=is_decorated_by("Component"))
    options = replace(options, source_provider=_chain(options.source_provider))
    return collect(prepare_root_names(paths), options)


def _chain(provider: SourceProvider | None) -> SourceProvider:
    if provider is None:
        return vue_source_provider

    def _provide(file_name: str) -> str | None:
        text = provider(file_name)
        return text if text is not None else vue_source_provider(file_name)

    return _provide
