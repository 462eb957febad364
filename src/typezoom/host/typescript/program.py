"""Load TypeScript files and their relative imports into a typed program."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from typezoom.host.base import SourceProvider
from typezoom.host.typescript.binder import BoundFile, bind_file
from typezoom.host.typescript.checker import TypeChecker
from typezoom.host.typescript.lib import LIB_FILE_NAME, LIB_SOURCE
from typezoom.host.typescript.syntax import get_parser
from typezoom.model import SourceFile

logger = logging.getLogger(__name__)

_EXTENSIONS = (".ts", ".tsx", ".d.ts")


class TypeScriptProgram(TypeChecker):
    """A fully loaded program; implements :class:`~typezoom.host.TypeHost`."""

    def __init__(self, files: dict[str, BoundFile], order: list[str]) -> None:
        super().__init__(files, files[LIB_FILE_NAME])
        self._order = order

    @property
    def file_names(self) -> list[str]:
        return list(self._order)

    def get_source_files(self) -> list[SourceFile]:
        result = []
        for file_name in self._order:
            bound = self._files[file_name]
            result.append(
                SourceFile(
                    file_name=bound.file_name,
                    is_declaration_file=bound.is_declaration_file,
                    declarations=list(bound.declarations),
                )
            )
        return result


def create_program(
    root_names: list[str] | list[Path],
    source_provider: SourceProvider | None = None,
) -> TypeScriptProgram:
    """Parse *root_names* and everything they import relatively.

    Text is obtained from *source_provider* when it answers, else read from
    disk.  The built-in library is always loaded first.
    """
    loader = _Loader(source_provider)
    loader.add(LIB_FILE_NAME, LIB_SOURCE)
    for root in root_names:
        loader.load(os.path.normpath(str(root)), is_root=True)
    logger.debug("Loaded %d source files", len(loader.order))
    return TypeScriptProgram(loader.files, loader.order)


def is_declaration_file(file_name: str) -> bool:
    return file_name.endswith(".d.ts")


class _Loader:
    """Depth-first loader: a file's imports are added before the file itself."""

    def __init__(self, source_provider: SourceProvider | None) -> None:
        self._source_provider = source_provider
        self._texts: dict[str, str | None] = {}
        self._loading: set[str] = set()
        self.files: dict[str, BoundFile] = {}
        self.order: list[str] = []

    def read(self, file_name: str) -> str | None:
        if file_name in self._texts:
            return self._texts[file_name]
        text = None
        if self._source_provider is not None:
            text = self._source_provider(file_name)
        if text is None:
            try:
                text = Path(file_name).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                text = None
        self._texts[file_name] = text
        return text

    def add(self, file_name: str, text: str) -> BoundFile:
        bound = _parse(file_name, text)
        self.files[file_name] = bound
        self.order.append(file_name)
        return bound

    def load(self, file_name: str, is_root: bool = False) -> None:
        if file_name in self.files or file_name in self._loading:
            return
        text = self.read(file_name)
        if text is None:
            if is_root:
                logger.warning("Cannot read %s, skipping", file_name)
            return

        bound = _parse(file_name, text)
        self._loading.add(file_name)
        try:
            for specifier in bound.module_specifiers:
                if specifier in bound.resolved_modules:
                    continue
                target = self.resolve_module(file_name, specifier)
                bound.resolved_modules[specifier] = target
                if target is None:
                    logger.debug("Unresolved module %r imported from %s", specifier, file_name)
                else:
                    self.load(target)
        finally:
            self._loading.discard(file_name)

        self.files[file_name] = bound
        self.order.append(file_name)

    def resolve_module(self, from_file: str, specifier: str) -> str | None:
        if not specifier.startswith(("./", "../")) and specifier not in (".", ".."):
            return None
        base = os.path.normpath(os.path.join(os.path.dirname(from_file), specifier))
        candidates = [base + ext for ext in _EXTENSIONS]
        candidates += [os.path.join(base, "index" + ext) for ext in _EXTENSIONS]
        if base.endswith(_EXTENSIONS):
            candidates.insert(0, base)
        for candidate in candidates:
            if candidate in self.files or candidate in self._loading:
                return candidate
            if self.read(candidate) is not None:
                return candidate
        return None


def _parse(file_name: str, text: str) -> BoundFile:
    source = text.encode("utf-8")
    tree = get_parser(file_name).parse(source)
    if tree.root_node.has_error:
        logger.warning("Syntax errors in %s; some declarations may be missing", file_name)
    return bind_file(file_name, source, tree, is_declaration_file(file_name))
