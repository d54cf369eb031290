"""Java import optimizer that orders imports by an import layout."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from styleguard.models import (
    AllOtherImports,
    AllOtherStaticImports,
    BlankLine,
    LayoutSegment,
    ModuleImportsGroup,
    PackageGroup,
)
from styleguard.settings.store import canonical_layout

logger = logging.getLogger(__name__)

_IMPORT_RE = re.compile(
    r"^\s*import\s+(?:(?P<kind>static|module)\s+)?(?P<name>[\w.]+(?:\.\*)?)\s*;\s*$"
)


@dataclass(frozen=True)
class ImportStatement:
    name: str
    static: bool = False
    module: bool = False

    def render(self) -> str:
        if self.module:
            return f"import module {self.name};"
        if self.static:
            return f"import static {self.name};"
        return f"import {self.name};"


def parse_import(line: str) -> ImportStatement | None:
    match = _IMPORT_RE.match(line)
    if not match:
        return None
    kind = match.group("kind")
    return ImportStatement(match.group("name"), static=kind == "static", module=kind == "module")


class JavaImportOptimizer:
    """Sorts and groups the import block of a Java source file.

    Each import goes to the most specific matching package group of the
    layout, falling back to the "all other" groups. Blank lines appear only
    where the layout places them.
    """

    def __init__(self, layout: list[LayoutSegment] | None = None) -> None:
        self.layout = layout if layout is not None else canonical_layout()

    def _segment_for(self, stmt: ImportStatement) -> int | None:
        if stmt.module:
            for i, segment in enumerate(self.layout):
                if isinstance(segment, ModuleImportsGroup):
                    return i
            return self._fallback(AllOtherImports)

        best: int | None = None
        best_len = -1
        for i, segment in enumerate(self.layout):
            if (isinstance(segment, PackageGroup) and segment.static == stmt.static
                    and segment.matches(stmt.name) and len(segment.package) > best_len):
                best, best_len = i, len(segment.package)
        if best is not None:
            return best
        if stmt.static:
            index = self._fallback(AllOtherStaticImports)
            if index is not None:
                return index
        return self._fallback(AllOtherImports)

    def _fallback(self, kind: type) -> int | None:
        for i, segment in enumerate(self.layout):
            if isinstance(segment, kind):
                return i
        return None

    def render(self, imports: list[ImportStatement]) -> list[str]:
        buckets: dict[int, list[ImportStatement]] = {}
        unplaced: list[ImportStatement] = []
        for stmt in dict.fromkeys(imports):
            index = self._segment_for(stmt)
            if index is None:
                unplaced.append(stmt)
            else:
                buckets.setdefault(index, []).append(stmt)

        lines: list[str] = []
        for i, segment in enumerate(self.layout):
            if isinstance(segment, BlankLine):
                if lines and lines[-1] != "":
                    lines.append("")
                continue
            for stmt in sorted(buckets.get(i, []), key=lambda s: s.name):
                lines.append(stmt.render())
        lines.extend(stmt.render() for stmt in sorted(unplaced, key=lambda s: s.name))

        while lines and lines[-1] == "":
            lines.pop()
        return lines

    def optimize_text(self, text: str) -> str:
        """Return text with its import block reordered."""
        lines = text.splitlines()
        first = last = None
        imports: list[ImportStatement] = []
        for i, line in enumerate(lines):
            stmt = parse_import(line)
            if stmt is not None:
                if first is None:
                    first = i
                last = i
                imports.append(stmt)
            elif first is not None and line.strip():
                break

        if first is None:
            return text

        new_lines = lines[:first] + self.render(imports) + lines[last + 1:]
        result = "\n".join(new_lines)
        if text.endswith("\n"):
            result += "\n"
        return result

    def optimize_file(self, path: str | Path) -> bool:
        """Rewrite a source file's imports. Returns True if it changed."""
        path = Path(path)
        original = path.read_text()
        optimized = self.optimize_text(original)
        if optimized == original:
            logger.info("Imports already ordered in %s", path)
            return False
        path.write_text(optimized)
        logger.info("Optimized imports in %s", path)
        return True
