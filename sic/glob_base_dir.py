"""Split glob patterns into a base directory and a pattern, and walk the
file system for files matching them."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence

_GLOB_MARKERS = ("*", "{", "}")


def strip_dot_prefix(path: str) -> str:
    """Drop a leading ``./`` or ``.\\`` from ``path``."""
    if path.startswith("./") or path.startswith(".\\"):
        return path[2:]
    return path


def glob_base_unrooted(path_pattern: str) -> tuple[Path, Path]:
    """Determine the longest base path of a pattern, and the remaining pattern.

    Relative patterns are searched from the current directory.
    """
    path = Path(path_pattern)
    if not path.is_absolute():
        return Path("."), path

    base_parts: list[str] = []
    pattern_parts: list[str] = []
    globbing = False
    for part in path.parts:
        if not globbing and any(marker in part for marker in _GLOB_MARKERS):
            globbing = True
        (pattern_parts if globbing else base_parts).append(part)
    return Path(*base_parts), Path(*pattern_parts)


def glob_builder_base(pattern: str, filters: Sequence[str] = ()) -> tuple[str, list[str]]:
    """Return the base directory and the list of patterns to walk with.

    The extra ``filters`` come first, the pattern part of ``pattern`` last.
    """
    base, pat = glob_base_unrooted(pattern)
    patterns = [strip_dot_prefix(f) for f in filters]
    patterns.append(strip_dot_prefix(pat.as_posix()))
    return strip_dot_prefix(str(base)), patterns


def _translate(pattern: str) -> str:
    out: list[str] = []
    depth = 0
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                if pattern.startswith("/", i):
                    out.append("(?:.*/)?")
                    i += 1
                else:
                    out.append(".*")
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            start = i + 1
            if pattern[start : start + 1] in ("!", "^") and start < n:
                start += 1
            end = pattern.find("]", start + 1)
            if end < 0:
                raise ValueError(f"Unable to parse the given glob pattern: {pattern!r}")
            body = pattern[i + 1 : end]
            if body.startswith("!"):
                body = "^" + body[1:]
            body = body.replace("\\", "\\\\").replace("[", "\\[")
            out.append(f"[{body}]")
            i = end + 1
            continue
        elif c == "{":
            depth += 1
            out.append("(?:")
        elif c == "}":
            if depth == 0:
                raise ValueError(f"Unable to parse the given glob pattern: {pattern!r}")
            depth -= 1
            out.append(")")
        elif c == "," and depth:
            out.append("|")
        elif c == "\\" and i + 1 < n:
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        else:
            out.append(re.escape(c))
        i += 1
    if depth:
        raise ValueError(f"Unable to parse the given glob pattern: {pattern!r}")
    return "".join(out)


@dataclass(frozen=True)
class _Matcher:
    regex: re.Pattern[str]
    anchored: bool
    negated: bool

    def matches(self, relative: str) -> bool:
        target = relative if self.anchored else relative.rsplit("/", 1)[-1]
        return self.regex.fullmatch(target) is not None


def _compile(pattern: str) -> _Matcher:
    negated = pattern.startswith("!")
    if negated:
        pattern = pattern[1:]
    anchored = "/" in pattern
    if pattern.startswith("/"):
        pattern = pattern[1:]
    return _Matcher(re.compile(_translate(pattern), re.DOTALL), anchored, negated)


def _selected(matchers: Iterable[_Matcher], relative: str) -> bool:
    decision = False
    for matcher in matchers:
        if matcher.matches(relative):
            decision = not matcher.negated
    return decision


def _walk(
    directory: Path,
    root: Path,
    matchers: list[_Matcher],
    follow_links: bool,
    visited: set[str],
) -> Iterator[Path]:
    with os.scandir(directory) as scan:
        entries = sorted(scan, key=lambda e: e.name)
    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=follow_links):
            real = os.path.realpath(entry.path)
            if real in visited:
                continue
            visited.add(real)
            yield from _walk(path, root, matchers, follow_links, visited)
        elif entry.is_file(follow_symlinks=follow_links):
            relative = path.relative_to(root).as_posix()
            if _selected(matchers, relative):
                yield path


def walk_glob(pattern: str, follow_links: bool = True) -> Iterator[Path]:
    """Yield every file below the pattern's base directory matching the pattern.

    Raises ``ValueError`` at once if the pattern cannot be parsed.
    """
    base, patterns = glob_builder_base(pattern, [])
    matchers = [_compile(p) for p in patterns]
    root = Path(base)
    return _walk(root, root, matchers, follow_links, {os.path.realpath(root)})