"""Find a common directory for a set of input files, so that the structure
below it can be mirrored under a new output root."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Iterable, Union

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class CommonDir:
    """A common root and, per input path, the branch that completes it."""

    common_root: Path
    entries: tuple[tuple[Path, Path], ...]

    def input_paths(self) -> list[Path]:
        """The original input paths."""
        return [original for original, _ in self.entries]

    def path_branches(self) -> list[Path]:
        """The ``k`` in ``common_root / k`` for every input."""
        return [branch for _, branch in self.entries]

    def path_combinations(self) -> list[tuple[Path, Path]]:
        """Pairs of original input path and its branch."""
        return list(self.entries)


def _starts_with(path: PurePath, prefix: PurePath) -> bool:
    prefix_parts = prefix.parts
    return path.parts[: len(prefix_parts)] == prefix_parts


def unroot(root: PathLike, path: PathLike) -> Path:
    """Remove the components of ``root`` from the front of ``path``."""
    skip = len(PurePath(root).parts)
    return Path(*Path(path).parts[skip:])


def find_common_dir(paths: Iterable[PathLike]) -> CommonDir:
    """Find the deepest directory shared by all paths (expects canonical paths)."""
    all_paths = [Path(p) for p in paths]
    if not all_paths:
        raise ValueError("No paths found (glob mode)")

    first = all_paths[0]
    if not first.name:
        raise ValueError("No root directory found (glob mode)")
    trunk = first.parent

    for ancestor in (trunk, *trunk.parents):
        if all(_starts_with(path, ancestor) for path in all_paths):
            return CommonDir(
                ancestor,
                tuple((path, unroot(ancestor, path)) for path in all_paths),
            )

    entries = []
    for path in all_paths:
        if not path.name:
            raise ValueError(
                "Unable to mirror input directory to output: found an invalid file path"
            )
        entries.append((path, Path(path.name)))
    return CommonDir(trunk, tuple(entries))