"""Run configuration and input/output mode selection for the command line."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Union

from sic.combinators import fallback_if
from sic.common_dir import CommonDir, find_common_dir
from sic.fallback import UnsupportedFormatError, guess_output_by_path
from sic.glob_base_dir import walk_glob

PathLike = Union[str, "os.PathLike[str]"]

# Extensions which the built-in output format decider recognises.
_SUPPORTED_EXTENSIONS = frozenset(
    {
        "avif",
        "bmp",
        "farbfeld",
        "gif",
        "ico",
        "jpg",
        "jpeg",
        "png",
        "pam",
        "pbm",
        "pgm",
        "ppm",
        "qoi",
        "tga",
        "tif",
        "tiff",
        "webp",
    }
)


class ConfigError(ValueError):
    """The given arguments do not form a valid configuration."""


@dataclass(frozen=True)
class PathVariant:
    """Either a file path, or the standard stream when ``path`` is None."""

    path: Path | None = None

    def is_std_stream(self) -> bool:
        """Whether this refers to stdin/stdout rather than a file."""
        return self.path is None


class InputOutputModeType(enum.Enum):
    SIMPLE = "simple"
    BATCH = "batch"


class SelectedLicenses(enum.Enum):
    THIS_SOFTWARE = "this-software"
    DEPENDENCIES = "dependencies"


@dataclass(frozen=True)
class FrameIndex:
    """Which frame of an animated image to load as a still image."""

    kind: str
    index: int = 0

    @classmethod
    def first(cls) -> FrameIndex:
        return cls("first")

    @classmethod
    def last(cls) -> FrameIndex:
        return cls("last")

    @classmethod
    def nth(cls, index: int) -> FrameIndex:
        if index < 0:
            raise ConfigError("A frame index must be a non-negative number")
        return cls("nth", index)


@dataclass
class FormatEncodingSettings:
    """Encoder settings; a ``gif_repeat`` of None repeats forever."""

    jpeg_quality: int = 80
    pnm_use_ascii_format: bool = False
    gif_repeat: Any = None
    image_output_format_fallback: bool = False


@dataclass
class Config:
    """Settings that control a single run of the tool."""

    tool_name: str = "sic"
    mode: InputOutputModeType = InputOutputModeType.SIMPLE
    show_license_text_of: SelectedLicenses | None = None
    selected_frame: FrameIndex | None = None
    disable_automatic_color_type_adjustment: bool = False
    forced_output_format: str | None = None
    encoding_settings: FormatEncodingSettings = field(default_factory=FormatEncodingSettings)
    image_operations_program: list = field(default_factory=list)


@dataclass(frozen=True)
class SingleMode:
    """One input and one output, each a file or a standard stream."""

    input: PathVariant
    output: PathVariant


@dataclass(frozen=True)
class BatchMode:
    """Many inputs, mirrored below an output root folder."""

    inputs: CommonDir
    output_root_folder: Path


def validate_jpeg_quality(quality: int) -> int:
    """Return ``quality`` if it lies within 1 to 100 inclusive."""
    if not 1 <= quality <= 100:
        raise ConfigError(
            "JPEG Encoding Settings error: JPEG quality requires a number "
            "between 1 and 100 (inclusive)."
        )
    return quality


def _by_extension(path: PathLike) -> str:
    suffix = Path(path).suffix
    extension = suffix[1:].lower()
    if extension not in _SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(f"No supported image format for extension {suffix!r}")
    return extension


def is_supported_extension(path: PathLike) -> bool:
    """Whether the built-in decider recognises the extension of ``path``."""
    try:
        _by_extension(path)
    except UnsupportedFormatError:
        return False
    return True


def filter_unsupported_paths(paths: Iterable[PathLike], fallback_enabled: bool) -> list[Path]:
    """Keep the paths whose extension maps to a known output format."""
    kept = []
    for path in map(Path, paths):
        try:
            fallback_if(
                lambda: _by_extension(path), fallback_enabled, guess_output_by_path, path
            )
        except UnsupportedFormatError:
            continue
        kept.append(path)
    return kept


def lookup_paths(
    paths: Iterable[PathLike], filter_unsupported: bool, fallback_enabled: bool
) -> list[Path]:
    """Collect found paths, optionally dropping those with unsupported extensions."""
    try:
        found = [Path(p) for p in paths]
    except OSError as err:
        raise ConfigError(f"Error while trying to find glob matches on the fs ({err})") from err
    if filter_unsupported:
        return filter_unsupported_paths(found, fallback_enabled)
    return found


def mode_type_from_args(args: Any) -> InputOutputModeType:
    """Batch mode when a glob input is given, simple mode otherwise."""
    if getattr(args, "glob_input", None) is not None:
        return InputOutputModeType.BATCH
    return InputOutputModeType.SIMPLE


def _path_variant(value: PathLike | None) -> PathVariant:
    return PathVariant() if value is None else PathVariant(Path(value))


def input_output_mode_from_args(args: Any) -> SingleMode | BatchMode:
    """Build the input/output mode from parsed command line arguments."""
    if mode_type_from_args(args) is InputOutputModeType.SIMPLE:
        return SingleMode(
            input=_path_variant(getattr(args, "input", None)),
            output=_path_variant(getattr(args, "output", None)),
        )

    pattern = getattr(args, "glob_input", None)
    if pattern is None:
        raise ConfigError("Glob mode requires an input pattern")
    output = getattr(args, "glob_output", None)
    if output is None:
        raise ConfigError("Glob mode requires an output folder")

    try:
        walker = walk_glob(pattern, follow_links=True)
    except ValueError as err:
        raise ConfigError(f"Unable to parse the given glob pattern: {err}") from err

    paths = lookup_paths(
        walker,
        not getattr(args, "no_skip_unsupported_extensions", False),
        bool(getattr(args, "enable_output_format_decider_fallback", False)),
    )
    try:
        inputs = find_common_dir(paths)
    except ValueError as err:
        raise ConfigError(str(err)) from err
    return BatchMode(inputs=inputs, output_root_folder=Path(output))