"""Command line definition and the translation of parsed arguments into a run configuration."""

from __future__ import annotations

import argparse
import re
from pathlib import Path
from typing import Any, Callable, Sequence

from sic.config import (
    Config,
    ConfigError,
    FrameIndex,
    SelectedLicenses,
    mode_type_from_args,
    validate_jpeg_quality,
)

_UNSIGNED = re.compile(r"\+?[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")
_FLOAT_CHARS = re.compile(r"[+-]?(?:[0-9]*\.?[0-9]*(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)", re.I)


def _integer(text: str, low: int, high: int, kind: str) -> int:
    if (_SIGNED if low < 0 else _UNSIGNED).fullmatch(text) and low <= int(text) <= high:
        return int(text)
    raise ValueError(f"invalid {kind} value: {text!r}")


def _u32(text: str) -> int:
    return _integer(text, 0, 2**32 - 1, "unsigned integer")


def _i32(text: str) -> int:
    return _integer(text, -(2**31), 2**31 - 1, "integer")


def _fp(text: str) -> float:
    if text and _FLOAT_CHARS.fullmatch(text):
        try:
            return float(text)
        except ValueError:
            pass
    raise ValueError(f"invalid floating point value: {text!r}")


def _text(text: str) -> str:
    return text


def _boolean(text: str) -> bool:
    return text == "true"


class _OperationAction(argparse.Action):
    """Append ``(operation, values)`` to a shared list, keeping command line order."""

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        converters: Sequence[Callable[[str], Any]] = (),
        operation: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(option_strings, dest, nargs=len(converters), **kwargs)
        self.converters = tuple(converters)
        self.operation = operation

    def __call__(self, parser, namespace, values, option_string=None):
        try:
            converted = tuple(c(v) for c, v in zip(self.converters, values))
        except ValueError as err:
            raise argparse.ArgumentError(self, str(err)) from err
        operations = list(getattr(namespace, self.dest, None) or [])
        operations.append((self.operation, converted))
        setattr(namespace, self.dest, operations)


_RGBA = "rgba(r,g,b,a)"

# name, help, metavar names, value converters
_OPERATIONS: tuple[tuple[str, str, tuple[str, ...], tuple[Callable[[str], Any], ...]], ...] = (
    ("blur", "Operation: perform a gaussian blur on the input image", ("fp",), (_fp,)),
    (
        "brighten",
        "Operation: increase or decrease the brightness of the input image",
        ("int",),
        (_i32,),
    ),
    (
        "contrast",
        "Operation: increase or decrease the contrast of the input image",
        ("fp",),
        (_fp,),
    ),
    (
        "crop",
        "Operation: crop the input image to a bounding rectangle ranging from top-left "
        "(lx, ly) to bottom-right (rx, ry) coordinates",
        ("lx", "ly", "rx", "ry"),
        (_u32,) * 4,
    ),
    ("diff", "Operation: show ", ("path to image",), (_text,)),
    (
        "filter3x3",
        "Operation: apply a 3x3 convolution filter to the input image (matrix arguments "
        "should be given left-to-right, top-to-bottom)",
        ("fp",) * 9,
        (_fp,) * 9,
    ),
    ("flip-horizontal", "Operation: flip the input image horizontally", (), ()),
    ("flip-vertical", "Operation: flip the input image vertically", (), ()),
    (
        "grayscale",
        "Operation: discard the chrominance signal from the input image, so it becomes "
        "achromatic",
        (),
        (),
    ),
    (
        "hue-rotate",
        "Operation: rotate the hue for each pixel of the input image by a provided degree",
        ("int",),
        (_i32,),
    ),
    (
        "horizontal-gradient",
        "Operation: blend the image with a horizontal gradient from color1 to color2.",
        (_RGBA, _RGBA),
        (_text, _text),
    ),
    ("invert", "Operation: invert the each pixel of the input image ", (), ()),
    (
        "overlay",
        "Operation: overlay an image loaded from the provided path argument, over the "
        "input image (at a certain position)",
        ("overlay image path", "x", "y"),
        (_text, _u32, _u32),
    ),
    ("resize", "Operation: resize the input image to x by y pixels", ("x", "y"), (_u32, _u32)),
    ("rotate90", "Operation: rotate the input image by 90 degrees", (), ()),
    ("rotate180", "Operation: rotate the input image by 180 degrees", (), ()),
    ("rotate270", "Operation: rotate the input image by 270 degrees", (), ()),
    (
        "unsharpen",
        "Operation: sharpen an image by combining an unsharp (blurred) mask of the input "
        "image with the (original) input image, sharpening for pixels where the difference "
        "is bigger than the provided threshold",
        ("blur amount", "threshold"),
        (_fp, _i32),
    ),
    (
        "vertical-gradient",
        "Operation: blend the image with a vertical gradient from color1 to color2.",
        (_RGBA, _RGBA),
        (_text, _text),
    ),
)

_MODIFIERS: tuple[tuple[str, str, str, tuple[str, ...], Callable[[str], Any]], ...] = (
    (
        "preserve-aspect-ratio",
        "Operation modifier for 'resize': preserve the aspect ratio of the original input "
        "image",
        "bool",
        ("true", "false"),
        _boolean,
    ),
    (
        "sampling-filter",
        "Operation modifier for 'resize': resize the image using a specific sampling-filter",
        "sampling filter",
        ("catmullrom", "gaussian", "lanczos3", "nearest", "triangle"),
        _text,
    ),
)

_OPTION_NAMES = {
    "license": "--license",
    "dep_licenses": "--dep-licenses",
    "input": "--input",
    "output": "--output",
    "glob_input": "--glob-input",
    "glob_output": "--glob-output",
    "apply_operations": "--apply-operations",
    "operations_script": "--operations-script",
    "operations": "<image operations>",
}

_CONFLICTS = {
    "license": ("dep_licenses", "input", "output", "glob_input", "glob_output"),
    "dep_licenses": ("license", "input", "output", "glob_input", "glob_output"),
    "input": ("license", "dep_licenses", "glob_input", "glob_output"),
    "output": ("license", "dep_licenses", "glob_input", "glob_output"),
    "glob_input": ("license", "dep_licenses", "input", "output"),
    "glob_output": ("license", "dep_licenses", "input", "output"),
    "apply_operations": ("operations_script", "operations"),
    "operations_script": ("apply_operations",),
    "operations": ("apply_operations",),
}


def _present(namespace: argparse.Namespace, dest: str) -> bool:
    value = getattr(namespace, dest, None)
    return value is not None and value is not False and value != []


class _SicParser(argparse.ArgumentParser):
    def parse_known_args(self, args=None, namespace=None):
        parsed, extras = super().parse_known_args(args, namespace)
        for dest, others in _CONFLICTS.items():
            if not _present(parsed, dest):
                continue
            for other in others:
                if _present(parsed, other):
                    self.error(
                        f"the argument '{_OPTION_NAMES[dest]}' cannot be used with "
                        f"'{_OPTION_NAMES[other]}'"
                    )
        return parsed, extras


def create_parser(version: str, about: str, help_ops: str) -> argparse.ArgumentParser:
    """Create the command line parser of the tool."""
    parser = _SicParser(prog="sic", description=about)
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {version}")

    parser.add_argument(
        "--license",
        action="store_true",
        help="Displays the license of this piece of software (`sic`).",
    )
    parser.add_argument(
        "--dep-licenses",
        action="store_true",
        help="Displays the licenses of the dependencies on which this software relies.",
    )

    parser.add_argument(
        "-i",
        "--input",
        metavar="INPUT_PATH",
        help="Input image path. When using this option, input piped from stdin will be "
        "ignored. If using unexpanded globs as argument, use --glob-input instead.",
    )
    parser.add_argument(
        "--glob-input",
        metavar="GLOB_INPUT_PATTERN",
        help="Input glob path which attempts to match all files matching the given glob "
        "pattern. Use with --glob-output.",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="OUTPUT_PATH",
        help="Output image path. When using this option, output won't be piped to stdout.",
    )
    parser.add_argument(
        "--glob-output",
        metavar="GLOB_OUTPUT_ROOT_FOLDER",
        help="This output should point to a folder in which the greatest root common "
        "directory of the glob input will be mirrored",
    )
    parser.add_argument(
        "--no-skip-unsupported-extensions",
        action="store_true",
        help="Files which don't have a known extension will not be skipped in glob mode",
    )

    parser.add_argument(
        "--select-frame",
        metavar="#FRAME",
        help="Frame to be loaded as still image if the input image is an animated image. "
        "Use 'first', 'last' or a zero-indexed frame number.",
    )

    parser.add_argument(
        "--disable-automatic-color-type-adjustment",
        action="store_true",
        help="Do not try to adjust the color type of the image buffer prior to encoding.",
    )
    parser.add_argument(
        "-f",
        "--output-format",
        metavar="FORMAT",
        help="Force the output image format to use FORMAT, regardless of the (if any) "
        "extension of the given output file path.",
    )
    parser.add_argument(
        "--jpeg-encoding-quality",
        metavar="QUALITY",
        help="Set the jpeg quality to QUALITY. Valid values are positive numbers from 1 up "
        "to and including 100.",
    )
    parser.add_argument(
        "--pnm-encoding-ascii",
        action="store_true",
        help="Use ascii based encoding when using a PNM image output format (pbm, pgm or ppm).",
    )
    parser.add_argument(
        "--gif-repeat",
        metavar="REPETITIONS",
        help="Repeat the frames of a (to be) gif encoded image `n` times, `infinite` times "
        "or `never`.",
    )
    parser.add_argument(
        "--enable-output-format-decider-fallback",
        action="store_true",
        help="[experimental] Fall back to an alternative output format decider if the "
        "default one can't find a suitable format.",
    )

    parser.add_argument(
        "-x",
        "--apply-operations",
        "--A",
        dest="apply_operations",
        metavar="OPERATIONS",
        help=help_ops.replace("%", "%%"),
    )
    parser.add_argument(
        "--operations-script",
        metavar="SCRIPT_FILE",
        help="Like '--apply-operations' but takes a file path where the file contains the "
        "script instead of taking it as value directly",
    )

    for name, help_text, metavar, converters in _OPERATIONS:
        parser.add_argument(
            f"--{name}",
            dest="operations",
            action=_OperationAction,
            operation=name,
            converters=converters,
            metavar=metavar if metavar else None,
            default=None,
            help=help_text,
        )
    for name, help_text, metavar, choices, converter in _MODIFIERS:
        parser.add_argument(
            f"--{name}",
            dest="operations",
            action=_OperationAction,
            operation=name,
            converters=(converter,),
            choices=choices,
            metavar=metavar,
            default=None,
            help=help_text,
        )
    return parser


def parse_frame_index(value: str) -> FrameIndex:
    """Interpret a ``--select-frame`` argument."""
    if value == "first":
        return FrameIndex.first()
    if value == "last":
        return FrameIndex.last()
    if not _UNSIGNED.fullmatch(value):
        raise ConfigError(
            "Provided argument for --select-frame is not a valid option. "
            "Valid options are 'first', 'last' or a (one-indexed) positive number."
        )
    return FrameIndex.nth(int(value))


def _parse_jpeg_quality(value: str) -> int:
    if not _UNSIGNED.fullmatch(value) or int(value) > 255:
        raise ConfigError("JPEG Encoding quality should be a value between 1 and 100 (inclusive).")
    return validate_jpeg_quality(int(value))


def _parse_gif_repeat(value: str) -> int | None:
    if value == "infinite":
        return None
    if value == "never":
        return 0
    if _UNSIGNED.fullmatch(value) and int(value) <= 0xFFFF:
        return int(value)
    raise ConfigError(
        "Provided argument for --gif-repeat is not a valid option. "
        "Valid options are 'infinite', 'never' or a positive number."
    )


def build_app_config(args: argparse.Namespace) -> Config:
    """Build the run configuration from parsed arguments."""
    config = Config()

    if getattr(args, "license", False):
        config.show_license_text_of = SelectedLicenses.THIS_SOFTWARE
        return config
    if getattr(args, "dep_licenses", False):
        config.show_license_text_of = SelectedLicenses.DEPENDENCIES
        return config

    config.mode = mode_type_from_args(args)

    frame = getattr(args, "select_frame", None)
    if frame is not None:
        config.selected_frame = parse_frame_index(frame)

    if getattr(args, "disable_automatic_color_type_adjustment", False):
        config.disable_automatic_color_type_adjustment = True

    forced = getattr(args, "output_format", None)
    if forced is not None:
        config.forced_output_format = forced

    quality = getattr(args, "jpeg_encoding_quality", None)
    if quality is not None:
        config.encoding_settings.jpeg_quality = _parse_jpeg_quality(quality)

    if getattr(args, "pnm_encoding_ascii", False):
        config.encoding_settings.pnm_use_ascii_format = True

    repeat = getattr(args, "gif_repeat", None)
    if repeat is not None:
        config.encoding_settings.gif_repeat = _parse_gif_repeat(repeat)

    config.encoding_settings.image_output_format_fallback = bool(
        getattr(args, "enable_output_format_decider_fallback", False)
    )

    script = getattr(args, "apply_operations", None)
    script_path = getattr(args, "operations_script", None)
    if script is not None:
        config.image_operations_program = [("script", script)]
    elif script_path is not None:
        try:
            contents = Path(script_path).read_text()
        except OSError as err:
            raise ConfigError(f"unable to read script file: {err}") from err
        config.image_operations_program = [("script", contents)]
    else:
        config.image_operations_program = list(getattr(args, "operations", None) or [])

    return config