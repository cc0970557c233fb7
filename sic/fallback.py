"""Output format guessing by file extension, used as a fallback decider."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Union


class UnsupportedFormatError(ValueError):
    """The image format could not be determined or cannot be encoded."""


@dataclass(frozen=True)
class ImageOutputFormat:
    """An encoder choice; jpeg carries a quality, pnm a subtype."""

    name: str
    jpeg_quality: int | None = None
    pnm_subtype: str | None = None


_IMAGE_FORMAT_BY_EXTENSION = {
    "avif": "Avif",
    "jpg": "Jpeg",
    "jpeg": "Jpeg",
    "png": "Png",
    "gif": "Gif",
    "webp": "WebP",
    "tif": "Tiff",
    "tiff": "Tiff",
    "tga": "Tga",
    "dds": "Dds",
    "bmp": "Bmp",
    "ico": "Ico",
    "hdr": "Hdr",
    "exr": "OpenExr",
    "pbm": "Pnm",
    "pam": "Pnm",
    "ppm": "Pnm",
    "pgm": "Pnm",
    "ff": "Farbfeld",
    "farbfeld": "Farbfeld",
    "qoi": "Qoi",
}

_OUTPUT_BY_IMAGE_FORMAT = {
    "Png": ImageOutputFormat("png"),
    "Jpeg": ImageOutputFormat("jpeg", jpeg_quality=75),
    "Pnm": ImageOutputFormat("pnm", pnm_subtype="arbitrary-map"),
    "Gif": ImageOutputFormat("gif"),
    "Ico": ImageOutputFormat("ico"),
    "Bmp": ImageOutputFormat("bmp"),
    "Farbfeld": ImageOutputFormat("farbfeld"),
    "Tga": ImageOutputFormat("tga"),
    "OpenExr": ImageOutputFormat("openexr"),
    "Tiff": ImageOutputFormat("tiff"),
    "Avif": ImageOutputFormat("avif"),
    "Qoi": ImageOutputFormat("qoi"),
    "WebP": ImageOutputFormat("webp"),
}


def guess_output_by_path(path: Union[str, "os.PathLike[str]"]) -> ImageOutputFormat:
    """Guess an output format from the extension of ``path``."""
    suffix = PurePath(path).suffix
    if not suffix:
        raise UnsupportedFormatError("The image format could not be determined")
    image_format = _IMAGE_FORMAT_BY_EXTENSION.get(suffix[1:].lower())
    if image_format is None:
        raise UnsupportedFormatError(
            f"The file extension {suffix} was not recognized as an image format"
        )
    output = _OUTPUT_BY_IMAGE_FORMAT.get(image_format)
    if output is None:
        raise UnsupportedFormatError(f"The image format {image_format} is not supported")
    return output


def guess_output_by_identifier(identifier: str) -> ImageOutputFormat:
    """Guess an output format from an identifier, treated as a file extension."""
    return guess_output_by_path(f"0.{identifier}")