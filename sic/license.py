"""Display the license of this tool or point to the licenses of its dependencies."""

from __future__ import annotations

import sys
import webbrowser
from dataclasses import dataclass
from typing import Callable, TextIO

from sic.config import SelectedLicenses


@dataclass(frozen=True)
class LicenseTexts:
    """The license text of this tool and where the dependency licenses live."""

    this_software: str
    dependencies_location: str = "licenses.html"


def request_another_copy(stream: TextIO) -> bool:
    """Read one answer line; only ``yes`` or ``y`` (any case) count as yes."""
    answer = stream.readline().lower().strip()
    return answer in ("yes", "y")


def print_license(
    selection: SelectedLicenses,
    texts: LicenseTexts,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    opener: Callable[[str], object] | None = None,
) -> None:
    """Show the selected license text, or offer to open the dependency licenses."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    opener = webbrowser.open if opener is None else opener

    if selection is SelectedLicenses.THIS_SOFTWARE:
        print(f"sic image tools license:\n\n{texts.this_software}", file=stdout)
        return

    print(
        "You should have received a licenses.html file with the distribution, "
        "but you can download another copy here.",
        file=stdout,
    )
    print("Open new copy [yes / no (default)]: ", end="", file=stdout)
    stdout.flush()

    try:
        wanted = request_another_copy(stdin)
    except OSError:
        wanted = False
    if wanted:
        opener(texts.dependencies_location)