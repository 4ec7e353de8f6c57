"""Cross sections written by UPCgen next to its event dump."""

from __future__ import annotations

from pathlib import Path
from typing import Union

XSEC_FILENAME = "xsec.out"

# Used for whatever xsec.out does not provide [pb]
DEFAULT_FIDUCIAL_XSEC = 1.0
DEFAULT_TOTAL_XSEC = 3.0


def xsec_path_for(input_path: Union[str, Path]) -> Path:
    return Path(input_path).parent / XSEC_FILENAME


def read_xsec(input_path: Union[str, Path]) -> tuple[float, float]:
    """Return (fiducial, total) cross sections in pb for an event dump.

    The file holds the fiducial and the total cross section as its first two
    whitespace-separated numbers. Reading stops at the first token that is not
    a number; each value not read keeps its default. A file that is missing or
    cannot be opened gives both defaults.
    """
    path = xsec_path_for(input_path)
    values = [DEFAULT_FIDUCIAL_XSEC, DEFAULT_TOTAL_XSEC]
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return values[0], values[1]

    for i, token in enumerate(text.split()[:2]):
        try:
            values[i] = float(token)
        except ValueError:
            break
    return values[0], values[1]
