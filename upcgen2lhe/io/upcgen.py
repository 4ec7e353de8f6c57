from __future__ import annotations

import gzip
import io
from pathlib import Path
from typing import Iterator, Optional, TextIO

from ..models import Event, Particle


def open_text(path: str):
    p = Path(path)
    if p.suffix == ".gz":
        return io.TextIOWrapper(gzip.open(p, "rb"), encoding="utf-8", errors="replace")
    return open(p, "r", encoding="utf-8", errors="replace")


# --- UPCgen HepMC-like ASCII dump -------------------------------------------------------
#
# Only three record types matter:
#   E <evtno> <nvertices> <nparticles>                              (event start)
#   U <mom_unit> <len_unit>                                         (must follow E)
#   P <i> <mother> <pdg> <px> <py> <pz> <e> <m> <status>            (nparticles times)
#
# Anything outside an event is skipped, and the first line containing
# END_EVENT_LISTING stops the scan. Inside an event the layout is strict: any
# deviation raises UPCgenFormatError.

END_MARKER = "END_EVENT_LISTING"


class UPCgenFormatError(ValueError):
    """A record in the UPCgen dump could not be parsed.

    Attributes:
        line: Raw text of the offending line (without trailing newline).
        line_number: 1-based line number, 0 if the input ended prematurely.
    """

    def __init__(self, kind: str, line: str, line_number: int):
        self.kind = kind
        self.line = line
        self.line_number = line_number
        where = f"line {line_number}" if line_number else "end of input"
        super().__init__(f"Failed to parse {kind} line ({where}): {line}")


class _Lines:
    """Line source that remembers where it is."""

    def __init__(self, f: TextIO):
        self._f = f
        self.number = 0

    def next(self) -> Optional[str]:
        raw = self._f.readline()
        if not raw:
            return None
        self.number += 1
        return raw.rstrip("\r\n")


def _parse_header(line: str, line_number: int) -> tuple[int, int, int]:
    parts = line.split()
    try:
        if len(parts) < 4 or parts[0] != "E":
            raise ValueError
        evtno, n_vtx, n_par = int(parts[1]), int(parts[2]), int(parts[3])
        if n_par < 0:
            raise ValueError
    except ValueError:
        raise UPCgenFormatError("event", line, line_number) from None
    return evtno, n_vtx, n_par


def _parse_units(line: Optional[str], line_number: int) -> dict:
    if line is None:
        raise UPCgenFormatError("units", "", 0)
    parts = line.split()
    if not parts or parts[0] != "U":
        raise UPCgenFormatError("units", line, line_number)
    if len(parts) >= 3:
        return {"momentum": parts[1], "length": parts[2]}
    return {}


def _parse_particle(line: Optional[str], line_number: int, expected_index: int) -> Particle:
    if line is None:
        raise UPCgenFormatError("track", "", 0)
    parts = line.split()
    try:
        if len(parts) < 10 or parts[0] != "P":
            raise ValueError
        index, mother, pdg = int(parts[1]), int(parts[2]), int(parts[3])
        px, py, pz = float(parts[4]), float(parts[5]), float(parts[6])
        e, m = float(parts[7]), float(parts[8])
        st = int(parts[9])
        if index != expected_index or not 0 <= mother < index:
            raise ValueError
    except ValueError:
        raise UPCgenFormatError("track", line, line_number) from None

    # The dump's own status is kept for reference only; output statuses come
    # from the mother references (see transform.resolve_statuses).
    return Particle(
        pdg_id=pdg,
        status=1,
        px=px,
        py=py,
        pz=pz,
        energy=e,
        mass=m,
        mother1=mother,
        attributes={"upcgen_status": st},
    )


def _read_event(lines: _Lines, header: str) -> Event:
    evtno, n_vtx, n_par = _parse_header(header, lines.number)
    units = _parse_units(lines.next(), lines.number)

    particles = []
    for i in range(1, n_par + 1):
        particles.append(_parse_particle(lines.next(), lines.number, i))

    ev = Event(event_number=evtno, particles=particles, n_particles=n_par)
    ev.extra["n_vertices"] = n_vtx
    if units:
        ev.extra["units"] = units
    return ev


def read_upcgen_events(f: TextIO) -> Iterator[Event]:
    """Iterate events from an open UPCgen text stream."""
    lines = _Lines(f)
    while True:
        line = lines.next()
        if line is None or END_MARKER in line:
            return
        if not line.startswith("E "):
            continue
        yield _read_event(lines, line)


def iter_upcgen(path: str) -> Iterator[Event]:
    """Iterate events from a UPCgen ASCII file (optionally gzipped)."""
    with open_text(path) as f:
        yield from read_upcgen_events(f)

