"""upcgen2lhe: convert UPCgen HepMC-like event dumps to Les Houches Event files."""

from __future__ import annotations

__version__ = "0.1.0"

from .convert import convert, info, output_path_for
from .io.upcgen import UPCgenFormatError
from .models import Event, FourMomentum, Particle, ProcessInfo, RunInfo
from .validation import validate_event

__all__ = [
    "__version__",
    "convert",
    "info",
    "output_path_for",
    "validate_event",
    "UPCgenFormatError",
    "Event",
    "FourMomentum",
    "Particle",
    "ProcessInfo",
    "RunInfo",
]
