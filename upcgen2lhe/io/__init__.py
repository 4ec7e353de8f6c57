from __future__ import annotations

from .lhe import LHEWriter, iter_lhe, read_run_info
from .upcgen import UPCgenFormatError, iter_upcgen
from .xsec import read_xsec

__all__ = ["LHEWriter", "UPCgenFormatError", "iter_lhe", "iter_upcgen", "read_run_info", "read_xsec"]
