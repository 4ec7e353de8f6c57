"""PDG helpers backed by scikit-hep ``particle``."""

from __future__ import annotations

from particle import PDGID, Particle


def is_valid_pdg_id(pdg_id: int) -> bool:
    try:
        return bool(PDGID(pdg_id).is_valid)
    except Exception:
        return False


def name(pdg_id: int) -> str:
    """Particle name, or the id itself for codes the PDG table does not know."""
    try:
        return Particle.from_pdgid(pdg_id).name
    except Exception:
        return str(pdg_id)

