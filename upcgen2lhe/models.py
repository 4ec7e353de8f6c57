"""
Core event data model for upcgen2lhe.

Events read from a UPCgen ASCII dump and events written to LHE share the
same representation. The reader fills in what the dump carries; the
transformation step (see :mod:`upcgen2lhe.transform`) turns that into an
LHE-ready event with beam particles, resolved statuses and mother slots.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FourMomentum:
    """Four-momentum (px, py, pz, E) in GeV."""

    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0
    energy: float = 0.0

    @classmethod
    def from_mass(cls, px: float, py: float, pz: float, mass: float) -> "FourMomentum":
        return cls(px, py, pz, math.sqrt(px * px + py * py + pz * pz + mass * mass))

    def __add__(self, other: "FourMomentum") -> "FourMomentum":
        if not isinstance(other, FourMomentum):
            return NotImplemented
        return FourMomentum(
            self.px + other.px,
            self.py + other.py,
            self.pz + other.pz,
            self.energy + other.energy,
        )

    @property
    def mass2(self) -> float:
        return self.energy * self.energy - self.px * self.px - self.py * self.py - self.pz * self.pz

    @property
    def mass(self) -> float:
        """Invariant mass.

        Space-like vectors get a negative mass, -sqrt(-m^2), so that the
        sign survives serialization.
        """
        m2 = self.mass2
        return math.sqrt(m2) if m2 >= 0 else -math.sqrt(-m2)


@dataclass
class Particle:
    """A single particle in an event.

    Attributes:
        pdg_id: PDG Monte Carlo particle ID.
        status: Status code. Convention:
            -1  = incoming (synthesized beam particle)
             1  = final state
             2  = intermediate (referenced as a mother)
        px, py, pz, energy: Four-momentum components in GeV.
        mass: Declared mass in GeV. For LHE output this is the mass
              computed from the four-momentum.
        mother1, mother2: Mother indices. For particles read from a UPCgen
              dump mother1 is the 1-based index in the dump (0 = primary);
              for LHE events both are 1-based LHE positions.
        color1, color2: Color flow tags (always 0 here).
        lifetime: Proper lifetime in mm.
        spin: Spin column (9.0 = unknown, LHE convention).
    """

    pdg_id: int
    status: int
    px: float
    py: float
    pz: float
    energy: float
    mass: float = 0.0
    mother1: int = 0
    mother2: int = 0
    color1: int = 0
    color2: int = 0
    lifetime: float = 0.0
    spin: float = 9.0
    attributes: dict = field(default_factory=dict)

    @property
    def momentum(self) -> FourMomentum:
        return FourMomentum(self.px, self.py, self.pz, self.energy)

    @property
    def computed_mass(self) -> float:
        """Mass computed from four-momentum."""
        return self.momentum.mass

    @property
    def is_incoming(self) -> bool:
        return self.status == -1

    @property
    def is_final(self) -> bool:
        return self.status == 1


@dataclass
class ProcessInfo:
    """One process record of the LHE <init> block.

    Attributes:
        process_id: Process identifier (LPRUP).
        cross_section: Cross section in pb (XSECUP).
        cross_section_error: Statistical error on the cross section (XERRUP).
        max_weight: Maximum event weight (XMAXUP).
    """

    process_id: int = 0
    cross_section: float = 0.0
    cross_section_error: float = 0.0
    max_weight: float = 0.0


@dataclass
class RunInfo:
    """Run-level metadata.

    Attributes:
        beam_pdg_id: Tuple of (beam1, beam2) PDG IDs.
        beam_energy: Tuple of (beam1, beam2) energies in GeV.
        pdf_group: PDF author group ids of the two beams.
        pdf_set: PDF set ids of the two beams.
        weight_strategy: Event weighting strategy (IDWTUP).
        processes: Process records.
        extra: Additional metadata.
    """

    beam_pdg_id: tuple[int, int] = (0, 0)
    beam_energy: tuple[float, float] = (0.0, 0.0)
    pdf_group: tuple[int, int] = (0, 0)
    pdf_set: tuple[int, int] = (0, 0)
    weight_strategy: int = 0
    processes: list[ProcessInfo] = field(default_factory=list)
    extra: dict = field(default_factory=dict)


@dataclass
class Event:
    """A single physics event.

    Attributes:
        event_number: Event number from the input record.
        particles: Particles in record order.
        weights: Event weights. First element is the main weight.
        process_id: Process identifier.
        scale: Event scale in GeV (-1.0 = not set).
        alpha_qed: QED coupling (-1.0 = not set).
        alpha_qcd: QCD coupling (-1.0 = not set).
        n_particles: Particle count declared by the input record.
        extra: Additional per-event metadata.
    """

    event_number: int = 0
    particles: list[Particle] = field(default_factory=list)
    weights: list[float] = field(default_factory=lambda: [1.0])
    process_id: int = 0
    scale: float = -1.0
    alpha_qed: float = -1.0
    alpha_qcd: float = -1.0
    n_particles: int = 0
    extra: dict = field(default_factory=dict)

    @property
    def weight(self) -> float:
        """Primary event weight."""
        return self.weights[0] if self.weights else 1.0

    @property
    def incoming_particles(self) -> list[Particle]:
        return [p for p in self.particles if p.is_incoming]

    @property
    def final_particles(self) -> list[Particle]:
        return [p for p in self.particles if p.is_final]
