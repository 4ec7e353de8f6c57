"""
Turn a parsed UPCgen event into an LHE event.

UPCgen does not record the photons radiated by the beams. They are
approximated here from the balance of the final state: with P the summed
final-state four-momentum, two massless photons along the beam axis with

    pz- = (Pz - E) / 2,    pz+ = (Pz + E) / 2

carry the same total Pz and E as the final state. Their transverse momentum
is set to zero.

In the LHE record the two photons come first, so every mother index from
the dump is shifted by two. Primary particles (mother index 0) become
daughters of both photons.
"""

from __future__ import annotations

from dataclasses import replace

from .models import Event, FourMomentum, Particle

PHOTON_PDG_ID = 22
# Process id written for every event and in the <init> block
PROCESS_ID = 81
N_BEAMS = 2


def resolve_statuses(particles: list[Particle]) -> list[Particle]:
    """Return copies with status 2 for every particle used as a mother, 1 otherwise."""
    mothers = {p.mother1 for p in particles if p.mother1 > 0}
    return [
        replace(p, status=2 if i in mothers else 1, attributes=dict(p.attributes))
        for i, p in enumerate(particles, start=1)
    ]


def final_state_momentum(particles: list[Particle]) -> FourMomentum:
    total = FourMomentum()
    for p in particles:
        if p.status == 1:
            total = total + p.momentum
    return total


def _beam_photon(pz: float) -> Particle:
    p4 = FourMomentum.from_mass(0.0, 0.0, pz, 0.0)
    return Particle(
        pdg_id=PHOTON_PDG_ID,
        status=-1,
        px=p4.px,
        py=p4.py,
        pz=p4.pz,
        energy=p4.energy,
        mass=0.0,
    )


def reconstruct_beams(total: FourMomentum) -> tuple[Particle, Particle]:
    """Beam photons balancing ``total`` along the beam axis, as (minus, plus)."""
    minus = _beam_photon((total.pz - total.energy) / 2.0)
    plus = _beam_photon((total.pz + total.energy) / 2.0)
    return minus, plus


def _lhe_mothers(p: Particle) -> tuple[int, int]:
    if p.status <= 0:
        return 0, 0
    if p.mother1 == 0:
        return 1, 2
    return p.mother1 + N_BEAMS, 0


def to_lhe_event(ev: Event) -> Event:
    """Build the LHE event for a parsed UPCgen event.

    The input event is left untouched.
    """
    particles = resolve_statuses(ev.particles)
    minus, plus = reconstruct_beams(final_state_momentum(particles))

    out: list[Particle] = [minus, plus]
    for p in particles:
        mother1, mother2 = _lhe_mothers(p)
        attributes = dict(p.attributes)
        attributes["declared_mass"] = p.mass
        out.append(replace(
            p,
            mother1=mother1,
            mother2=mother2,
            mass=p.computed_mass,
            attributes=attributes,
        ))

    return Event(
        event_number=ev.event_number,
        particles=out,
        weights=[1.0],
        process_id=PROCESS_ID,
        scale=-1.0,
        alpha_qed=-1.0,
        alpha_qcd=-1.0,
        n_particles=len(out),
        extra=dict(ev.extra),
    )
