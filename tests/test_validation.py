from __future__ import annotations

import pytest

from upcgen2lhe import pdg
from upcgen2lhe.models import Event, Particle
from upcgen2lhe.transform import to_lhe_event
from upcgen2lhe.validation import ValidationReport, validate_event, validate_stream


def _converted(*particles: Particle) -> Event:
    return to_lhe_event(Event(event_number=7, particles=list(particles)))


def _muon(mother: int = 0, pz: float = 1.0) -> Particle:
    energy = (pz**2 + 0.10566**2) ** 0.5
    return Particle(pdg_id=13, status=1, px=0.0, py=0.0, pz=pz, energy=energy, mass=0.10566, mother1=mother)


def test_converted_event_is_clean():
    assert validate_event(_converted(_muon(pz=2.0), _muon(pz=-1.5))) == []


def test_empty_event_warns():
    issues = validate_event(Event(event_number=1))
    assert [i.level for i in issues] == ["warning"]


def test_bad_mother_reference():
    ev = _converted(_muon())
    ev.particles[2].mother1 = 3
    issues = validate_event(ev, check_balance=False)
    assert any(i.level == "error" and i.particle_index == 3 for i in issues)


def test_imbalance_is_an_error():
    ev = _converted(_muon())
    ev.particles[0].energy += 1.0
    issues = validate_event(ev)
    assert [i.message.split(":")[0] for i in issues if i.level == "error"] == ["Beam/final-state imbalance in E"]


def test_negative_energy():
    p = Particle(pdg_id=13, status=1, px=0.0, py=0.0, pz=0.0, energy=-1.0)
    issues = validate_event(_converted(p), check_balance=False)
    assert any("Negative energy" in i.message for i in issues)


def test_declared_mass_mismatch_warns():
    p = Particle(pdg_id=443, status=1, px=0.0, py=0.0, pz=3.0, energy=5.0, mass=3.0969)
    issues = validate_event(_converted(p))
    assert [i.level for i in issues] == ["warning"]
    assert "Mass inconsistency" in issues[0].message
    assert issues[0].particle_index == 3


def test_unknown_pdg_id_warns():
    p = _muon()
    p.pdg_id = 0
    issues = validate_event(_converted(p))
    assert any(i.level == "warning" and "PDG" in i.message for i in issues)


def test_validate_stream_collects_and_strict_raises():
    good = _converted(_muon())
    bad = _converted(_muon())
    bad.particles[1].pz += 1.0

    report = ValidationReport()
    out = list(validate_stream([good, bad], report))
    assert out == [good, bad]
    assert report.n_events == 2
    assert not report.is_valid
    assert "1 errors" in str(report)

    with pytest.raises(ValueError, match="event 7"):
        list(validate_stream([bad], ValidationReport(), strict=True))


def test_pdg_helpers():
    assert pdg.name(22) == "gamma"
    assert pdg.name(0) == "0"
    assert pdg.is_valid_pdg_id(2212)
    assert pdg.is_valid_pdg_id(-13)
    assert not pdg.is_valid_pdg_id(0)
