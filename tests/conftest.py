"""Test fixtures.

The UPCgen dumps used by the tests are small enough to live in this file.
They are (re)generated under ``tests/fixtures/`` at collection time so the
suite does not depend on data files being shipped.
"""

from __future__ import annotations

from pathlib import Path

import pytest

# One event, J/psi (index 1) decaying to a muon (index 2). Momenta are chosen
# so that every formatted number is exact.
TWO_BODY = """HepMC::Version 3.02.05
HepMC::Asciiv3-START_EVENT_LISTING
E 0 1 2
U GEV MM
P 1 0 443 0.0 0.0 3.0 5.0 3.0969 2
P 2 1 13 0.0 0.0 4.0 5.0 0.10566 1
HepMC::Asciiv3-END_EVENT_LISTING
"""

TWO_BODY_LHE = "\n".join([
    '<LesHouchesEvents version="3.0">',
    "<!-- ",
    " #Converted from UPCGEN generator HEPMC output ",
    "-->",
    "<header>",
    "</header>",
    "<init>",
    "2212 2212 6.80000000e+03 6.80000000e+03 0 0 0 0 3 1",
    "1.00000000e+00 0.00000000e+00 3.00000000e+00 81",
    "</init>",
    "<event>",
    "4 81 1.0 -1.0 -1.0 -1.0",
    "22 -1 0 0 0 0 0.0000000000e+00 0.0000000000e+00 -5.0000000000e-01 5.0000000000e-01 0.0000000000e+00 0.0000e+00 9.0000e+00",
    "22 -1 0 0 0 0 0.0000000000e+00 0.0000000000e+00 4.5000000000e+00 4.5000000000e+00 0.0000000000e+00 0.0000e+00 9.0000e+00",
    "443 2 1 2 0 0 0.0000000000e+00 0.0000000000e+00 3.0000000000e+00 5.0000000000e+00 4.0000000000e+00 0.0000e+00 9.0000e+00",
    "13 1 3 0 0 0 0.0000000000e+00 0.0000000000e+00 4.0000000000e+00 5.0000000000e+00 3.0000000000e+00 0.0000e+00 9.0000e+00",
    "</event>",
    "</LesHouchesEvents>",
]) + "\n"

# Three dimuon events in the layout UPCgen writes, with the usual header
# lines, a resonance decay in the second event and a stray record after the
# end-of-listing marker that must not be read.
DIMUON = """HepMC::Version 3.02.05
HepMC::Asciiv3-START_EVENT_LISTING
E 0 1 2
U GEV MM
P 1 0 13 1.2000000000e-01 -3.4000000000e-02 2.5100000000e+00 2.5153000000e+00 1.0566000000e-01 1
P 2 0 -13 -1.1000000000e-01 4.1000000000e-02 -1.8700000000e+00 1.8767000000e+00 1.0566000000e-01 1
E 1 2 3
U GEV MM
P 1 0 443 2.0000000000e-02 -1.0000000000e-02 4.0000000000e-01 3.4212000000e+00 3.3977000000e+00 2
P 2 1 13 8.0000000000e-01 1.2000000000e+00 1.1000000000e+00 1.8169000000e+00 1.0566000000e-01 1
P 3 1 -13 -7.8000000000e-01 -1.2100000000e+00 -7.0000000000e-01 1.6043000000e+00 1.0566000000e-01 1
E 2 1 2
U GEV MM
P 1 0 -13 3.0000000000e-01 0.0000000000e+00 -9.2000000000e+00 9.2055000000e+00 1.0566000000e-01 1
P 2 0 13 -2.9000000000e-01 1.0000000000e-02 -4.4000000000e+00 4.4108200000e+00 1.0566000000e-01 1
HepMC::Asciiv3-END_EVENT_LISTING
E 3 1 1
U GEV MM
P 1 0 13 0.0 0.0 1.0 1.0 0.0 1
"""


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def pytest_configure(config):  # noqa: D401
    """Ensure fixtures exist before any tests run."""

    fixtures = Path(__file__).resolve().parent / "fixtures"
    _write_text(fixtures / "two_body.hepmc", TWO_BODY)
    _write_text(fixtures / "dimuon" / "upcgen_dimuon.hepmc", DIMUON)
    _write_text(fixtures / "dimuon" / "xsec.out", "12.5 40.25\n")


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def write_dump(tmp_path):
    """Write a UPCgen dump under tmp_path/input/ and return its path."""

    def _write(text: str, name: str = "events.hepmc") -> Path:
        path = tmp_path / "input" / name
        _write_text(path, text)
        return path

    return _write


@pytest.fixture
def two_body_lhe() -> str:
    return TWO_BODY_LHE
