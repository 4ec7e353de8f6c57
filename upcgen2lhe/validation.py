"""
Physics checks for converted LHE events.

Provides checks for:
- Mother references inside the event record
- Longitudinal balance between beam photons and final state
- Valid PDG particle IDs
- Energy positivity
- Declared vs. four-momentum mass
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from . import pdg as pdg_module
from .models import Event


@dataclass
class ValidationIssue:
    """A single validation issue found in an event."""

    level: str  # "error", "warning"
    event_number: int
    particle_index: Optional[int]  # 1-based LHE position, None for event-level issues
    message: str

    def __str__(self) -> str:
        loc = f"event {self.event_number}"
        if self.particle_index is not None:
            loc += f", particle {self.particle_index}"
        return f"[{self.level.upper()}] {loc}: {self.message}"


@dataclass
class ValidationReport:
    """Summary of all validation issues."""

    issues: list[ValidationIssue] = field(default_factory=list)
    n_events: int = 0

    @property
    def n_errors(self) -> int:
        return sum(1 for i in self.issues if i.level == "error")

    @property
    def n_warnings(self) -> int:
        return sum(1 for i in self.issues if i.level == "warning")

    @property
    def is_valid(self) -> bool:
        return self.n_errors == 0

    def __str__(self) -> str:
        lines = [
            f"Validation: {self.n_events} events, {self.n_errors} errors, "
            f"{self.n_warnings} warnings"
        ]
        for issue in self.issues[:50]:  # Cap output
            lines.append(f"  {issue}")
        if len(self.issues) > 50:
            lines.append(f"  ... and {len(self.issues) - 50} more")
        return "\n".join(lines)


def validate_event(
    event: Event,
    *,
    check_mothers: bool = True,
    check_balance: bool = True,
    check_pdg: bool = True,
    check_energy: bool = True,
    check_mass: bool = True,
    balance_tolerance: float = 1e-6,
    mass_tolerance: float = 1e-2,
) -> list[ValidationIssue]:
    """Validate a single LHE event.

    Args:
        event: The event to validate.
        check_mothers: Mother slots must point at earlier particles.
        check_balance: Beam photons must balance the final state in pz and E.
        check_pdg: Check PDG ID validity.
        check_energy: Check energy positivity.
        check_mass: Compare the mass declared in the input with the
            four-momentum mass (needs ``attributes["declared_mass"]``).
        balance_tolerance: Relative tolerance for the pz/E balance.
        mass_tolerance: Relative tolerance for the mass check.

    Returns:
        List of validation issues found.
    """
    issues: list[ValidationIssue] = []
    evt = event.event_number

    if not event.particles:
        issues.append(ValidationIssue("warning", evt, None, "Event has no particles"))
        return issues

    if check_mothers:
        for i, p in enumerate(event.particles, start=1):
            for m in (p.mother1, p.mother2):
                if m < 0 or m >= i:
                    issues.append(ValidationIssue(
                        "error", evt, i,
                        f"Mother index {m} does not refer to an earlier particle"
                    ))

    if check_pdg:
        for i, p in enumerate(event.particles, start=1):
            if not pdg_module.is_valid_pdg_id(p.pdg_id):
                issues.append(ValidationIssue(
                    "warning", evt, i,
                    f"Unknown/invalid PDG ID: {p.pdg_id}"
                ))

    if check_energy:
        for i, p in enumerate(event.particles, start=1):
            if p.energy < 0:
                issues.append(ValidationIssue(
                    "error", evt, i,
                    f"Negative energy: {p.energy:.6e} GeV"
                ))

    if check_mass:
        for i, p in enumerate(event.particles, start=1):
            declared = p.attributes.get("declared_mass")
            if declared is None or abs(declared) < 1e-3:
                continue
            rel_diff = abs(p.mass - declared) / abs(declared)
            if rel_diff > mass_tolerance:
                issues.append(ValidationIssue(
                    "warning", evt, i,
                    f"Mass inconsistency: declared={declared:.6e}, "
                    f"computed={p.mass:.6e}, rel_diff={rel_diff:.4e}"
                ))

    if check_balance:
        incoming = event.incoming_particles
        outgoing = event.final_particles
        if incoming and outgoing:
            sum_in = (sum(p.pz for p in incoming), sum(p.energy for p in incoming))
            sum_out = (sum(p.pz for p in outgoing), sum(p.energy for p in outgoing))
            scale = max(abs(sum_out[1]), 1e-10)
            for label, a, b in zip(("pz", "E"), sum_in, sum_out):
                diff = abs(a - b)
                if diff / scale > balance_tolerance:
                    issues.append(ValidationIssue(
                        "error", evt, None,
                        f"Beam/final-state imbalance in {label}: "
                        f"beams={a:.6e}, final={b:.6e}, diff={diff:.6e}"
                    ))

    return issues


def validate_stream(
    events: Iterable[Event],
    report: ValidationReport,
    *,
    strict: bool = False,
    **kwargs,
) -> Iterator[Event]:
    """Validate events in a streaming pipeline.

    Issues are collected into ``report``. If strict=True, raise ValueError on
    the first error instead.
    """
    for event in events:
        issues = validate_event(event, **kwargs)
        errors = [iss for iss in issues if iss.level == "error"]
        if errors and strict:
            raise ValueError(str(errors[0]))
        report.issues.extend(issues)
        report.n_events += 1
        yield event
