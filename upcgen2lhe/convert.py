"""High-level conversion/info API."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .io.lhe import LHEWriter, iter_lhe, read_run_info
from .io.upcgen import open_text, read_upcgen_events
from .io.xsec import read_xsec
from .models import ProcessInfo, RunInfo
from .transform import PROCESS_ID, to_lhe_event
from .validation import ValidationReport, validate_stream

LHE_SUFFIX = ".lhe"
BEAM_PDG_ID = 2212
# IDWTUP: unweighted events, every event has weight +1
WEIGHT_STRATEGY = 3


def output_path_for(input_path: Union[str, Path], output_dir: Union[str, Path, None] = None) -> Path:
    """``<input basename without its last extension>.lhe``, in ``output_dir``.

    ``output_dir`` defaults to the current working directory, not the
    directory of the input.
    """
    name = Path(input_path).name
    stem, dot, _ = name.rpartition(".")
    if not dot:
        stem = name
    out = stem + LHE_SUFFIX
    return Path(output_dir) / out if output_dir is not None else Path(out)


def build_run_info(beam_energy1: float, beam_energy2: float, fiducial_xsec: float, total_xsec: float) -> RunInfo:
    return RunInfo(
        beam_pdg_id=(BEAM_PDG_ID, BEAM_PDG_ID),
        beam_energy=(beam_energy1, beam_energy2),
        weight_strategy=WEIGHT_STRATEGY,
        processes=[ProcessInfo(
            process_id=PROCESS_ID,
            cross_section=fiducial_xsec,
            cross_section_error=0.0,
            max_weight=total_xsec,
        )],
    )


def convert(
    input_path: Union[str, Path],
    beam_energy1: float,
    beam_energy2: float,
    *,
    output_dir: Union[str, Path, None] = None,
    validate: bool = False,
    strict_validation: bool = False,
    quiet: bool = False,
) -> dict:
    """Convert a UPCgen ASCII dump into an LHE file.

    Events are streamed: each one is parsed, transformed and written before
    the next is read. Any malformed record aborts the conversion with
    UPCgenFormatError; whatever was written up to that point stays on disk.
    """
    input_path = Path(input_path)
    output_path = output_path_for(input_path, output_dir)
    writer = LHEWriter()
    report: Optional[ValidationReport] = ValidationReport() if validate else None

    with open_text(str(input_path)) as fin:
        fid_xsec, tot_xsec = read_xsec(input_path)
        run_info = build_run_info(beam_energy1, beam_energy2, fid_xsec, tot_xsec)

        with open(output_path, "w", encoding="utf-8") as fout:
            if not quiet:
                print("Converting UPCGen HEPMC output to LHE format")

            ev_iter = (to_lhe_event(ev) for ev in read_upcgen_events(fin))
            if report is not None:
                ev_iter = validate_stream(ev_iter, report, strict=strict_validation)

            n_events = writer.write_stream(fout, ev_iter, run_info)

    if not quiet:
        print(f"{n_events} events written in {output_path}")
        if report is not None:
            print(str(report))

    return {
        "n_events": n_events,
        "output": output_path,
        "run_info": run_info,
        "validation": report,
    }


def info(filepath: Union[str, Path]) -> dict:
    """Summarize an LHE file."""
    run_info = read_run_info(str(filepath))

    n_events = 0
    total_particles = 0
    pdg_counts: dict[int, int] = {}
    status_counts: dict[int, int] = {}

    for ev in iter_lhe(str(filepath)):
        n_events += 1
        total_particles += len(ev.particles)
        for p in ev.particles:
            pdg_counts[p.pdg_id] = pdg_counts.get(p.pdg_id, 0) + 1
            status_counts[p.status] = status_counts.get(p.status, 0) + 1

    from .pdg import name as pdg_name

    top_pdg = sorted(pdg_counts.items(), key=lambda x: -x[1])[:20]
    top_named = [(pdg_name(pid), count) for pid, count in top_pdg]

    return {
        "n_events": n_events,
        "total_particles": total_particles,
        "avg_particles_per_event": total_particles / max(1, n_events),
        "beam_pdg_id": run_info.beam_pdg_id,
        "beam_energy": run_info.beam_energy,
        "cross_sections": [
            (proc.process_id, proc.cross_section, proc.max_weight) for proc in run_info.processes
        ],
        "top_particles": top_named,
        "status_counts": dict(sorted(status_counts.items())),
    }
