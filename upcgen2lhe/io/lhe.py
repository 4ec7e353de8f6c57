from __future__ import annotations

import gzip
import io
import re
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO

from ..models import Event, Particle, ProcessInfo, RunInfo

_TAG_EVENT_OPEN = re.compile(r"<event\b")
_TAG_EVENT_CLOSE = re.compile(r"</event>")
_TAG_INIT_OPEN = re.compile(r"<init\b")
_TAG_INIT_CLOSE = re.compile(r"</init>")

# Digits after the decimal point
INIT_DIGITS = 8
EVENT_DIGITS = 10

HEADER = (
    '<LesHouchesEvents version="3.0">\n'
    "<!-- \n"
    " #Converted from UPCGEN generator HEPMC output \n"
    "-->\n"
    "<header>\n"
    "</header>\n"
)
FOOTER = "</LesHouchesEvents>\n"


def format_sci(value: float, digits: int) -> str:
    """Scientific notation with a fixed number of digits after the point."""
    return f"{value:.{digits}e}"


def _open_text(path: str):
    p = Path(path)
    if p.suffix == ".gz":
        return io.TextIOWrapper(gzip.open(p, "rb"), encoding="utf-8", errors="replace")
    return open(p, "r", encoding="utf-8", errors="replace")


# --- writing ----------------------------------------------------------------------------


def format_init(run: RunInfo) -> str:
    # LHE format: https://arxiv.org/pdf/hep-ph/0109068.pdf
    # beam ids, beam energies [GeV], PDF author groups, PDF set ids, weight strategy, # processes
    lines = [
        "<init>",
        " ".join([
            str(run.beam_pdg_id[0]),
            str(run.beam_pdg_id[1]),
            format_sci(run.beam_energy[0], INIT_DIGITS),
            format_sci(run.beam_energy[1], INIT_DIGITS),
            str(run.pdf_group[0]),
            str(run.pdf_group[1]),
            str(run.pdf_set[0]),
            str(run.pdf_set[1]),
            str(run.weight_strategy),
            str(len(run.processes)),
        ]),
    ]
    # cross section [pb], its stat. uncertainty [pb], maximum event weight, process id
    for proc in run.processes:
        lines.append(
            f"{format_sci(proc.cross_section, INIT_DIGITS)} "
            f"{format_sci(proc.cross_section_error, INIT_DIGITS)} "
            f"{format_sci(proc.max_weight, INIT_DIGITS)} {proc.process_id}"
        )
    lines.append("</init>")
    return "\n".join(lines) + "\n"


def format_particle(p: Particle) -> str:
    # id, status, mothers, colors, px, py, pz, E, M [GeV], lifetime [mm], spin
    return (
        f"{p.pdg_id} {p.status} {p.mother1} {p.mother2} {p.color1} {p.color2} "
        f"{format_sci(p.px, EVENT_DIGITS)} {format_sci(p.py, EVENT_DIGITS)} "
        f"{format_sci(p.pz, EVENT_DIGITS)} {format_sci(p.energy, EVENT_DIGITS)} "
        f"{format_sci(p.mass, EVENT_DIGITS)} "
        f"{format_sci(p.lifetime, 4)} {format_sci(p.spin, 4)}"
    )


def format_event(ev: Event) -> str:
    # particles, process id, weight, scale, alpha_em, alpha_s
    lines = [
        "<event>",
        f"{len(ev.particles)} {ev.process_id} {ev.weight} {ev.scale} {ev.alpha_qed} {ev.alpha_qcd}",
    ]
    lines.extend(format_particle(p) for p in ev.particles)
    lines.append("</event>")
    return "\n".join(lines) + "\n"


class LHEWriter:
    """Writes converted events as a Les Houches Event document."""

    def write_header(self, out: TextIO, run_info: Optional[RunInfo]) -> None:
        out.write(HEADER)
        out.write(format_init(run_info or RunInfo()))

    def write_event(self, out: TextIO, ev: Event) -> None:
        out.write(format_event(ev))

    def write_footer(self, out: TextIO) -> None:
        out.write(FOOTER)

    def write_stream(self, out: TextIO, events: Iterable[Event], run_info: Optional[RunInfo]) -> int:
        """Write a complete LHE document to an open stream; return the event count."""
        self.write_header(out, run_info)
        n = 0
        for ev in events:
            self.write_event(out, ev)
            n += 1
        self.write_footer(out)
        return n

    def write(self, path: str, events: Iterable[Event], run_info: Optional[RunInfo]) -> None:
        p = Path(path)
        if p.suffix == ".gz":
            fh = gzip.open(p, "wt", encoding="utf-8")
        else:
            fh = open(p, "w", encoding="utf-8")
        with fh as out:
            self.write_stream(out, events, run_info)


# --- reading back -----------------------------------------------------------------------


def _parse_init(lines: list[str]) -> RunInfo:
    rows = [ln.split() for ln in lines if ln.strip() and not ln.strip().startswith("#")]
    if not rows:
        return RunInfo()
    head = rows[0]
    if len(head) < 10:
        raise ValueError(f"Malformed <init> beam record: {' '.join(head)}")
    run = RunInfo(
        beam_pdg_id=(int(head[0]), int(head[1])),
        beam_energy=(float(head[2]), float(head[3])),
        pdf_group=(int(head[4]), int(head[5])),
        pdf_set=(int(head[6]), int(head[7])),
        weight_strategy=int(head[8]),
    )
    # XSECUP XERRUP XMAXUP LPRUP, one row per process
    for row in rows[1:1 + int(head[9])]:
        if len(row) < 4:
            raise ValueError(f"Malformed <init> process record: {' '.join(row)}")
        run.processes.append(ProcessInfo(
            process_id=int(row[3]),
            cross_section=float(row[0]),
            cross_section_error=float(row[1]),
            max_weight=float(row[2]),
        ))
    return run


def read_run_info(path: str) -> RunInfo:
    init_lines: list[str] = []
    in_init = False
    with _open_text(path) as f:
        for line in f:
            if not in_init:
                if _TAG_INIT_OPEN.search(line):
                    in_init = True
                continue
            if _TAG_INIT_CLOSE.search(line):
                break
            init_lines.append(line)
    return _parse_init(init_lines)


def _parse_event_block(lines: list[str], event_number: int) -> Event:
    rows = [ln.split() for ln in lines if ln.strip() and not ln.strip().startswith("#")]
    if not rows:
        return Event(event_number=event_number)

    # nup idprup xwgtup scalup aqedup aqcdup
    hp = rows[0]
    nup = int(hp[0])
    particles: list[Particle] = []
    for cols in rows[1:1 + nup]:
        # id status mother1 mother2 col1 col2 px py pz E M lifetime spin
        particles.append(Particle(
            pdg_id=int(cols[0]),
            status=int(cols[1]),
            mother1=int(cols[2]),
            mother2=int(cols[3]),
            color1=int(cols[4]),
            color2=int(cols[5]),
            px=float(cols[6]),
            py=float(cols[7]),
            pz=float(cols[8]),
            energy=float(cols[9]),
            mass=float(cols[10]),
            lifetime=float(cols[11]) if len(cols) > 11 else 0.0,
            spin=float(cols[12]) if len(cols) > 12 else 9.0,
        ))

    return Event(
        event_number=event_number,
        particles=particles,
        process_id=int(hp[1]) if len(hp) > 1 else 0,
        weights=[float(hp[2]) if len(hp) > 2 else 1.0],
        scale=float(hp[3]) if len(hp) > 3 else -1.0,
        alpha_qed=float(hp[4]) if len(hp) > 4 else -1.0,
        alpha_qcd=float(hp[5]) if len(hp) > 5 else -1.0,
        n_particles=nup,
    )


def iter_lhe(path: str) -> Iterator[Event]:
    with _open_text(path) as f:
        in_event = False
        buf: list[str] = []
        event_no = 0
        for line in f:
            if not in_event:
                if _TAG_EVENT_OPEN.search(line):
                    in_event = True
                    buf = []
                continue
            if _TAG_EVENT_CLOSE.search(line):
                event_no += 1
                yield _parse_event_block(buf, event_no)
                in_event = False
                buf = []
            else:
                buf.append(line)
