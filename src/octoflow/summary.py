# summary.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .github.models import RunInfo
from .model import JobNode
from .timing import PLACEHOLDER, delta_ms, format_duration, format_timestamp


@dataclass(frozen=True)
class TableRow:
    name: str
    result: str
    wait: str
    duration: str


def timing_rows(jobs: Sequence[JobNode], run_created_at: Optional[str]) -> List[TableRow]:
    """
    One row per job, sorted by job name.

    Wait is measured from run creation to job start, duration from job
    start to job completion.
    """
    rows = [
        TableRow(
            name=job.name,
            result=job.result,
            wait=format_duration(delta_ms(run_created_at, job.started_at)),
            duration=format_duration(delta_ms(job.started_at, job.completed_at)),
        )
        for job in jobs
    ]
    return sorted(rows, key=lambda r: (r.name.casefold(), r.name))


def _cell(text: str) -> str:
    return text.replace("|", "\\|")


def render_table(rows: Sequence[TableRow]) -> str:
    lines = [
        "| Job | Result | Wait (approx) | Duration |",
        "|---|---|---:|---:|",
    ]
    for r in rows:
        lines.append(f"| {_cell(r.name)} | {_cell(r.result)} | {r.wait} | {r.duration} |")
    return "\n".join(lines) + "\n"


def render_summary(
    title: str,
    repo: str,
    run: RunInfo,
    graph: str,
    rows: Sequence[TableRow],
) -> str:
    """Markdown for the job summary page."""
    label = f"{repo} #{run.id}"
    run_link = f"[{label}]({run.html_url})" if run.html_url else label
    started = run.run_started_at or run.created_at

    md = f"## {title}\n\n"
    md += f"**Run:** {run_link}  \n"
    md += f"**Status:** {run.status or PLACEHOLDER} / {run.conclusion or PLACEHOLDER}  \n"
    if started:
        md += f"**Started:** {format_timestamp(started)}  \n"
    md += "\n"

    md += "### Pipeline\n\n"
    md += (graph or "Graph is not available.") + "\n\n"

    md += "### Jobs\n\n"
    md += render_table(rows)
    md += "\n"
    return md


def append_summary(path: str | Path, markdown: str) -> None:
    with Path(path).open("a", encoding="utf-8") as f:
        f.write(markdown)
