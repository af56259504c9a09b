# graph.py
from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from .model import JobNode, LogicalEdge
from .resolve import resolve

SUPPORTED_FORMATS = ("mermaid",)
DEFAULT_FORMAT = "mermaid"

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_]")

_FAILED_CONCLUSIONS = {"failure", "timed_out", "cancelled", "action_required"}


def sanitize_id(value: str) -> str:
    return _UNSAFE_ID_CHARS.sub("_", value)


def node_id(job: JobNode) -> str:
    # the numeric id keeps ids unique when two names sanitize the same way
    return f"J_{sanitize_id(job.name)}_{job.id}"


def status_icon(job: JobNode) -> str:
    conclusion = (job.conclusion or "").lower()
    if job.status == "in_progress":
        return "🟣"
    if job.status == "queued":
        return "⚪️"
    if conclusion == "success":
        return "✅"
    if conclusion == "skipped":
        return "⏭️"
    if conclusion in _FAILED_CONCLUSIONS:
        return "❌"
    return "⚪️"


def _label(job: JobNode) -> str:
    name = job.name.replace('"', "#quot;")
    return f"{status_icon(job)} {name}\\n{job.result}"


def select_graph_format(requested: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Pick the graph format to render.

    Returns:
        (format, warning) where warning is None unless the requested
        format is unsupported and the default was substituted.
    """
    fmt = (requested or "").strip().lower()
    if not fmt:
        return DEFAULT_FORMAT, None
    if fmt in SUPPORTED_FORMATS:
        return fmt, None
    return DEFAULT_FORMAT, f"Graph format '{fmt}' is not supported yet, defaulting to Mermaid."


def resolved_edges(
    jobs: Sequence[JobNode], edges: Sequence[LogicalEdge]
) -> List[Tuple[JobNode, JobNode]]:
    """Edges with both ends bound to runtime jobs. Unmatched edges are dropped."""
    out: List[Tuple[JobNode, JobNode]] = []
    for from_id, to_id in edges:
        src = resolve(from_id, jobs)
        dst = resolve(to_id, jobs)
        if not (src.matched and dst.matched):
            continue
        out.append((src.node, dst.node))
    return out


def unresolved_edges(jobs: Sequence[JobNode], edges: Sequence[LogicalEdge]) -> List[LogicalEdge]:
    """Logical edges the graph leaves out because an end has no runtime job."""
    return [
        (from_id, to_id)
        for from_id, to_id in edges
        if not (resolve(from_id, jobs).matched and resolve(to_id, jobs).matched)
    ]


def mermaid_flowchart(jobs: Sequence[JobNode], edges: Sequence[LogicalEdge]) -> str:
    """
    Render jobs and their `needs` edges as a fenced Mermaid flowchart.

    One node line per job and one edge line per resolvable logical edge,
    both in input order. Duplicate edges are kept.
    """
    lines: List[str] = ["flowchart LR"]

    for job in jobs:
        lines.append(f'{node_id(job)}["{_label(job)}"]')

    for src, dst in resolved_edges(jobs, edges):
        lines.append(f"{node_id(src)} --> {node_id(dst)}")

    return "```mermaid\n" + "\n".join(lines) + "\n```"


def render_graph(
    jobs: Sequence[JobNode], edges: Sequence[LogicalEdge], fmt: str = DEFAULT_FORMAT
) -> str:
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported graph format: {fmt!r}")
    return mermaid_flowchart(jobs, edges)
