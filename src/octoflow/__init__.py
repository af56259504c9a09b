from .definition import MalformedDefinition, parse_needs_edges
from .graph import mermaid_flowchart, render_graph
from .model import JobNode, LogicalEdge, StepRecord, normalize_jobs
from .payload import ExportPayload, build_payload
from .resolve import BracketedMatch, ExactMatch, PrefixMatch, Unresolved, resolve
from .timing import delta_ms, format_duration

__all__ = [
    "MalformedDefinition", "parse_needs_edges",
    "mermaid_flowchart", "render_graph",
    "JobNode", "LogicalEdge", "StepRecord", "normalize_jobs",
    "ExportPayload", "build_payload",
    "BracketedMatch", "ExactMatch", "PrefixMatch", "Unresolved", "resolve",
    "delta_ms", "format_duration",
]
