# runner.py
# Wires the pieces together for one workflow run:
#   fetch run + jobs -> parse needs edges -> graph + table -> summary / export / check run
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .config import ActionConfig
from .definition import parse_needs_edges
from .github.api_client import APIError, GitHubClient
from .github.models import RunInfo
from .graph import render_graph, select_graph_format, unresolved_edges
from .model import JobNode, LogicalEdge, normalize_jobs
from .payload import ExportPayload, build_payload, write_payload
from .summary import render_summary, timing_rows
from .ui.console import get_console

CHECK_NAME = "OctoFlow"


@dataclass
class SummaryResult:
    run: RunInfo
    jobs: List[JobNode]
    edges: List[LogicalEdge]
    markdown: str
    payload: ExportPayload
    export_path: Optional[Path] = None
    check_url: Optional[str] = None


def render_markdown(
    title: str,
    repo: str,
    run: RunInfo,
    jobs: Sequence[JobNode],
    edges: Sequence[LogicalEdge],
    graph_format: Optional[str] = None,
) -> str:
    """Graph + timing table for a run. Warns (does not fail) on an unsupported format."""
    console = get_console()

    fmt, warning = select_graph_format(graph_format)
    if warning:
        console.print_warning(warning)

    for from_id, to_id in unresolved_edges(jobs, edges):
        console.print_debug(f"edge {from_id} -> {to_id} has no matching job, not drawn")

    graph = render_graph(jobs, edges, fmt)
    rows = timing_rows(jobs, run.created_at)
    return render_summary(title, repo, run, graph, rows)


def viewer_details_url(viewer_url: str, owner: str, repo: str, run_id: int) -> str:
    return f"{viewer_url.rstrip('/')}/run/{owner}/{repo}/{run_id}"


def summarize_run(config: ActionConfig, client: Optional[GitHubClient] = None) -> SummaryResult:
    """
    Build the summary for the run described by `config`.

    The workflow file is parsed before anything is written, so a malformed
    definition aborts without partial output.

    Raises:
        APIError: If the run or its jobs cannot be fetched
        MalformedDefinition: If the workflow file exists but is not valid YAML
    """
    console = get_console()
    client = client or GitHubClient(config.token, config.api_url)

    run = client.get_run(config.owner, config.repo, config.run_id)
    jobs = normalize_jobs(client.list_jobs(config.owner, config.repo, config.run_id))
    if not jobs:
        console.print_warning("No jobs were returned for the current workflow run.")

    edges = parse_needs_edges(config.workspace, config.workflow_path)
    if config.workflow_path and not edges:
        console.print_debug(f"no needs edges found in {config.workflow_path}")

    console.print_run_loaded(config.full_repo, run.id, len(jobs), len(edges))

    markdown = render_markdown(config.title, config.full_repo, run, jobs, edges, config.graph)
    payload = build_payload(
        config.full_repo,
        run,
        jobs,
        edges,
        workflow_path=config.workflow_path,
        sha=config.sha,
    )
    result = SummaryResult(run=run, jobs=jobs, edges=edges, markdown=markdown, payload=payload)

    if config.artifact:
        result.export_path = write_payload(payload, config.export_path)
        console.print_info(f"Export written to {result.export_path}")

    if config.publish == "check" and config.viewer_url:
        details_url = viewer_details_url(config.viewer_url, config.owner, config.repo, run.id)
        try:
            client.create_check_run(
                config.owner,
                config.repo,
                name=CHECK_NAME,
                head_sha=config.sha,
                conclusion=run.conclusion or "neutral",
                details_url=details_url,
                title="OctoFlow Viewer",
                summary=f"Open the interactive pipeline view: {details_url}",
            )
            result.check_url = details_url
        except APIError as e:
            console.print_warning(f"Could not create check run: {e}")

    return result
