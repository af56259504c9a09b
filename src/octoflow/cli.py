# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from octoflow.config import ActionConfig, ConfigError
from octoflow.definition import MalformedDefinition, parse_needs_edges
from octoflow.github.api_client import APIError
from octoflow.github.models import RunInfo
from octoflow.payload import load_payload
from octoflow.runner import render_markdown, summarize_run
from octoflow.summary import append_summary
from octoflow.ui.console import Console, get_console, set_console


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """OctoFlow: pipeline graph and timing summary for GitHub Actions runs."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--token", default=None, help="GitHub token (defaults to INPUT_GITHUB-TOKEN / GITHUB_TOKEN)")
@click.option("--repository", default=None, help="owner/repo (defaults to GITHUB_REPOSITORY)")
@click.option("--run-id", default=None, type=int, help="Workflow run id (defaults to GITHUB_RUN_ID)")
@click.option("--sha", default=None, help="Commit sha (defaults to GITHUB_SHA)")
@click.option("--workspace", default=None, help="Checkout root (defaults to GITHUB_WORKSPACE or cwd)")
@click.option("--workflow-path", default=None, help="Workflow file relative to the workspace")
@click.option("--summary-path", default=None, help="Markdown file to append to (defaults to GITHUB_STEP_SUMMARY)")
@click.option("--title", default=None, help="Summary heading")
@click.option("--graph", default=None, help="Graph format (only 'mermaid' is supported)")
@click.option("--artifact/--no-artifact", default=None, help="Write octoflow.json export")
@click.option("--viewer-url", default=None, help="Viewer base URL for the check run link")
@click.pass_context
def summarize(ctx, token, repository, run_id, sha, workspace, workflow_path, summary_path,
              title, graph, artifact, viewer_url):
    """Summarize the current workflow run."""
    console = get_console()

    try:
        config = ActionConfig.from_env(
            token=token,
            repository=repository,
            run_id=run_id,
            sha=sha,
            workspace=workspace,
            workflow_path=workflow_path,
            summary_path=summary_path,
            title=title,
            graph=graph,
            artifact=artifact,
            viewer_url=viewer_url,
        )
    except ConfigError as e:
        console.print_error(
            "Missing run context",
            str(e),
            suggestion="Run inside GitHub Actions or pass --token/--repository/--run-id/--sha.",
        )
        sys.exit(1)

    try:
        result = summarize_run(config)

        if config.summary_path:
            append_summary(config.summary_path, result.markdown)
            console.print_info(f"Summary appended to {config.summary_path}")
        else:
            console.print_info(result.markdown)

    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except MalformedDefinition as e:
        console.print_error(
            "Malformed workflow file",
            str(e),
            suggestion="Fix the YAML syntax of the workflow file; no summary was written.",
        )
        sys.exit(1)
    except APIError as e:
        details = [e.body] if e.body else None
        console.print_error("GitHub API error", str(e), details=details)
        sys.exit(1)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--title", default="OctoFlow", show_default=True, help="Summary heading")
@click.option("--graph", default="mermaid", show_default=True, help="Graph format")
def render(payload_file, title, graph):
    """Re-render the summary from a saved octoflow.json export."""
    console = get_console()

    try:
        payload = load_payload(payload_file)
    except ValidationError as e:
        console.print_error(
            "Invalid export file",
            f"{payload_file} is not a version 1 OctoFlow export",
            details=[str(e)],
        )
        sys.exit(1)

    run = RunInfo(
        id=payload.run.id,
        name=payload.run.name,
        status=payload.run.status,
        conclusion=payload.run.conclusion,
        created_at=payload.run.created_at,
        run_started_at=payload.run.run_started_at,
        head_sha=payload.run.sha,
    )
    markdown = render_markdown(
        title, payload.repo, run, payload.job_nodes(), payload.logical_edges(), graph
    )
    click.echo(markdown, nl=False)


@cli.command()
@click.argument("workflow_file", type=click.Path(dir_okay=False, path_type=Path))
def edges(workflow_file):
    """List the needs edges declared in a workflow file."""
    console = get_console()

    if not workflow_file.exists():
        console.print_warning(f"{workflow_file} does not exist, no edges")
        return

    try:
        found = parse_needs_edges(workflow_file.parent, workflow_file.name)
    except MalformedDefinition as e:
        console.print_error("Malformed workflow file", str(e))
        sys.exit(1)

    for from_id, to_id in found:
        click.echo(f"{from_id} -> {to_id}")


@cli.command()
@click.option("--exports", default=None, help="Directory of saved exports (defaults to OCTOFLOW_EXPORTS_DIR)")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, type=int, show_default=True)
def serve(exports, host, port):
    """Serve saved exports over HTTP."""
    import uvicorn

    from octoflow.viewer.app import create_app

    app = create_app(exports)
    uvicorn.run(app, host=host, port=port)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
