import json
import textwrap
from unittest.mock import MagicMock

import pytest

from octoflow.config import ActionConfig
from octoflow.definition import MalformedDefinition
from octoflow.github.api_client import APIError
from octoflow.runner import render_markdown, summarize_run, viewer_details_url

from tests.factories import make_job


def make_config(tmp_path, **overrides):
    env = {
        "INPUT_GITHUB-TOKEN": "tok",
        "GITHUB_REPOSITORY": "acme/widgets",
        "GITHUB_RUN_ID": "42",
        "GITHUB_SHA": "abc123",
        "GITHUB_WORKSPACE": str(tmp_path),
        "GITHUB_WORKFLOW_REF": "acme/widgets/.github/workflows/ci.yml@refs/heads/main",
    }
    return ActionConfig.from_env(env, **overrides)


def write_workflow(tmp_path, body):
    path = tmp_path / ".github" / "workflows" / "ci.yml"
    path.parent.mkdir(parents=True)
    path.write_text(textwrap.dedent(body))


@pytest.fixture
def client(run_info, api_jobs):
    client = MagicMock()
    client.get_run.return_value = run_info
    client.list_jobs.return_value = api_jobs
    return client


class TestSummarizeRun:
    def test_full_run(self, tmp_path, client):
        write_workflow(tmp_path, """
            jobs:
              build: {}
              test:
                needs: build
        """)
        result = summarize_run(make_config(tmp_path), client)

        assert result.edges == [("build", "test")]
        assert "J_build_1 --> J_test__3_11__2" in result.markdown
        assert result.export_path == tmp_path / "octoflow.json"
        data = json.loads(result.export_path.read_text())
        assert data["edges"] == [["build", "test"]]
        assert data["workflow_path"] == ".github/workflows/ci.yml"
        assert data["run"]["sha"] == "abc123"
        client.create_check_run.assert_not_called()

    def test_missing_workflow_file_still_succeeds(self, tmp_path, client):
        result = summarize_run(make_config(tmp_path), client)
        assert result.edges == []
        assert " --> " not in result.markdown
        assert "flowchart LR" in result.markdown

    def test_malformed_workflow_aborts_without_output(self, tmp_path, client):
        write_workflow(tmp_path, "jobs: [oops\n")
        with pytest.raises(MalformedDefinition):
            summarize_run(make_config(tmp_path), client)
        assert not (tmp_path / "octoflow.json").exists()

    def test_no_artifact(self, tmp_path, client):
        result = summarize_run(make_config(tmp_path, artifact=False), client)
        assert result.export_path is None
        assert not (tmp_path / "octoflow.json").exists()

    def test_no_jobs_warns(self, tmp_path, client, capsys):
        client.list_jobs.return_value = []
        result = summarize_run(make_config(tmp_path), client)
        assert result.jobs == []
        assert "No jobs were returned" in capsys.readouterr().err

    def test_check_run_when_viewer_configured(self, tmp_path, client):
        result = summarize_run(make_config(tmp_path, viewer_url="https://viewer.example/"), client)
        assert result.check_url == "https://viewer.example/run/acme/widgets/42"
        kwargs = client.create_check_run.call_args.kwargs
        assert kwargs["conclusion"] == "success"
        assert kwargs["head_sha"] == "abc123"

    def test_check_run_failure_is_a_warning(self, tmp_path, client, capsys):
        client.create_check_run.side_effect = APIError("forbidden", status=403)
        result = summarize_run(make_config(tmp_path, viewer_url="https://viewer.example"), client)
        assert result.check_url is None
        assert "Could not create check run" in capsys.readouterr().err


class TestRenderMarkdown:
    def test_unsupported_format_warns_and_renders_mermaid(self, run_info, capsys):
        md = render_markdown("T", "acme/widgets", run_info, [make_job(1, "build")], [], "graphviz")
        assert "```mermaid" in md
        assert "Graph format 'graphviz' is not supported yet" in capsys.readouterr().err


def test_viewer_details_url():
    assert viewer_details_url("https://v.example/", "acme", "widgets", 1) == "https://v.example/run/acme/widgets/1"
