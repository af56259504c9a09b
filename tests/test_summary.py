from octoflow.summary import append_summary, render_summary, render_table, timing_rows

from tests.factories import make_job


class TestTimingRows:
    def test_sorted_by_name_with_wait_and_duration(self):
        jobs = [
            make_job(2, "test", started_at="2024-01-01T10:01:00Z", completed_at="2024-01-01T10:02:05Z"),
            make_job(1, "build", started_at="2024-01-01T10:00:30Z", completed_at="2024-01-01T10:00:50Z"),
        ]
        rows = timing_rows(jobs, "2024-01-01T10:00:00Z")
        assert [r.name for r in rows] == ["build", "test"]
        assert rows[0].wait == "30s"
        assert rows[0].duration == "20s"
        assert rows[1].wait == "1m 0s"
        assert rows[1].duration == "1m 5s"

    def test_missing_timestamps_show_placeholder(self):
        rows = timing_rows([make_job(1, "queued-job", status="queued", conclusion=None)], None)
        assert rows[0].result == "queued"
        assert rows[0].wait == "—"
        assert rows[0].duration == "—"


class TestRenderSummary:
    def test_sections(self, run_info):
        rows = timing_rows([make_job(1, "build")], run_info.created_at)
        md = render_summary("OctoFlow", "acme/widgets", run_info, "```mermaid\nflowchart LR\n```", rows)

        assert md.startswith("## OctoFlow\n\n")
        assert "**Run:** [acme/widgets #42](https://github.com/acme/widgets/actions/runs/42)  \n" in md
        assert "**Status:** completed / success  \n" in md
        assert "**Started:** 2024-01-01T10:00:05.000Z  \n" in md
        assert "### Pipeline\n\n```mermaid\nflowchart LR\n```\n\n" in md
        assert "| Job | Result | Wait (approx) | Duration |\n|---|---|---:|---:|\n" in md
        assert "| build | success | — | — |" in md

    def test_run_without_url_or_conclusion(self, run_info):
        run = run_info.__class__(id=5, name="CI", status="in_progress", conclusion=None)
        md = render_summary("T", "acme/widgets", run, "", [])
        assert "**Run:** acme/widgets #5  \n" in md
        assert "**Status:** in_progress / —" in md
        assert "**Started:**" not in md

    def test_pipes_are_escaped(self):
        rows = timing_rows([make_job(1, "a|b")], None)
        assert "| a\\|b |" in render_table(rows)


def test_append_summary(tmp_path):
    path = tmp_path / "summary.md"
    path.write_text("existing\n")
    append_summary(path, "## added\n")
    assert path.read_text() == "existing\n## added\n"
