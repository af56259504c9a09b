import pytest

from octoflow.github.models import RunInfo
from octoflow.ui.console import Console, set_console


@pytest.fixture(autouse=True)
def quiet_console():
    """Fresh console per test, no workflow commands."""
    console = Console(debug=False, actions=False)
    set_console(console)
    return console


@pytest.fixture
def run_info():
    return RunInfo(
        id=42,
        name="CI",
        status="completed",
        conclusion="success",
        created_at="2024-01-01T10:00:00Z",
        run_started_at="2024-01-01T10:00:05Z",
        html_url="https://github.com/acme/widgets/actions/runs/42",
        head_sha="abc123",
    )


@pytest.fixture
def api_jobs():
    """Raw jobs API records."""
    return [
        {
            "id": 1,
            "name": "build",
            "status": "completed",
            "conclusion": "success",
            "started_at": "2024-01-01T10:00:10Z",
            "completed_at": "2024-01-01T10:01:15Z",
            "steps": [
                {
                    "name": "Checkout",
                    "status": "completed",
                    "conclusion": "success",
                    "number": 1,
                    "started_at": "2024-01-01T10:00:10Z",
                    "completed_at": "2024-01-01T10:00:12Z",
                },
            ],
        },
        {
            "id": 2,
            "name": "test (3.11)",
            "status": "completed",
            "conclusion": "failure",
            "started_at": "2024-01-01T10:01:20Z",
            "completed_at": "2024-01-01T10:02:00Z",
            "steps": [],
        },
    ]

