# github/models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RunInfo:
    """Workflow run metadata (GET /repos/{owner}/{repo}/actions/runs/{run_id})."""
    id: int
    name: Optional[str]
    status: Optional[str]
    conclusion: Optional[str]
    created_at: Optional[str] = None
    run_started_at: Optional[str] = None
    html_url: Optional[str] = None
    head_sha: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RunInfo:
        """Create RunInfo from the API response dictionary."""
        return cls(
            id=int(data["id"]),
            name=data.get("name"),
            status=data.get("status"),
            conclusion=data.get("conclusion"),
            created_at=data.get("created_at"),
            run_started_at=data.get("run_started_at"),
            html_url=data.get("html_url"),
            head_sha=data.get("head_sha"),
        )
