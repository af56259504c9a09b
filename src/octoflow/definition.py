# definition.py
# Reads the `needs:` relationships out of a workflow YAML file.
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import yaml

from .model import LogicalEdge


class MalformedDefinition(Exception):
    """Raised when a workflow file exists but is not valid YAML."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Could not parse workflow file {self.path}: {reason}")


def workflow_path_from_ref(ref: Optional[str]) -> Optional[str]:
    """
    Extract the repository-relative workflow path from a workflow ref.

    `owner/repo/.github/workflows/ci.yml@refs/heads/main` -> `.github/workflows/ci.yml`

    Returns None if the ref is empty or has no `.github` segment.
    """
    if not ref:
        return None
    left = ref.split("@", 1)[0]
    parts = left.split("/")
    if ".github" not in parts:
        return None
    return "/".join(parts[parts.index(".github"):])


def edges_from_document(doc: Any) -> List[LogicalEdge]:
    """
    Build logical edges from an already-parsed workflow document.

    One edge (predecessor, job_id) per entry in each job's `needs`,
    in document order. A scalar `needs` counts as a one-element list.
    """
    if not isinstance(doc, dict):
        return []
    jobs = doc.get("jobs")
    if not isinstance(jobs, dict):
        return []

    edges: List[LogicalEdge] = []
    for job_id, job_def in jobs.items():
        if not isinstance(job_def, dict):
            continue
        needs = job_def.get("needs")
        if not needs:
            continue
        entries = needs if isinstance(needs, list) else [needs]
        for dep in entries:
            edges.append((str(dep), str(job_id)))
    return edges


def parse_needs_edges(workspace: str | Path, workflow_rel_path: str | None) -> List[LogicalEdge]:
    """
    Read a workflow file and return its logical edges.

    Args:
        workspace: Checkout root the workflow path is relative to
        workflow_rel_path: e.g. ".github/workflows/ci.yml"; None means unknown

    Returns:
        Logical edges in document order. Empty if the file does not exist.

    Raises:
        MalformedDefinition: If the file exists but cannot be parsed
    """
    if not workflow_rel_path:
        return []
    path = Path(workspace) / workflow_rel_path
    if not path.is_file():
        return []

    try:
        raw = path.read_text(encoding="utf-8")
        # BaseLoader keeps every scalar a string, so ids like `on` or `no` survive
        doc = yaml.load(raw, Loader=yaml.BaseLoader)
    except UnicodeDecodeError as e:
        raise MalformedDefinition(path, f"not valid UTF-8 ({e.reason})") from e
    except yaml.YAMLError as e:
        raise MalformedDefinition(path, str(e)) from e

    return edges_from_document(doc)
