# config.py
# Run context for `octoflow summarize`. Everything that the GitHub Actions
# runner exposes through the environment is read here, once, and passed
# explicitly to the rest of the code.
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .definition import workflow_path_from_ref
from .github.api_client import DEFAULT_API_URL
from .payload import EXPORT_FILENAME

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

DEFAULT_TITLE = "OctoFlow"
DEFAULT_GRAPH = "mermaid"
DEFAULT_PUBLISH = "check"


class ConfigError(Exception):
    """Raised when required run context is missing or invalid."""


def to_bool(value: Optional[str]) -> bool:
    """Action-style boolean input: empty or unrecognised means true."""
    if not value:
        return True
    normalized = value.strip().lower()
    if normalized in FALSE_VALUES:
        return False
    return True


def _input(environ: Mapping[str, str], name: str) -> str:
    # the runner exposes `with:` inputs as INPUT_<NAME> with the name upper-cased
    return environ.get(f"INPUT_{name.upper()}", "").strip()


@dataclass(frozen=True)
class ActionConfig:
    token: str
    owner: str
    repo: str
    run_id: int
    sha: str
    workspace: Path
    workflow_path: Optional[str] = None
    summary_path: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    title: str = DEFAULT_TITLE
    graph: str = DEFAULT_GRAPH
    artifact: bool = True
    publish: str = DEFAULT_PUBLISH
    viewer_url: str = ""

    @property
    def full_repo(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def export_path(self) -> Path:
        return self.workspace / EXPORT_FILENAME

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> ActionConfig:
        """
        Build the config from an environment mapping.

        Keyword overrides (e.g. from CLI options) win over the environment
        when they are not None.

        Raises:
            ConfigError: If token, repository, run id or sha are missing
        """
        env = os.environ if environ is None else environ
        values = {
            "token": _input(env, "github-token") or env.get("GITHUB_TOKEN", ""),
            "repository": env.get("GITHUB_REPOSITORY", ""),
            "run_id": env.get("GITHUB_RUN_ID", ""),
            "sha": env.get("GITHUB_SHA", ""),
            "workspace": env.get("GITHUB_WORKSPACE") or os.getcwd(),
            "workflow_ref": env.get("GITHUB_WORKFLOW_REF", ""),
            "summary_path": env.get("GITHUB_STEP_SUMMARY") or None,
            "api_url": env.get("GITHUB_API_URL") or DEFAULT_API_URL,
            "title": _input(env, "title") or DEFAULT_TITLE,
            "graph": _input(env, "graph") or DEFAULT_GRAPH,
            "artifact": to_bool(_input(env, "artifact")),
            "publish": _input(env, "publish") or DEFAULT_PUBLISH,
            "viewer_url": _input(env, "viewer-url"),
            "workflow_path": None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        missing = [k for k in ("token", "repository", "run_id", "sha") if not values[k]]
        if missing:
            raise ConfigError(f"Missing run context: {', '.join(missing)}")

        repository = str(values["repository"])
        if "/" not in repository:
            raise ConfigError(f"Invalid repository '{repository}', expected owner/repo")
        owner, repo = repository.split("/", 1)

        try:
            run_id = int(values["run_id"])
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid run id: {values['run_id']!r}")

        workflow_path = values["workflow_path"] or workflow_path_from_ref(values["workflow_ref"])

        return cls(
            token=str(values["token"]),
            owner=owner,
            repo=repo,
            run_id=run_id,
            sha=str(values["sha"]),
            workspace=Path(values["workspace"]),
            workflow_path=workflow_path,
            summary_path=values["summary_path"],
            api_url=str(values["api_url"]),
            title=str(values["title"]),
            graph=str(values["graph"]),
            artifact=bool(values["artifact"]),
            publish=str(values["publish"]),
            viewer_url=str(values["viewer_url"]),
        )
