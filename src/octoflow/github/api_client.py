# github/api_client.py
from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode, urljoin

from .models import RunInfo

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


class APIError(Exception):
    """Raised when GitHub API requests fail."""

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class GitHubClient:
    """Minimal REST client for the Actions run/jobs/checks endpoints."""

    def __init__(self, token: str, base_url: str = DEFAULT_API_URL, timeout: float = 30.0):
        """
        Initialize API client.

        Args:
            token: Token with `actions:read` (and `checks:write` for check runs)
            base_url: API root, e.g. "https://api.github.com" or a GHES "/api/v3" URL
            timeout: Per-request socket timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        data: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict:
        """
        Make an HTTP request to the API.

        Returns:
            Parsed JSON response as dictionary

        Raises:
            APIError: If the request fails
        """
        url = urljoin(self.base_url + "/", path.lstrip("/"))
        if params:
            url = f"{url}?{urlencode(params)}"

        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": "octoflow",
        }
        req_data = None
        if data is not None:
            headers["Content-Type"] = "application/json"
            req_data = json.dumps(data).encode("utf-8")

        req = urllib.request.Request(url, data=req_data, headers=headers, method=method)

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                body = response.read().decode("utf-8")
                if body:
                    return json.loads(body)
                return {}
        except urllib.error.HTTPError as e:
            error_body = e.read().decode("utf-8", errors="replace") if e.fp else ""
            raise APIError(
                f"GitHub API request failed: {method} {path}: {e.code} {e.reason}",
                status=e.code,
                body=error_body,
            )
        except urllib.error.URLError as e:
            raise APIError(f"Network error: {e.reason}")
        except json.JSONDecodeError as e:
            raise APIError(f"Invalid JSON response from {path}: {e}")

    def get_run(self, owner: str, repo: str, run_id: int) -> RunInfo:
        data = self._request("GET", f"/repos/{owner}/{repo}/actions/runs/{run_id}")
        return RunInfo.from_dict(data)

    def list_jobs(self, owner: str, repo: str, run_id: int, per_page: int = 100) -> List[Dict[str, Any]]:
        """
        Fetch every job record of a run, following pagination.

        Records are returned raw, in API order, pages concatenated.
        """
        jobs: List[Dict[str, Any]] = []
        page = 1
        while True:
            data = self._request(
                "GET",
                f"/repos/{owner}/{repo}/actions/runs/{run_id}/jobs",
                params={"per_page": per_page, "page": page},
            )
            batch = data.get("jobs") or []
            jobs.extend(batch)

            total = data.get("total_count")
            if len(batch) < per_page:
                break
            if isinstance(total, int) and len(jobs) >= total:
                break
            page += 1
        return jobs

    def create_check_run(
        self,
        owner: str,
        repo: str,
        *,
        name: str,
        head_sha: str,
        conclusion: str,
        details_url: str,
        title: str,
        summary: str,
    ) -> dict:
        """Create a completed check run pointing at `details_url`."""
        return self._request(
            "POST",
            f"/repos/{owner}/{repo}/check-runs",
            data={
                "name": name,
                "head_sha": head_sha,
                "status": "completed",
                "conclusion": conclusion,
                "details_url": details_url,
                "output": {"title": title, "summary": summary},
            },
        )
