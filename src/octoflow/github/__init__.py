from .api_client import APIError, GitHubClient
from .models import RunInfo

__all__ = ["APIError", "GitHubClient", "RunInfo"]
