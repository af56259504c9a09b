"""Console output formatting utilities for OctoFlow."""

from __future__ import annotations

import os
import sys
from typing import Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, actions: Optional[bool] = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            actions: Emit GitHub Actions workflow commands for warnings/errors.
                     Defaults to True when running inside Actions.
        """
        self.debug = debug
        if actions is None:
            actions = os.environ.get("GITHUB_ACTIONS") == "true"
        self.actions = actions

    def print_run_loaded(self, repository: str, run_id: int, job_count: int, edge_count: int) -> None:
        """Print what was fetched for the run."""
        print("\nRUN LOADED")
        print(f"Repository: {repository}")
        print(f"Run: {run_id}")
        print(f"Jobs: {job_count}")
        print(f"Edges: {edge_count}")

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_warning(self, message: str) -> None:
        if self.actions:
            print(f"::warning::{message}")
        print(f"WARNING: {message}", file=sys.stderr)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        if self.actions:
            print(f"::error title={title}::{message}")
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
