from __future__ import annotations
import os

EXPORTS_DIR = os.environ.get("OCTOFLOW_EXPORTS_DIR", "exports")
