# resolve.py
"""
Matching of workflow job ids (as written under `jobs:`) to runtime jobs.

Runtime names drift from the ids: a job can carry a custom `name:`, and a
matrix job shows up once per combination as "deploy (prod)", "deploy (dev)".
Rules are tried in order and the first node hit wins, scanning nodes in the
order the API returned them:

  1. exact name match
  2. name starts with the id
  3. name starts with "<id> ("

Every name hit by rule 3 is also hit by rule 2, so the node chosen is always
the first prefix hit. When that node's name has the matrix form "<id> (...)"
the result is tagged BracketedMatch instead of PrefixMatch.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from .model import JobNode


@dataclass(frozen=True)
class ExactMatch:
    node: JobNode
    matched = True


@dataclass(frozen=True)
class PrefixMatch:
    node: JobNode
    matched = True


@dataclass(frozen=True)
class BracketedMatch:
    node: JobNode
    matched = True


@dataclass(frozen=True)
class Unresolved:
    logical_id: str
    matched = False

    @property
    def node(self) -> None:
        return None


Resolution = Union[ExactMatch, PrefixMatch, BracketedMatch, Unresolved]


def _first(nodes: Sequence[JobNode], pred: Callable[[JobNode], bool]) -> Optional[JobNode]:
    for node in nodes:
        if pred(node):
            return node
    return None


def resolve(logical_id: str, nodes: Sequence[JobNode]) -> Resolution:
    """Map a workflow job id onto a runtime job node."""
    exact = _first(nodes, lambda n: n.name == logical_id)
    if exact is not None:
        return ExactMatch(exact)

    # an empty id would prefix-match every node
    if not logical_id:
        return Unresolved(logical_id)

    prefixed = _first(nodes, lambda n: n.name.startswith(logical_id))
    if prefixed is not None:
        if prefixed.name.startswith(f"{logical_id} ("):
            return BracketedMatch(prefixed)
        return PrefixMatch(prefixed)

    return Unresolved(logical_id)
