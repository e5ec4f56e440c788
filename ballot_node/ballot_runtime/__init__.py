"""
Ballot runtime package (lazy import)

Keeps `import ballot_node.ballot_runtime` free of side effects. The
commonly used names are resolved on first attribute access (PEP 562).
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "Election",
    "Voter",
    "Proposal",
    "WorkflowStatus",
    "compute_winner",
    # lazily exposed modules:
    "election",
    "errors",
    "events",
    "workflow",
]

_LAZY_MAP = {
    "election": ("ballot_node.ballot_runtime.election", None),
    "errors": ("ballot_node.ballot_runtime.errors", None),
    "events": ("ballot_node.ballot_runtime.events", None),
    "workflow": ("ballot_node.ballot_runtime.workflow", None),
    "Election": ("ballot_node.ballot_runtime.election", "Election"),
    "Voter": ("ballot_node.ballot_runtime.election", "Voter"),
    "Proposal": ("ballot_node.ballot_runtime.election", "Proposal"),
    "compute_winner": ("ballot_node.ballot_runtime.election", "compute_winner"),
    "WorkflowStatus": ("ballot_node.ballot_runtime.workflow", "WorkflowStatus"),
}


def __getattr__(name: str) -> Any:
    target = _LAZY_MAP.get(name)
    if not target:
        raise AttributeError(name)
    mod_path, attr = target
    mod = import_module(mod_path)
    return getattr(mod, attr) if attr else mod


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | set(_LAZY_MAP.keys()))
