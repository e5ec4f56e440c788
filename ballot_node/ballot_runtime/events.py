"""
ballot_node/ballot_runtime/events.py
------------------------------------

Events emitted by successful election operations.

Each mutating call on an Election returns the event it produced, the
same record that lands in `Election.events` and is handed to any
subscribed observers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Union

from .workflow import WorkflowStatus


@dataclass(frozen=True)
class VoterRegistered:
    voter_address: str

    name = "VoterRegistered"

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.name, "voter_address": self.voter_address}


@dataclass(frozen=True)
class WorkflowStatusChange:
    previous_status: WorkflowStatus
    new_status: WorkflowStatus

    name = "WorkflowStatusChange"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.name,
            "previous_status": int(self.previous_status),
            "new_status": int(self.new_status),
        }


@dataclass(frozen=True)
class ProposalRegistered:
    proposal_id: int

    name = "ProposalRegistered"

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.name, "proposal_id": self.proposal_id}


@dataclass(frozen=True)
class Voted:
    voter: str
    proposal_id: int

    name = "Voted"

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.name, "voter": self.voter, "proposal_id": self.proposal_id}


Event = Union[VoterRegistered, WorkflowStatusChange, ProposalRegistered, Voted]
Observer = Callable[[Event], None]
