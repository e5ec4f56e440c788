"""
ballot_node/ballot_runtime/workflow.py
--------------------------------------

Workflow phases of an election.

The phases are strictly ordered and only ever advance one step:

    RegisteringVoters
      -> ProposalsRegistrationStarted
      -> ProposalsRegistrationEnded
      -> VotingSessionStarted
      -> VotingSessionEnded
      -> VotesTallied (terminal)

The integer values match the positions above so statuses compare and
serialize as plain ints.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class WorkflowStatus(int, Enum):
    REGISTERING_VOTERS = 0
    PROPOSALS_REGISTRATION_STARTED = 1
    PROPOSALS_REGISTRATION_ENDED = 2
    VOTING_SESSION_STARTED = 3
    VOTING_SESSION_ENDED = 4
    VOTES_TALLIED = 5

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: Dict[WorkflowStatus, str] = {
    WorkflowStatus.REGISTERING_VOTERS: "RegisteringVoters",
    WorkflowStatus.PROPOSALS_REGISTRATION_STARTED: "ProposalsRegistrationStarted",
    WorkflowStatus.PROPOSALS_REGISTRATION_ENDED: "ProposalsRegistrationEnded",
    WorkflowStatus.VOTING_SESSION_STARTED: "VotingSessionStarted",
    WorkflowStatus.VOTING_SESSION_ENDED: "VotingSessionEnded",
    WorkflowStatus.VOTES_TALLIED: "VotesTallied",
}

INITIAL_STATUS = WorkflowStatus.REGISTERING_VOTERS
TERMINAL_STATUS = WorkflowStatus.VOTES_TALLIED


def next_status(status: WorkflowStatus) -> Optional[WorkflowStatus]:
    """
    Return the single status reachable from `status`, or None at the end.
    """
    if status == TERMINAL_STATUS:
        return None
    return WorkflowStatus(int(status) + 1)


def predecessor_of(status: WorkflowStatus) -> Optional[WorkflowStatus]:
    if status == INITIAL_STATUS:
        return None
    return WorkflowStatus(int(status) - 1)
