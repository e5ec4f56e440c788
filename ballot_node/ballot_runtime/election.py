"""
ballot_node/ballot_runtime/election.py
--------------------------------------

Election: the single-election voting workflow.

An Election owns:

- the administrator identity (fixed at construction)
- the workflow status (see workflow.py)
- voters:    identity -> Voter
- proposals: id       -> Proposal   (ids dense from 0)
- events:    ordered audit trail of everything emitted

Caller identity is always passed in explicitly. The runtime never
authenticates it; it only compares it to the administrator and the
voter registry.

All mutations run under one per-instance lock, so check-then-set
sequences (e.g. has_voted) are atomic with respect to other callers.
Observers are notified after the lock is released.
Every rejected call raises an ElectionError before touching state.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

from .errors import (
    AlreadyRegistered,
    AlreadyVoted,
    ElectionError,
    ErrorContext,
    InvalidArgument,
    InvalidPhase,
    NotFound,
    Unauthorized,
)
from .events import (
    Event,
    Observer,
    ProposalRegistered,
    Voted,
    VoterRegistered,
    WorkflowStatusChange,
)
from .workflow import INITIAL_STATUS, WorkflowStatus, next_status, predecessor_of

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Voter:
    is_registered: bool = False
    has_voted: bool = False
    voted_proposal_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_registered": bool(self.is_registered),
            "has_voted": bool(self.has_voted),
            "voted_proposal_id": self.voted_proposal_id,
        }


@dataclass(frozen=True)
class Proposal:
    id: int
    description: str
    vote_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "description": self.description, "vote_count": self.vote_count}


_UNREGISTERED = Voter()


def compute_winner(proposals: List[Proposal]) -> Optional[Proposal]:
    """
    First proposal (lowest id) holding the highest vote count.

    Single linear scan: the leader is only replaced on a strictly
    greater count, so later ties never displace an earlier leader.
    """
    best: Optional[Proposal] = None
    for p in proposals:
        if best is None or p.vote_count > best.vote_count:
            best = p
    return best


def _check_identity(value: Any, action: str, what: str) -> str:
    """
    Identities are compared verbatim, so they must arrive already trimmed.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(
            f"{what} identity must not be empty.",
            ErrorContext(action=action, reason="empty_identity"),
        )
    if value != value.strip():
        raise InvalidArgument(
            f"{what} identity must not carry surrounding whitespace.",
            ErrorContext(action=action, reason="untrimmed_identity", detail=repr(value)),
        )
    return value


class Election:
    def __init__(self, admin_id: str) -> None:
        self.admin_id = _check_identity(admin_id, "create_election", "Administrator")
        self._lock = threading.RLock()
        self._status: WorkflowStatus = INITIAL_STATUS
        self._voters: Dict[str, Voter] = {}
        self._proposals: Dict[int, Proposal] = {}
        self._next_proposal_id: int = 0
        self._winner_id: Optional[int] = None
        self._observers: List[Observer] = []
        self._events: List[Event] = []

    # ------------------------
    # Events / observers
    # ------------------------
    @property
    def events(self) -> Tuple[Event, ...]:
        """Audit trail of every emitted event, oldest first."""
        with self._lock:
            return tuple(self._events)

    def subscribe(self, observer: Observer) -> None:
        with self._lock:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    def _record(self, event: Event) -> Event:
        # caller holds the lock; state is already committed
        self._events.append(event)
        return event

    def _notify(self, event: Event) -> Event:
        # must be called without the lock held
        with self._lock:
            observers = list(self._observers)
        for obs in observers:
            try:
                obs(event)
            except Exception:
                log.exception("Observer failed on %s", event.name)
        return event

    # ------------------------
    # Guards
    # ------------------------
    def _reject(self, exc: ElectionError) -> None:
        ctx = exc.ctx
        log.warning(
            "Rejected %s: %s (%s)",
            ctx.action if ctx else "call",
            exc.code,
            ctx.detail if ctx and ctx.detail else exc,
        )
        raise exc

    def _require_admin(self, caller: str, action: str) -> None:
        if caller != self.admin_id:
            self._reject(
                Unauthorized(
                    "Caller is not the administrator.",
                    ErrorContext(action=action, reason="not_admin", detail=f"caller={caller}"),
                )
            )

    def _require_voter(self, caller: str, action: str) -> Voter:
        voter = self._voters.get(caller)
        if voter is None or not voter.is_registered:
            self._reject(
                Unauthorized(
                    "You're not a voter.",
                    ErrorContext(action=action, reason="not_registered", detail=f"caller={caller}"),
                )
            )
        return voter

    def _require_status(self, required: WorkflowStatus, action: str) -> None:
        if self._status != required:
            self._reject(
                InvalidPhase(
                    f"'{action}' requires {required.label}, election is in {self._status.label}.",
                    ErrorContext(
                        action=action,
                        reason="wrong_phase",
                        detail=f"required={required.label} current={self._status.label}",
                    ),
                )
            )

    def _lookup_proposal(self, proposal_id: Any, action: str) -> Proposal:
        # bool hashes like int; True must not resolve to proposal 1
        prop = None
        if isinstance(proposal_id, int) and not isinstance(proposal_id, bool):
            prop = self._proposals.get(proposal_id)
        if prop is None:
            self._reject(
                NotFound(
                    f"Proposal {proposal_id!r} not found.",
                    ErrorContext(action=action, reason="unknown_proposal", detail=f"id={proposal_id!r}"),
                )
            )
        return prop

    # ------------------------
    # Reads
    # ------------------------
    @property
    def status(self) -> WorkflowStatus:
        return self._status

    def get_voter(self, identity: str) -> Voter:
        """Unknown identities read as an unregistered voter."""
        return self._voters.get(identity, _UNREGISTERED)

    def get_proposal(self, proposal_id: int) -> Proposal:
        with self._lock:
            return self._lookup_proposal(proposal_id, "get_proposal")

    def list_proposals(self) -> List[Proposal]:
        with self._lock:
            return [self._proposals[pid] for pid in range(self._next_proposal_id)]

    def get_winner(self) -> Proposal:
        with self._lock:
            if self._status != WorkflowStatus.VOTES_TALLIED:
                raise InvalidPhase(
                    "Votes have not been tallied yet.",
                    ErrorContext(action="get_winner", reason="not_tallied", detail=self._status.label),
                )
            if self._winner_id is None:
                raise NotFound(
                    "Election has no proposals.",
                    ErrorContext(action="get_winner", reason="no_proposals"),
                )
            return self._proposals[self._winner_id]

    def summary(self) -> Dict[str, Any]:
        with self._lock:
            following = next_status(self._status)
            return {
                "status": int(self._status),
                "status_label": self._status.label,
                "next_status": int(following) if following is not None else None,
                "admin_id": self.admin_id,
                "voters": sum(1 for v in self._voters.values() if v.is_registered),
                "voted": sum(1 for v in self._voters.values() if v.has_voted),
                "proposals": len(self._proposals),
                "total_votes": sum(p.vote_count for p in self._proposals.values()),
            }

    # ------------------------
    # Voter registry
    # ------------------------
    def add_voter(self, caller: str, identity: str) -> VoterRegistered:
        with self._lock:
            self._require_admin(caller, "add_voter")
            self._require_status(WorkflowStatus.REGISTERING_VOTERS, "add_voter")

            try:
                voter_id = _check_identity(identity, "add_voter", "Voter")
            except InvalidArgument as e:
                self._reject(e)
            if self.get_voter(voter_id).is_registered:
                self._reject(
                    AlreadyRegistered(
                        "Already registered.",
                        ErrorContext(action="add_voter", reason="duplicate", detail=f"voter={voter_id}"),
                    )
                )

            self._voters[voter_id] = Voter(is_registered=True)
            log.info("Voter registered: %s", voter_id)
            event = self._record(VoterRegistered(voter_address=voter_id))
        return self._notify(event)

    # ------------------------
    # Proposal registry
    # ------------------------
    def add_proposal(self, caller: str, description: str) -> ProposalRegistered:
        with self._lock:
            self._require_voter(caller, "add_proposal")
            self._require_status(WorkflowStatus.PROPOSALS_REGISTRATION_STARTED, "add_proposal")

            if not description or not str(description).strip():
                self._reject(
                    InvalidArgument(
                        "Proposal description must not be empty.",
                        ErrorContext(action="add_proposal", reason="empty_description"),
                    )
                )

            pid = self._next_proposal_id
            self._proposals[pid] = Proposal(id=pid, description=description)
            self._next_proposal_id += 1
            log.info("Proposal %s registered by %s", pid, caller)
            event = self._record(ProposalRegistered(proposal_id=pid))
        return self._notify(event)

    # ------------------------
    # Voting
    # ------------------------
    def vote(self, caller: str, proposal_id: int) -> Voted:
        with self._lock:
            voter = self._require_voter(caller, "vote")
            if voter.has_voted:
                self._reject(
                    AlreadyVoted(
                        "Already voted.",
                        ErrorContext(
                            action="vote",
                            reason="already_voted",
                            detail=f"voter={caller} voted_for={voter.voted_proposal_id}",
                        ),
                    )
                )
            self._require_status(WorkflowStatus.VOTING_SESSION_STARTED, "vote")
            prop = self._lookup_proposal(proposal_id, "vote")

            self._voters[caller] = replace(voter, has_voted=True, voted_proposal_id=prop.id)
            self._proposals[prop.id] = replace(prop, vote_count=prop.vote_count + 1)
            log.info("Vote from %s for proposal %s", caller, prop.id)
            event = self._record(Voted(voter=caller, proposal_id=prop.id))
        return self._notify(event)

    # ------------------------
    # Workflow transitions
    # ------------------------
    def _advance(self, caller: str, target: WorkflowStatus, action: str) -> WorkflowStatusChange:
        # caller holds the lock
        self._require_admin(caller, action)
        self._require_status(predecessor_of(target), action)

        previous = self._status
        self._status = target
        log.info("Workflow status %s -> %s", previous.label, target.label)
        return self._record(WorkflowStatusChange(previous_status=previous, new_status=target))

    def _transition(self, caller: str, target: WorkflowStatus, action: str) -> WorkflowStatusChange:
        with self._lock:
            event = self._advance(caller, target, action)
        return self._notify(event)

    def start_proposal_registration(self, caller: str) -> WorkflowStatusChange:
        return self._transition(caller, WorkflowStatus.PROPOSALS_REGISTRATION_STARTED, "start_proposal_registration")

    def end_proposal_registration(self, caller: str) -> WorkflowStatusChange:
        return self._transition(caller, WorkflowStatus.PROPOSALS_REGISTRATION_ENDED, "end_proposal_registration")

    def start_voting_session(self, caller: str) -> WorkflowStatusChange:
        return self._transition(caller, WorkflowStatus.VOTING_SESSION_STARTED, "start_voting_session")

    def end_voting_session(self, caller: str) -> WorkflowStatusChange:
        return self._transition(caller, WorkflowStatus.VOTING_SESSION_ENDED, "end_voting_session")

    def tally_votes(self, caller: str) -> WorkflowStatusChange:
        with self._lock:
            self._require_admin(caller, "tally_votes")
            self._require_status(WorkflowStatus.VOTING_SESSION_ENDED, "tally_votes")

            winner = compute_winner(self.list_proposals())
            self._winner_id = winner.id if winner is not None else None
            if winner is not None:
                log.info("Tally complete: proposal %s wins with %s votes", winner.id, winner.vote_count)
            else:
                log.info("Tally complete: no proposals registered")
            event = self._advance(caller, WorkflowStatus.VOTES_TALLIED, "tally_votes")
        return self._notify(event)
