from __future__ import annotations

"""
Election REST API.

Routes
------
- GET  /election/status
- GET  /election/summary
- GET  /election/events
- POST /election/voters                          (administrator)
- GET  /election/voters/{voter_id}
- POST /election/proposal-registration/start     (administrator)
- POST /election/proposal-registration/end       (administrator)
- POST /election/proposals                       (registered voter)
- GET  /election/proposals
- GET  /election/proposals/{proposal_id}
- POST /election/voting/start                    (administrator)
- POST /election/voting/end                      (administrator)
- POST /election/votes                           (registered voter)
- POST /election/tally                           (administrator)
- GET  /election/winner

Mutating routes take the caller identity from the configured header
(see security/current_user.py).
"""

from typing import Any, Callable, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from ballot_node.ballot_runtime.election import Election
from ballot_node.ballot_runtime.errors import (
    AlreadyRegistered,
    AlreadyVoted,
    ElectionError,
    InvalidArgument,
    InvalidPhase,
    NotFound,
    Unauthorized,
)
from ballot_node.security.current_user import require_caller_id

router = APIRouter(prefix="/election", tags=["election"])

_STATUS_BY_ERROR = {
    Unauthorized: 403,
    InvalidPhase: 409,
    AlreadyVoted: 409,
    AlreadyRegistered: 409,
    InvalidArgument: 400,
    NotFound: 404,
}


class VoterAdd(BaseModel):
    voter_id: str


class ProposalAdd(BaseModel):
    description: str


class VoteCast(BaseModel):
    proposal_id: int


def get_election(request: Request) -> Election:
    return request.app.state.election


def _http_error(exc: ElectionError) -> HTTPException:
    return HTTPException(status_code=_STATUS_BY_ERROR.get(type(exc), 400), detail=exc.code)


def _run(fn: Callable[..., Any], *args: Any) -> Dict[str, Any]:
    try:
        event = fn(*args)
    except ElectionError as e:
        raise _http_error(e) from e
    return {"ok": True, "event": event.to_dict()}


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


@router.get("/status")
def get_status(election: Election = Depends(get_election)):
    st = election.status
    return {"ok": True, "status": int(st), "label": st.label}


@router.get("/summary")
def get_summary(election: Election = Depends(get_election)):
    return {"ok": True, "summary": election.summary()}


@router.get("/events")
def list_events(election: Election = Depends(get_election)):
    return {"ok": True, "events": [e.to_dict() for e in list(election.events)]}


@router.get("/voters/{voter_id}")
def read_voter(voter_id: str, election: Election = Depends(get_election)):
    return {"ok": True, "voter_id": voter_id, "voter": election.get_voter(voter_id).to_dict()}


@router.get("/proposals")
def list_proposals(election: Election = Depends(get_election)):
    return {"ok": True, "proposals": [p.to_dict() for p in election.list_proposals()]}


@router.get("/proposals/{proposal_id}")
def read_proposal(proposal_id: int, election: Election = Depends(get_election)):
    try:
        prop = election.get_proposal(proposal_id)
    except ElectionError as e:
        raise _http_error(e) from e
    return {"ok": True, "proposal": prop.to_dict()}


@router.get("/winner")
def read_winner(election: Election = Depends(get_election)):
    try:
        winner = election.get_winner()
    except ElectionError as e:
        raise _http_error(e) from e
    return {"ok": True, "winner": winner.to_dict()}


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


@router.post("/voters")
def add_voter(
    payload: VoterAdd,
    caller_id: str = Depends(require_caller_id),
    election: Election = Depends(get_election),
):
    return _run(election.add_voter, caller_id, payload.voter_id)


@router.post("/proposal-registration/start")
def start_proposal_registration(
    caller_id: str = Depends(require_caller_id),
    election: Election = Depends(get_election),
):
    return _run(election.start_proposal_registration, caller_id)


@router.post("/proposals")
def add_proposal(
    payload: ProposalAdd,
    caller_id: str = Depends(require_caller_id),
    election: Election = Depends(get_election),
):
    return _run(election.add_proposal, caller_id, payload.description)


@router.post("/proposal-registration/end")
def end_proposal_registration(
    caller_id: str = Depends(require_caller_id),
    election: Election = Depends(get_election),
):
    return _run(election.end_proposal_registration, caller_id)


@router.post("/voting/start")
def start_voting_session(
    caller_id: str = Depends(require_caller_id),
    election: Election = Depends(get_election),
):
    return _run(election.start_voting_session, caller_id)


@router.post("/votes")
def cast_vote(
    payload: VoteCast,
    caller_id: str = Depends(require_caller_id),
    election: Election = Depends(get_election),
):
    return _run(election.vote, caller_id, payload.proposal_id)


@router.post("/voting/end")
def end_voting_session(
    caller_id: str = Depends(require_caller_id),
    election: Election = Depends(get_election),
):
    return _run(election.end_voting_session, caller_id)


@router.post("/tally")
def tally_votes(
    caller_id: str = Depends(require_caller_id),
    election: Election = Depends(get_election),
):
    return _run(election.tally_votes, caller_id)
