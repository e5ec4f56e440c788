# tests/test_workflow.py
from __future__ import annotations

import pytest

from ballot_node.ballot_runtime.election import Election
from ballot_node.ballot_runtime.errors import InvalidPhase, Unauthorized
from ballot_node.ballot_runtime.events import WorkflowStatusChange
from ballot_node.ballot_runtime.workflow import (
    WorkflowStatus,
    next_status,
    predecessor_of,
)

from conftest import ADMIN, NOT_VOTER, VOTER1

# transition method name -> status it moves the election into
TRANSITIONS = [
    ("start_proposal_registration", WorkflowStatus.PROPOSALS_REGISTRATION_STARTED),
    ("end_proposal_registration", WorkflowStatus.PROPOSALS_REGISTRATION_ENDED),
    ("start_voting_session", WorkflowStatus.VOTING_SESSION_STARTED),
    ("end_voting_session", WorkflowStatus.VOTING_SESSION_ENDED),
    ("tally_votes", WorkflowStatus.VOTES_TALLIED),
]


def _election_at(status: WorkflowStatus) -> Election:
    el = Election(admin_id=ADMIN)
    for method, _target in TRANSITIONS:
        if el.status == status:
            break
        getattr(el, method)(ADMIN)
    assert el.status == status
    return el


def test_initial_status_is_registering_voters(election):
    assert election.status == WorkflowStatus.REGISTERING_VOTERS
    assert election.status.label == "RegisteringVoters"


def test_status_values_are_ordered():
    assert [int(s) for s in WorkflowStatus] == [0, 1, 2, 3, 4, 5]
    assert next_status(WorkflowStatus.VOTES_TALLIED) is None
    assert predecessor_of(WorkflowStatus.REGISTERING_VOTERS) is None
    assert next_status(WorkflowStatus.VOTING_SESSION_STARTED) == WorkflowStatus.VOTING_SESSION_ENDED


def test_full_forward_walk_emits_status_changes(election):
    previous = election.status
    for method, target in TRANSITIONS:
        event = getattr(election, method)(ADMIN)
        assert isinstance(event, WorkflowStatusChange)
        assert event.previous_status == previous
        assert event.new_status == target
        assert election.status == target
        previous = target

    assert [e.name for e in election.events] == ["WorkflowStatusChange"] * len(TRANSITIONS)


@pytest.mark.parametrize("method,target", TRANSITIONS)
@pytest.mark.parametrize("caller", [VOTER1, NOT_VOTER, ""])
def test_transitions_reject_non_admin(method, target, caller):
    el = _election_at(predecessor_of(target))

    before = el.status
    with pytest.raises(Unauthorized):
        getattr(el, method)(caller)
    assert el.status == before


@pytest.mark.parametrize("method,target", TRANSITIONS)
@pytest.mark.parametrize("current", list(WorkflowStatus))
def test_transitions_only_from_exact_predecessor(method, target, current):
    el = _election_at(current)
    if current == predecessor_of(target):
        getattr(el, method)(ADMIN)
        assert int(el.status) == int(current) + 1
        return

    events_before = len(el.events)
    with pytest.raises(InvalidPhase):
        getattr(el, method)(ADMIN)
    assert el.status == current
    assert len(el.events) == events_before


def test_terminal_status_has_no_further_transitions():
    el = _election_at(WorkflowStatus.VOTES_TALLIED)
    for method, _ in TRANSITIONS:
        with pytest.raises(InvalidPhase):
            getattr(el, method)(ADMIN)
    assert el.status == WorkflowStatus.VOTES_TALLIED


def test_unauthorized_is_checked_before_phase():
    el = _election_at(WorkflowStatus.VOTES_TALLIED)
    with pytest.raises(Unauthorized):
        el.start_proposal_registration(NOT_VOTER)


def test_status_change_event_to_dict(election):
    event = election.start_proposal_registration(ADMIN)
    assert event.to_dict() == {
        "event": "WorkflowStatusChange",
        "previous_status": 0,
        "new_status": 1,
    }


def test_runtime_package_exposes_names_lazily():
    from ballot_node import ballot_runtime

    assert ballot_runtime.Election is Election
    assert ballot_runtime.WorkflowStatus is WorkflowStatus
    assert ballot_runtime.workflow.TERMINAL_STATUS == WorkflowStatus.VOTES_TALLIED
    with pytest.raises(AttributeError):
        ballot_runtime.does_not_exist
