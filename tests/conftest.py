import pytest

from ballot_node.ballot_runtime.election import Election

ADMIN = "owner"
VOTER1 = "voter1"
VOTER2 = "voter2"
NOT_VOTER = "not_voter"


@pytest.fixture(scope="function")
def election():
    """Fresh election per test, administrator = ADMIN"""
    return Election(admin_id=ADMIN)


@pytest.fixture
def registered(election):
    """Election with VOTER1 and VOTER2 registered, still in RegisteringVoters."""
    election.add_voter(ADMIN, VOTER1)
    election.add_voter(ADMIN, VOTER2)
    return election


@pytest.fixture
def with_proposals(registered):
    """Two proposals (ids 0 and 1), proposal registration ended."""
    registered.start_proposal_registration(ADMIN)
    registered.add_proposal(VOTER1, "Proposal 1")
    registered.add_proposal(VOTER2, "Proposal 2")
    registered.end_proposal_registration(ADMIN)
    return registered


@pytest.fixture
def voting(with_proposals):
    """Voting session open."""
    with_proposals.start_voting_session(ADMIN)
    return with_proposals
