from copy import copy

from hypothesis import given
from hypothesis import strategies as st

from context_util import *
from onchain_campaigns.onchain.election.election_util import *

START = 1_700_000_000_000
END = START + 3_600_000
ELECTORS = [pubkey_address(bytes([i]) * 28) for i in range(1, 6)]


def make_state(census, candidacies) -> ElectionState:
    return ElectionState(
        ElectionParams(
            ELECTORS[0], START, END, Token(CAMPAIGN_POLICY_ID, b"election")
        ),
        census,
        [],
        [Candidacy(name, 0) for name in candidacies],
    )


@given(st.lists(st.integers(0, 10)), st.integers())
def test_add_vote_to_index(votes: list, index):
    candidacies = [Candidacy(bytes([i]), v) for i, v in enumerate(votes)]
    try:
        assert 0 <= index < len(votes)
        exp_votes = copy(votes)
        exp_votes[index] += 1
    except AssertionError:
        exp_votes = None
    try:
        res_votes = [c.votes for c in add_vote_to_index(candidacies, index)]
    except AssertionError:
        res_votes = None
    assert res_votes == exp_votes


@given(st.lists(st.integers(0, len(ELECTORS) - 1), unique=True), st.data())
def test_votes_are_counted_once(census_indices, data):
    census = [ELECTORS[i] for i in census_indices]
    state = make_state(census, [b"Alt", b"Baix"])
    total = 0
    for voter in data.draw(st.permutations(census)):
        index = data.draw(st.integers(0, 1))
        state = construct_voted_state(state, voter, index)
        total += 1
        assert not voter in state.census
        assert voter in state.voters
        try:
            construct_voted_state(state, voter, index)
            assert False
        except AssertionError as e:
            assert "Elector is not in the census" in str(e)
    assert sum([c.votes for c in state.candidacies]) == total == len(census)
    assert state.census == []


def test_census_operations():
    census = add_elector([], ELECTORS[1])
    census = add_elector(census, ELECTORS[2])
    assert census == [ELECTORS[1], ELECTORS[2]]
    try:
        add_elector(census, ELECTORS[1])
        assert False
    except AssertionError as e:
        assert "Elector is already registered" in str(e)
    assert remove_elector(census, ELECTORS[1]) == [ELECTORS[2]]
    try:
        remove_elector(census, ELECTORS[3])
        assert False
    except AssertionError as e:
        assert "Elector is not in the census" in str(e)


def test_add_candidacy():
    candidacies = add_candidacy([], b"Alt")
    candidacies = add_candidacy(candidacies, b"Baix")
    assert candidacies == [Candidacy(b"Alt", 0), Candidacy(b"Baix", 0)]
    try:
        add_candidacy(candidacies, b"Alt")
        assert False
    except AssertionError as e:
        assert "Candidacy is already registered" in str(e)


@given(st.integers(-10_000, END - START + 10_000))
def test_election_status(offset):
    params = make_state([], []).params
    res = election_status(params, make_point_range(START + offset))
    if offset < 0:
        assert isinstance(res, NotStarted)
    elif START + offset > END:
        assert isinstance(res, Closed)
    else:
        assert isinstance(res, Voting)


def test_voting_period_boundaries():
    params = make_state([], []).params
    assert voting_period_open(params, make_point_range(START))
    assert voting_period_open(params, make_point_range(END))
    assert voting_period_open(params, make_range(START, END))
    assert not voting_period_open(params, make_range(START - 1, END))
    assert not voting_period_open(params, make_range(START, END + 1))
    assert not voting_period_started(params, make_range(START - 1, START + 10))
    assert voting_period_ended(params, make_range(END - 10, END + 1))
    assert not voting_period_ended(params, make_range(END - 10, END))
    # a range straddling the start already reports the voting period
    assert isinstance(
        election_status(params, make_range(START - 1, START + 1)), Voting
    )


def test_validate_election_params():
    params = make_state([], []).params
    validate_election_params(params, make_range(START - 1000, START - 1))
    try:
        validate_election_params(params, make_range(START - 1000, START))
        assert False
    except AssertionError as e:
        assert "Start time can't be in the past" in str(e)
    try:
        validate_election_params(
            ElectionParams(params.owner, START, START, params.campaign_nft),
            make_range(START - 1000, START - 1),
        )
        assert False
    except AssertionError as e:
        assert "End time must be after start time" in str(e)
