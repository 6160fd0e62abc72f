from hypothesis import given
from hypothesis import strategies as st

from context_util import *
from onchain_campaigns.onchain.funding.funding_util import *

DEADLINE = 1_700_000_000_000
DONORS = [pubkey_address(bytes([i]) * 28) for i in range(1, 5)]


def make_state(max_deposit_per_donor: int = 0) -> FundingState:
    return FundingState(
        FundingParams(
            owner=DONORS[0],
            fund_token=LOVELACE,
            target=1000,
            deadline=DEADLINE,
            min_fund=10,
            max_target=2000,
            reserve=0,
            campaign_nft=Token(CAMPAIGN_POLICY_ID, b"campaign"),
        ),
        max_deposit_per_donor,
        [],
        FalseData(),
    )


contributions = st.lists(
    st.tuples(st.integers(0, len(DONORS) - 1), st.integers(1, 1000))
)


@given(contributions)
def test_deposits_sum_to_balance(contribs):
    state = make_state()
    balance = 0
    for donor_index, amount in contribs:
        state = construct_funded_state(state, DONORS[donor_index], amount)
        balance += amount
        assert total_deposits(state.deposits) == balance
    # every donor has exactly one entry
    assert not has_duplicates([d.donor for d in state.deposits])


@given(contributions, st.integers(0, len(DONORS) - 1))
def test_refund_removes_exactly_the_deposit(contribs, refunded_index):
    state = make_state()
    for donor_index, amount in contribs:
        state = construct_funded_state(state, DONORS[donor_index], amount)
    refunded = DONORS[refunded_index]
    deposit = deposit_of(state.deposits, refunded)
    next_state = construct_refunded_state(state, refunded)
    assert total_deposits(next_state.deposits) == total_deposits(state.deposits) - deposit
    assert deposit_of(next_state.deposits, refunded) == 0
    # refunding again changes nothing
    assert construct_refunded_state(next_state, refunded) == next_state


@given(contributions)
def test_claim_clears_deposits(contribs):
    state = make_state()
    for donor_index, amount in contribs:
        state = construct_funded_state(state, DONORS[donor_index], amount)
    claimed = construct_claimed_state(state)
    assert claimed.deposits == []
    assert owner_has_claimed(claimed)
    assert claimed.params == state.params


@given(st.integers(0, 3000), st.integers(-10_000, 10_000))
def test_funding_status(funds, offset):
    state = make_state()
    res = funding_status(state, funds, make_point_range(DEADLINE + offset))
    if offset <= 0:
        assert isinstance(res, FundingPeriod)
    elif funds >= 1000:
        assert isinstance(res, Successful)
    else:
        assert isinstance(res, Failed)


def test_claimed_campaign_stays_successful():
    state = construct_claimed_state(make_state())
    assert isinstance(
        funding_status(state, 0, make_point_range(DEADLINE + 1)), Successful
    )
    assert isinstance(
        funding_status(state, 0, make_point_range(DEADLINE)), FundingPeriod
    )


def test_set_deposit_keeps_order():
    a, b, c = DONORS[1:4]
    deposits = set_deposit([], a, 10)
    deposits = set_deposit(deposits, b, 20)
    deposits = set_deposit(deposits, a, 30)
    deposits = set_deposit(deposits, c, 40)
    assert deposits == [Deposit(c, 40), Deposit(b, 20), Deposit(a, 30)]
    assert clear_deposit(deposits, b) == [Deposit(c, 40), Deposit(a, 30)]
    assert deposit_of(deposits, DONORS[0]) == 0


def test_validate_funding_params():
    valid_range = make_range(DEADLINE - 10_000, DEADLINE - 1)
    state = make_state(max_deposit_per_donor=500)
    validate_funding_params(state.params, 500, valid_range)
    validate_funding_params(state.params, 10, valid_range)
    try:
        validate_funding_params(state.params, 9, valid_range)
        assert False
    except AssertionError as e:
        assert "Max deposit per donor" in str(e)
    try:
        validate_funding_params(
            state.params, 500, make_range(DEADLINE - 10_000, DEADLINE)
        )
        assert False
    except AssertionError as e:
        assert "Deadline can't be in the past" in str(e)
