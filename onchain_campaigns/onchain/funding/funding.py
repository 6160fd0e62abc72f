"""
The funding contract.

This contract holds the funds and the ledger of deposits of a crowdfunding campaign.
Donors may fund the campaign until its deadline. Afterwards the campaign is either
successful (the target was reached) and the owner may withdraw all funds, or it failed
and every donor may reclaim exactly their own deposit.

This contract is intended to be have inputs from these contracts:
- funding/funding (1, the previous state)

This contract is intended to have mints with these contracts:
- funding/funding_nft: Mints the campaign NFT upon creation of the campaign

Outputs of this contract may go to:
- funding/funding (1, continuation of the above)
- the owner (payout of a successful campaign)
- a donor (refund of a failed campaign)

Relevant NFTs present at outputs of this contract:
- funding/funding_nft (1, authenticates the campaign thread)

It is not allowed to spend several campaign states in a single transaction.
"""
from onchain_campaigns.onchain.funding.funding_util import *


@dataclass
class Fund(PlutusData):
    """
    Redeemer for the funding contract to contribute funds to the campaign
    """

    CONSTR_ID = 1
    donor: Address
    amount: int
    state_input_index: int
    state_output_index: int


@dataclass
class Claim(PlutusData):
    """
    Redeemer for the funding contract to claim funds after the deadline.
    The owner claims all funds of a successful campaign,
    donors claim their deposit back from a failed campaign.
    """

    CONSTR_ID = 2
    claimant: Address
    state_input_index: int
    state_output_index: int
    payout_index: int


@dataclass
class SetMaxDepositPerDonor(PlutusData):
    """
    Redeemer for the funding contract to change the cap on the cumulative deposit per donor
    """

    CONSTR_ID = 3
    max_deposit_per_donor: int
    state_input_index: int
    state_output_index: int


FundingRedeemer = Union[Fund, Claim, SetMaxDepositPerDonor]


def resolve_linear_output_state(
    next_state_output: TxOut, tx_info: TxInfo
) -> FundingState:
    """
    Resolve the continuing datum of the output that is referenced by the redeemer.
    """
    next_state: FundingState = resolve_datum_unsafe(next_state_output, tx_info)
    return next_state


def check_fund(
    previous_state: FundingState,
    redeemer: Fund,
    transition: CampaignTransition,
    tx_info: TxInfo,
) -> FundingState:
    """
    Check that a contribution is admissible, returns the desired next state
    """
    params = previous_state.params
    check_signed_by(redeemer.donor, tx_info, "Donor did not sign the transaction")
    assert (
        redeemer.amount >= params.min_fund
    ), "Fund doesn't reach the minimum accepted"
    funds = current_funds(previous_state, transition.previous_state_input)
    assert (
        funds + redeemer.amount <= params.max_target
    ), "Fund would exceed the maximum amount"
    assert before_ext(
        tx_info.valid_range, FinitePOSIXTime(params.deadline)
    ), "Cannot fund after deadline"
    wallet_deposit = deposit_of(previous_state.deposits, redeemer.donor) + redeemer.amount
    if previous_state.max_deposit_per_donor > 0:
        assert (
            wallet_deposit <= previous_state.max_deposit_per_donor
        ), "Deposit exceeds maximum allowed"
    check_value_change(transition, params.fund_token, redeemer.amount)
    return construct_funded_state(previous_state, redeemer.donor, redeemer.amount)


def check_claim(
    previous_state: FundingState,
    redeemer: Claim,
    transition: CampaignTransition,
    tx_info: TxInfo,
) -> FundingState:
    """
    Check that a claim pays out exactly what is owed to the claimant, returns the desired next state
    """
    params = previous_state.params
    funds = current_funds(previous_state, transition.previous_state_input)
    status = funding_status(previous_state, funds, tx_info.valid_range)
    if isinstance(status, FundingPeriod):
        assert False, "Cannot claim before deadline"
        next_state = previous_state
    elif isinstance(status, Successful):
        check_owner(
            params.owner,
            redeemer.claimant,
            tx_info,
            "Only owner can claim successful funding",
        )
        if owner_has_claimed(previous_state):
            check_value_change(transition, params.fund_token, 0)
            next_state = previous_state
        else:
            check_payout(
                tx_info, redeemer.payout_index, params.owner, params.fund_token, funds
            )
            check_value_change(transition, params.fund_token, -funds)
            next_state = construct_claimed_state(previous_state)
    elif isinstance(status, Failed):
        check_signed_by(
            redeemer.claimant, tx_info, "Claimant did not sign the transaction"
        )
        deposit = deposit_of(previous_state.deposits, redeemer.claimant)
        if deposit > 0:
            check_payout(
                tx_info,
                redeemer.payout_index,
                redeemer.claimant,
                params.fund_token,
                deposit,
            )
            check_value_change(transition, params.fund_token, -deposit)
            next_state = construct_refunded_state(previous_state, redeemer.claimant)
        else:
            check_value_change(transition, params.fund_token, 0)
            next_state = previous_state
    else:
        assert False, "Invalid status"
        next_state = previous_state
    return next_state


def check_set_max_deposit(
    previous_state: FundingState,
    redeemer: SetMaxDepositPerDonor,
    transition: CampaignTransition,
    tx_info: TxInfo,
) -> FundingState:
    params = previous_state.params
    assert user_signed_tx(
        params.owner, tx_info
    ), "Only owner can change the maximum deposit"
    funds = current_funds(previous_state, transition.previous_state_input)
    assert isinstance(
        funding_status(previous_state, funds, tx_info.valid_range), FundingPeriod
    ), "Campaign has ended"
    assert (
        redeemer.max_deposit_per_donor == 0
        or redeemer.max_deposit_per_donor >= params.min_fund
    ), "Max deposit per donor must be 0 or at least min fund"
    check_value_change(transition, params.fund_token, 0)
    return construct_max_deposit_state(previous_state, redeemer.max_deposit_per_donor)


def validator(
    state: FundingState, redeemer: FundingRedeemer, context: ScriptContext
) -> None:
    """
    Funding campaign
    Ensures that contributions respect the campaign limits and that funds are only released
    to the owner of a successful campaign or back to the donors of a failed campaign.
    """
    tx_info = context.tx_info
    transition = resolve_campaign_transition(
        state.params.campaign_nft,
        redeemer.state_input_index,
        redeemer.state_output_index,
        context,
    )
    next_state = resolve_linear_output_state(transition.next_state_output, tx_info)

    if isinstance(redeemer, Fund):
        desired_next_state = check_fund(state, redeemer, transition, tx_info)
    elif isinstance(redeemer, Claim):
        desired_next_state = check_claim(state, redeemer, transition, tx_info)
    elif isinstance(redeemer, SetMaxDepositPerDonor):
        desired_next_state = check_set_max_deposit(state, redeemer, transition, tx_info)
    else:
        assert False, "Invalid redeemer"
        desired_next_state = state
    assert next_state == desired_next_state, "New funding state is incorrect"
