"""
The deadline-gated ledger campaign.

A campaign is a single UTxO (the campaign thread) that holds the campaign NFT and carries
the full campaign state as inline datum: an immutable configuration and a mutable ledger of
participants. Every action spends the thread and recreates it at the same address with the
next state. Funding campaigns and elections share the helpers of this module.
"""
from onchain_campaigns.onchain.util import *


@dataclass
class CampaignTransition(PlutusData):
    """
    The spent and the continuing output of a campaign thread
    """

    CONSTR_ID = 0
    previous_state_input: TxOut
    next_state_output: TxOut


def resolve_campaign_transition(
    campaign_nft: Token,
    state_input_index: int,
    state_output_index: int,
    context: ScriptContext,
) -> CampaignTransition:
    """
    Resolve the campaign thread that is spent and its continuation.
    Ensures that only one thread is spent and continued and that the campaign NFT stays in the thread.
    """
    tx_info = context.tx_info
    purpose = get_spending_purpose(context)
    previous_state_input = resolve_linear_input(tx_info, state_input_index, purpose)
    assert token_present_in_output(
        campaign_nft, previous_state_input
    ), "Campaign NFT is not present in the campaign input"
    next_state_output = resolve_linear_output(
        previous_state_input, tx_info, state_output_index
    )
    assert token_present_in_output(
        campaign_nft, next_state_output
    ), "Campaign NFT missing from the continuing output"
    return CampaignTransition(previous_state_input, next_state_output)


def check_signed_by(address: Address, tx_info: TxInfo, message: str) -> None:
    assert user_signed_tx(address, tx_info), message


def check_owner(
    owner: Address, caller: Address, tx_info: TxInfo, message: str
) -> None:
    """
    Capability check for owner-only actions
    """
    assert caller == owner, message
    check_signed_by(caller, tx_info, message)


def fund_token_change(transition: CampaignTransition, fund_token: Token) -> int:
    return amount_of_token_in_output(
        fund_token, transition.next_state_output
    ) - amount_of_token_in_output(fund_token, transition.previous_state_input)


def check_value_change(
    transition: CampaignTransition, fund_token: Token, delta: int
) -> None:
    """
    Check that the custodied amount of the fund token changes by exactly delta
    and that no other asset is removed from the campaign thread.
    """
    assert (
        fund_token_change(transition, fund_token) == delta
    ), "Custodied funds changed by an incorrect amount"
    desired_value = add_value(
        transition.previous_state_input.value,
        {fund_token.policy_id: {fund_token.token_name: delta}},
    )
    check_greater_or_equal_value(transition.next_state_output.value, desired_value)


def check_preserves_value(transition: CampaignTransition) -> None:
    """
    Check that nothing is removed from the campaign thread
    """
    check_greater_or_equal_value(
        transition.next_state_output.value, transition.previous_state_input.value
    )


def check_payout(
    tx_info: TxInfo, payout_index: int, receiver: Address, token: Token, amount: int
) -> None:
    """
    Check that at least amount of the token is sent to the receiver
    """
    payout_output = tx_info.outputs[payout_index]
    assert payout_output.address == receiver, "Payout address is incorrect"
    assert (
        amount_of_token_in_output(token, payout_output) >= amount
    ), "Payout amount is too low"
