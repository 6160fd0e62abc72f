"""
The funding campaign NFT contract.
This contract creates a single one-shot NFT with a unique token name.
Its presence uniquely identifies a funding campaign thread.

The policy is parameterized by the address of the funding contract and validates the
configuration of the campaign exactly once, upon creation. A campaign with invalid
parameters can not be created.

Outputs of this contract may go to:
- funding/funding (1, the created campaign)

It is not allowed to mint several campaign NFTs in a single transaction.
"""
from onchain_campaigns.onchain.one_shot_nft import *
from onchain_campaigns.onchain.funding.funding_util import *

funding_nft_name = one_shot_nft_name


def validator(
    funding_address: Address, redeemer: CreateCampaign, context: ScriptContext
) -> None:
    tx_info = context.tx_info
    purpose = get_minting_purpose(context)
    state_output = check_one_shot_mint(funding_address, redeemer, context)
    state: FundingState = resolve_datum_unsafe(state_output, tx_info)

    nft_name = funding_nft_name(tx_info.inputs[redeemer.unique_input_index].out_ref)
    assert state.params.campaign_nft == Token(
        purpose.policy_id, nft_name
    ), "Campaign NFT in the parameters does not match the minted NFT"
    validate_funding_params(
        state.params, state.max_deposit_per_donor, tx_info.valid_range
    )
    assert len(state.deposits) == 0, "Campaign must start without deposits"
    assert not owner_has_claimed(state), "Campaign must start unclaimed"
    assert (
        current_funds(state, state_output) == 0
    ), "Campaign must start with exactly the reserve"
