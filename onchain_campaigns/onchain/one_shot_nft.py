"""
Shared logic of the one-shot campaign NFTs.

A one-shot NFT is named after a UTxO that has to be spent in the minting transaction.
Since a UTxO can be spent only once, at most one token with that name can ever exist
and its presence uniquely identifies a campaign thread.
"""
from onchain_campaigns.onchain.util import *


@dataclass
class CreateCampaign(PlutusData):
    """
    Redeemer for the campaign NFT policies to create a new campaign thread.
    """

    CONSTR_ID = 0
    unique_input_index: int
    state_output_index: int


def one_shot_nft_name(unique_utxo: TxOutRef) -> TokenName:
    return sha256(unique_utxo.to_cbor()).digest()


def check_one_shot_mint(
    campaign_address: Address,
    redeemer: CreateCampaign,
    context: ScriptContext,
) -> TxOut:
    """
    Check that exactly one NFT named after the spent unique UTxO is minted and locked in the
    declared output at the campaign address.
    Returns the output holding the new campaign state.
    """
    tx_info = context.tx_info
    purpose = get_minting_purpose(context)

    unique_input = tx_info.inputs[redeemer.unique_input_index]
    nft_name = one_shot_nft_name(unique_input.out_ref)
    check_mint_exactly_one_with_name(tx_info.mint, purpose.policy_id, nft_name)

    state_output = tx_info.outputs[redeemer.state_output_index]
    assert (
        state_output.address == campaign_address
    ), "Campaign NFT must be locked at the campaign address"
    assert (
        amount_of_token_in_output(Token(purpose.policy_id, nft_name), state_output)
        == 1
    ), "Campaign NFT missing from the state output"
    assert only_one_output_to_address(
        campaign_address, tx_info.outputs
    ), "More than one output to the campaign address"
    return state_output
