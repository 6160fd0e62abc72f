"""
The election NFT contract.
This contract creates a single one-shot NFT with a unique token name.
Its presence uniquely identifies an election thread.

The policy is parameterized by the address of the election contract and validates the
voting period and the initial census and candidacies exactly once, upon creation.

Outputs of this contract may go to:
- election/election (1, the created election)

It is not allowed to mint several election NFTs in a single transaction.
"""
from onchain_campaigns.onchain.one_shot_nft import *
from onchain_campaigns.onchain.election.election_util import *

election_nft_name = one_shot_nft_name


def validator(
    election_address: Address, redeemer: CreateCampaign, context: ScriptContext
) -> None:
    tx_info = context.tx_info
    purpose = get_minting_purpose(context)
    state_output = check_one_shot_mint(election_address, redeemer, context)
    state: ElectionState = resolve_datum_unsafe(state_output, tx_info)

    nft_name = election_nft_name(tx_info.inputs[redeemer.unique_input_index].out_ref)
    assert state.params.campaign_nft == Token(
        purpose.policy_id, nft_name
    ), "Campaign NFT in the parameters does not match the minted NFT"
    validate_election_params(state.params, tx_info.valid_range)
    assert len(state.voters) == 0, "Election must start without voters"
    assert not has_duplicates(state.census), "Elector registered twice"
    assert not has_duplicates(
        candidacy_names(state.candidacies)
    ), "Candidacy registered twice"
    assert all(
        [c.votes == 0 for c in state.candidacies]
    ), "Candidacies must start without votes"
