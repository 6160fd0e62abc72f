"""
Owner-only set-up of an election: census and candidacies
"""
import fire

from onchain_campaigns.onchain.election import election_nft, election
from onchain_campaigns.utils.network import show_tx, context
from opshin.prelude import Token
from pycardano import (
    TransactionBuilder,
    Redeemer,
    AuxiliaryData,
    AlonzoMetadata,
    Metadata,
    TransactionOutput,
)

from ..util import (
    sorted_utxos,
    find_campaign_utxo,
    with_min_lovelace,
    validity_until,
)
from ...utils import get_signing_info, get_address, network
from ...utils.contracts import get_contract, get_ref_utxo, module_name
from ...utils.to_script_context import to_address


def _administrate(wallet: str, campaign_nft_name: str, make_redeemer, message: str):
    # Load script info
    (_, election_nft_policy_id, _) = get_contract(module_name(election_nft), True)
    (
        election_script,
        _,
        election_address,
    ) = get_contract(module_name(election), True)
    election_script = get_ref_utxo(election_script, context) or election_script
    campaign_nft = Token(
        election_nft_policy_id.payload, bytes.fromhex(campaign_nft_name)
    )

    # Get payment address
    payment_vkey, payment_skey, payment_address = get_signing_info(
        wallet, network=network
    )

    # Select election
    election_utxo, prev_state = find_campaign_utxo(
        election_address, campaign_nft, election.ElectionState
    )
    assert election_utxo, "No election found"

    payment_utxos = context.utxos(payment_address)
    all_inputs = sorted_utxos([election_utxo] + payment_utxos)

    redeemer = make_redeemer(all_inputs.index(election_utxo))
    new_state = election.construct_new_election_state(prev_state, redeemer)

    # Build the transaction
    builder = TransactionBuilder(context)
    builder.auxiliary_data = AuxiliaryData(
        data=AlonzoMetadata(metadata=Metadata({674: {"msg": [message]}}))
    )
    for u in payment_utxos:
        builder.add_input(u)
    builder.add_script_input(election_utxo, election_script, None, Redeemer(redeemer))
    builder.add_output(
        with_min_lovelace(
            TransactionOutput(
                address=election_address,
                amount=election_utxo.output.amount,
                datum=new_state,
            ),
            context,
        )
    )
    builder.required_signers = [payment_vkey.hash()]
    builder.validity_start, builder.ttl = validity_until(prev_state.params.end_time)

    # Sign the transaction
    signed_tx = builder.build_and_sign(
        signing_keys=[payment_skey],
        change_address=payment_address,
    )

    # Submit the transaction
    context.submit_tx(signed_tx)

    show_tx(signed_tx)
    return signed_tx


def add_elector(
    wallet: str = "creator", campaign_nft_name: str = "", elector: str = "voter"
):
    elector_address = to_address(get_address(elector, network=network))
    return _administrate(
        wallet,
        campaign_nft_name,
        lambda index: election.AddElector(elector_address, index, 0),
        "Add Elector",
    )


def remove_elector(
    wallet: str = "creator", campaign_nft_name: str = "", elector: str = "voter"
):
    elector_address = to_address(get_address(elector, network=network))
    return _administrate(
        wallet,
        campaign_nft_name,
        lambda index: election.RemoveElector(elector_address, index, 0),
        "Remove Elector",
    )


def add_candidacy(wallet: str = "creator", campaign_nft_name: str = "", name: str = ""):
    return _administrate(
        wallet,
        campaign_nft_name,
        lambda index: election.AddCandidacy(name.encode(), index, 0),
        "Add Candidacy",
    )


if __name__ == "__main__":
    fire.Fire(
        {
            "add_elector": add_elector,
            "remove_elector": remove_elector,
            "add_candidacy": add_candidacy,
        }
    )
