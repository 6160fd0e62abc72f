import datetime
from typing import List

import fire

from onchain_campaigns.onchain import one_shot_nft
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
    Value,
)

from ..util import (
    asset_from_token,
    with_min_lovelace,
    sorted_utxos,
    current_posix_time,
    validity_before,
)
from ...utils import get_signing_info, get_address, network
from ...utils.contracts import get_contract, get_ref_utxo, module_name
from ...utils.to_script_context import to_address, to_tx_out_ref


def main(
    wallet: str = "creator",
    starts_in_minutes: int = 60,
    duration_minutes: int = 60 * 24,
    electors: List[str] = (),
    candidacies: List[str] = (),
):
    start_time = current_posix_time() + int(
        datetime.timedelta(minutes=starts_in_minutes).total_seconds() * 1000
    )
    end_time = start_time + int(
        datetime.timedelta(minutes=duration_minutes).total_seconds() * 1000
    )
    # Load script info
    (
        election_nft_script,
        election_nft_policy_id,
        _,
    ) = get_contract(module_name(election_nft), True)
    election_nft_ref_utxo = get_ref_utxo(election_nft_script, context)
    (_, _, election_address) = get_contract(module_name(election), True)

    # Get payment address
    payment_vkey, payment_skey, payment_address = get_signing_info(
        wallet, network=network
    )

    # Select UTxO to define the election thread ID
    payment_utxos = sorted_utxos(context.utxos(payment_address))
    unique_utxo = payment_utxos[0]

    campaign_nft_name = election_nft.election_nft_name(
        to_tx_out_ref(unique_utxo.input)
    )
    campaign_nft = Token(
        policy_id=election_nft_policy_id.payload,
        token_name=campaign_nft_name,
    )

    # Make the datum of the election
    election_state = election.ElectionState(
        params=election.ElectionParams(
            owner=to_address(payment_address),
            start_time=start_time,
            end_time=end_time,
            campaign_nft=campaign_nft,
        ),
        census=[to_address(get_address(e, network=network)) for e in electors],
        voters=[],
        candidacies=[election.Candidacy(c.encode(), 0) for c in candidacies],
    )

    # generate redeemer for the election nft
    election_nft_redeemer = Redeemer(
        one_shot_nft.CreateCampaign(
            unique_input_index=payment_utxos.index(unique_utxo),
            state_output_index=0,
        )
    )

    # Build the transaction
    builder = TransactionBuilder(context)
    builder.auxiliary_data = AuxiliaryData(
        data=AlonzoMetadata(metadata=Metadata({674: {"msg": ["Create Election"]}}))
    )
    for u in payment_utxos:
        builder.add_input(u)
    builder.add_minting_script(
        election_nft_ref_utxo or election_nft_script,
        election_nft_redeemer,
    )
    builder.add_output(
        with_min_lovelace(
            TransactionOutput(
                address=election_address,
                amount=Value(
                    coin=2000000,
                    multi_asset=asset_from_token(campaign_nft, 1),
                ),
                datum=election_state,
            ),
            context,
        )
    )
    builder.mint = asset_from_token(campaign_nft, 1)
    builder.validity_start, builder.ttl = validity_before(start_time)

    # Sign the transaction
    signed_tx = builder.build_and_sign(
        signing_keys=[payment_skey],
        change_address=payment_address,
    )

    # Submit the transaction
    context.submit_tx(signed_tx)

    print(f"Created election with campaign_nft_name: {campaign_nft_name.hex()}")

    show_tx(signed_tx)
    return signed_tx, campaign_nft_name.hex()


if __name__ == "__main__":
    fire.Fire(main)
