import datetime

import fire

from onchain_campaigns.onchain import one_shot_nft
from onchain_campaigns.onchain.funding import funding_nft, funding
from onchain_campaigns.utils.network import show_tx, context
from opshin.prelude import Token, FalseData
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
    token_from_string,
    asset_from_token,
    value_from_token,
    sorted_utxos,
    current_posix_time,
    validity_before,
    LOVELACE,
)
from ...utils import get_signing_info, network
from ...utils.contracts import get_contract, get_ref_utxo, module_name
from ...utils.to_script_context import to_address, to_tx_out_ref


def main(
    wallet: str = "creator",
    fund_token: str = "lovelace",
    target: int = 1000_000_000,
    duration_minutes: int = 60 * 24 * 7,
    min_fund: int = 10_000_000,
    max_deposit_per_donor: int = 500_000_000,
    max_target: int = 2000_000_000,
    reserve: int = 5_000_000,
):
    fund_token = token_from_string(fund_token)
    deadline = current_posix_time() + int(
        datetime.timedelta(minutes=duration_minutes).total_seconds() * 1000
    )
    # Load script info
    (
        funding_nft_script,
        funding_nft_policy_id,
        _,
    ) = get_contract(module_name(funding_nft), True)
    funding_nft_ref_utxo = get_ref_utxo(funding_nft_script, context)
    (_, _, funding_address) = get_contract(module_name(funding), True)

    # Get payment address
    payment_vkey, payment_skey, payment_address = get_signing_info(
        wallet, network=network
    )

    # Select UTxO to define the campaign thread ID
    payment_utxos = sorted_utxos(context.utxos(payment_address))
    unique_utxo = payment_utxos[0]

    campaign_nft_name = funding_nft.funding_nft_name(to_tx_out_ref(unique_utxo.input))
    campaign_nft = Token(
        policy_id=funding_nft_policy_id.payload,
        token_name=campaign_nft_name,
    )

    # Make the datum of the campaign
    funding_state = funding.FundingState(
        params=funding.FundingParams(
            owner=to_address(payment_address),
            fund_token=fund_token,
            target=target,
            deadline=deadline,
            min_fund=min_fund,
            max_target=max_target,
            reserve=reserve,
            campaign_nft=campaign_nft,
        ),
        max_deposit_per_donor=max_deposit_per_donor,
        deposits=[],
        owner_claimed=FalseData(),
    )

    # generate redeemer for the campaign nft
    funding_nft_redeemer = Redeemer(
        one_shot_nft.CreateCampaign(
            unique_input_index=payment_utxos.index(unique_utxo),
            state_output_index=0,
        )
    )

    # the campaign starts with exactly the reserve of the fund token
    campaign_value = Value(multi_asset=asset_from_token(campaign_nft, 1))
    if fund_token == LOVELACE:
        campaign_value.coin = reserve
    else:
        campaign_value = campaign_value + value_from_token(fund_token, reserve)
        campaign_value.coin = 5_000_000

    # Build the transaction
    builder = TransactionBuilder(context)
    builder.auxiliary_data = AuxiliaryData(
        data=AlonzoMetadata(
            metadata=Metadata({674: {"msg": ["Create Funding Campaign"]}})
        )
    )
    for u in payment_utxos:
        builder.add_input(u)
    builder.add_minting_script(
        funding_nft_ref_utxo or funding_nft_script,
        funding_nft_redeemer,
    )
    builder.add_output(
        TransactionOutput(
            address=funding_address,
            amount=campaign_value,
            datum=funding_state,
        )
    )
    builder.mint = asset_from_token(campaign_nft, 1)
    builder.validity_start, builder.ttl = validity_before(deadline)

    # Sign the transaction
    signed_tx = builder.build_and_sign(
        signing_keys=[payment_skey],
        change_address=payment_address,
    )

    # Submit the transaction
    context.submit_tx(signed_tx)

    print(f"Created funding campaign with campaign_nft_name: {campaign_nft_name.hex()}")

    show_tx(signed_tx)
    return signed_tx, campaign_nft_name.hex()


if __name__ == "__main__":
    fire.Fire(main)
