import pytest

from context_util import *
from onchain_campaigns.onchain.funding.funding_nft import *

NOW = 1_700_000_000_000
DEADLINE = NOW + 7 * 24 * 60 * 60 * 1000
FUNDING_ADDRESS = script_address(bytes.fromhex("f0" * 28))
OWNER_PKH = bytes.fromhex("01" * 28)
OWNER = pubkey_address(OWNER_PKH)
UNIQUE_REF = TxOutRef(TxId(WALLET_TX_ID), 3)
NFT_NAME = funding_nft_name(UNIQUE_REF)
CAMPAIGN_NFT = Token(CAMPAIGN_POLICY_ID, NFT_NAME)
RESERVE = 2_000_000


def make_state(**kwargs):
    params = dict(
        owner=OWNER,
        fund_token=LOVELACE,
        target=1000,
        deadline=DEADLINE,
        min_fund=10,
        max_target=2000,
        reserve=RESERVE,
        campaign_nft=CAMPAIGN_NFT,
    )
    params.update(kwargs)
    return FundingState(FundingParams(**params), 500, [], FalseData())


def create(
    state: FundingState,
    lovelace: int = RESERVE,
    mint: Value = None,
    address: Address = FUNDING_ADDRESS,
    valid_range: POSIXTimeRange = make_range(NOW, NOW + 600_000),
):
    wallet_input = TxInInfo(UNIQUE_REF, make_out(OWNER, make_value(100_000_000)))
    minted = {CAMPAIGN_POLICY_ID: {NFT_NAME: 1}}
    output = make_out(address, make_value(lovelace, minted), state)
    tx_info = make_tx_info(
        [wallet_input],
        [output, make_out(OWNER, make_value(50_000_000))],
        valid_range,
        [OWNER_PKH],
        minted if mint is None else mint,
    )
    validator(
        FUNDING_ADDRESS,
        CreateCampaign(0, 0),
        minting_context(tx_info, CAMPAIGN_POLICY_ID),
    )


def test_nft_name_is_unique_per_utxo():
    assert len(NFT_NAME) == 32
    assert funding_nft_name(TxOutRef(TxId(WALLET_TX_ID), 4)) != NFT_NAME
    assert funding_nft_name(TxOutRef(TxId(CAMPAIGN_TX_ID), 3)) != NFT_NAME


def test_create_campaign():
    create(make_state())
    create(make_state(reserve=0), lovelace=0)


def test_create_with_wrong_nft_in_params():
    state = make_state(campaign_nft=Token(CAMPAIGN_POLICY_ID, b"other"))
    with pytest.raises(
        AssertionError,
        match="Campaign NFT in the parameters does not match the minted NFT",
    ):
        create(state)


def test_create_mints_exactly_one():
    with pytest.raises(AssertionError, match="Exactly n token must be minted"):
        create(make_state(), mint={CAMPAIGN_POLICY_ID: {NFT_NAME: 2}})
    with pytest.raises(AssertionError, match="No other token must be minted"):
        create(make_state(), mint={CAMPAIGN_POLICY_ID: {NFT_NAME: 1, b"other": 1}})


def test_create_at_campaign_address():
    with pytest.raises(
        AssertionError, match="Campaign NFT must be locked at the campaign address"
    ):
        create(make_state(), address=OWNER)


def test_create_with_invalid_params():
    with pytest.raises(AssertionError, match="Target must be more than 0"):
        create(make_state(target=0))
    with pytest.raises(
        AssertionError, match="Max target must be greater than or equal to target"
    ):
        create(make_state(max_target=999))
    with pytest.raises(AssertionError, match="Min fund must be greater than 0"):
        create(make_state(min_fund=0))
    with pytest.raises(
        AssertionError,
        match="Max deposit per donor must be greater than or equal to min fund",
    ):
        create(make_state(min_fund=501))
    with pytest.raises(AssertionError, match="Deadline can't be in the past"):
        create(make_state(), valid_range=make_range(NOW, DEADLINE))


def test_create_with_initial_funds():
    with pytest.raises(
        AssertionError, match="Campaign must start with exactly the reserve"
    ):
        create(make_state(), lovelace=RESERVE + 1)


def test_create_with_deposits():
    state = make_state()
    with pytest.raises(AssertionError, match="Campaign must start without deposits"):
        create(
            FundingState(
                state.params, 500, [Deposit(OWNER, 100)], state.owner_claimed
            )
        )
    with pytest.raises(AssertionError, match="Campaign must start unclaimed"):
        create(FundingState(state.params, 500, [], TrueData()))
