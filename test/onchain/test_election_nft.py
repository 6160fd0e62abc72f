import pytest

from context_util import *
from onchain_campaigns.onchain.election.election_nft import *

NOW = 1_700_000_000_000
START = NOW + 24 * 60 * 60 * 1000
END = START + 24 * 60 * 60 * 1000
ELECTION_ADDRESS = script_address(bytes.fromhex("e0" * 28))
OWNER_PKH = bytes.fromhex("01" * 28)
OWNER = pubkey_address(OWNER_PKH)
X = pubkey_address(bytes.fromhex("0a" * 28))
Y = pubkey_address(bytes.fromhex("0b" * 28))
UNIQUE_REF = TxOutRef(TxId(WALLET_TX_ID), 0)
NFT_NAME = election_nft_name(UNIQUE_REF)
CAMPAIGN_NFT = Token(CAMPAIGN_POLICY_ID, NFT_NAME)


def make_state(
    census=(X, Y),
    voters=(),
    candidacies=((b"Alt", 0), (b"Baix", 0)),
    start=START,
    end=END,
    campaign_nft=CAMPAIGN_NFT,
):
    return ElectionState(
        ElectionParams(OWNER, start, end, campaign_nft),
        list(census),
        list(voters),
        [Candidacy(name, votes) for name, votes in candidacies],
    )


def create(state: ElectionState, valid_range=make_range(NOW, NOW + 600_000)):
    wallet_input = TxInInfo(UNIQUE_REF, make_out(OWNER, make_value(100_000_000)))
    minted = {CAMPAIGN_POLICY_ID: {NFT_NAME: 1}}
    tx_info = make_tx_info(
        [wallet_input],
        [make_out(ELECTION_ADDRESS, make_value(2_000_000, minted), state)],
        valid_range,
        [OWNER_PKH],
        minted,
    )
    validator(
        ELECTION_ADDRESS,
        CreateCampaign(0, 0),
        minting_context(tx_info, CAMPAIGN_POLICY_ID),
    )


def test_create_election():
    create(make_state())
    create(make_state(census=(), candidacies=()))


def test_create_with_wrong_nft_in_params():
    with pytest.raises(
        AssertionError,
        match="Campaign NFT in the parameters does not match the minted NFT",
    ):
        create(make_state(campaign_nft=Token(CAMPAIGN_POLICY_ID, b"other")))


def test_create_with_invalid_period():
    with pytest.raises(AssertionError, match="Start time can't be in the past"):
        create(make_state(start=NOW + 1000))
    with pytest.raises(AssertionError, match="End time must be after start time"):
        create(make_state(end=START))


def test_create_with_invalid_ledger():
    with pytest.raises(AssertionError, match="Election must start without voters"):
        create(make_state(voters=(X,)))
    with pytest.raises(AssertionError, match="Elector registered twice"):
        create(make_state(census=(X, Y, X)))
    with pytest.raises(AssertionError, match="Candidacy registered twice"):
        create(make_state(candidacies=((b"Alt", 0), (b"Alt", 0))))
    with pytest.raises(AssertionError, match="Candidacies must start without votes"):
        create(make_state(candidacies=((b"Alt", 1), (b"Baix", 0))))
