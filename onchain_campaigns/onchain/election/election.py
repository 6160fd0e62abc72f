"""
The election contract.

This contract holds the state of an election: the census of electors that may still vote,
the register of electors that already voted and the list of candidacies with their votes.
The owner sets up the census and the candidacies, electors vote once within the voting period.

This contract is intended to be have inputs from these contracts:
- election/election (1, the previous state)

This contract is intended to have mints with these contracts:
- election/election_nft: Mints the campaign NFT upon creation of the election

Outputs of this contract may go to:
- election/election (1, continuation of the above, no value may be withdrawn)

Relevant NFTs present at outputs of this contract:
- election/election_nft (1, authenticates the election thread)

It is not allowed to spend several election states in a single transaction.
"""
from onchain_campaigns.onchain.election.election_util import *


@dataclass
class AddElector(PlutusData):
    """
    Redeemer for the election contract to add an elector to the census
    """

    CONSTR_ID = 1
    elector: Address
    state_input_index: int
    state_output_index: int


@dataclass
class RemoveElector(PlutusData):
    """
    Redeemer for the election contract to remove an elector from the census
    """

    CONSTR_ID = 2
    elector: Address
    state_input_index: int
    state_output_index: int


@dataclass
class AddCandidacy(PlutusData):
    """
    Redeemer for the election contract to register a new candidacy
    """

    CONSTR_ID = 3
    name: bytes
    state_input_index: int
    state_output_index: int


@dataclass
class CastVote(PlutusData):
    """
    Redeemer for the election contract to vote for the candidacy at the given index
    """

    CONSTR_ID = 4
    voter: Address
    candidacy_index: int
    state_input_index: int
    state_output_index: int


ElectionRedeemer = Union[AddElector, RemoveElector, AddCandidacy, CastVote]


def resolve_linear_output_state(
    next_state_output: TxOut, tx_info: TxInfo
) -> ElectionState:
    """
    Resolve the continuing datum of the output that is referenced by the redeemer.
    """
    next_state: ElectionState = resolve_datum_unsafe(next_state_output, tx_info)
    return next_state


def check_administration_allowed(previous_state: ElectionState, tx_info: TxInfo) -> None:
    """
    Only the owner may change the census or the candidacies and only until the election is closed
    """
    assert user_signed_tx(
        previous_state.params.owner, tx_info
    ), "Only owner can administrate the election"
    assert not isinstance(
        election_status(previous_state.params, tx_info.valid_range), Closed
    ), "Election has finished"


def check_vote_allowed(
    previous_state: ElectionState, redeemer: CastVote, tx_info: TxInfo
) -> None:
    voter = redeemer.voter
    check_signed_by(voter, tx_info, "Voter did not sign the transaction")
    assert voter in previous_state.census, "Not in the census of electors"
    assert not voter in previous_state.voters, "Already voted"
    assert voting_period_started(
        previous_state.params, tx_info.valid_range
    ), "Voting period has not started yet"
    assert not voting_period_ended(
        previous_state.params, tx_info.valid_range
    ), "Voting period has finished"


def check_action_allowed(
    previous_state: ElectionState, redeemer: ElectionRedeemer, tx_info: TxInfo
) -> None:
    if isinstance(redeemer, CastVote):
        check_vote_allowed(previous_state, redeemer, tx_info)
    else:
        check_administration_allowed(previous_state, tx_info)


def construct_new_election_state(
    previous_state: ElectionState, redeemer: ElectionRedeemer
) -> ElectionState:
    """
    Construct the new election state based on the previous state and the redeemer
    """
    if isinstance(redeemer, AddElector):
        next_state = ElectionState(
            previous_state.params,
            add_elector(previous_state.census, redeemer.elector),
            previous_state.voters,
            previous_state.candidacies,
        )
    elif isinstance(redeemer, RemoveElector):
        next_state = ElectionState(
            previous_state.params,
            remove_elector(previous_state.census, redeemer.elector),
            previous_state.voters,
            previous_state.candidacies,
        )
    elif isinstance(redeemer, AddCandidacy):
        next_state = ElectionState(
            previous_state.params,
            previous_state.census,
            previous_state.voters,
            add_candidacy(previous_state.candidacies, redeemer.name),
        )
    elif isinstance(redeemer, CastVote):
        next_state = construct_voted_state(
            previous_state, redeemer.voter, redeemer.candidacy_index
        )
    else:
        assert False, "Invalid redeemer"
        next_state = previous_state
    return next_state


def validator(
    state: ElectionState, redeemer: ElectionRedeemer, context: ScriptContext
) -> None:
    """
    Election
    Ensures that only electors of the census vote, that every elector votes at most once
    and only within the voting period, and that every vote is counted exactly once.
    """
    tx_info = context.tx_info
    transition = resolve_campaign_transition(
        state.params.campaign_nft,
        redeemer.state_input_index,
        redeemer.state_output_index,
        context,
    )
    next_state = resolve_linear_output_state(transition.next_state_output, tx_info)

    check_action_allowed(state, redeemer, tx_info)
    desired_next_state = construct_new_election_state(state, redeemer)
    assert next_state == desired_next_state, "New election state is incorrect"
    check_preserves_value(transition)
