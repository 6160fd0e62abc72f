from onchain_campaigns.onchain.campaign.campaign_util import *


@dataclass
class ElectionParams(PlutusData):
    """
    Non-updatable parameters of an election
    """

    CONSTR_ID = 0
    owner: Address
    start_time: POSIXTime
    end_time: POSIXTime
    campaign_nft: Token


@dataclass
class Candidacy(PlutusData):
    CONSTR_ID = 0
    name: bytes
    votes: int


@dataclass
class ElectionState(PlutusData):
    """
    Tracks the census, the electors that already voted and the votes per candidacy
    """

    CONSTR_ID = 0
    params: ElectionParams
    # electors that may still vote
    census: List[Address]
    # electors that have voted
    voters: List[Address]
    candidacies: List[Candidacy]


@dataclass
class NotStarted(PlutusData):
    CONSTR_ID = 0


@dataclass
class Voting(PlutusData):
    CONSTR_ID = 1


@dataclass
class Closed(PlutusData):
    CONSTR_ID = 2


ElectionStatus = Union[NotStarted, Voting, Closed]


def validate_election_params(
    params: ElectionParams, valid_range: POSIXTimeRange
) -> None:
    assert before_ext(
        valid_range, FinitePOSIXTime(params.start_time)
    ), "Start time can't be in the past"
    assert params.end_time > params.start_time, "End time must be after start time"


def election_status(
    params: ElectionParams, valid_range: POSIXTimeRange
) -> ElectionStatus:
    if before_ext(valid_range, FinitePOSIXTime(params.start_time)):
        status: ElectionStatus = NotStarted()
    elif after_ext(valid_range, FinitePOSIXTime(params.end_time)):
        status: ElectionStatus = Closed()
    else:
        status: ElectionStatus = Voting()
    return status


def voting_period_started(params: ElectionParams, valid_range: POSIXTimeRange) -> bool:
    """
    Whether the whole validity range lies at or after the start of the voting period
    """
    return (
        compare_extended(
            lower_bound_time(valid_range), FinitePOSIXTime(params.start_time)
        )
        >= 0
    )


def voting_period_ended(params: ElectionParams, valid_range: POSIXTimeRange) -> bool:
    """
    Whether any instant of the validity range lies after the end of the voting period
    """
    return (
        compare_extended(upper_bound_time(valid_range), FinitePOSIXTime(params.end_time))
        > 0
    )


def voting_period_open(params: ElectionParams, valid_range: POSIXTimeRange) -> bool:
    """
    Whether the whole validity range lies within the voting period, both ends included
    """
    return contained_ext(
        valid_range,
        FinitePOSIXTime(params.start_time),
        FinitePOSIXTime(params.end_time),
    )


def candidacy_names(candidacies: List[Candidacy]) -> List[bytes]:
    return [c.name for c in candidacies]


def add_elector(census: List[Address], elector: Address) -> List[Address]:
    assert not elector in census, "Elector is already registered"
    return census + [elector]


def remove_elector(census: List[Address], elector: Address) -> List[Address]:
    assert elector in census, "Elector is not in the census"
    res: List[Address] = [e for e in census if e != elector]
    return res


def add_candidacy(candidacies: List[Candidacy], name: bytes) -> List[Candidacy]:
    assert not name in candidacy_names(candidacies), "Candidacy is already registered"
    return candidacies + [Candidacy(name, 0)]


def add_vote_to_index(candidacies: List[Candidacy], index: int) -> List[Candidacy]:
    assert 0 <= index < len(candidacies), "Invalid index"
    candidacy = candidacies[index]
    return (
        candidacies[:index]
        + [Candidacy(candidacy.name, candidacy.votes + 1)]
        + candidacies[index + 1 :]
    )


def construct_voted_state(
    previous_state: ElectionState, voter: Address, index: int
) -> ElectionState:
    """
    Count the vote and move the voter from the census to the register of voters
    """
    return ElectionState(
        previous_state.params,
        remove_elector(previous_state.census, voter),
        [voter] + previous_state.voters,
        add_vote_to_index(previous_state.candidacies, index),
    )
