from onchain_campaigns.onchain.campaign.campaign_util import *


@dataclass
class FundingParams(PlutusData):
    """
    Non-updatable parameters of a funding campaign
    """

    CONSTR_ID = 0
    owner: Address
    fund_token: Token
    target: int
    deadline: POSIXTime
    min_fund: int
    max_target: int
    # amount of the fund token locked at creation, it never counts towards the raised funds
    reserve: int
    campaign_nft: Token


@dataclass
class Deposit(PlutusData):
    """
    Cumulative contribution of a single donor
    """

    CONSTR_ID = 0
    donor: Address
    amount: int


@dataclass
class FundingState(PlutusData):
    """
    Tracks the contributions to a funding campaign
    """

    CONSTR_ID = 0
    params: FundingParams
    # 0 means that there is no limit per donor
    max_deposit_per_donor: int
    deposits: List[Deposit]
    owner_claimed: BoolData


@dataclass
class FundingPeriod(PlutusData):
    CONSTR_ID = 0


@dataclass
class Successful(PlutusData):
    CONSTR_ID = 1


@dataclass
class Failed(PlutusData):
    CONSTR_ID = 2


FundingStatus = Union[FundingPeriod, Successful, Failed]


def validate_funding_params(
    params: FundingParams, max_deposit_per_donor: int, valid_range: POSIXTimeRange
) -> None:
    assert params.target > 0, "Target must be more than 0"
    assert (
        params.max_target >= params.target
    ), "Max target must be greater than or equal to target"
    assert params.min_fund > 0, "Min fund must be greater than 0"
    assert (
        max_deposit_per_donor >= params.min_fund
    ), "Max deposit per donor must be greater than or equal to min fund"
    assert params.reserve >= 0, "Reserve must not be negative"
    assert before_ext(
        valid_range, FinitePOSIXTime(params.deadline)
    ), "Deadline can't be in the past"


def deposit_of(deposits: List[Deposit], donor: Address) -> int:
    """
    The cumulative contribution of the donor, absent entries count as 0
    """
    amount = 0
    for d in deposits:
        if d.donor == donor:
            amount = d.amount
    return amount


def clear_deposit(deposits: List[Deposit], donor: Address) -> List[Deposit]:
    return [d for d in deposits if d.donor != donor]


def set_deposit(deposits: List[Deposit], donor: Address, amount: int) -> List[Deposit]:
    """
    Set the deposit of the donor, keeping the position of an existing entry and
    prepending new entries
    """
    if deposit_of(deposits, donor) == 0:
        res = [Deposit(donor, amount)] + deposits
    else:
        res = [
            Deposit(donor, amount) if d.donor == donor else d for d in deposits
        ]
    return res


def total_deposits(deposits: List[Deposit]) -> int:
    return sum([d.amount for d in deposits])


def current_funds(state: FundingState, campaign_output: TxOut) -> int:
    """
    Funds raised by the campaign, i.e. the custodied fund token without the reserve
    """
    return (
        amount_of_token_in_output(state.params.fund_token, campaign_output)
        - state.params.reserve
    )


def owner_has_claimed(state: FundingState) -> bool:
    return isinstance(state.owner_claimed, TrueData)


def funding_status(
    state: FundingState, funds: int, valid_range: POSIXTimeRange
) -> FundingStatus:
    """
    The phase of the campaign. The deadline itself still belongs to the funding period.
    """
    if not after_ext(valid_range, FinitePOSIXTime(state.params.deadline)):
        status: FundingStatus = FundingPeriod()
    elif owner_has_claimed(state) or funds >= state.params.target:
        status: FundingStatus = Successful()
    else:
        status: FundingStatus = Failed()
    return status


def construct_funded_state(
    previous_state: FundingState, donor: Address, amount: int
) -> FundingState:
    return FundingState(
        previous_state.params,
        previous_state.max_deposit_per_donor,
        set_deposit(
            previous_state.deposits,
            donor,
            deposit_of(previous_state.deposits, donor) + amount,
        ),
        previous_state.owner_claimed,
    )


def construct_claimed_state(previous_state: FundingState) -> FundingState:
    """
    State after the owner withdrew the funds of a successful campaign
    """
    no_deposits: List[Deposit] = []
    return FundingState(
        previous_state.params,
        previous_state.max_deposit_per_donor,
        no_deposits,
        TrueData(),
    )


def construct_refunded_state(
    previous_state: FundingState, donor: Address
) -> FundingState:
    return FundingState(
        previous_state.params,
        previous_state.max_deposit_per_donor,
        clear_deposit(previous_state.deposits, donor),
        previous_state.owner_claimed,
    )


def construct_max_deposit_state(
    previous_state: FundingState, max_deposit_per_donor: int
) -> FundingState:
    return FundingState(
        previous_state.params,
        max_deposit_per_donor,
        previous_state.deposits,
        previous_state.owner_claimed,
    )
