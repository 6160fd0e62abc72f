"""
Comparisons between transaction validity ranges and extended POSIX times.

All times are in milliseconds. Open bounds are normalised to the closest closed
bound, so a range (l, u) is treated as [l + 1, u - 1].
"""
from opshin.prelude import *


def compare_extended_helper(time: ExtendedPOSIXTime) -> int:
    result = 0
    if isinstance(time, NegInfPOSIXTime):
        result = -1
    elif isinstance(time, FinitePOSIXTime):
        result = 0
    elif isinstance(time, PosInfPOSIXTime):
        result = 1
    return result


def compare_extended(a: ExtendedPOSIXTime, b: ExtendedPOSIXTime) -> int:
    """
    Returns -1 if a < b, 0 if a == b and 1 if a > b
    """
    a_val = compare_extended_helper(a)
    b_val = compare_extended_helper(b)
    result = 0
    if a_val == 0 and b_val == 0:
        a_finite: FinitePOSIXTime = a
        b_finite: FinitePOSIXTime = b
        if a_finite.time < b_finite.time:
            result = -1
        elif a_finite.time > b_finite.time:
            result = 1
    elif a_val < b_val:
        result = -1
    elif a_val > b_val:
        result = 1
    return result


def shift_extended(time: ExtendedPOSIXTime, milliseconds: int) -> ExtendedPOSIXTime:
    if isinstance(time, FinitePOSIXTime):
        return FinitePOSIXTime(time.time + milliseconds)
    return time


def get_bool(b: BoolData) -> bool:
    return isinstance(b, TrueData)


def lower_bound_time(valid_range: POSIXTimeRange) -> ExtendedPOSIXTime:
    """
    The earliest instant contained in the range
    """
    lower_bound = valid_range.lower_bound
    if get_bool(lower_bound.closed):
        return lower_bound.limit
    return shift_extended(lower_bound.limit, 1)


def upper_bound_time(valid_range: POSIXTimeRange) -> ExtendedPOSIXTime:
    """
    The latest instant contained in the range
    """
    upper_bound = valid_range.upper_bound
    if get_bool(upper_bound.closed):
        return upper_bound.limit
    return shift_extended(upper_bound.limit, -1)


def before_ext(valid_range: POSIXTimeRange, time: ExtendedPOSIXTime) -> bool:
    """
    Whether every instant of the range lies strictly before the given time
    """
    return compare_extended(upper_bound_time(valid_range), time) < 0


def after_ext(valid_range: POSIXTimeRange, time: ExtendedPOSIXTime) -> bool:
    """
    Whether every instant of the range lies strictly after the given time
    """
    return compare_extended(lower_bound_time(valid_range), time) > 0


def contained_ext(
    valid_range: POSIXTimeRange, start: ExtendedPOSIXTime, end: ExtendedPOSIXTime
) -> bool:
    """
    Whether every instant of the range lies in [start, end]
    """
    return (
        compare_extended(lower_bound_time(valid_range), start) >= 0
        and compare_extended(upper_bound_time(valid_range), end) <= 0
    )


def make_range(lower: POSIXTime, upper: POSIXTime) -> POSIXTimeRange:
    return POSIXTimeRange(
        LowerBoundPOSIXTime(FinitePOSIXTime(lower), TrueData()),
        UpperBoundPOSIXTime(FinitePOSIXTime(upper), TrueData()),
    )


def make_point_range(time: POSIXTime) -> POSIXTimeRange:
    """
    The range containing exactly one instant
    """
    return make_range(time, time)
