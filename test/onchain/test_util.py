from hypothesis import strategies as st
from hypothesis import given

from onchain_campaigns.onchain.util import (
    add_value,
    check_greater_or_equal_value,
    has_duplicates,
)

token_names = st.sampled_from([b"", b"a", b"b"])
values = st.dictionaries(
    st.sampled_from([b"", b"\x01" * 28, b"\x02" * 28]),
    st.dictionaries(token_names, st.integers(-1000, 1000)),
)


@given(st.lists(st.integers(0, 5)))
def test_has_duplicates(listy: list):
    assert has_duplicates(listy) == (len(set(listy)) != len(listy))


@given(values, values)
def test_add_value(a, b):
    res = add_value(a, b)
    for policy_id in set(a.keys()) | set(b.keys()):
        for token_name in set(a.get(policy_id, {}).keys()) | set(
            b.get(policy_id, {}).keys()
        ):
            assert res[policy_id][token_name] == a.get(policy_id, {}).get(
                token_name, 0
            ) + b.get(policy_id, {}).get(token_name, 0)


def test_check_greater_or_equal_value():
    check_greater_or_equal_value({b"": {b"": 10}}, {b"": {b"": 10}})
    check_greater_or_equal_value({b"": {b"": 10}, b"x": {b"y": 1}}, {b"": {b"": 5}})
    try:
        check_greater_or_equal_value({b"": {b"": 10}}, {b"x": {b"y": 1}})
        assert False
    except AssertionError as e:
        assert "is too low" in str(e)
