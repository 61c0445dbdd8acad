import pytest

from domain.common.exceptions import InvalidArgument
from domain.prime import INT64_MAX, INT64_MIN, PrimeRequest, parse_query
from shared.codes import BusinessCode


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("10", 10),
        ("0", 0),
        ("-7", -7),
        ("+42", 42),
        ("007", 7),
        (str(INT64_MAX), INT64_MAX),
        (str(INT64_MIN), INT64_MIN),
    ],
)
def test_valid_decimal_strings(raw, expected):
    request = parse_query(raw)
    assert request == PrimeRequest(query=expected)


def test_absent_query_defaults_to_four():
    assert parse_query(None).query == 4


@pytest.mark.parametrize("raw", ["abc", "", " 10", "10 ", "1_000", "0x10", "1e3", "3.0", "--1", "+"])
def test_non_numeric_strings_rejected(raw):
    with pytest.raises(InvalidArgument) as ei:
        parse_query(raw)
    assert ei.value.message == f'parsing "{raw}": invalid syntax'
    assert ei.value.code == BusinessCode.PARAM_ERROR
    assert ei.value.field == "query"


@pytest.mark.parametrize("raw", [str(INT64_MAX + 1), str(INT64_MIN - 1), "9" * 30])
def test_int64_overflow_rejected(raw):
    with pytest.raises(InvalidArgument) as ei:
        parse_query(raw)
    assert ei.value.message == f'parsing "{raw}": value out of range'


@pytest.mark.parametrize("raw", ["9" * 5000, "-" + "1" * 5000, "1" + "0" * 19])
def test_very_long_digit_strings_are_out_of_range(raw):
    with pytest.raises(InvalidArgument) as ei:
        parse_query(raw)
    assert ei.value.message.endswith("value out of range")


@pytest.mark.parametrize(
    "raw, expected",
    [("0" * 5000 + "7", 7), ("-" + "0" * 5000 + "7", -7), ("0" * 5000, 0), ("+" + "0" * 30 + str(INT64_MAX), INT64_MAX)],
)
def test_leading_zeros_do_not_count_toward_length(raw, expected):
    assert parse_query(raw).query == expected


def test_request_is_immutable():
    request = parse_query("10")
    with pytest.raises(AttributeError):
        request.query = 11  # type: ignore[misc]


def test_request_rejects_out_of_range_values():
    with pytest.raises(ValueError):
        PrimeRequest(query=INT64_MAX + 1)
    with pytest.raises(TypeError):
        PrimeRequest(query=True)
