import pytest

from correlator.errors import MissingStatusError, UnrecognizedStatusError
from correlator.outcome import Result
from correlator.status import map_result_status


@pytest.mark.parametrize(
    "token, expected",
    [
        ("pass", Result.PASS),
        ("fixed", Result.PASS),
        ("fail", Result.FAIL),
        ("notselected", Result.ERROR),
        ("notapplicable", Result.ERROR),
        ("error", Result.ERROR),
        ("unknown", Result.ERROR),
    ],
)
def test_known_tokens_map_to_results(token, expected):
    assert map_result_status(token) is expected


def test_surrounding_whitespace_is_ignored():
    assert map_result_status("\n  fail  ") is Result.FAIL


@pytest.mark.parametrize("token", ["notchecked", "informational", "PASS", ""])
def test_unrecognized_token_is_invalid_and_raises(token):
    with pytest.raises(UnrecognizedStatusError) as excinfo:
        map_result_status(token, rule_id="rule1")

    assert excinfo.value.result is Result.INVALID
    assert excinfo.value.rule_id == "rule1"
    assert excinfo.value.value == token.strip()


def test_missing_token_is_invalid_and_raises():
    with pytest.raises(MissingStatusError) as excinfo:
        map_result_status(None)

    assert excinfo.value.result is Result.INVALID
