"""
Unit tests for Erlang-B blocking and the required-channel search.
"""

import pytest

from services.calculations.base import FormulaDomainError, MissingInputError
from services.calculations.erlang_b import (
    DEFAULT_MAX_CHANNELS,
    ErlangBCalculator,
    blocking_probability,
    blocking_probability_direct,
    required_channels,
)


# Blocking probability

@pytest.mark.parametrize("channels", [0, 1, 5, 50])
def test_no_traffic_means_no_blocking(channels):
    assert blocking_probability(0, channels) == 0.0


def test_zero_channels_block_everything():
    assert blocking_probability(3.5, 0) == 1.0


def test_known_table_value():
    """10 Erlangs on 15 channels blocks ~3.65% of calls."""
    assert blocking_probability(10, 15) == pytest.approx(0.0365, abs=1e-4)


@pytest.mark.parametrize("traffic", [0.5, 2.0, 10.0, 25.0])
def test_recursion_matches_factorial_ratio(traffic):
    for channels in range(0, 30):
        assert blocking_probability(traffic, channels) == pytest.approx(
            blocking_probability_direct(traffic, channels), rel=1e-9
        )


def test_strictly_increasing_in_traffic():
    values = [blocking_probability(a / 2, 10) for a in range(1, 61)]
    for left, right in zip(values, values[1:]):
        assert right > left


def test_strictly_decreasing_in_channels():
    values = [blocking_probability(10.0, n) for n in range(0, 41)]
    for left, right in zip(values, values[1:]):
        assert right < left


def test_recursion_handles_large_channel_counts():
    """The factorial ratio overflows well before realistic trunk sizes."""
    blocking = blocking_probability(150.0, 200)
    assert 0.0 < blocking < 1.0

    with pytest.raises(OverflowError):
        blocking_probability_direct(150.0, 200)


def test_direct_form_rejects_negative_channels():
    with pytest.raises(ValueError):
        blocking_probability_direct(5.0, -1)


def test_recursion_stops_once_blocking_reaches_zero():
    """Huge channel counts finish as soon as the recursion underflows to zero."""
    assert blocking_probability(1.0, 10 ** 12) == 0.0


# Required channels

def test_required_channels_known_value():
    """2% grade of service at 10 Erlangs needs 17 channels."""
    channels, converged = required_channels(10, 0.02)

    assert (channels, converged) == (17, True)
    assert blocking_probability(10, 17) <= 0.02
    assert blocking_probability(10, 16) > 0.02


@pytest.mark.parametrize("traffic", [0.1, 1.0, 5.0, 10.0, 50.0, 120.0])
@pytest.mark.parametrize("target", [0.001, 0.01, 0.05, 0.2])
def test_required_channels_is_smallest_meeting_target(traffic, target):
    channels, converged = required_channels(traffic, target)

    assert converged is True
    assert blocking_probability(traffic, channels) <= target
    if channels > 1:
        assert blocking_probability(traffic, channels - 1) > target


def test_required_channels_without_traffic():
    assert required_channels(0.0, 0.01) == (1, True)


def test_required_channels_cap():
    channels, converged = required_channels(5000.0, 1e-9, max_channels=50)
    assert (channels, converged) == (50, False)


def test_default_cap():
    assert DEFAULT_MAX_CHANNELS == 1000
    channels, converged = required_channels(2000.0, 0.001)
    assert (channels, converged) == (1000, False)


# Calculator

def test_calculator_result():
    result = ErlangBCalculator(
        {"traffic": 10, "channels": 15, "maxBlocking": 0.02}
    ).calculate()

    assert result["blockingProbability"] == blocking_probability(10.0, 15)
    assert result["blockingPercent"] == pytest.approx(result["blockingProbability"] * 100)
    assert result["requiredChannels"] == 17
    assert result["converged"] is True
    assert "10.00 Erlangs of offered traffic on 15 channels" in result["explanation"]
    assert "3.65%" in result["explanation"]
    assert "at least 17 channels" in result["explanation"]


def test_calculator_reports_capped_search():
    result = ErlangBCalculator(
        {"traffic": 500, "channels": 10, "maxBlocking": 0.001},
        max_channels=20,
    ).calculate()

    assert result["requiredChannels"] == 20
    assert result["converged"] is False
    assert "approximate" in result["explanation"]


def test_calculator_accepts_integral_float_channels():
    result = ErlangBCalculator(
        {"traffic": 2, "channels": 4.0, "maxBlocking": 0.1}
    ).calculate()
    assert result["blockingProbability"] == blocking_probability(2.0, 4)


@pytest.mark.parametrize(
    "params, field",
    [
        ({"traffic": -1, "channels": 5, "maxBlocking": 0.02}, "traffic"),
        ({"traffic": 5, "channels": -2, "maxBlocking": 0.02}, "channels"),
        ({"traffic": 5, "channels": 2.5, "maxBlocking": 0.02}, "channels"),
        ({"traffic": 5, "channels": 5, "maxBlocking": 0}, "maxBlocking"),
        ({"traffic": 5, "channels": 5, "maxBlocking": 1.5}, "maxBlocking"),
    ],
)
def test_calculator_domain_checks(params, field):
    with pytest.raises(FormulaDomainError) as exc_info:
        ErlangBCalculator(params).calculate()
    assert exc_info.value.field == field


def test_calculator_missing_inputs():
    with pytest.raises(MissingInputError) as exc_info:
        ErlangBCalculator({"traffic": 5})
    assert str(exc_info.value) == (
        "Missing required input: traffic, channels or maxBlocking"
    )


def test_calculator_rejects_channels_above_cap():
    with pytest.raises(FormulaDomainError) as exc_info:
        ErlangBCalculator(
            {"traffic": 10, "channels": 30_000_000, "maxBlocking": 0.02}
        ).calculate()
    assert exc_info.value.field == "channels"
    assert str(exc_info.value) == "Invalid channels: must be at most 1000 (got 30000000)"


def test_calculator_channel_cap_follows_max_channels():
    params = {"traffic": 10, "channels": 50, "maxBlocking": 0.02}

    assert ErlangBCalculator(params, max_channels=50).calculate()["requiredChannels"] == 17
    with pytest.raises(FormulaDomainError):
        ErlangBCalculator(params, max_channels=49).calculate()


def test_calculator_accepts_channels_at_cap():
    result = ErlangBCalculator(
        {"traffic": 10, "channels": DEFAULT_MAX_CHANNELS, "maxBlocking": 0.02}
    ).calculate()
    assert result["blockingProbability"] == 0.0
