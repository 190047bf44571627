"""
Unit tests for the M-PSK bit error rate calculators.
"""

import math

import pytest

from services.calculations.base import FormulaDomainError, MissingInputError
from services.calculations.ber import (
    BerCalculator,
    LinearBerCalculator,
    ber_mpsk,
    classify_ber,
    modulation_name,
)
from services.calculations.special_functions import erfc, db_to_linear


# Formula

def test_bpsk_at_zero_db():
    """BPSK at Eb/No = 1 (0 dB): 0.5 * erfc(1) ~= 0.0786."""
    assert ber_mpsk(1.0, 2) == pytest.approx(0.0786, abs=1e-4)
    assert ber_mpsk(1.0, 2) == 0.5 * erfc(1.0)


def test_qpsk_matches_bpsk():
    """Gray-coded QPSK has the same per-bit error rate as BPSK."""
    for eb_no in (0.5, 1.0, 4.0, 10.0):
        assert ber_mpsk(eb_no, 4) == ber_mpsk(eb_no, 2)


def test_qpsk_at_ten_db():
    assert ber_mpsk(db_to_linear(10), 4) == pytest.approx(3.87e-6, rel=1e-2)


def test_eight_psk_uses_symbol_error_over_bits():
    eb_no = 10.0
    expected = erfc(math.sqrt(3 * eb_no) * math.sin(math.pi / 8)) / 3
    assert ber_mpsk(eb_no, 8) == expected


def test_higher_order_psk_needs_more_power():
    eb_no = db_to_linear(10)
    assert ber_mpsk(eb_no, 4) < ber_mpsk(eb_no, 8) < ber_mpsk(eb_no, 16) < ber_mpsk(eb_no, 32)


@pytest.mark.parametrize("modulation_order", [2, 4, 8, 16, 32, 64])
def test_ber_non_increasing_in_eb_no(modulation_order):
    eb_no_grid_db = [x / 2 for x in range(-20, 41)]
    bers = [ber_mpsk(db_to_linear(db), modulation_order) for db in eb_no_grid_db]
    for left, right in zip(bers, bers[1:]):
        assert right <= left


# Labels and bands

def test_modulation_names():
    assert modulation_name(2) == "BPSK"
    assert modulation_name(4) == "QPSK"
    assert modulation_name(8) == "8-PSK"
    assert modulation_name(16) == "16-PSK"


def test_modulation_name_beyond_table():
    assert modulation_name(32) == "32-PSK"
    assert modulation_name(256) == "256-PSK"


def test_classify_ber_bands():
    assert classify_ber(0.2) == "high"
    assert classify_ber(0.0100001) == "high"
    assert classify_ber(0.01) == "moderate"
    assert classify_ber(5e-4) == "moderate"
    assert classify_ber(1.1e-6) == "moderate"
    assert classify_ber(1e-6) == "low"
    assert classify_ber(0.0) == "low"


# Calculators

def test_ber_calculator_result():
    result = BerCalculator({"ebNoDb": 10, "modulationOrder": 4}).calculate()

    assert result["ber"] == pytest.approx(3.87e-6, rel=1e-2)
    assert result["ebNoDb"] == 10.0
    assert result["ebNoLinear"] == pytest.approx(10.0)
    assert result["modulationOrder"] == 4
    assert result["modulation"] == "QPSK"
    assert result["severity"] == "moderate"
    assert result["explanation"].startswith(
        "For a QPSK signal with an Eb/No of 10.0 dB, the calculated Bit Error Rate (BER) "
        "is approximately 3.87e-6."
    )
    assert "moderate error rate" in result["explanation"]


def test_ber_calculator_high_error_rate_explanation():
    result = BerCalculator({"ebNoDb": 0, "modulationOrder": 2}).calculate()

    assert result["severity"] == "high"
    assert "7.86e-2" in result["explanation"]
    assert "This is a high error rate" in result["explanation"]
    assert "Increasing the Eb/No (signal power) is recommended." in result["explanation"]


def test_ber_calculator_low_error_rate_explanation():
    result = BerCalculator({"ebNoDb": 12, "modulationOrder": 2}).calculate()

    assert result["severity"] == "low"
    assert "This is a low error rate" in result["explanation"]


def test_ber_calculator_labels_large_orders():
    result = BerCalculator({"ebNoDb": 20, "modulationOrder": 64}).calculate()
    assert result["modulation"] == "64-PSK"
    assert "For a 64-PSK signal" in result["explanation"]


def test_linear_ber_calculator_converts_to_db():
    result = LinearBerCalculator({"ebNoLinear": 1.0, "modulationOrder": 2}).calculate()

    assert result["ebNoDb"] == 0.0
    assert result["ber"] == pytest.approx(0.0786, abs=1e-4)
    assert "Eb/No of 0.0 dB" in result["explanation"]


def test_db_and_linear_contracts_agree():
    from_db = BerCalculator({"ebNoDb": 7, "modulationOrder": 8}).calculate()
    from_linear = LinearBerCalculator(
        {"ebNoLinear": db_to_linear(7), "modulationOrder": 8}
    ).calculate()
    assert from_db["ber"] == pytest.approx(from_linear["ber"])


def test_missing_inputs_report_both_fields():
    with pytest.raises(MissingInputError) as exc_info:
        LinearBerCalculator({})
    assert str(exc_info.value) == "Missing required input: ebNoLinear or modulationOrder"

    with pytest.raises(MissingInputError) as exc_info:
        BerCalculator({"ebNoDb": 3, "modulationOrder": None})
    assert str(exc_info.value) == "Missing required input: ebNoDb or modulationOrder"


@pytest.mark.parametrize("modulation_order", [0, 1, 3, 6, 12, 4.5, -4])
def test_modulation_order_must_be_power_of_two(modulation_order):
    calculator = BerCalculator({"ebNoDb": 10, "modulationOrder": modulation_order})
    with pytest.raises(FormulaDomainError) as exc_info:
        calculator.calculate()
    assert exc_info.value.field == "modulationOrder"


@pytest.mark.parametrize("eb_no_linear", [0, -1.5])
def test_linear_eb_no_must_be_positive(eb_no_linear):
    calculator = LinearBerCalculator({"ebNoLinear": eb_no_linear, "modulationOrder": 2})
    with pytest.raises(FormulaDomainError) as exc_info:
        calculator.calculate()
    assert exc_info.value.field == "ebNoLinear"


def test_non_finite_eb_no_rejected():
    calculator = BerCalculator({"ebNoDb": float("nan"), "modulationOrder": 2})
    with pytest.raises(FormulaDomainError):
        calculator.calculate()


def test_calculation_is_pure():
    params = {"ebNoDb": 6.5, "modulationOrder": 16}
    assert BerCalculator(params).calculate() == BerCalculator(params).calculate()
    assert params == {"ebNoDb": 6.5, "modulationOrder": 16}


def test_boolean_eb_no_rejected():
    calculator = BerCalculator({"ebNoDb": True, "modulationOrder": 2})
    with pytest.raises(FormulaDomainError) as exc_info:
        calculator.calculate()
    assert str(exc_info.value) == "Invalid ebNoDb: must be a number"
