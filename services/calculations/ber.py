"""
Bit error rate for coherent M-PSK over AWGN.

BPSK/QPSK (M <= 4):  BER = 0.5 * erfc(sqrt(Eb/No))
M-PSK (M >= 8):      SER = erfc(sqrt(k * Eb/No) * sin(pi / M)),  BER = SER / k

where k = log2(M) bits per symbol and Eb/No is the linear ratio. The M-PSK
branch is the high-SNR nearest-neighbour approximation with Gray coding.

Two input contracts are served, each by its own calculator:
- BerCalculator:        Eb/No in dB        (ebNoDb, modulationOrder)
- LinearBerCalculator:  Eb/No as a ratio   (ebNoLinear, modulationOrder)
"""

from typing import Any, Dict, Tuple
import logging
import math

from services.calculations.base import BaseFormulaCalculator
from services.calculations.special_functions import erfc, db_to_linear, linear_to_db
from services.explanations import get_renderer

logger = logging.getLogger(__name__)

MODULATION_NAMES = {
    2: "BPSK",
    4: "QPSK",
    8: "8-PSK",
    16: "16-PSK",
}

HIGH_BER_THRESHOLD = 0.01
LOW_BER_THRESHOLD = 1e-6

SEVERITY_MESSAGES = {
    "high": (
        "This is a high error rate, indicating a poor quality signal, likely "
        "resulting in significant data loss. Increasing the Eb/No (signal "
        "power) is recommended."
    ),
    "moderate": (
        "This is a moderate error rate. The connection would be functional but "
        "might require error correction codes for reliable data transmission."
    ),
    "low": (
        "This is a low error rate, indicating a high-quality, reliable signal. "
        "Data transmission should be very stable."
    ),
}


def ber_mpsk(eb_no_linear: float, modulation_order: int) -> float:
    """BER of M-PSK at a linear Eb/No."""
    if modulation_order <= 4:
        return 0.5 * erfc(math.sqrt(eb_no_linear))

    k = math.log2(modulation_order)
    ser = erfc(math.sqrt(k * eb_no_linear) * math.sin(math.pi / modulation_order))
    return ser / k


def modulation_name(modulation_order: int) -> str:
    """Display label; orders beyond the table are labelled '<M>-PSK'."""
    return MODULATION_NAMES.get(modulation_order, f"{modulation_order}-PSK")


def classify_ber(ber: float) -> str:
    if ber > HIGH_BER_THRESHOLD:
        return "high"
    if ber > LOW_BER_THRESHOLD:
        return "moderate"
    return "low"


class BerCalculator(BaseFormulaCalculator):
    """BER from Eb/No given in dB."""

    formula_code = "ber"
    template_name = "ber.txt"
    required_fields = ("ebNoDb", "modulationOrder")

    def _eb_no(self) -> Tuple[float, float]:
        """Return (Eb/No in dB, linear Eb/No)."""
        eb_no_db = self._number("ebNoDb")
        return eb_no_db, db_to_linear(eb_no_db)

    def calculate(self) -> Dict[str, Any]:
        modulation_order = self._modulation_order()
        eb_no_db, eb_no_linear = self._eb_no()

        ber = ber_mpsk(eb_no_linear, modulation_order)
        severity = classify_ber(ber)
        label = modulation_name(modulation_order)

        logger.info(
            f"BER ({label}): Eb/No={eb_no_db:.2f}dB "
            f"(linear {eb_no_linear:.4f}), BER={ber:.3e} [{severity}]"
        )

        explanation = get_renderer().render(
            self.template_name,
            {
                "modulation": label,
                "eb_no_db": eb_no_db,
                "ber": ber,
                "severity_message": SEVERITY_MESSAGES[severity],
            },
        )

        return {
            "ber": ber,
            "ebNoDb": eb_no_db,
            "ebNoLinear": eb_no_linear,
            "modulationOrder": modulation_order,
            "modulation": label,
            "severity": severity,
            "explanation": explanation,
        }


class LinearBerCalculator(BerCalculator):
    """BER from Eb/No given as a linear power ratio."""

    formula_code = "ber_linear"
    required_fields = ("ebNoLinear", "modulationOrder")

    def _eb_no(self) -> Tuple[float, float]:
        eb_no_linear = self._positive("ebNoLinear")
        return linear_to_db(eb_no_linear), eb_no_linear
