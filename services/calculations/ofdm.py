"""
OFDM peak throughput over a set of parallel resource blocks.

    bits/symbol     = log2(M)
    subcarriers/RB  = RB bandwidth / subcarrier spacing
    bits/RB         = bits/symbol * subcarriers/RB * symbols/RB
    max data rate   = parallel RBs * bits/RB / RB duration
    total bandwidth = parallel RBs * RB bandwidth
    efficiency      = max data rate / total bandwidth
"""

from typing import Any, Dict
import logging
import math

from services.calculations.base import BaseFormulaCalculator
from services.explanations import get_renderer

logger = logging.getLogger(__name__)


class OfdmThroughputCalculator(BaseFormulaCalculator):
    """
    Example (LTE-like):
        - M=16, 180 kHz RB, 15 kHz subcarrier spacing
        - 7 symbols per 0.5 ms RB, 100 parallel RBs
        - 4 * 12 * 7 = 336 bits/RB -> 67.2 Mbps over 18 MHz (3.73 bps/Hz)
    """

    formula_code = "ofdm"
    template_name = "ofdm.txt"
    required_fields = (
        "modulationOrder",
        "rbBandwidth",
        "subcarrierSpacing",
        "symbolsPerRb",
        "rbDuration",
        "parallelRbs",
    )

    def calculate(self) -> Dict[str, Any]:
        modulation_order = self._modulation_order()
        rb_bandwidth = self._positive("rbBandwidth")
        subcarrier_spacing = self._positive("subcarrierSpacing")
        symbols_per_rb = self._non_negative("symbolsPerRb")
        rb_duration = self._positive("rbDuration")
        parallel_rbs = self._positive("parallelRbs")

        bits_per_symbol = math.log2(modulation_order)
        subcarriers_per_rb = rb_bandwidth / subcarrier_spacing
        bits_per_rb = bits_per_symbol * subcarriers_per_rb * symbols_per_rb
        max_data_rate = parallel_rbs * bits_per_rb / rb_duration
        total_bandwidth = parallel_rbs * rb_bandwidth
        spectral_efficiency = max_data_rate / total_bandwidth

        logger.info(
            f"OFDM: {bits_per_rb:.0f} bits/RB x {parallel_rbs:g} RBs / {rb_duration:g}s "
            f"= {max_data_rate / 1e6:.2f}Mbps, {spectral_efficiency:.2f}bps/Hz"
        )

        explanation = get_renderer().render(
            self.template_name,
            {
                "bits_per_symbol": bits_per_symbol,
                "subcarriers_per_rb": subcarriers_per_rb,
                "bits_per_rb": bits_per_rb,
                "rb_duration": rb_duration,
                "parallel_rbs": parallel_rbs,
                "total_bandwidth": total_bandwidth,
                "max_data_rate": max_data_rate,
                "spectral_efficiency": spectral_efficiency,
            },
        )

        return {
            "bitsPerSymbol": bits_per_symbol,
            "subcarriersPerRb": subcarriers_per_rb,
            "bitsPerRb": bits_per_rb,
            "maxDataRate": max_data_rate,
            "totalBandwidth": total_bandwidth,
            "spectralEfficiency": spectral_efficiency,
            "explanation": explanation,
        }
