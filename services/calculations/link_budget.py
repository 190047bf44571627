"""
Link budget: transmit power needed to close a digital link.

All terms in dB / dBW:

    N        = -228.6 + 10*log10(T) + 10*log10(Rb)      (kTB noise, k in dBW/K/Hz)
    S        = N + NF + Eb/No_req                        (receiver sensitivity)
    Prx_req  = S + fade margin
    Ptx_req  = Prx_req + path loss + other losses - Gtx - Grx
    Ptx_W    = 10^(Ptx_req / 10)
"""

from typing import Any, Dict
import logging
import math

from services.calculations.base import BaseFormulaCalculator
from services.calculations.special_functions import db_to_linear
from services.explanations import get_renderer

logger = logging.getLogger(__name__)

# Boltzmann's constant, 10*log10(1.38e-23 W/K/Hz)
BOLTZMANN_DBW = -228.6


def noise_power_dbw(temperature_k: float, data_rate_bps: float) -> float:
    return BOLTZMANN_DBW + 10 * math.log10(temperature_k) + 10 * math.log10(data_rate_bps)


class LinkBudgetCalculator(BaseFormulaCalculator):
    """Required transmit power from receiver noise, margins, losses and gains."""

    formula_code = "link_budget"
    template_name = "link_budget.txt"
    required_fields = (
        "temperature",
        "dataRate",
        "noiseFigure",
        "requiredEbNo",
        "fadeMargin",
        "pathLoss",
        "otherLosses",
        "txGain",
        "rxGain",
    )

    def calculate(self) -> Dict[str, Any]:
        temperature = self._positive("temperature")
        data_rate = self._positive("dataRate")
        noise_figure = self._number("noiseFigure")
        required_eb_no = self._number("requiredEbNo")
        fade_margin = self._number("fadeMargin")
        path_loss = self._number("pathLoss")
        other_losses = self._number("otherLosses")
        tx_gain = self._number("txGain")
        rx_gain = self._number("rxGain")

        noise_power = noise_power_dbw(temperature, data_rate)
        sensitivity = noise_power + noise_figure + required_eb_no
        required_rx_power = sensitivity + fade_margin
        required_tx_power_dbw = (
            required_rx_power + path_loss + other_losses - tx_gain - rx_gain
        )
        required_tx_power_w = db_to_linear(required_tx_power_dbw)

        logger.info(
            f"Link budget: N={noise_power:.2f}dBW, S={sensitivity:.2f}dBW, "
            f"Prx={required_rx_power:.2f}dBW, Ptx={required_tx_power_dbw:.2f}dBW "
            f"({required_tx_power_w:.4g}W)"
        )

        explanation = get_renderer().render(
            self.template_name,
            {
                "temperature": temperature,
                "data_rate": data_rate,
                "noise_figure": noise_figure,
                "required_eb_no": required_eb_no,
                "fade_margin": fade_margin,
                "path_loss": path_loss,
                "other_losses": other_losses,
                "total_gain": tx_gain + rx_gain,
                "noise_power_dbw": noise_power,
                "sensitivity_dbw": sensitivity,
                "required_rx_power_dbw": required_rx_power,
                "required_tx_power_dbw": required_tx_power_dbw,
                "required_tx_power_w": required_tx_power_w,
            },
        )

        return {
            "noisePowerDbw": noise_power,
            "sensitivityDbw": sensitivity,
            "requiredRxPowerDbw": required_rx_power,
            "requiredTxPowerDbw": required_tx_power_dbw,
            "requiredTxPowerW": required_tx_power_w,
            "explanation": explanation,
        }
