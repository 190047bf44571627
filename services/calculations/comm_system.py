"""
Digital communication system rate chain.

Source -> sampler -> quantizer -> source encoder -> channel encoder -> burst.

    fs          = 2 * bandwidth                  (Nyquist sampling)
    R_q         = fs * quantizer bits
    R_src       = R_q * source encoder rate      (compression ratio, <= 1)
    R_ch        = R_src / channel encoder rate   (code rate, <= 1)
    T_burst     = burst size / R_ch
"""

from typing import Any, Dict
import logging

from services.calculations.base import BaseFormulaCalculator
from services.explanations import get_renderer

logger = logging.getLogger(__name__)


class CommSystemCalculator(BaseFormulaCalculator):
    """Bit rate at each stage of the transmit chain and the resulting burst duration."""

    formula_code = "comm_system"
    template_name = "comm_system.txt"
    required_fields = (
        "bandwidth",
        "quantizerBits",
        "sourceEncoderRate",
        "channelEncoderRate",
        "burstSize",
    )

    def calculate(self) -> Dict[str, Any]:
        bandwidth = self._positive("bandwidth")
        quantizer_bits = self._positive("quantizerBits")
        source_encoder_rate = self._positive("sourceEncoderRate")
        channel_encoder_rate = self._positive("channelEncoderRate")
        burst_size = self._non_negative("burstSize")

        sampling_frequency = 2 * bandwidth
        quantizer_rate = sampling_frequency * quantizer_bits
        source_encoder_out_rate = quantizer_rate * source_encoder_rate
        channel_encoder_out_rate = source_encoder_out_rate / channel_encoder_rate
        burst_duration = burst_size / channel_encoder_out_rate

        logger.info(
            f"Comm system: fs={sampling_frequency:g}Hz, Rq={quantizer_rate:g}bps, "
            f"Rsrc={source_encoder_out_rate:g}bps, Rch={channel_encoder_out_rate:g}bps, "
            f"burst={burst_duration:.3e}s"
        )

        explanation = get_renderer().render(
            self.template_name,
            {
                "bandwidth": bandwidth,
                "quantizer_bits": quantizer_bits,
                "source_encoder_rate": source_encoder_rate,
                "channel_encoder_rate": channel_encoder_rate,
                "burst_size": burst_size,
                "sampling_frequency": sampling_frequency,
                "quantizer_rate": quantizer_rate,
                "source_encoder_out_rate": source_encoder_out_rate,
                "channel_encoder_out_rate": channel_encoder_out_rate,
                "burst_duration": burst_duration,
            },
        )

        return {
            "samplingFrequency": sampling_frequency,
            "quantizerRate": quantizer_rate,
            "sourceEncoderOutRate": source_encoder_out_rate,
            "channelEncoderOutRate": channel_encoder_out_rate,
            "burstDuration": burst_duration,
            "explanation": explanation,
        }
