"""
Pydantic models for the formula evaluation endpoints.

Request fields are all Optional at the schema level: a missing field is
reported by the calculator with the fixed "Missing required input: ..."
message instead of a schema error. Fields are StrictFloat, so JSON booleans
and numeric strings are rejected rather than coerced. JSON names are
camelCase; Python attributes are snake_case.
"""

from pydantic import BaseModel, Field, ConfigDict, StrictFloat
from pydantic.alias_generators import to_camel
from typing import Optional, Dict, Any


class FormulaRequest(BaseModel):
    """Base for formula request bodies."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_params(self) -> Dict[str, Any]:
        """Input fields keyed by their JSON (camelCase) names."""
        return self.model_dump(by_alias=True)


class FormulaResponse(BaseModel):
    """Base for formula response bodies."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    explanation: str = Field(..., description="Natural-language summary of the result")


# =============================================================================
# BER
# =============================================================================

class BerRequest(FormulaRequest):
    """Request body for POST /api/ber (Eb/No in dB)."""

    eb_no_db: Optional[StrictFloat] = Field(None, description="Eb/No in dB")
    modulation_order: Optional[StrictFloat] = Field(
        None, description="M-PSK order M (2, 4, 8, 16, ...)"
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"ebNoDb": 10, "modulationOrder": 4}}
    )


class LinearBerRequest(FormulaRequest):
    """Request body for POST /api/ber/linear (Eb/No as a linear ratio)."""

    eb_no_linear: Optional[StrictFloat] = Field(None, description="Eb/No as a linear power ratio (> 0)")
    modulation_order: Optional[StrictFloat] = Field(
        None, description="M-PSK order M (2, 4, 8, 16, ...)"
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"ebNoLinear": 10, "modulationOrder": 4}}
    )


class BerResponse(FormulaResponse):
    ber: float = Field(..., description="Bit error rate")
    eb_no_db: float = Field(..., description="Eb/No in dB")
    eb_no_linear: float = Field(..., description="Eb/No as a linear ratio")
    modulation_order: int
    modulation: str = Field(..., description="Modulation label (BPSK, QPSK, 8-PSK, ...)")
    severity: str = Field(..., description="high, moderate or low error rate band")


# =============================================================================
# Erlang-B
# =============================================================================

class ErlangBRequest(FormulaRequest):
    """Request body for POST /api/erlang-b."""

    traffic: Optional[StrictFloat] = Field(None, description="Offered traffic in Erlangs (>= 0)")
    channels: Optional[StrictFloat] = Field(None, description="Number of channels (whole number >= 0)")
    max_blocking: Optional[StrictFloat] = Field(
        None, description="Target blocking probability (0 < p <= 1)"
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"traffic": 10, "channels": 15, "maxBlocking": 0.02}}
    )


class ErlangBResponse(FormulaResponse):
    blocking_probability: float
    blocking_percent: float
    required_channels: int = Field(..., description="Smallest channel count meeting maxBlocking")
    converged: bool = Field(
        ..., description="False when the search hit its channel cap (result approximate)"
    )


# =============================================================================
# Link budget
# =============================================================================

class LinkBudgetRequest(FormulaRequest):
    """Request body for POST /api/link-budget. Gains, losses and margins in dB."""

    temperature: Optional[StrictFloat] = Field(None, description="System noise temperature (K)")
    data_rate: Optional[StrictFloat] = Field(None, description="Data rate (bps)")
    noise_figure: Optional[StrictFloat] = Field(None, description="Receiver noise figure (dB)")
    required_eb_no: Optional[StrictFloat] = Field(None, description="Required Eb/No (dB)")
    fade_margin: Optional[StrictFloat] = Field(None, description="Fade margin (dB)")
    path_loss: Optional[StrictFloat] = Field(None, description="Path loss (dB)")
    other_losses: Optional[StrictFloat] = Field(None, description="Other losses (dB)")
    tx_gain: Optional[StrictFloat] = Field(None, description="Transmit antenna gain (dBi)")
    rx_gain: Optional[StrictFloat] = Field(None, description="Receive antenna gain (dBi)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "temperature": 290,
                "dataRate": 1e6,
                "noiseFigure": 5,
                "requiredEbNo": 10,
                "fadeMargin": 10,
                "pathLoss": 150,
                "otherLosses": 3,
                "txGain": 20,
                "rxGain": 20,
            }
        }
    )


class LinkBudgetResponse(FormulaResponse):
    noise_power_dbw: float
    sensitivity_dbw: float
    required_rx_power_dbw: float
    required_tx_power_dbw: float
    required_tx_power_w: float


# =============================================================================
# OFDM
# =============================================================================

class OfdmRequest(FormulaRequest):
    """Request body for POST /api/ofdm."""

    modulation_order: Optional[StrictFloat] = Field(None, description="Constellation size M (power of two)")
    rb_bandwidth: Optional[StrictFloat] = Field(None, description="Resource block bandwidth (Hz)")
    subcarrier_spacing: Optional[StrictFloat] = Field(None, description="Subcarrier spacing (Hz)")
    symbols_per_rb: Optional[StrictFloat] = Field(None, description="OFDM symbols per resource block")
    rb_duration: Optional[StrictFloat] = Field(None, description="Resource block duration (s)")
    parallel_rbs: Optional[StrictFloat] = Field(None, description="Resource blocks transmitted in parallel")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "modulationOrder": 16,
                "rbBandwidth": 180e3,
                "subcarrierSpacing": 15e3,
                "symbolsPerRb": 7,
                "rbDuration": 0.5e-3,
                "parallelRbs": 100,
            }
        }
    )


class OfdmResponse(FormulaResponse):
    bits_per_symbol: float
    subcarriers_per_rb: float
    bits_per_rb: float
    max_data_rate: float = Field(..., description="bps")
    total_bandwidth: float = Field(..., description="Hz")
    spectral_efficiency: float = Field(..., description="bps/Hz")


# =============================================================================
# Communication system rate chain
# =============================================================================

class CommSystemRequest(FormulaRequest):
    """Request body for POST /api/comm-system."""

    bandwidth: Optional[StrictFloat] = Field(None, description="Source bandwidth (Hz)")
    quantizer_bits: Optional[StrictFloat] = Field(None, description="Bits per quantized sample")
    source_encoder_rate: Optional[StrictFloat] = Field(None, description="Source encoder compression rate")
    channel_encoder_rate: Optional[StrictFloat] = Field(None, description="Channel code rate")
    burst_size: Optional[StrictFloat] = Field(None, description="Bits per burst")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "bandwidth": 4000,
                "quantizerBits": 8,
                "sourceEncoderRate": 0.5,
                "channelEncoderRate": 0.5,
                "burstSize": 1000,
            }
        }
    )


class CommSystemResponse(FormulaResponse):
    sampling_frequency: float = Field(..., description="sps")
    quantizer_rate: float = Field(..., description="bps")
    source_encoder_out_rate: float = Field(..., description="bps")
    channel_encoder_out_rate: float = Field(..., description="bps")
    burst_duration: float = Field(..., description="s")


# =============================================================================
# Cellular sizing
# =============================================================================

class CellularRequest(FormulaRequest):
    """Request body for POST /api/cellular."""

    coverage_area: Optional[StrictFloat] = Field(None, description="Area to cover (km²)")
    cell_radius: Optional[StrictFloat] = Field(None, description="Hexagonal cell radius (km)")
    subscribers: Optional[StrictFloat] = Field(None, description="Number of subscribers")
    calls_per_hour: Optional[StrictFloat] = Field(None, description="Calls per subscriber per busy hour")
    call_duration: Optional[StrictFloat] = Field(None, description="Mean call duration (minutes)")
    required_sir: Optional[StrictFloat] = Field(None, description="Required signal-to-interference ratio (dB)")
    path_loss_exponent: Optional[StrictFloat] = Field(None, description="Path-loss exponent n")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "coverageArea": 1000,
                "cellRadius": 2,
                "subscribers": 50000,
                "callsPerHour": 2,
                "callDuration": 3,
                "requiredSir": 18,
                "pathLossExponent": 4,
            }
        }
    )


class CellularResponse(FormulaResponse):
    cell_area: float
    num_cells: int
    traffic_per_user: float = Field(..., description="Erlangs")
    total_traffic: float = Field(..., description="Erlangs")
    traffic_per_cell: float = Field(..., description="Erlangs")
    sir_linear: float
    cluster_size: int
