"""
API endpoints for telecom formula evaluation.

One POST route per formula family. Each takes a JSON object of named
numeric fields and returns the computed fields plus an explanation.
Input errors are raised as FormulaError and answered with
400 {"message": ...} by the registered exception handler.
"""

from typing import Any, Dict
import logging

from fastapi import APIRouter, HTTPException

from config import get_settings
from models.formulas import (
    FormulaRequest,
    BerRequest,
    BerResponse,
    LinearBerRequest,
    ErlangBRequest,
    ErlangBResponse,
    LinkBudgetRequest,
    LinkBudgetResponse,
    OfdmRequest,
    OfdmResponse,
    CommSystemRequest,
    CommSystemResponse,
    CellularRequest,
    CellularResponse,
)
from services.calculations import FormulaError, evaluate_formula

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Formulas"])


def _evaluate(formula_code: str, payload: FormulaRequest, **options) -> Dict[str, Any]:
    try:
        return evaluate_formula(formula_code, payload.to_params(), **options)
    except FormulaError:
        raise
    except Exception as e:
        logger.error(f"{formula_code} evaluation failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"{formula_code} evaluation failed: {str(e)}"
        )


@router.post("/ber", response_model=BerResponse)
async def calculate_ber(payload: BerRequest):
    """
    Bit error rate of M-PSK at an Eb/No given in dB.

    This route only accepts `ebNoDb`. Clients that used to POST
    `{ebNoLinear, modulationOrder}` here must move to `/api/ber/linear`;
    sending `ebNoLinear` to this route returns 400 "Missing required input".

    **Example Request:**
    ```json
    {"ebNoDb": 10, "modulationOrder": 4}
    ```

    **Example Response:**
    ```json
    {
      "ber": 3.87e-06,
      "ebNoDb": 10.0,
      "ebNoLinear": 10.0,
      "modulationOrder": 4,
      "modulation": "QPSK",
      "severity": "moderate",
      "explanation": "For a QPSK signal with an Eb/No of 10.0 dB, ..."
    }
    ```
    """
    return _evaluate("ber", payload)


@router.post("/ber/linear", response_model=BerResponse)
async def calculate_ber_linear(payload: LinearBerRequest):
    """
    Bit error rate of M-PSK at an Eb/No given as a linear power ratio.

    This is the contract the frontend previously sent to `/api/ber`.

    Missing fields return
    400 {"message": "Missing required input: ebNoLinear or modulationOrder"}.
    """
    return _evaluate("ber_linear", payload)


@router.post("/erlang-b", response_model=ErlangBResponse)
async def calculate_erlang_b(payload: ErlangBRequest):
    """
    Erlang-B blocking probability and the channels needed for a blocking target.

    **Example Request:**
    ```json
    {"traffic": 10, "channels": 15, "maxBlocking": 0.02}
    ```

    **Example Response:**
    ```json
    {
      "blockingProbability": 0.0365,
      "blockingPercent": 3.65,
      "requiredChannels": 17,
      "converged": true,
      "explanation": "With 10.00 Erlangs of offered traffic on 15 channels, ..."
    }
    ```

    `channels` may not exceed ERLANG_B_MAX_CHANNELS. `converged` is false
    when no channel count up to that cap meets the target; `requiredChannels`
    is then the cap.
    """
    return _evaluate(
        "erlang_b",
        payload,
        max_channels=get_settings().erlang_b_max_channels,
    )


@router.post("/link-budget", response_model=LinkBudgetResponse)
async def calculate_link_budget(payload: LinkBudgetRequest):
    """
    Required transmit power (dBW and W) to close a link.

    Temperature in K, data rate in bps; all gains, losses, margins and the
    required Eb/No in dB.
    """
    return _evaluate("link_budget", payload)


@router.post("/ofdm", response_model=OfdmResponse)
async def calculate_ofdm(payload: OfdmRequest):
    """
    OFDM peak data rate and spectral efficiency.

    Bandwidths and spacing in Hz, RB duration in seconds.
    """
    return _evaluate("ofdm", payload)


@router.post("/comm-system", response_model=CommSystemResponse)
async def calculate_comm_system(payload: CommSystemRequest):
    """
    Bit rates through sampler, quantizer, source and channel encoders, and
    the resulting burst duration. Bandwidth in Hz, burst size in bits.
    """
    return _evaluate("comm_system", payload)


@router.post("/cellular", response_model=CellularResponse)
async def calculate_cellular(payload: CellularRequest):
    """
    Cell count, offered traffic per cell and frequency-reuse cluster size.

    Call duration in minutes, required SIR in dB.
    """
    return _evaluate("cellular", payload)
