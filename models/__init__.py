"""
Pydantic models for the telecom formula API.

This module exports the request/response bodies for each formula family.
"""

from .formulas import (
    FormulaRequest,
    FormulaResponse,
    # Request models
    BerRequest,
    LinearBerRequest,
    ErlangBRequest,
    LinkBudgetRequest,
    OfdmRequest,
    CommSystemRequest,
    CellularRequest,
    # Response models
    BerResponse,
    ErlangBResponse,
    LinkBudgetResponse,
    OfdmResponse,
    CommSystemResponse,
    CellularResponse,
)

__all__ = [
    "FormulaRequest",
    "FormulaResponse",
    # Request models
    "BerRequest",
    "LinearBerRequest",
    "ErlangBRequest",
    "LinkBudgetRequest",
    "OfdmRequest",
    "CommSystemRequest",
    "CellularRequest",
    # Response models
    "BerResponse",
    "ErlangBResponse",
    "LinkBudgetResponse",
    "OfdmResponse",
    "CommSystemResponse",
    "CellularResponse",
]
