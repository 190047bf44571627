"""
Calculation modules for the telecom formula families.

Named Calculator Registry pattern: each formula family is a separate class,
dispatched via FORMULA_CALCULATORS keyed by the formula code that the API
route passes in.
"""

from typing import Any, Dict
import logging
import math

from services.calculations.base import (
    BaseFormulaCalculator,
    FormulaError,
    FormulaDomainError,
    MissingInputError,
)
from services.calculations.ber import BerCalculator, LinearBerCalculator
from services.calculations.erlang_b import ErlangBCalculator
from services.calculations.link_budget import LinkBudgetCalculator
from services.calculations.ofdm import OfdmThroughputCalculator
from services.calculations.comm_system import CommSystemCalculator
from services.calculations.cellular import CellularSizingCalculator

logger = logging.getLogger(__name__)


# =============================================================================
# Calculator Registry
# =============================================================================

FORMULA_CALCULATORS: Dict[str, type] = {
    'ber': BerCalculator,
    'ber_linear': LinearBerCalculator,
    'erlang_b': ErlangBCalculator,
    'link_budget': LinkBudgetCalculator,
    'ofdm': OfdmThroughputCalculator,
    'comm_system': CommSystemCalculator,
    'cellular': CellularSizingCalculator,
}


def evaluate_formula(formula_code: str, params: dict, **options) -> Dict[str, Any]:
    """
    Dispatch to the calculator registered for formula_code.

    Args:
        formula_code: Registry key ('ber', 'erlang_b', ...).
        params: Input fields keyed by their camelCase request names.
        **options: Extra constructor arguments for the calculator
                   (e.g. max_channels for 'erlang_b').

    Returns:
        Result dict with numeric fields and 'explanation'.

    Raises:
        ValueError: Unknown formula code.
        MissingInputError: A required field is absent.
        FormulaDomainError: An input (or the result it produces) is out of range.
    """
    calculator_class = FORMULA_CALCULATORS.get(formula_code)
    if not calculator_class:
        raise ValueError(f"Unknown formula: {formula_code}")

    calculator = calculator_class(params, **options)
    try:
        result = calculator.calculate()
    except OverflowError:
        logger.warning(f"{formula_code}: result overflowed for inputs {params}")
        raise FormulaDomainError("input", "result exceeds the floating-point range")
    except ZeroDivisionError:
        logger.warning(f"{formula_code}: intermediate value underflowed to zero for inputs {params}")
        raise FormulaDomainError("input", "an intermediate value underflows to zero")

    for field, value in result.items():
        if isinstance(value, float) and not math.isfinite(value):
            logger.warning(f"{formula_code}: non-finite {field} for inputs {params}")
            raise FormulaDomainError(field, "result is not a finite number")

    return result


__all__ = [
    "BaseFormulaCalculator",
    "FormulaError",
    "FormulaDomainError",
    "MissingInputError",
    "FORMULA_CALCULATORS",
    "evaluate_formula",
]
