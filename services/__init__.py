"""
Services for telecom formula evaluation and explanation rendering.
"""

from .calculations import (
    FORMULA_CALCULATORS,
    evaluate_formula,
    FormulaError,
    FormulaDomainError,
    MissingInputError,
)

__all__ = [
    "FORMULA_CALCULATORS",
    "evaluate_formula",
    "FormulaError",
    "FormulaDomainError",
    "MissingInputError",
]
