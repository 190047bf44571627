"""
Base calculator and input guards for the telecom formula families.

Every formula family is a BaseFormulaCalculator subclass constructed from the
parsed request parameters (camelCase keys, exactly as they arrive in the JSON
body). Construction checks that the required fields are present; calculate()
checks each value's domain before evaluating the closed-form chain.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Tuple
import logging
import math

logger = logging.getLogger(__name__)


class FormulaError(Exception):
    """Base exception for formula evaluation."""
    pass


class MissingInputError(FormulaError):
    """Raised when one or more required input fields are absent."""

    def __init__(self, fields: Iterable[str]):
        self.fields = tuple(fields)
        super().__init__(f"Missing required input: {_join_fields(self.fields)}")


class FormulaDomainError(FormulaError):
    """Raised when an input value lies outside the formula's domain."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


def _join_fields(fields: Tuple[str, ...]) -> str:
    if len(fields) <= 1:
        return "".join(fields)
    return f"{', '.join(fields[:-1])} or {fields[-1]}"


def is_power_of_two(value: float) -> bool:
    """True for 1, 2, 4, 8, ... given as int or integral float."""
    if not float(value).is_integer() or value < 1:
        return False
    n = int(value)
    return n & (n - 1) == 0


class BaseFormulaCalculator(ABC):
    """Abstract base for formula family calculators."""

    formula_code: str = ""
    template_name: str = ""
    required_fields: Tuple[str, ...] = ()

    def __init__(self, params: dict):
        self.params = params
        missing = [f for f in self.required_fields if params.get(f) is None]
        if missing:
            logger.warning(
                f"{self.formula_code}: missing required input {missing}"
            )
            raise MissingInputError(self.required_fields)

    # ------------------------------------------------------------------
    # Domain guards
    # ------------------------------------------------------------------

    def _number(self, field: str) -> float:
        value = self.params[field]
        if isinstance(value, bool):
            raise FormulaDomainError(field, "must be a number")
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise FormulaDomainError(field, "must be a number")
        if not math.isfinite(value):
            raise FormulaDomainError(field, "must be a finite number")
        return value

    def _positive(self, field: str) -> float:
        value = self._number(field)
        if value <= 0:
            raise FormulaDomainError(field, f"must be greater than 0 (got {value})")
        return value

    def _non_negative(self, field: str) -> float:
        value = self._number(field)
        if value < 0:
            raise FormulaDomainError(field, f"must be 0 or greater (got {value})")
        return value

    def _non_negative_integer(self, field: str) -> int:
        value = self._non_negative(field)
        if not value.is_integer():
            raise FormulaDomainError(field, f"must be a whole number (got {value})")
        return int(value)

    def _modulation_order(self, field: str = "modulationOrder") -> int:
        value = self._number(field)
        if value < 2 or not is_power_of_two(value):
            raise FormulaDomainError(
                field, f"must be a power of two of at least 2 (got {value:g})"
            )
        return int(value)

    @abstractmethod
    def calculate(self) -> Dict[str, Any]:
        """
        Evaluate the formula chain.

        Returns:
            Dict of camelCase output fields (full precision) plus an
            'explanation' string.
        """
        pass
