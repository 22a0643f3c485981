from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import RuleStyle
from ...core.exceptions import ValidationError
from .base import SalaryCalculator
from .garut_calculator import GarutSalaryCalculator
from .general_calculator import GeneralSalaryCalculator


@dataclass
class SalaryCalculatorFactory:
    """Factory Pattern: choose the salary strategy for a factory-site convention."""

    def for_style(self, style: RuleStyle | str) -> SalaryCalculator:
        try:
            style = RuleStyle(style.strip().lower())
        except (AttributeError, ValueError) as ex:
            raise ValidationError(f"Unknown payroll rule style: {style!r}") from ex

        if style == RuleStyle.GARUT:
            return GarutSalaryCalculator()
        if style == RuleStyle.GENERAL_FACTORY:
            return GeneralSalaryCalculator(deduct_holidays=True)
        return GeneralSalaryCalculator()
