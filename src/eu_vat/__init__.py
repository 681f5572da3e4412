"""European VAT rate resolution, price calculation and VIES number checks."""

from .calculator import VatCalculator
from .config import Settings
from .exceptions import VatCalculatorError, VatErrorKind
from .models.results import CalculationDetails, CalculationResult, ValidationResult
from .models.rules import CountryRule, RateCategory, RuleTable, SpecialRules
from .rules.defaults import DEFAULT_VAT_RULES, merge_rules

__all__ = [
    "DEFAULT_VAT_RULES",
    "CalculationDetails",
    "CalculationResult",
    "CountryRule",
    "RateCategory",
    "RuleTable",
    "Settings",
    "SpecialRules",
    "ValidationResult",
    "VatCalculator",
    "VatCalculatorError",
    "VatErrorKind",
    "merge_rules",
]
