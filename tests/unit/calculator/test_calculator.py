"""Test the VatCalculator session: calculation, setters and collection rules."""
import pytest

from eu_vat.calculator import VatCalculator
from eu_vat.config import Settings
from eu_vat.exceptions import VatCalculatorError, VatErrorKind
from eu_vat.models.context import CalculationContext
from eu_vat.models.rules import CountryRule, SpecialRules
from eu_vat.rules.defaults import DEFAULT_VAT_RULES, merge_rules


class TestBasicCalculation:
    def test_predefined_rules(self, calculator):
        result = calculator.calculate(24.00, "DE")
        assert result.net_price == 24.00
        assert result.vat_rate == 0.19
        assert result.vat_amount == pytest.approx(4.56)
        assert result.gross_price == pytest.approx(28.56)
        assert result.country_code == "DE"
        assert result.details.rule_applied == "standard"

    def test_custom_rules(self):
        calculator = VatCalculator(rules=merge_rules({"DE": CountryRule(rate=0.50, rates={"high": 0.50, "low": 0.07})}))
        result = calculator.calculate(24.00, "DE")
        assert result.vat_rate == 0.50
        assert result.vat_amount == 12.00
        assert result.gross_price == 36.00

    def test_rules_from_plain_dicts(self):
        calculator = VatCalculator(rules={"de": {"rate": 0.16}})
        assert calculator.calculate(100, "DE").vat_rate == 0.16

    def test_no_country_fails_loudly(self, calculator):
        with pytest.raises(VatCalculatorError) as exc:
            calculator.calculate(25.00)
        assert exc.value.kind is VatErrorKind.INVALID_COUNTRY_CODE

    def test_unvalidated_unknown_country_is_zero(self):
        calculator = VatCalculator(validate_country_codes=False)
        result = calculator.calculate(25.00, "XX")
        assert result.gross_price == 25.00
        assert result.vat_rate == 0
        assert result.details.rule_applied == "no-rule"

    def test_lower_case_country(self, calculator):
        assert calculator.calculate(100, "de").country_code == "DE"

    def test_rate_categories(self, calculator):
        assert calculator.calculate(100, "DE").vat_rate == 0.19
        assert calculator.calculate(100, "DE", rate_category="low").vat_rate == 0.07
        assert calculator.calculate(100, "ES", rate_category="super-reduced").vat_rate == 0.04
        assert calculator.calculate(100, "DE", rate_category="reduced").vat_rate == 0.19


class TestCalculateNet:
    def test_net_from_gross(self, calculator):
        result = calculator.calculate_net(119, "DE")
        assert result.net_price == pytest.approx(100)
        assert result.gross_price == 119
        assert result.vat_amount == pytest.approx(19)
        assert result.vat_rate == 0.19
        assert calculator.get_net_price() == pytest.approx(100)

    def test_alias(self, calculator):
        assert calculator.calculate_from_gross(119, "DE").net_price == pytest.approx(100)

    @pytest.mark.parametrize("country", sorted(DEFAULT_VAT_RULES))
    def test_round_trip(self, calculator, country):
        gross = calculator.calculate(37.5, country).gross_price
        assert calculator.calculate_net(gross, country).net_price == pytest.approx(37.5)

    def test_reverse_charge_from_gross(self):
        calculator = VatCalculator(business_country_code="DE")
        result = calculator.calculate_net(100, "DE", company=True)
        assert result.net_price == 100
        assert result.vat_amount == 0
        assert result.is_company is True


class TestBusinessTransactions:
    def test_same_country_business_is_reverse_charged(self):
        calculator = VatCalculator(business_country_code="DE")
        result = calculator.calculate(24.00, "DE", company=True)
        assert result.vat_rate == 0
        assert result.gross_price == 24.00
        assert result.is_company is True
        assert result.details.reverse_charge is True
        assert result.details.rule_applied == "reverse-charge"

    def test_cross_border_business(self):
        calculator = VatCalculator(business_country_code="DE")
        result = calculator.calculate(100, "FR", company=True)
        assert result.vat_rate == 0.20
        assert result.details.reverse_charge is False

    def test_business_without_home_country(self, calculator):
        result = calculator.calculate(100, "DE", company=True)
        assert result.vat_rate == 0.19
        assert result.details.reverse_charge is False

    def test_invalid_business_country(self):
        with pytest.raises(VatCalculatorError) as exc:
            VatCalculator(business_country_code="XX")
        assert exc.value.kind is VatErrorKind.INVALID_COUNTRY_CODE


class TestSpecialTerritories:
    @pytest.mark.parametrize("country, postal_code, rate", [
        ("DE", "27498", 0),
        ("DE", "78266", 0),
        ("AT", "6691", 0.19),
        ("EL", "63086", 0),
        ("ES", "35001", 0),
        ("PT", "9000", 0.22),
        ("PT", "9500", 0.16),
    ])
    def test_territories(self, calculator, country, postal_code, rate):
        result = calculator.calculate(100, country, postal_code)
        assert result.vat_rate == rate
        assert result.details.postal_code_used == postal_code

    def test_heligoland_gross(self, calculator):
        assert calculator.calculate(24.00, "DE", "27498").gross_price == 24.00

    def test_austrian_enclave_follows_custom_german_rate(self):
        calculator = VatCalculator(rules=merge_rules({"DE": CountryRule(rate=0.16)}))
        assert calculator.calculate(100, "AT", "6992").vat_rate == 0.16

    def test_territory_via_location_lookup(self, calculator):
        assert calculator.get_tax_rate_for_location("DE", "27498") == 0
        assert calculator.get_tax_rate_for_country("DE") == 0.19


class TestSessionState:
    def test_method_chaining(self, calculator):
        result = (
            calculator
            .set_country_code("DE")
            .set_postal_code("10115")
            .set_company(True)
            .set_vat_number("DE123456789")
            .calculate(100)
        )
        assert result.country_code == "DE"
        assert result.is_company is True
        assert result.details.postal_code_used == "10115"
        assert result.details.vat_number_used == "DE123456789"

    def test_arguments_only_overwrite_when_given(self, calculator):
        calculator.set_country_code("FR").set_company(True)
        result = calculator.calculate(100)
        assert result.country_code == "FR"
        assert result.is_company is True

        result = calculator.calculate(100, "DE", company=False)
        assert result.country_code == "DE"
        assert calculator.is_company() is False

    def test_getters(self, calculator):
        calculator.set_country_code("NL").set_postal_code("1012 AB").set_vat_number("NL123456789B12")
        calculator.set_business_country_code("BE")
        assert calculator.get_country_code() == "NL"
        assert calculator.get_postal_code() == "1012 AB"
        assert calculator.get_vat_number() == "NL123456789B12"
        assert calculator.get_business_country_code() == "BE"
        assert calculator.context.country_code == "NL"

    def test_sessions_are_independent(self):
        first = VatCalculator().set_country_code("DE")
        second = VatCalculator()
        assert second.get_country_code() is None
        assert first.get_country_code() == "DE"


class TestValidationToggles:
    @pytest.mark.parametrize("country", ["XX", "ZZ", "US"])
    def test_invalid_country(self, calculator, country):
        with pytest.raises(VatCalculatorError) as exc:
            calculator.set_country_code(country)
        assert exc.value.kind is VatErrorKind.INVALID_COUNTRY_CODE

    def test_country_validation_disabled(self):
        calculator = VatCalculator(validate_country_codes=False)
        assert calculator.set_country_code("XX").get_country_code() == "XX"

    def test_invalid_vat_number(self, calculator):
        for vat_number in ["", "ATU1234567", "DE12345678", "IE1234567X_invalid_suffix"]:
            with pytest.raises(VatCalculatorError) as exc:
                calculator.set_vat_number(vat_number)
            assert exc.value.kind is VatErrorKind.INVALID_VAT_NUMBER

    def test_vat_number_validation_disabled(self):
        calculator = VatCalculator(validate_vat_numbers=False)
        assert calculator.set_vat_number("anything").get_vat_number() == "anything"

    def test_postal_codes_not_validated_by_default(self, calculator):
        calculator.set_country_code("DE").set_postal_code("invalid")
        assert calculator.get_postal_code() == "invalid"

    def test_postal_code_validation(self):
        calculator = VatCalculator(validate_postal_codes=True)
        calculator.set_country_code("DE").set_postal_code("12345")
        calculator.set_country_code("FR").set_postal_code("75001")
        calculator.set_country_code("GB").set_postal_code("SW1A 1AA")

        for country, postal_code in [("DE", "1234"), ("FR", "7501"), ("GB", "SW1A")]:
            with pytest.raises(VatCalculatorError) as exc:
                calculator.set_country_code(country).set_postal_code(postal_code)
            assert exc.value.kind is VatErrorKind.INVALID_POSTAL_CODE

    def test_postal_code_error_message(self):
        calculator = VatCalculator(validate_postal_codes=True)
        calculator.set_country_code("DE")
        with pytest.raises(VatCalculatorError, match="Invalid postal code format for country DE"):
            calculator.set_postal_code("invalid")

    def test_postal_code_without_country_is_accepted(self):
        calculator = VatCalculator(validate_postal_codes=True)
        assert calculator.set_postal_code("anything").get_postal_code() == "anything"

    def test_settings_instance_with_overrides(self):
        calculator = VatCalculator(Settings(validate_postal_codes=True), validate_country_codes=False)
        assert calculator.settings.validate_postal_codes is True
        assert calculator.settings.validate_country_codes is False


class TestShouldCollectVat:
    def test_known_countries(self, calculator):
        assert calculator.should_collect_vat("DE") is True
        assert calculator.should_collect_vat("FR") is True

    @pytest.mark.parametrize("country", ["XX", "", "US"])
    def test_unknown_countries(self, calculator, country):
        assert calculator.should_collect_vat(country) is False

    def test_business_in_home_country(self):
        calculator = VatCalculator(business_country_code="DE").set_company(True)
        assert calculator.should_collect_vat("DE") is False
        assert calculator.should_collect_vat("FR") is True

    def test_required_vat_number_still_collects(self):
        calculator = VatCalculator(
            rules=merge_rules({"GB": CountryRule(rate=0.20, special_rules=SpecialRules(vat_number_required=True))})
        )
        assert calculator.should_collect_vat("GB") is True
        calculator.set_vat_number("GB123456789")
        assert calculator.should_collect_vat("GB") is True

    def test_lower_case_country(self, calculator):
        assert calculator.should_collect_vat("de") is True
        assert calculator.should_collect_vat("xx") is False

    def test_lower_case_business_country_match(self):
        calculator = VatCalculator(business_country_code="DE").set_company(True)
        assert calculator.should_collect_vat("de") is False


class TestExplicitContext:
    def test_uses_given_context(self):
        context = CalculationContext(country_code="DE", postal_code="27498")
        calculator = VatCalculator(context=context)
        assert calculator.context is context
        assert calculator.calculate(100).vat_rate == 0

    def test_setters_write_through_to_context(self):
        context = CalculationContext()
        VatCalculator(context=context).set_country_code("FR").set_company(True)
        assert context.country_code == "FR"
        assert context.company is True

    def test_context_business_country_kept(self):
        context = CalculationContext(business_country_code="AT", company=True)
        calculator = VatCalculator(context=context)
        assert calculator.calculate(100, "AT").details.reverse_charge is True
