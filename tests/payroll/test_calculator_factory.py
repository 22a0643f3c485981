import pytest

from src.garment_payroll.garment_payroll.core.enums import RuleStyle
from src.garment_payroll.garment_payroll.core.exceptions import ValidationError
from src.garment_payroll.garment_payroll.payroll.calculator.factory import SalaryCalculatorFactory
from src.garment_payroll.garment_payroll.payroll.calculator.garut_calculator import GarutSalaryCalculator
from src.garment_payroll.garment_payroll.payroll.calculator.general_calculator import GeneralSalaryCalculator


def test_factory_garut_style():
    assert isinstance(SalaryCalculatorFactory().for_style(RuleStyle.GARUT), GarutSalaryCalculator)


def test_factory_general_styles():
    staff = SalaryCalculatorFactory().for_style("general_staff")
    factory = SalaryCalculatorFactory().for_style(" GENERAL_FACTORY ")

    assert isinstance(staff, GeneralSalaryCalculator)
    assert not staff.deduct_holidays
    assert isinstance(factory, GeneralSalaryCalculator)
    assert factory.deduct_holidays


def test_factory_rejects_unknown_style():
    with pytest.raises(ValidationError):
        SalaryCalculatorFactory().for_style("borongan")
