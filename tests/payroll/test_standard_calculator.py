from dayflow.payroll.calculator.standard_calculator import StandardPayrollCalculator


def test_standard_calculator_adds_allowances_and_subtracts_deductions():
    calc = StandardPayrollCalculator()
    assert calc.net_salary(base_salary=1000, allowances=200, deductions=50) == 1150.00


def test_standard_calculator_rounds_to_cents():
    calc = StandardPayrollCalculator()
    assert calc.net_salary(base_salary=0.1, allowances=0.2, deductions=0) == 0.3
    assert calc.net_salary(base_salary=100.005, allowances=0, deductions=0) == 100.01


def test_standard_calculator_allows_negative_net():
    calc = StandardPayrollCalculator()
    assert calc.net_salary(base_salary=100, allowances=0, deductions=150) == -50.0
