from __future__ import annotations

import pytest

from dayflow.core.enums import PayrollStatus, Role
from dayflow.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from dayflow.core.identity import Identity
from dayflow.payroll.model import PayrollRecord, SalarySlip
from dayflow.payroll.service import PayrollService

ADMIN = Identity(user_id=1, role=Role.ADMIN)
EMPLOYEE = Identity(user_id=3, role=Role.EMPLOYEE)


class FakePayrollRepo:
    def __init__(self):
        self.records: dict[int, PayrollRecord] = {}

    def save_record(self, *, user_id, month, year, base_salary, allowances, deductions, net_salary, status):
        existing = self.get_for_period(user_id=user_id, month=month, year=year)
        pid = existing.payroll_id if existing else len(self.records) + 1
        self.records[pid] = PayrollRecord(
            payroll_id=pid,
            user_id=user_id,
            month=month,
            year=year,
            base_salary=base_salary,
            allowances=allowances,
            deductions=deductions,
            net_salary=net_salary,
            status=status,
        )
        return pid

    def get_record(self, *, payroll_id):
        return self.records.get(payroll_id)

    def get_for_period(self, *, user_id, month, year):
        for r in self.records.values():
            if (r.user_id, r.month, r.year) == (user_id, month, year):
                return r
        return None

    def set_status(self, *, payroll_id, status):
        r = self.records[payroll_id]
        self.records[payroll_id] = PayrollRecord(**{**r.__dict__, "status": status})
        return True

    def list_records(self, *, user_id=None, month=None, year=None):
        return [
            {"id": r.payroll_id, "user_id": r.user_id, "month": r.month, "year": r.year}
            for r in self.records.values()
            if (user_id is None or r.user_id == user_id)
            and (month is None or r.month == month)
            and (year is None or r.year == year)
        ]


class FakeUsers:
    def __init__(self, employees):
        self.employees = employees

    def get_by_id(self, user_id):
        return self.employees.get(user_id)

    def get_employee(self, user_id):
        return self.employees.get(user_id)


@pytest.fixture
def svc():
    users = FakeUsers(
        {
            3: {"id": 3, "employee_id": "EMP003", "first_name": "Alice", "last_name": "Ng", "department": "Engineering"},
            4: {"id": 4, "employee_id": "EMP004", "first_name": "Bob", "last_name": "Stone", "department": None},
        }
    )
    return PayrollService(FakePayrollRepo(), users)


def _record(**overrides):
    record = {"user_id": 3, "month": 6, "year": 2026, "base_salary": 1000, "allowances": 200, "deductions": 50}
    record.update(overrides)
    return record


def test_create_computes_net_salary(svc):
    pid, net = svc.create(ADMIN, _record())

    assert pid == 1
    assert net == 1150.0


def test_create_defaults_allowances_deductions_and_status(svc):
    pid, net = svc.create(ADMIN, _record(allowances=None, deductions=""))

    assert net == 1000.0
    assert svc._payroll.get_record(payroll_id=pid).status == PayrollStatus.PENDING


def test_create_rounds_to_cents(svc):
    _, net = svc.create(ADMIN, _record(base_salary="1000.005", allowances=0, deductions=0))

    assert net == 1000.01


def test_same_period_overwrites(svc):
    first, _ = svc.create(ADMIN, _record())
    second, net = svc.create(ADMIN, _record(base_salary=2000))

    assert first == second
    assert net == 2150.0
    assert len(svc._payroll.records) == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"user_id": None},
        {"month": 13},
        {"month": 0},
        {"year": "soon"},
        {"base_salary": None},
        {"base_salary": -1},
        {"deductions": "nan"},
        {"status": "refunded"},
    ],
)
def test_create_validates_input(svc, overrides):
    with pytest.raises(ValidationError):
        svc.create(ADMIN, _record(**overrides))


def test_create_for_unknown_employee_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.create(ADMIN, _record(user_id=99))


def test_employee_cannot_create_or_set_status(svc):
    with pytest.raises(AuthorizationError):
        svc.create(EMPLOYEE, _record())
    pid, _ = svc.create(ADMIN, _record())
    with pytest.raises(AuthorizationError):
        svc.set_status(EMPLOYEE, pid, "paid")


def test_set_status_toggles(svc):
    pid, _ = svc.create(ADMIN, _record())

    assert svc.set_status(ADMIN, pid, "paid") == "Payroll status updated to paid"
    assert svc._payroll.get_record(payroll_id=pid).status == PayrollStatus.PAID
    svc.set_status(ADMIN, pid, "pending")
    assert svc._payroll.get_record(payroll_id=pid).status == PayrollStatus.PENDING


def test_set_status_unknown_record(svc):
    with pytest.raises(NotFoundError):
        svc.set_status(ADMIN, 42, "paid")
    with pytest.raises(ValidationError):
        svc.set_status(ADMIN, 42, "void")


def test_list_dispatches_on_role(svc):
    svc.create(ADMIN, _record())
    svc.create(ADMIN, _record(user_id=4))

    assert [r["user_id"] for r in svc.list(EMPLOYEE)] == [3]
    assert len(svc.list(ADMIN)) == 2
    assert [r["user_id"] for r in svc.list(ADMIN, user_id="4")] == [4]


def test_list_all_is_privileged(svc):
    with pytest.raises(AuthorizationError):
        svc.list_all(EMPLOYEE)


def test_salary_slip_for_own_period(svc):
    svc.create(ADMIN, _record())

    slip = svc.salary_slip(EMPLOYEE, 3, month="6", year="2026")

    assert slip.net_salary == 1150.0
    assert slip.employee["employee_id"] == "EMP003"
    assert slip.to_dict()["status"] == "pending"


def test_salary_slip_of_someone_else_is_forbidden(svc):
    svc.create(ADMIN, _record(user_id=4))

    with pytest.raises(AuthorizationError):
        svc.salary_slip(EMPLOYEE, 4, month=6, year=2026)


def test_salary_slip_missing_period_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.salary_slip(ADMIN, 3, month=1, year=2026)
    with pytest.raises(NotFoundError):
        svc.salary_slip(ADMIN, 99, month=1, year=2026)


def test_render_salary_slip():
    slip = SalarySlip(
        employee={"employee_id": "EMP004", "first_name": "Bob", "last_name": "Stone", "department": None},
        month=2,
        year=2026,
        base_salary=3000.0,
        allowances=0.0,
        deductions=125.5,
        net_salary=2874.5,
        status=PayrollStatus.PAID,
    )

    text = PayrollService.render_salary_slip(slip)

    assert "Employee: Bob Stone" in text
    assert "Department: N/A" in text
    assert "Month: 2/2026" in text
    assert "Deductions: $125.50" in text
    assert "Net Salary: $2874.50" in text
    assert text.endswith("Status: paid\n")
    assert PayrollService.slip_filename(slip) == "salary-slip-EMP004-2-2026.txt"
