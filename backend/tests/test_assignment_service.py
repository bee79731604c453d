"""
Tests for app/services/data/assignment_service.py - staffing with allocation enforcement.
"""
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.assignment import EmployeeProject
from app.models.employee import Employee
from app.models.project import Project
from app.schemas.assignment import AssignmentCreate, AssignmentUpdate, BillingType
from app.services.data.assignment_service import (
    AssignmentService,
    serialize_assignment,
    summarize_allocation,
)
from tests.utils.staffing_factories import make_amendment, make_assignment, scalars_result


@pytest.fixture
def employee():
    employee = MagicMock()
    employee.id = 1
    employee.last_active_date = None
    return employee


@pytest.fixture
def project():
    project = MagicMock()
    project.id = 5
    project.po_number = "PO-PROJECT"
    return project


@pytest.fixture
def session(mock_db_session, employee, project):
    """Session whose get() resolves the employee and project fixtures by model."""
    async def get(model, record_id):
        if model is Employee and record_id == employee.id:
            return employee
        if model is Project and record_id == project.id:
            return project
        return None

    mock_db_session.get.side_effect = get
    return mock_db_session


def added_assignments(session):
    return [c.args[0] for c in session.add.call_args_list if isinstance(c.args[0], EmployeeProject)]


class TestAdd:

    @pytest.mark.asyncio
    async def test_add_within_capacity(self, session, today):
        session.execute.return_value = scalars_result([make_assignment(1, 40, project_id=2)])
        service = AssignmentService(session, today)

        await service.add(5, AssignmentCreate(employee_id=1, allocation_percentage=Decimal("60"), start_date=date(2024, 6, 1)))

        (created,) = added_assignments(session)
        assert created.allocation_percentage == Decimal("60.00")
        assert created.po_number == "PO-PROJECT"
        assert created.billing == "Monthly"
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_explicit_po_number_is_kept(self, session, today):
        session.execute.return_value = scalars_result([])
        service = AssignmentService(session, today)

        await service.add(
            5,
            AssignmentCreate(
                employee_id=1,
                allocation_percentage=Decimal("50"),
                start_date=date(2024, 6, 1),
                po_number=" PO-OWN ",
                billing=BillingType.HOURLY,
            ),
        )

        (created,) = added_assignments(session)
        assert created.po_number == "PO-OWN"
        assert created.billing == "Hourly"

    @pytest.mark.asyncio
    async def test_add_over_capacity_is_rejected(self, session, today):
        session.execute.return_value = scalars_result([
            make_assignment(1, 40, project_id=2),
            make_assignment(2, 50, project_id=3, end_date=date(2024, 6, 30)),
        ])
        service = AssignmentService(session, today)

        with pytest.raises(ValidationError, match="exceeds 100%"):
            await service.add(5, AssignmentCreate(employee_id=1, allocation_percentage=Decimal("15"), start_date=date(2024, 7, 1)))

        assert added_assignments(session) == []
        session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_link_is_a_conflict(self, session, today):
        session.execute.return_value = scalars_result([make_assignment(1, 20, project_id=5)])
        service = AssignmentService(session, today)

        with pytest.raises(ConflictError):
            await service.add(5, AssignmentCreate(employee_id=1, allocation_percentage=Decimal("10"), start_date=date(2024, 6, 1)))

    @pytest.mark.asyncio
    async def test_end_before_start_is_rejected(self, session, today):
        service = AssignmentService(session, today)

        with pytest.raises(ValidationError, match="End date cannot be before start date"):
            await service.add(
                5,
                AssignmentCreate(employee_id=1, start_date=date(2024, 6, 1), end_date=date(2024, 5, 1)),
            )

    @pytest.mark.asyncio
    async def test_unknown_employee(self, session, today):
        service = AssignmentService(session, today)

        with pytest.raises(NotFoundError, match="Employee 42 not found"):
            await service.add(5, AssignmentCreate(employee_id=42, start_date=date(2024, 6, 1)))


class TestUpdate:

    @pytest.fixture
    def links(self, session):
        first = make_assignment(1, 60, project_id=5)
        second = make_assignment(2, 30, project_id=6)
        # _get_link picks the first row; the allocation check reads both
        session.execute.return_value = scalars_result([first, second])
        return first, second

    @pytest.mark.asyncio
    async def test_edit_excludes_its_own_share(self, session, links, today):
        first, _ = links
        service = AssignmentService(session, today)

        await service.update(1, 5, AssignmentUpdate(allocation_percentage=Decimal("70")))

        assert first.allocation_percentage == Decimal("70.00")
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_edit_past_capacity_is_rejected(self, session, links, today):
        first, _ = links
        service = AssignmentService(session, today)

        with pytest.raises(ValidationError):
            await service.update(1, 5, AssignmentUpdate(allocation_percentage=Decimal("71")))

        assert first.allocation_percentage == Decimal("60")
        session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_clearing_start_date_is_rejected(self, session, links, today):
        service = AssignmentService(session, today)

        with pytest.raises(ValidationError, match="Start date is required"):
            await service.update(1, 5, AssignmentUpdate(start_date=None))

    @pytest.mark.asyncio
    async def test_edit_refreshes_last_active_date(self, session, links, employee, today):
        first, second = links
        second.po_amendments = [make_amendment(9, date(2024, 1, 1), date(2024, 9, 15))]
        service = AssignmentService(session, today)

        await service.update(1, 5, AssignmentUpdate(end_date=date(2024, 6, 30)))

        assert first.end_date == date(2024, 6, 30)
        assert employee.last_active_date == date(2024, 9, 15)

    @pytest.mark.asyncio
    async def test_missing_link(self, session, today):
        session.execute.return_value = scalars_result([])
        service = AssignmentService(session, today)

        with pytest.raises(NotFoundError, match="not assigned"):
            await service.update(1, 5, AssignmentUpdate(role_in_project="Lead"))


class TestRemove:

    @pytest.mark.asyncio
    async def test_remove_deletes_link(self, session, today):
        link = make_assignment(1, 60, project_id=5)
        session.execute.return_value = scalars_result([link])
        service = AssignmentService(session, today)

        await service.remove(1, 5)

        session.delete.assert_awaited_once_with(link)
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_remove_rederives_from_remaining_end_dates(self, session, employee, today):
        employee.last_active_date = date(2024, 9, 15)
        link = make_assignment(1, 60, project_id=5, end_date=date(2024, 9, 15))
        remaining = make_assignment(2, 40, project_id=6, end_date=date(2024, 8, 31))
        session.execute.side_effect = [scalars_result([link]), scalars_result([remaining])]

        await AssignmentService(session, today).remove(1, 5)

        assert employee.last_active_date == date(2024, 8, 31)

    @pytest.mark.asyncio
    async def test_remove_keeps_stored_date_when_no_end_dates_remain(self, session, employee, today):
        employee.last_active_date = date(2024, 9, 15)
        link = make_assignment(1, 60, project_id=5, end_date=date(2024, 9, 15))
        ongoing = make_assignment(2, 40, project_id=6, end_date=None)
        session.execute.side_effect = [scalars_result([link]), scalars_result([ongoing])]

        await AssignmentService(session, today).remove(1, 5)

        assert employee.last_active_date == date(2024, 9, 15)


class TestProjections:

    def test_serialize_includes_derived_billability(self, today):
        assignment = make_assignment(
            1, 50, po_number=None, po_amendments=[make_amendment(3, date(2024, 1, 1), is_active=True)]
        )
        data = serialize_assignment(assignment, today)
        assert data["billability_status"] == "Billable"
        assert data["is_billable_active"] is True
        assert data["project_name"] == "Project 1"

    def test_serialize_bench_without_po(self, today):
        data = serialize_assignment(make_assignment(1, 50), today)
        assert data["billability_status"] == "Bench"
        assert data["is_billable_active"] is False

    def test_summary_flags_over_allocation(self):
        summary = summarize_allocation(1, [make_assignment(1, 80), make_assignment(2, 50)])
        assert summary["total_allocation"] == Decimal("130.00")
        assert summary["remaining_allocation"] == Decimal("0.00")
        assert summary["over_allocated"] is True

    def test_summary_with_headroom(self):
        summary = summarize_allocation(1, [make_assignment(1, 40), make_assignment(2, 50)])
        assert summary["remaining_allocation"] == Decimal("10.00")
        assert summary["over_allocated"] is False
