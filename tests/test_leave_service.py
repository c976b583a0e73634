from __future__ import annotations

import threading

import pytest

from employee_portal.core.enums import LeaveStatus
from employee_portal.core.exceptions import (
    ConflictError,
    DanglingReferenceError,
    NotFoundError,
    ReviewerNotFoundError,
    ValidationError,
)


def _apply(container, **overrides):
    body = {
        "employeeId": "2",
        "startDate": "2026-11-10",
        "endDate": "2026-11-12",
        "type": "vacation",
        "reason": "Family trip",
    }
    body.update(overrides)
    return container.leave_service.apply(body)


def test_apply_creates_pending_request_at_version_zero(container, db):
    leave = _apply(container)

    assert leave.status == LeaveStatus.PENDING
    assert leave.version == 0
    assert db.leaves[leave.id].to_dict()["version"] == 0


def test_apply_validates_dates_type_and_employee(container):
    with pytest.raises(ValidationError):
        _apply(container, endDate="2026-11-01")
    with pytest.raises(ValidationError):
        _apply(container, type="sabbatical")
    with pytest.raises(DanglingReferenceError):
        _apply(container, employeeId="99")


def test_approve_bumps_version_and_records_reviewer(container, db):
    leave = _apply(container)

    container.leave_service.approve(leave.id, {"adminId": "1", "version": 0, "comments": "Enjoy"})

    stored = db.leaves[leave.id]
    assert stored.status == LeaveStatus.APPROVED
    assert stored.version == 1
    assert stored.reviewed_by == "1"
    assert stored.comments == "Enjoy"
    assert stored.review_date is not None


def test_stale_version_conflicts_with_current_version(container, db):
    leave = _apply(container)
    container.leave_service.approve(leave.id, {"adminId": "1", "version": 0})

    with pytest.raises(ConflictError) as exc:
        container.leave_service.reject(leave.id, {"adminId": "1", "version": 0})

    assert exc.value.current_version == 1
    assert db.leaves[leave.id].status == LeaveStatus.APPROVED


def test_terminal_request_cannot_be_reviewed_even_with_current_version(container, db):
    leave = _apply(container)
    container.leave_service.reject(leave.id, {"adminId": "1", "version": 0})

    with pytest.raises(ConflictError):
        container.leave_service.approve(leave.id, {"adminId": "1", "version": 1})
    assert db.leaves[leave.id].status == LeaveStatus.REJECTED
    assert db.leaves[leave.id].version == 1


def test_review_requires_admin_and_version(container):
    leave = _apply(container)

    with pytest.raises(ValidationError, match="adminId is required"):
        container.leave_service.approve(leave.id, {"version": 0})
    with pytest.raises(ValidationError, match="Version is required"):
        container.leave_service.approve(leave.id, {"adminId": "1"})
    with pytest.raises(ValidationError):
        container.leave_service.approve(leave.id, {"adminId": "1", "version": "abc"})


def test_unknown_reviewer_and_unknown_request(container, db):
    leave = _apply(container)

    with pytest.raises(ReviewerNotFoundError, match="Admin does not exist"):
        container.leave_service.approve(leave.id, {"adminId": "99", "version": 0})
    assert db.leaves[leave.id].status == LeaveStatus.PENDING

    with pytest.raises(NotFoundError):
        container.leave_service.approve("missing", {"adminId": "1", "version": 0})


def test_concurrent_reviews_with_same_version_have_one_winner(container, db):
    leave = _apply(container)
    outcomes: list[str] = []
    barrier = threading.Barrier(8)

    def review(i: int):
        barrier.wait()
        action = container.leave_service.approve if i % 2 else container.leave_service.reject
        try:
            action(leave.id, {"adminId": "1", "version": 0})
            outcomes.append("ok")
        except ConflictError:
            outcomes.append("conflict")

    threads = [threading.Thread(target=review, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("conflict") == 7
    assert db.leaves[leave.id].version == 1


def test_list_requests_filters(container):
    mine = _apply(container)
    _apply(container, employeeId="1")
    container.leave_service.approve(mine.id, {"adminId": "1", "version": 0})

    assert [lr.id for lr in container.leave_service.list_requests(employee_id="2")] == [mine.id]
    assert len(container.leave_service.list_requests(status="pending")) == 1
    with pytest.raises(ValidationError):
        container.leave_service.list_requests(status="maybe")
