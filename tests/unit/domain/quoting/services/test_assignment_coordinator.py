"""
Tests for AssignmentCoordinator domain service and derive_request_status().

Covers:
- Status derivation rules (any acceptance, all rejected, never downgrade)
- Order independence and idempotence of recompute()
- Idempotent assignment creation
- Contractor responses recorded exactly once
- View tracking
"""

import itertools
from decimal import Decimal

import pytest

from src.domain.quoting.constants import RULE_INVALID_ASSIGNMENT_STATUS
from src.domain.quoting.entities import (
    AssignmentStatus,
    QuoteRequest,
    QuoteRequestStatus,
    ResponseDecision,
)
from src.domain.quoting.services import AssignmentCoordinator, derive_request_status
from src.domain.shared.exceptions import BusinessRuleViolationError, NotFoundError

S = QuoteRequestStatus
A = AssignmentStatus


@pytest.fixture
def coordinator(repository) -> AssignmentCoordinator:
    return AssignmentCoordinator(repository)


@pytest.fixture
def request_with_three(repository, coordinator) -> QuoteRequest:
    request = QuoteRequest(
        user_id="user-1",
        system_size_kwp=Decimal("10"),
        location="Jeddah",
        selected_contractors=["c-1", "c-2", "c-3"],
    )
    repository.save_quote_request(request)
    coordinator.create_assignments(request.id, request.selected_contractors)
    return request


# ============================================================================
# TESTS - derive_request_status()
# ============================================================================


def test_any_acceptance_moves_pending_to_in_progress():
    """Test one acceptance among rejections gives in-progress."""
    assert derive_request_status(S.PENDING, [A.ACCEPTED, A.REJECTED, A.ASSIGNED]) == S.IN_PROGRESS


def test_all_rejected_moves_pending_to_rejected():
    """Test every contractor rejecting gives rejected."""
    assert derive_request_status(S.PENDING, [A.REJECTED, A.REJECTED]) == S.REJECTED


def test_all_rejected_from_contractors_selected():
    """Test the all-rejected rule also applies to contractors_selected and open."""
    assert derive_request_status(S.CONTRACTORS_SELECTED, [A.REJECTED]) == S.REJECTED
    assert derive_request_status(S.OPEN, [A.REJECTED]) == S.REJECTED


def test_all_rejected_never_downgrades_in_progress():
    """Test in-progress stays in-progress when statuses only show rejections."""
    assert derive_request_status(S.IN_PROGRESS, [A.REJECTED, A.REJECTED]) == S.IN_PROGRESS


def test_acceptance_never_downgrades_later_statuses():
    """Test quotes_received and quote_selected are kept on acceptance."""
    assert derive_request_status(S.QUOTES_RECEIVED, [A.ACCEPTED]) == S.QUOTES_RECEIVED
    assert derive_request_status(S.QUOTE_SELECTED, [A.ACCEPTED]) == S.QUOTE_SELECTED


def test_late_acceptance_lifts_rejected_request():
    """Test an acceptance after an all-rejected state gives in-progress."""
    assert derive_request_status(S.REJECTED, [A.REJECTED, A.ACCEPTED]) == S.IN_PROGRESS


def test_partial_rejection_leaves_status_unchanged():
    """Test some rejected and some unanswered keeps the current status."""
    assert derive_request_status(S.PENDING, [A.REJECTED, A.VIEWED]) == S.PENDING


def test_no_assignments_leaves_status_unchanged():
    """Test an empty assignment list never derives rejected."""
    assert derive_request_status(S.PENDING, []) == S.PENDING


@pytest.mark.parametrize("terminal", [S.COMPLETED, S.CANCELLED])
def test_terminal_statuses_are_never_changed(terminal):
    """Test completed and cancelled are absorbing."""
    assert derive_request_status(terminal, [A.ACCEPTED]) == terminal
    assert derive_request_status(terminal, [A.REJECTED]) == terminal


@pytest.mark.parametrize(
    "statuses",
    [
        [A.ACCEPTED, A.REJECTED, A.VIEWED],
        [A.REJECTED, A.REJECTED, A.REJECTED],
        [A.REJECTED, A.ASSIGNED, A.REJECTED],
    ],
)
def test_derivation_is_order_independent(statuses):
    """Test every permutation of the same statuses derives the same result."""
    results = {derive_request_status(S.PENDING, list(p)) for p in itertools.permutations(statuses)}

    assert len(results) == 1


# ============================================================================
# TESTS - create_assignments()
# ============================================================================


def test_create_assignments_creates_one_per_contractor(repository, request_with_three):
    """Test fan-out creates an ASSIGNED record per contractor."""
    assignments = repository.load_assignments_for_request(request_with_three.id)

    assert [a.contractor_id for a in assignments] == ["c-1", "c-2", "c-3"]
    assert all(a.status == A.ASSIGNED for a in assignments)


def test_create_assignments_skips_existing_pairs(repository, coordinator, request_with_three):
    """Test re-creating existing assignments is a silent no-op."""
    created = coordinator.create_assignments(request_with_three.id, ["c-1", "c-4"])

    assert created == 1
    assert len(repository.load_assignments_for_request(request_with_three.id)) == 4


def test_create_assignments_dedupes_input(coordinator, request_with_three):
    """Test duplicate ids in one call create a single assignment."""
    assert coordinator.create_assignments(request_with_three.id, ["c-9", "c-9"]) == 1


def test_create_assignments_with_empty_list(coordinator, request_with_three):
    """Test nothing is created for an empty list."""
    assert coordinator.create_assignments(request_with_three.id, []) == 0


def test_existing_assignment_keeps_its_response(repository, coordinator, request_with_three):
    """Test a duplicate creation does not reset an answered assignment."""
    coordinator.record_response(request_with_three.id, "c-1", ResponseDecision.ACCEPT)

    coordinator.create_assignments(request_with_three.id, ["c-1"])

    assert repository.find_assignment(request_with_three.id, "c-1").status == A.ACCEPTED


# ============================================================================
# TESTS - record_response() and recompute()
# ============================================================================


def test_accept_moves_request_to_in_progress(repository, coordinator, request_with_three):
    """Test the first acceptance lifts the request to in-progress."""
    assignment = coordinator.record_response(
        request_with_three.id, "c-1", ResponseDecision.ACCEPT, notes="Available next week"
    )

    assert assignment.status == A.ACCEPTED
    assert assignment.responded_at is not None
    assert assignment.response_notes == "Available next week"
    assert repository.get_quote_request(request_with_three.id).status == S.IN_PROGRESS


def test_accept_then_reject_stays_in_progress(repository, coordinator, request_with_three):
    """Test a rejection after an acceptance does not downgrade the request."""
    coordinator.record_response(request_with_three.id, "c-1", ResponseDecision.ACCEPT)
    coordinator.record_response(request_with_three.id, "c-2", ResponseDecision.REJECT)
    coordinator.record_response(request_with_three.id, "c-3", ResponseDecision.REJECT)

    assert repository.get_quote_request(request_with_three.id).status == S.IN_PROGRESS


def test_all_reject_moves_request_to_rejected(repository, coordinator, request_with_three):
    """Test the request is rejected once every contractor rejected."""
    for contractor_id in ("c-1", "c-2"):
        coordinator.record_response(request_with_three.id, contractor_id, ResponseDecision.REJECT)
    assert repository.get_quote_request(request_with_three.id).status == S.PENDING

    coordinator.record_response(request_with_three.id, "c-3", ResponseDecision.REJECT)

    assert repository.get_quote_request(request_with_three.id).status == S.REJECTED


def test_response_order_does_not_change_outcome(repository, coordinator):
    """Test the final status is the same for every response order."""
    decisions = {
        "c-1": ResponseDecision.REJECT,
        "c-2": ResponseDecision.ACCEPT,
        "c-3": ResponseDecision.REJECT,
    }
    outcomes = set()

    for order in itertools.permutations(decisions):
        request = QuoteRequest(
            user_id="user-1",
            system_size_kwp=Decimal("5"),
            location="Dammam",
            selected_contractors=list(order),
        )
        repository.save_quote_request(request)
        coordinator.create_assignments(request.id, request.selected_contractors)
        for contractor_id in order:
            coordinator.record_response(request.id, contractor_id, decisions[contractor_id])
        outcomes.add(repository.get_quote_request(request.id).status)

    assert outcomes == {S.IN_PROGRESS}


def test_recompute_is_idempotent(repository, coordinator, request_with_three):
    """Test recomputing twice gives the same persisted status."""
    coordinator.record_response(request_with_three.id, "c-2", ResponseDecision.ACCEPT)

    first = coordinator.recompute(request_with_three.id)
    second = coordinator.recompute(request_with_three.id)

    assert first == second == S.IN_PROGRESS


def test_second_response_is_rejected(coordinator, request_with_three):
    """Test a contractor can answer only once."""
    coordinator.record_response(request_with_three.id, "c-1", ResponseDecision.ACCEPT)

    with pytest.raises(BusinessRuleViolationError, match="Cannot respond") as exc_info:
        coordinator.record_response(request_with_three.id, "c-1", ResponseDecision.REJECT)

    assert exc_info.value.rule == RULE_INVALID_ASSIGNMENT_STATUS


def test_response_without_assignment_raises_not_found(coordinator, request_with_three):
    """Test uninvited contractors cannot respond."""
    with pytest.raises(NotFoundError, match="No assignment"):
        coordinator.record_response(request_with_three.id, "c-404", ResponseDecision.ACCEPT)


def test_recompute_unknown_request_raises_not_found(coordinator):
    """Test recompute() on a missing request raises NotFoundError."""
    with pytest.raises(NotFoundError):
        coordinator.recompute("missing")


# ============================================================================
# TESTS - mark_viewed()
# ============================================================================


def test_mark_viewed_moves_assigned_to_viewed(coordinator, request_with_three):
    """Test first view sets status and timestamp."""
    assignment = coordinator.mark_viewed(request_with_three.id, "c-1")

    assert assignment.status == A.VIEWED
    assert assignment.viewed_at is not None


def test_mark_viewed_does_not_touch_answered_assignment(coordinator, request_with_three):
    """Test viewing after responding keeps the response."""
    coordinator.record_response(request_with_three.id, "c-1", ResponseDecision.REJECT)

    assignment = coordinator.mark_viewed(request_with_three.id, "c-1")

    assert assignment.status == A.REJECTED


def test_viewed_assignment_can_still_respond(repository, coordinator, request_with_three):
    """Test VIEWED -> ACCEPTED is allowed."""
    coordinator.mark_viewed(request_with_three.id, "c-1")

    assignment = coordinator.record_response(request_with_three.id, "c-1", ResponseDecision.ACCEPT)

    assert assignment.status == A.ACCEPTED
