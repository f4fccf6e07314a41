"""
Tests for QuoteRequestLifecycle domain service.

Covers:
- Request creation and contractor fan-out
- Adding / removing contractors
- Contractor responses through the lifecycle
- Quote submission guards (status, eligibility, pricing, duplicates)
- Admin review, winner selection, completion and cancellation
- Role and ownership checks
"""

from decimal import Decimal

import pytest

from src.domain.quoting.constants import (
    RULE_CONTRACTOR_ALREADY_ASSIGNED,
    RULE_INVALID_REQUEST_STATUS,
    RULE_INVALID_STATUS_TRANSITION,
    RULE_LINE_ITEM_TOTAL_MISMATCH,
    RULE_NOT_ASSIGNED,
    RULE_PRICE_CALCULATION_MISMATCH,
    RULE_PRICE_PER_KWP_TOO_HIGH,
    RULE_QUOTE_ALREADY_APPROVED,
    RULE_QUOTE_NOT_APPROVED,
    RULE_SYSTEM_SIZE_TOO_LARGE,
    RULE_TOO_MANY_CONTRACTORS,
    SubmissionEligibility,
)
from src.domain.quoting.entities import (
    AdminReviewStatus,
    AssignmentStatus,
    QuoteRequestStatus,
    ResponseDecision,
)
from src.domain.quoting.services import (
    AssignmentCoordinator,
    FinancialCalculator,
    PricingConfigProvider,
    QuoteRequestLifecycle,
)
from src.domain.quoting.value_objects import LineItem
from src.domain.shared.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    ConflictError,
    NotFoundError,
    ValidationFailureError,
)
from src.infrastructure.persistence.in_memory import InMemoryPricingRulesRepository

S = QuoteRequestStatus


def build_lifecycle(repository, **options) -> QuoteRequestLifecycle:
    provider = PricingConfigProvider(InMemoryPricingRulesRepository(), cache_ttl_seconds=0)
    return QuoteRequestLifecycle(
        repository,
        FinancialCalculator(provider),
        AssignmentCoordinator(repository),
        provider,
        **options,
    )


@pytest.fixture
def lifecycle(repository) -> QuoteRequestLifecycle:
    return build_lifecycle(repository)


@pytest.fixture
def request_id(lifecycle, user, contractor_a, contractor_b) -> str:
    """Pending 10 kWp request inviting contractors A and B."""
    request = lifecycle.create(
        user, 10, "Riyadh", contractor_ids=[contractor_a.actor_id, contractor_b.actor_id]
    )
    return request.id


def line_item(total, vendor_net, line_order) -> LineItem:
    return LineItem(
        item_name=f"Row {line_order}",
        quantity=1,
        unit_price=total,
        total_price=total,
        vendor_net_price=vendor_net,
        line_order=line_order,
    )


# ============================================================================
# TESTS - create()
# ============================================================================


def test_create_request_is_pending_with_assignments(lifecycle, repository, user):
    """Test creation stores a pending request and one assignment per contractor."""
    request = lifecycle.create(
        user,
        "12.5",
        "Riyadh",
        contractor_ids=["c-1", "c-2"],
        service_area="central",
        details={"property_details": {"roof": "flat"}},
    )

    stored = repository.get_quote_request(request.id)
    assert stored.status == S.PENDING
    assert stored.user_id == user.actor_id
    assert stored.system_size_kwp == Decimal("12.5")
    assert stored.details == {"property_details": {"roof": "flat"}}
    assignments = repository.load_assignments_for_request(request.id)
    assert {a.contractor_id for a in assignments} == {"c-1", "c-2"}
    assert all(a.status == AssignmentStatus.ASSIGNED for a in assignments)


def test_create_without_contractors(lifecycle, repository, user):
    """Test a request may start with no contractors."""
    request = lifecycle.create(user, 10, "Riyadh")

    assert request.status == S.PENDING
    assert repository.load_assignments_for_request(request.id) == []


def test_create_requires_user_role(lifecycle, contractor_a, admin):
    """Test only end users create requests."""
    for actor in (contractor_a, admin):
        with pytest.raises(AuthorizationError, match="requires role 'user'"):
            lifecycle.create(actor, 10, "Riyadh")


def test_create_rejects_system_size_out_of_range(lifecycle, user):
    """Test system size is validated against pricing rules."""
    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.create(user, 150, "Riyadh")

    assert exc_info.value.rule == RULE_SYSTEM_SIZE_TOO_LARGE


def test_create_rejects_non_positive_size(lifecycle, user):
    """Test zero size is a validation failure."""
    with pytest.raises(ValidationFailureError):
        lifecycle.create(user, 0, "Riyadh")


def test_create_rejects_blank_location(lifecycle, user):
    """Test blank location is rejected by the aggregate."""
    with pytest.raises(ValidationFailureError, match="location is required"):
        lifecycle.create(user, 10, "   ")


def test_create_rejects_duplicate_contractors(lifecycle, user):
    """Test a contractor cannot be listed twice."""
    with pytest.raises(ValidationFailureError, match="duplicates"):
        lifecycle.create(user, 10, "Riyadh", contractor_ids=["c-1", "c-1"])


def test_create_rejects_too_many_contractors(lifecycle, user):
    """Test more than 10 contractors is refused."""
    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.create(user, 10, "Riyadh", contractor_ids=[f"c-{i}" for i in range(11)])

    assert exc_info.value.rule == RULE_TOO_MANY_CONTRACTORS
    assert exc_info.value.limit == 10


def test_create_honours_configured_contractor_cap(repository, user):
    """Test max_contractors_per_request is configurable."""
    lifecycle = build_lifecycle(repository, max_contractors_per_request=2)

    with pytest.raises(BusinessRuleViolationError, match="Maximum 2 contractors"):
        lifecycle.create(user, 10, "Riyadh", contractor_ids=["c-1", "c-2", "c-3"])


# ============================================================================
# TESTS - add_contractor() / remove_contractor()
# ============================================================================


def test_add_contractor_moves_pending_to_contractors_selected(lifecycle, repository, user):
    """Test adding a contractor creates the assignment and advances the status."""
    request = lifecycle.create(user, 10, "Riyadh")

    updated = lifecycle.add_contractor(user, request.id, "c-7")

    assert updated.status == S.CONTRACTORS_SELECTED
    assert updated.selected_contractors == ["c-7"]
    assert repository.find_assignment(request.id, "c-7") is not None


def test_add_contractor_rejects_duplicate(lifecycle, user, request_id, contractor_a):
    """Test adding an already selected contractor fails."""
    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.add_contractor(user, request_id, contractor_a.actor_id)

    assert exc_info.value.rule == RULE_CONTRACTOR_ALREADY_ASSIGNED


def test_add_contractor_respects_cap(repository, user):
    """Test the cap applies to additions as well."""
    lifecycle = build_lifecycle(repository, max_contractors_per_request=1)
    request = lifecycle.create(user, 10, "Riyadh", contractor_ids=["c-1"])

    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.add_contractor(user, request.id, "c-2")

    assert exc_info.value.rule == RULE_TOO_MANY_CONTRACTORS


def test_add_contractor_requires_owner(lifecycle, request_id, other_user, admin):
    """Test only the owning user can change the selection."""
    for actor in (other_user, admin):
        with pytest.raises(AuthorizationError, match="owner"):
            lifecycle.add_contractor(actor, request_id, "c-9")


def test_add_contractor_to_cancelled_request_fails(lifecycle, user, request_id):
    """Test a terminal request cannot be changed."""
    lifecycle.cancel(user, request_id)

    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.add_contractor(user, request_id, "c-9")

    assert exc_info.value.rule == RULE_INVALID_REQUEST_STATUS


def test_remove_contractor_keeps_assignment_history(lifecycle, repository, user, request_id, contractor_a):
    """Test removal updates the selection but keeps the assignment record."""
    updated = lifecycle.remove_contractor(user, request_id, contractor_a.actor_id)

    assert contractor_a.actor_id not in updated.selected_contractors
    assert repository.find_assignment(request_id, contractor_a.actor_id) is not None


def test_remove_unknown_contractor_raises_not_found(lifecycle, user, request_id):
    """Test removing a contractor that is not selected fails."""
    with pytest.raises(NotFoundError, match="is not assigned"):
        lifecycle.remove_contractor(user, request_id, "c-404")


def test_unknown_request_raises_not_found(lifecycle, user):
    """Test operations on a missing request raise NotFoundError."""
    with pytest.raises(NotFoundError, match="not found"):
        lifecycle.add_contractor(user, "missing", "c-1")


# ============================================================================
# TESTS - contractor_respond() / mark_viewed()
# ============================================================================


def test_contractor_respond_returns_assignment_and_status(lifecycle, request_id, contractor_a):
    """Test the answer is recorded and the derived status returned."""
    assignment, status = lifecycle.contractor_respond(
        contractor_a, request_id, ResponseDecision.ACCEPT, notes="Can start Monday"
    )

    assert assignment.status == AssignmentStatus.ACCEPTED
    assert status == S.IN_PROGRESS


def test_accept_then_reject_keeps_request_in_progress(lifecycle, request_id, contractor_a, contractor_b):
    """Test contractor B's later rejection does not revert the request."""
    lifecycle.contractor_respond(contractor_a, request_id, ResponseDecision.ACCEPT)

    _, status = lifecycle.contractor_respond(contractor_b, request_id, ResponseDecision.REJECT)

    assert status == S.IN_PROGRESS


def test_all_contractors_rejecting_rejects_request(lifecycle, request_id, contractor_a, contractor_b):
    """Test the request is rejected when every contractor declines."""
    lifecycle.contractor_respond(contractor_a, request_id, ResponseDecision.REJECT)

    _, status = lifecycle.contractor_respond(contractor_b, request_id, ResponseDecision.REJECT)

    assert status == S.REJECTED


def test_respond_requires_contractor_role(lifecycle, request_id, user):
    """Test users cannot answer on behalf of contractors."""
    with pytest.raises(AuthorizationError):
        lifecycle.contractor_respond(user, request_id, ResponseDecision.ACCEPT)


def test_respond_by_uninvited_contractor_raises_not_found(lifecycle, request_id, outsider):
    """Test a contractor without assignment cannot respond."""
    with pytest.raises(NotFoundError):
        lifecycle.contractor_respond(outsider, request_id, ResponseDecision.ACCEPT)


def test_respond_on_cancelled_request_fails(lifecycle, user, request_id, contractor_a):
    """Test responses are refused once the request is terminal."""
    lifecycle.cancel(user, request_id, reason="Changed plans")

    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.contractor_respond(contractor_a, request_id, ResponseDecision.ACCEPT)

    assert exc_info.value.rule == RULE_INVALID_REQUEST_STATUS


def test_mark_viewed_marks_own_assignment(lifecycle, request_id, contractor_a):
    """Test the calling contractor's assignment becomes viewed."""
    assignment = lifecycle.mark_viewed(contractor_a, request_id)

    assert assignment.contractor_id == contractor_a.actor_id
    assert assignment.status == AssignmentStatus.VIEWED


# ============================================================================
# TESTS - submit_quote()
# ============================================================================


def test_submit_quote_stores_breakdown_and_moves_to_quotes_received(
    lifecycle, repository, request_id, contractor_a
):
    """Test a valid quote is priced, stored and advances the request."""
    submission = lifecycle.submit_quote(contractor_a, request_id, 10000, 1000)

    assert submission.request_status == S.QUOTES_RECEIVED
    assert submission.breakdown.total_user_price == Decimal("11000.00")
    stored = repository.get_quote(submission.quote.id)
    assert stored.contractor_id == contractor_a.actor_id
    assert stored.markup_amount == Decimal("1000.00")
    assert stored.commission_amount == Decimal("1500.00")
    assert stored.contractor_net_amount == Decimal("8500.00")
    assert stored.platform_revenue == Decimal("2500.00")
    assert stored.admin_status == AdminReviewStatus.PENDING_REVIEW
    assert repository.get_quote_request(request_id).status == S.QUOTES_RECEIVED


def test_second_quote_from_other_contractor_keeps_quotes_received(
    lifecycle, request_id, contractor_a, contractor_b
):
    """Test later quotes keep the request in quotes_received."""
    lifecycle.submit_quote(contractor_a, request_id, 10000, 1000)

    submission = lifecycle.submit_quote(contractor_b, request_id, 12000, 1200)

    assert submission.request_status == S.QUOTES_RECEIVED


def test_duplicate_quote_raises_conflict(lifecycle, request_id, contractor_a):
    """Test a contractor cannot submit twice for the same request."""
    lifecycle.submit_quote(contractor_a, request_id, 10000, 1000)

    with pytest.raises(ConflictError, match="already submitted") as exc_info:
        lifecycle.submit_quote(contractor_a, request_id, 9000, 900)

    assert exc_info.value.contractor_id == contractor_a.actor_id


def test_submit_by_uninvited_contractor_is_refused(lifecycle, request_id, outsider):
    """Test contractors outside the selection get NOT_ASSIGNED."""
    with pytest.raises(BusinessRuleViolationError, match="not assigned") as exc_info:
        lifecycle.submit_quote(outsider, request_id, 10000, 1000)

    assert exc_info.value.rule == RULE_NOT_ASSIGNED


def test_submit_without_accepting_is_allowed_by_default(lifecycle, request_id, contractor_a):
    """Test selection alone is enough under SELECTED eligibility."""
    submission = lifecycle.submit_quote(contractor_a, request_id, 10000, 1000)

    assert submission.quote.request_id == request_id


def test_submit_refused_while_in_progress_by_default(lifecycle, request_id, contractor_a, contractor_b):
    """Test in-progress requests refuse submissions under SELECTED eligibility."""
    lifecycle.contractor_respond(contractor_a, request_id, ResponseDecision.ACCEPT)

    with pytest.raises(BusinessRuleViolationError, match="Cannot submit quote") as exc_info:
        lifecycle.submit_quote(contractor_b, request_id, 10000, 1000)

    assert exc_info.value.rule == RULE_INVALID_REQUEST_STATUS


def test_accepted_eligibility_requires_acceptance(repository, user, contractor_a):
    """Test ACCEPTED eligibility refuses contractors who have not accepted."""
    lifecycle = build_lifecycle(repository, submission_eligibility=SubmissionEligibility.ACCEPTED)
    request = lifecycle.create(user, 10, "Riyadh", contractor_ids=[contractor_a.actor_id])

    with pytest.raises(BusinessRuleViolationError, match="must accept") as exc_info:
        lifecycle.submit_quote(contractor_a, request.id, 10000, 1000)

    assert exc_info.value.details == {"eligibility": "accepted"}


def test_accepted_eligibility_allows_submission_after_acceptance(repository, user, contractor_a):
    """Test an accepting contractor can submit from in-progress."""
    lifecycle = build_lifecycle(repository, submission_eligibility=SubmissionEligibility.ACCEPTED)
    request = lifecycle.create(user, 10, "Riyadh", contractor_ids=[contractor_a.actor_id])
    lifecycle.contractor_respond(contractor_a, request.id, ResponseDecision.ACCEPT)

    submission = lifecycle.submit_quote(contractor_a, request.id, 10000, 1000)

    assert submission.request_status == S.QUOTES_RECEIVED


def test_accepted_eligibility_refuses_removed_contractor(
    repository, user, contractor_a, contractor_b
):
    """Test a contractor removed after accepting can no longer submit."""
    lifecycle = build_lifecycle(repository, submission_eligibility=SubmissionEligibility.ACCEPTED)
    request = lifecycle.create(
        user, 10, "Riyadh", contractor_ids=[contractor_a.actor_id, contractor_b.actor_id]
    )
    lifecycle.contractor_respond(contractor_a, request.id, ResponseDecision.ACCEPT)
    lifecycle.remove_contractor(user, request.id, contractor_a.actor_id)

    with pytest.raises(BusinessRuleViolationError, match="not assigned") as exc_info:
        lifecycle.submit_quote(contractor_a, request.id, 10000, 1000)

    assert exc_info.value.rule == RULE_NOT_ASSIGNED
    assert repository.list_quotes_for_request(request.id) == []
    assert repository.get_quote_request(request.id).status == S.IN_PROGRESS


def test_accepted_eligibility_refuses_uninvited_contractor(repository, user, contractor_a, outsider):
    """Test ACCEPTED eligibility still requires selection."""
    lifecycle = build_lifecycle(repository, submission_eligibility=SubmissionEligibility.ACCEPTED)
    request = lifecycle.create(user, 10, "Riyadh", contractor_ids=[contractor_a.actor_id])

    with pytest.raises(BusinessRuleViolationError, match="not assigned") as exc_info:
        lifecycle.submit_quote(outsider, request.id, 10000, 1000)

    assert exc_info.value.rule == RULE_NOT_ASSIGNED



def test_submit_validates_price_per_kwp(lifecycle, request_id, contractor_a):
    """Test price per kWp above the cap is refused."""
    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.submit_quote(contractor_a, request_id, 25000, 2500)

    assert exc_info.value.rule == RULE_PRICE_PER_KWP_TOO_HIGH


def test_submit_checks_price_consistency(lifecycle, request_id, contractor_a):
    """Test base price must equal price per kWp x requested size."""
    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.submit_quote(contractor_a, request_id, 9000, 1000)

    assert exc_info.value.rule == RULE_PRICE_CALCULATION_MISMATCH


def test_submit_with_line_items_applies_vat_and_orders_rows(lifecycle, request_id, contractor_a):
    """Test line items are stored ordered, with VAT, and totals aggregated."""
    items = [line_item(6000, 5100, line_order=2), line_item(4000, 3400, line_order=1)]

    submission = lifecycle.submit_quote(
        contractor_a, request_id, 10000, 1000, line_items=items, details={"notes": "Tier 1 panels"}
    )

    assert [item.line_order for item in submission.quote.line_items] == [1, 2]
    assert [item.vat_amount for item in submission.quote.line_items] == [
        Decimal("510.00"),
        Decimal("765.00"),
    ]
    assert submission.totals.total_vendor_net == Decimal("8500.00")
    assert submission.totals.vat_amount == Decimal("1275.00")
    assert submission.totals.total_payable == Decimal("9775.00")
    assert submission.quote.details == {"notes": "Tier 1 panels"}


def test_submit_rejects_line_item_total_mismatch(lifecycle, repository, request_id, contractor_a):
    """Test line items must add up to the base price; nothing is stored."""
    items = [line_item(4000, 3400, line_order=1)]

    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.submit_quote(contractor_a, request_id, 10000, 1000, line_items=items)

    assert exc_info.value.rule == RULE_LINE_ITEM_TOTAL_MISMATCH
    assert repository.list_quotes_for_request(request_id) == []


def test_submit_requires_contractor_role(lifecycle, request_id, user):
    """Test only contractors submit quotes."""
    with pytest.raises(AuthorizationError):
        lifecycle.submit_quote(user, request_id, 10000, 1000)


# ============================================================================
# TESTS - ADMIN REVIEW
# ============================================================================


@pytest.fixture
def quote_id(lifecycle, request_id, contractor_a) -> str:
    return lifecycle.submit_quote(contractor_a, request_id, 10000, 1000).quote.id


def test_approve_quote(lifecycle, admin, quote_id, repository, request_id):
    """Test approval records reviewer and leaves the request status alone."""
    quote = lifecycle.approve_quote(admin, quote_id, notes="Looks good")

    assert quote.admin_status == AdminReviewStatus.APPROVED
    assert quote.reviewed_by == admin.actor_id
    assert quote.admin_notes == "Looks good"
    assert repository.get_quote_request(request_id).status == S.QUOTES_RECEIVED


def test_reject_quote_records_reason(lifecycle, admin, quote_id):
    """Test rejection stores the reason."""
    quote = lifecycle.reject_quote(admin, quote_id, reason="Price too high")

    assert quote.admin_status == AdminReviewStatus.REJECTED
    assert quote.rejection_reason == "Price too high"


def test_request_revision(lifecycle, admin, quote_id):
    """Test revision request sets revision_needed."""
    quote = lifecycle.request_quote_revision(admin, quote_id, notes="Add warranty terms")

    assert quote.admin_status == AdminReviewStatus.REVISION_NEEDED


def test_approved_quote_cannot_be_reviewed_again(lifecycle, admin, quote_id):
    """Test approved quotes are immutable."""
    lifecycle.approve_quote(admin, quote_id)

    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.reject_quote(admin, quote_id, reason="Changed mind")

    assert exc_info.value.rule == RULE_QUOTE_ALREADY_APPROVED


def test_review_requires_admin(lifecycle, user, contractor_a, quote_id):
    """Test users and contractors cannot review quotes."""
    for actor in (user, contractor_a):
        with pytest.raises(AuthorizationError, match="requires role 'admin'"):
            lifecycle.approve_quote(actor, quote_id)


def test_review_unknown_quote_raises_not_found(lifecycle, admin):
    """Test reviewing a missing quote raises NotFoundError."""
    with pytest.raises(NotFoundError):
        lifecycle.approve_quote(admin, "missing")


# ============================================================================
# TESTS - SELECTION, COMPLETION, CANCELLATION
# ============================================================================


def test_select_approved_quote(lifecycle, user, admin, request_id, quote_id):
    """Test the owner selects an approved quote."""
    lifecycle.approve_quote(admin, quote_id)

    request = lifecycle.select_quote(user, request_id, quote_id)

    assert request.status == S.QUOTE_SELECTED
    assert request.selected_quote_id == quote_id


def test_select_unapproved_quote_fails(lifecycle, user, request_id, quote_id):
    """Test quotes pending review cannot be selected."""
    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.select_quote(user, request_id, quote_id)

    assert exc_info.value.rule == RULE_QUOTE_NOT_APPROVED


def test_select_quote_of_other_request_raises_not_found(lifecycle, user, admin, quote_id):
    """Test a quote must belong to the request it is selected for."""
    lifecycle.approve_quote(admin, quote_id)
    other = lifecycle.create(user, 10, "Mecca")

    with pytest.raises(NotFoundError):
        lifecycle.select_quote(user, other.id, quote_id)


def test_select_requires_owner_or_admin(lifecycle, other_user, contractor_a, admin, request_id, quote_id):
    """Test other users and contractors cannot select."""
    lifecycle.approve_quote(admin, quote_id)

    for actor in (other_user, contractor_a):
        with pytest.raises(AuthorizationError):
            lifecycle.select_quote(actor, request_id, quote_id)


def test_complete_after_selection(lifecycle, user, admin, request_id, quote_id):
    """Test admin completes a request with a selected quote."""
    lifecycle.approve_quote(admin, quote_id)
    lifecycle.select_quote(user, request_id, quote_id)

    request = lifecycle.complete(admin, request_id)

    assert request.status == S.COMPLETED


def test_complete_before_selection_fails(lifecycle, admin, request_id):
    """Test completion requires quote_selected."""
    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.complete(admin, request_id)

    assert exc_info.value.rule == RULE_INVALID_STATUS_TRANSITION


def test_cancel_records_reason(lifecycle, repository, user, request_id):
    """Test the owner cancels with a reason."""
    request = lifecycle.cancel(user, request_id, reason="Found another installer")

    assert request.status == S.CANCELLED
    assert repository.get_quote_request(request_id).cancellation_reason == "Found another installer"


def test_admin_can_cancel(lifecycle, admin, request_id):
    """Test admins can cancel any request."""
    assert lifecycle.cancel(admin, request_id).status == S.CANCELLED


def test_cancel_twice_fails(lifecycle, user, request_id):
    """Test cancelled is terminal."""
    lifecycle.cancel(user, request_id)

    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.cancel(user, request_id)

    assert exc_info.value.rule == RULE_INVALID_STATUS_TRANSITION


def test_submit_on_cancelled_request_fails(lifecycle, user, request_id, contractor_a):
    """Test submissions are refused once cancelled."""
    lifecycle.cancel(user, request_id)

    with pytest.raises(BusinessRuleViolationError) as exc_info:
        lifecycle.submit_quote(contractor_a, request_id, 10000, 1000)

    assert exc_info.value.rule == RULE_INVALID_REQUEST_STATUS
