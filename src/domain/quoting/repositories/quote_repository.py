"""
QuoteRepository Interface

Persistence port for quote requests, contractor assignments and contractor
quotes.

Responsibility:
    - Define the data access contract (interface)
    - Enable Dependency Inversion (Domain defines, Infrastructure implements)
    - Support testing with in-memory fakes

Architecture Notes:
    - Repository Pattern, Protocol-based interface (structural typing)
    - Synchronous calls: the core is invoked once per inbound request
    - Implementations wrap driver errors in StorageFailureError
    - Implementations MUST enforce (request_id, contractor_id) uniqueness for
      assignments and quotes; the domain's check-then-insert is not race-free
"""

from typing import Optional, Protocol

from ..entities.contractor_assignment import ContractorAssignment
from ..entities.contractor_quote import ContractorQuote
from ..entities.quote_request import QuoteRequest


class QuoteRepositoryProtocol(Protocol):
    """
    Protocol defining the contract for quote persistence.

    Usage:
        Repository is injected into domain services at construction time:

        >>> coordinator = AssignmentCoordinator(repository)
        >>> lifecycle = QuoteRequestLifecycle(repository, calculator, coordinator, provider)
    """

    # ------------------------------------------------------------------
    # Quote requests
    # ------------------------------------------------------------------

    def get_quote_request(self, request_id: str) -> Optional[QuoteRequest]:
        """Return the request, or None if it does not exist."""
        ...

    def save_quote_request(self, request: QuoteRequest) -> None:
        """Insert or overwrite the request (keyed by id)."""
        ...

    # ------------------------------------------------------------------
    # Assignments
    # ------------------------------------------------------------------

    def load_assignments_for_request(self, request_id: str) -> list[ContractorAssignment]:
        """
        Fresh read of every assignment of a request, in assignment order.

        Returns an empty list when the request has none.
        """
        ...

    def find_assignment(self, request_id: str, contractor_id: str) -> Optional[ContractorAssignment]:
        ...

    def insert_assignments(self, assignments: list[ContractorAssignment]) -> int:
        """
        Insert assignments, silently skipping (request, contractor) pairs that
        already exist.

        Returns:
            Number of rows actually inserted
        """
        ...

    def update_assignment(self, assignment: ContractorAssignment) -> None:
        """
        Persist a changed assignment.

        Raises:
            NotFoundError: If the assignment does not exist
        """
        ...

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    def find_quote_by_request_and_contractor(
        self, request_id: str, contractor_id: str
    ) -> Optional[ContractorQuote]:
        ...

    def insert_quote_with_line_items(self, quote: ContractorQuote) -> None:
        """
        Atomically insert a quote together with its line items.

        Raises:
            ConflictError: If a quote for (request_id, contractor_id) exists
        """
        ...

    def get_quote(self, quote_id: str) -> Optional[ContractorQuote]:
        ...

    def update_quote(self, quote: ContractorQuote) -> None:
        """
        Persist admin review changes of a quote.

        Raises:
            NotFoundError: If the quote does not exist
        """
        ...

    def list_quotes_for_request(self, request_id: str) -> list[ContractorQuote]:
        ...
