"""
In-Memory Quote Repository

Concrete implementation of QuoteRepositoryProtocol holding quote requests,
contractor assignments and contractor quotes in process memory.

Responsibility:
    - Implement the Domain persistence port for single-process deployments
      and tests
    - Enforce (request_id, contractor_id) uniqueness for assignments and
      quotes under one lock, which makes check-then-insert atomic here
    - Hand out copies so callers only change stored state through save/update

Architecture Notes:
    - Infrastructure Layer (implements Domain interface)
    - Thread-safe with threading.RLock
    - Entities are deep-copied on the way in and out
"""

import copy
import logging
import threading
from typing import Optional

from src.domain.quoting.entities import ContractorAssignment, ContractorQuote, QuoteRequest
from src.domain.shared.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

PairKey = tuple[str, str]


class InMemoryQuoteRepository:
    """
    Dictionary-backed quote persistence.

    Storage Strategy:
        - requests: request id -> QuoteRequest
        - assignments: (request id, contractor id) -> ContractorAssignment,
          insertion ordered
        - quotes: quote id -> ContractorQuote, plus a unique index
          (request id, contractor id) -> quote id

    Examples:
        >>> repo = InMemoryQuoteRepository()
        >>> repo.save_quote_request(request)
        >>> repo.get_quote_request(request.id).location
        'Riyadh'
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._requests: dict[str, QuoteRequest] = {}
        self._assignments: dict[PairKey, ContractorAssignment] = {}
        self._quotes: dict[str, ContractorQuote] = {}
        self._quote_index: dict[PairKey, str] = {}

    # ------------------------------------------------------------------
    # Quote requests
    # ------------------------------------------------------------------

    def get_quote_request(self, request_id: str) -> Optional[QuoteRequest]:
        with self._lock:
            request = self._requests.get(request_id)
            return copy.deepcopy(request) if request is not None else None

    def save_quote_request(self, request: QuoteRequest) -> None:
        with self._lock:
            self._requests[request.id] = copy.deepcopy(request)

    # ------------------------------------------------------------------
    # Assignments
    # ------------------------------------------------------------------

    def load_assignments_for_request(self, request_id: str) -> list[ContractorAssignment]:
        with self._lock:
            return [
                copy.deepcopy(assignment)
                for (owner_id, _), assignment in self._assignments.items()
                if owner_id == request_id
            ]

    def find_assignment(self, request_id: str, contractor_id: str) -> Optional[ContractorAssignment]:
        with self._lock:
            assignment = self._assignments.get((request_id, contractor_id))
            return copy.deepcopy(assignment) if assignment is not None else None

    def insert_assignments(self, assignments: list[ContractorAssignment]) -> int:
        inserted = 0
        with self._lock:
            for assignment in assignments:
                if assignment.key in self._assignments:
                    logger.debug(f"Assignment {assignment.key} already exists, skipping")
                    continue
                self._assignments[assignment.key] = copy.deepcopy(assignment)
                inserted += 1
        return inserted

    def update_assignment(self, assignment: ContractorAssignment) -> None:
        with self._lock:
            if assignment.key not in self._assignments:
                raise NotFoundError(
                    f"Assignment {assignment.key} not found",
                    entity="ContractorAssignment",
                    entity_id=assignment.id,
                )
            self._assignments[assignment.key] = copy.deepcopy(assignment)

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    def find_quote_by_request_and_contractor(
        self, request_id: str, contractor_id: str
    ) -> Optional[ContractorQuote]:
        with self._lock:
            quote_id = self._quote_index.get((request_id, contractor_id))
            return self.get_quote(quote_id) if quote_id is not None else None

    def insert_quote_with_line_items(self, quote: ContractorQuote) -> None:
        key = (quote.request_id, quote.contractor_id)
        with self._lock:
            if key in self._quote_index:
                raise ConflictError(
                    "You have already submitted a quote for this request",
                    request_id=quote.request_id,
                    contractor_id=quote.contractor_id,
                )
            self._quotes[quote.id] = copy.deepcopy(quote)
            self._quote_index[key] = quote.id

    def get_quote(self, quote_id: str) -> Optional[ContractorQuote]:
        with self._lock:
            quote = self._quotes.get(quote_id)
            return copy.deepcopy(quote) if quote is not None else None

    def update_quote(self, quote: ContractorQuote) -> None:
        with self._lock:
            if quote.id not in self._quotes:
                raise NotFoundError(
                    f"Quote {quote.id} not found", entity="ContractorQuote", entity_id=quote.id
                )
            self._quotes[quote.id] = copy.deepcopy(quote)

    def list_quotes_for_request(self, request_id: str) -> list[ContractorQuote]:
        with self._lock:
            return [
                copy.deepcopy(quote)
                for quote in self._quotes.values()
                if quote.request_id == request_id
            ]
