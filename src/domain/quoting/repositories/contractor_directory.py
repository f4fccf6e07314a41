"""
ContractorDirectory Interface

Read-only lookup of contractor display data owned by a sibling service.
The core depends only on this projection, never on the sibling schema.
"""

from typing import Optional, Protocol

from pydantic import BaseModel


class ContractorInfo(BaseModel):
    """Contractor projection used to enrich status views."""

    contractor_id: str
    company_name: str
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    model_config = {"frozen": True}


class ContractorDirectoryProtocol(Protocol):
    """Contract for the contractor lookup port."""

    def get_contractors(self, contractor_ids: list[str]) -> dict[str, ContractorInfo]:
        """
        Look up display data for the given ids.

        Unknown ids are simply absent from the returned mapping.
        """
        ...
