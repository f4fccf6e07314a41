"""
In-Memory Contractor Directory

ContractorDirectoryProtocol implementation over a local mapping. Stands in
for the contractor service's data in single-process deployments and tests.
"""

import logging
import threading
from typing import Iterable

from src.domain.quoting.repositories import ContractorInfo

logger = logging.getLogger(__name__)


class InMemoryContractorDirectory:
    """
    Examples:
        >>> directory = InMemoryContractorDirectory(
        ...     [ContractorInfo(contractor_id="c-1", company_name="Sun Co")]
        ... )
        >>> directory.get_contractors(["c-1", "c-9"])["c-1"].company_name
        'Sun Co'
    """

    def __init__(self, contractors: Iterable[ContractorInfo] = ()) -> None:
        self._lock = threading.Lock()
        self._contractors: dict[str, ContractorInfo] = {}
        for info in contractors:
            self.register(info)

    def register(self, info: ContractorInfo) -> None:
        with self._lock:
            self._contractors[info.contractor_id] = info
        logger.debug(f"Registered contractor {info.contractor_id} ({info.company_name})")

    def get_contractors(self, contractor_ids: list[str]) -> dict[str, ContractorInfo]:
        with self._lock:
            return {
                contractor_id: self._contractors[contractor_id]
                for contractor_id in contractor_ids
                if contractor_id in self._contractors
            }
