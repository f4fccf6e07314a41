"""
Contractor Directory Adapters

Exports:
    - InMemoryContractorDirectory: ContractorDirectoryProtocol over a local mapping
"""

from .in_memory_directory import InMemoryContractorDirectory

__all__ = ["InMemoryContractorDirectory"]
