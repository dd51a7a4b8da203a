"""Abstract storage interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from fintrack.domain.entities import Ledger


class Storage(ABC):
    """Persistence collaborator holding one ledger per owner.

    The engine never calls storage. The host applies an engine mutation and
    then saves the resulting ledger.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the backing store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the backing store."""
        pass

    @abstractmethod
    def load(self, owner_key: str) -> Optional[Ledger]:
        """Load an owner's ledger, or None if nothing was saved yet."""
        pass

    @abstractmethod
    def save(self, owner_key: str, ledger: Ledger) -> bool:
        """Replace an owner's ledger. Returns False if the write failed."""
        pass
