"""
Group Catalog

Groups in creation order. Each group exclusively owns one user registry
and one transaction log; nothing is shared between groups.
"""

from typing import Iterator, Optional

from groupledger.ledger import TransactionLog
from groupledger.models import LedgerStatus
from groupledger.registry import UserRegistry


class Group:
    """A named collection of members and their shared transaction history."""
    
    def __init__(self, name: str):
        self._name = name
        self.users = UserRegistry()
        self.transactions = TransactionLog()
    
    @property
    def name(self) -> str:
        return self._name
    
    def __repr__(self) -> str:
        return (
            f"Group({self._name!r}, users={len(self.users)}, "
            f"transactions={len(self.transactions)})"
        )


class GroupCatalog:
    """
    All groups, unique by name.
    
    Lookup is a case-sensitive exact match over the groups in creation
    order.
    """
    
    def __init__(self):
        self._groups: list[Group] = []
    
    def __len__(self) -> int:
        return len(self._groups)
    
    def __iter__(self) -> Iterator[Group]:
        return iter(self._groups)
    
    def __contains__(self, name: str) -> bool:
        return self.find_group(name) is not None
    
    def add_group(self, name: str) -> LedgerStatus:
        """Append an empty group; ALREADY_EXISTS if the name is taken."""
        if self.find_group(name) is not None:
            return LedgerStatus.ALREADY_EXISTS
        self._groups.append(Group(name))
        return LedgerStatus.OK
    
    def find_group(self, name: str) -> Optional[Group]:
        for group in self._groups:
            if group.name == name:
                return group
        return None
    
    def list_groups(self) -> list[str]:
        return [group.name for group in self._groups]
