"""
User Registry

A group's members, kept in a singly-linked list ordered by ascending
balance (lowest payer first).

DESIGN DECISION: Every mutation is built on ``find_prev_user``. A singly
linked list can only unlink or move a node through its predecessor, so
lookup returns the predecessor (or the node itself when it is first).

KNOWN LIMITATIONS (kept on purpose, see DESIGN.md):
1. New members are inserted at the front with balance 0, even when a
   negative balance already exists further down the list.
2. Posting an amount repositions the member by at most one adjacent swap
   towards the tail. If the new balance exceeds several successors, the
   list is only partially re-sorted.
"""

from decimal import Decimal
from typing import Iterator, Optional

from groupledger.models import ZERO, LedgerStatus, UserBalance, exact_sum


class UserNode:
    """One member in the registry's linked list."""
    
    __slots__ = ("name", "balance", "next")
    
    def __init__(self, name: str, balance: Decimal = ZERO):
        self.name = name
        self.balance = balance
        self.next: Optional["UserNode"] = None
    
    def snapshot(self) -> UserBalance:
        return UserBalance(name=self.name, balance=self.balance)
    
    def __repr__(self) -> str:
        return f"UserNode({self.name!r}, {self.balance})"


class UserRegistry:
    """
    Members of one group, sorted by non-decreasing balance.
    
    The registry owns its head reference; inserts, removals and
    repositions update it in place.
    """
    
    def __init__(self):
        self._head: Optional[UserNode] = None
        self._size = 0
    
    def __len__(self) -> int:
        return self._size
    
    def __contains__(self, name: str) -> bool:
        return self.find_prev_user(name) is not None
    
    def __iter__(self) -> Iterator[UserBalance]:
        return self.list_users()
    
    @property
    def is_empty(self) -> bool:
        return self._head is None
    
    @property
    def head(self) -> Optional[UserNode]:
        return self._head
    
    def find_prev_user(self, name: str) -> Optional[UserNode]:
        """
        Return the node before the member called ``name``.
        
        If the member is first in the list, the member's own node is
        returned. Returns None if no such member exists.
        """
        current = self._head
        if current is None:
            return None
        if current.name == name:
            return current
        
        prev, current = current, current.next
        while current is not None:
            if current.name == name:
                return prev
            prev, current = current, current.next
        return None
    
    def _locate(self, name: str) -> tuple[Optional[UserNode], Optional[UserNode]]:
        """Return (predecessor, node); predecessor is None when node is first."""
        prev = self.find_prev_user(name)
        if prev is None:
            return None, None
        if prev is self._head and prev.name == name:
            return None, prev
        return prev, prev.next
    
    def find_user(self, name: str) -> Optional[UserBalance]:
        _, node = self._locate(name)
        return node.snapshot() if node is not None else None
    
    def add_user(self, name: str) -> LedgerStatus:
        """
        Add a member with a zero balance at the front of the list.
        
        Returns ALREADY_EXISTS if the name is taken in this group.
        """
        if self.find_prev_user(name) is not None:
            return LedgerStatus.ALREADY_EXISTS
        
        node = UserNode(name)
        node.next = self._head
        self._head = node
        self._size += 1
        return LedgerStatus.OK
    
    def remove_user(self, name: str) -> LedgerStatus:
        """
        Unlink the member called ``name``.
        
        Only the registry is touched; purging the member's transactions
        is the caller's job.
        """
        prev, node = self._locate(name)
        if node is None:
            return LedgerStatus.NOT_FOUND
        
        if prev is None:
            self._head = node.next
        else:
            prev.next = node.next
        node.next = None
        self._size -= 1
        return LedgerStatus.OK
    
    def post_amount(self, name: str, delta: Decimal) -> LedgerStatus:
        """
        Add ``delta`` to a member's balance and reposition the member.
        
        Only the order between the member and its immediate successor can
        be broken by a single balance change, so at most one adjacent swap
        is made: predecessor -> successor -> member -> rest.
        """
        prev, node = self._locate(name)
        if node is None:
            return LedgerStatus.NOT_FOUND
        
        node.balance = exact_sum(node.balance, delta)
        
        successor = node.next
        if successor is not None and node.balance > successor.balance:
            node.next = successor.next
            successor.next = node
            if prev is None:
                self._head = successor
            else:
                prev.next = successor
        return LedgerStatus.OK
    
    def user_balance(self, name: str) -> Optional[Decimal]:
        _, node = self._locate(name)
        return node.balance if node is not None else None
    
    def list_users(self) -> Iterator[UserBalance]:
        """Yield (name, balance) snapshots in list order, lowest first."""
        current = self._head
        while current is not None:
            yield current.snapshot()
            current = current.next
    
    def under_paid(self) -> Iterator[UserBalance]:
        """
        Yield every member whose balance is <= the minimum seen so far.
        
        On a sorted list this is exactly the set tied for the lowest
        balance, in list order. Yields nothing for an empty registry;
        callers check ``is_empty`` to tell the two cases apart.
        """
        current = self._head
        if current is None:
            return
        minimum = current.balance
        while current is not None:
            if current.balance <= minimum:
                minimum = current.balance
                yield current.snapshot()
            current = current.next
