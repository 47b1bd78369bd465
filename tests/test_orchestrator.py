"""
Flow tests through the GroupLedger facade.

These cover the operations a caller sees: result statuses, the posting
and removal flows that span registry and log, and the audit events they
leave behind.
"""

import pytest
from decimal import Decimal

from pydantic import ValidationError

from groupledger.audit import AuditLogger, InMemoryAuditTrail
from groupledger.config import LedgerSettings
from groupledger.models import AuditEventType, LedgerStatus
from groupledger.orchestrator import GroupLedger, create_ledger


@pytest.fixture
def settings() -> LedgerSettings:
    return LedgerSettings(_env_file=None, default_recent_count=3)


@pytest.fixture
def trail() -> InMemoryAuditTrail:
    return InMemoryAuditTrail()


@pytest.fixture
def ledger(settings, trail) -> GroupLedger:
    return GroupLedger(audit_logger=AuditLogger(trail), settings=settings)


@pytest.fixture
def trip(ledger) -> GroupLedger:
    """Ledger with group 'trip' holding members A and B."""
    ledger.add_group("trip")
    ledger.add_user("trip", "A")
    ledger.add_user("trip", "B")
    return ledger


class TestGroups:
    """Tests for group operations."""
    
    def test_add_group_twice(self, ledger):
        """Test the second add fails and only one group exists."""
        assert ledger.add_group("trip").success
        second = ledger.add_group("trip")
        
        assert second.status == LedgerStatus.ALREADY_EXISTS
        assert "trip" in second.message
        assert ledger.list_groups() == ["trip"]
    
    def test_list_groups_in_creation_order(self, ledger):
        """Test group enumeration order."""
        for name in ("b", "a", "c"):
            ledger.add_group(name)
        assert ledger.list_groups() == ["b", "a", "c"]
    
    def test_find_group(self, ledger):
        """Test handles for known and unknown groups."""
        ledger.add_group("trip")
        assert ledger.find_group("trip").name == "trip"
        assert ledger.find_group("nope") is None
    
    @pytest.mark.parametrize("call", [
        lambda l: l.add_user("nope", "A"),
        lambda l: l.list_users("nope"),
        lambda l: l.remove_user("nope", "A"),
        lambda l: l.user_balance("nope", "A"),
        lambda l: l.under_paid("nope"),
        lambda l: l.add_xct("nope", "A", 1),
        lambda l: l.recent_xct("nope", 1),
        lambda l: l.reconcile("nope"),
    ])
    def test_unknown_group_is_not_found(self, ledger, call):
        """Test every group-scoped operation reports a missing group."""
        result = call(ledger)
        assert result.status == LedgerStatus.NOT_FOUND
        assert "nope" in result.message


class TestUsers:
    """Tests for member operations."""
    
    def test_add_user_twice(self, trip):
        """Test duplicate members are rejected and size is unchanged."""
        result = trip.add_user("trip", "A")
        assert result.status == LedgerStatus.ALREADY_EXISTS
        assert len(trip.list_users("trip").members) == 2
    
    def test_same_name_in_different_groups(self, trip):
        """Test member names are only unique within a group."""
        trip.add_group("rent")
        assert trip.add_user("rent", "A").success
    
    def test_remove_unknown_user(self, trip):
        """Test removing a missing member."""
        assert trip.remove_user("trip", "Z").status == LedgerStatus.NOT_FOUND
    
    def test_remove_user_cascades(self, trip):
        """Test removal deletes the member's transactions too."""
        trip.add_xct("trip", "A", 5)
        trip.add_xct("trip", "B", 2)
        trip.add_xct("trip", "A", 1)
        
        assert trip.remove_user("trip", "A").success
        
        recent = trip.recent_xct("trip", 10).transactions
        assert [txn.user_name for txn in recent] == ["B"]
        assert trip.list_users("trip").names == ["B"]
    
    def test_readded_user_starts_clean(self, trip):
        """Test a re-added name has zero balance and no history."""
        trip.add_xct("trip", "A", 9)
        trip.remove_user("trip", "A")
        trip.add_user("trip", "A")
        
        assert trip.user_balance("trip", "A").balance == Decimal("0")
        assert all(
            txn.user_name != "A"
            for txn in trip.recent_xct("trip", 10).transactions
        )


class TestTransactions:
    """Tests for posting and listing transactions."""
    
    def test_example_scenario(self, trip):
        """Test A pays 10, B pays 4 -> B(4.00) listed before A(10.00)."""
        assert trip.add_xct("trip", "A", 10).success
        assert trip.add_xct("trip", "B", 4).success
        
        a = trip.user_balance("trip", "A")
        b = trip.user_balance("trip", "B")
        assert a.balance == Decimal("10.00")
        assert b.balance == Decimal("4.00")
        assert trip.format(a.balance) == "$10.00"
        
        members = trip.list_users("trip").members
        assert [(m.name, m.formatted_balance()) for m in members] == [
            ("B", "4.00"),
            ("A", "10.00"),
        ]
    
    def test_unknown_user_leaves_log_untouched(self, trip):
        """Test posting for a missing member fails without logging it."""
        result = trip.add_xct("trip", "Z", 3)
        assert result.status == LedgerStatus.NOT_FOUND
        assert trip.recent_xct("trip", 10).transactions == []
    
    def test_invalid_amount_raises_before_mutation(self, trip):
        """Test non-finite amounts raise and change nothing."""
        with pytest.raises(ValidationError):
            trip.add_xct("trip", "A", "NaN")
        assert trip.recent_xct("trip", 10).transactions == []
        assert trip.user_balance("trip", "A").balance == Decimal("0")
    
    @pytest.mark.parametrize("amounts", [
        ["10"],
        ["1.10", "2.20", "-0.30"],
        ["-5", "5", "-5", "12.75"],
    ])
    def test_balance_is_sum_of_posts(self, trip, amounts):
        """Test a member's balance equals the sum of their amounts."""
        for amount in amounts:
            trip.add_xct("trip", "A", amount)
        
        expected = sum((Decimal(a) for a in amounts), Decimal("0"))
        assert trip.user_balance("trip", "A").balance == expected
        assert trip.reconcile("trip").members == []
    
    def test_post_orders_member_and_old_successor(self, trip):
        """Test the posting member ends up after its old successor."""
        trip.add_user("trip", "C")  # C, B, A
        group = trip.find_group("trip")
        successor = group.users.find_prev_user("C").next.name
        
        trip.add_xct("trip", "C", 7)
        
        names = trip.list_users("trip").names
        assert names.index(successor) == names.index("C") - 1
        assert (
            trip.user_balance("trip", successor).balance
            <= trip.user_balance("trip", "C").balance
        )
    
    def test_huge_amount_through_audited_ledger(self):
        """Test a very large amount posts cleanly with auditing on."""
        ledger = create_ledger(LedgerSettings(_env_file=None))
        ledger.add_group("trip")
        ledger.add_user("trip", "A")
        
        assert ledger.add_xct("trip", "A", "1e27").success
        assert ledger.add_xct("trip", "A", "0.01").success
        
        assert ledger.user_balance("trip", "A").balance == Decimal(
            "1000000000000000000000000000.01"
        )
        assert len(ledger.recent_xct("trip", 10).transactions) == 2
        assert ledger.reconcile("trip").members == []
        
        posted = ledger.audit_logger.trail.get_recent_events(
            event_type=AuditEventType.TRANSACTION_POSTED
        )
        assert posted[1].details["amount"].endswith("000.00")
    
    def test_recent_three_of_five(self, trip):
        """Test recent_xct(3) after T1..T5 returns T5, T4, T3."""
        for amount in ("1", "2", "3", "4", "5"):
            trip.add_xct("trip", "A", amount)
        
        recent = trip.recent_xct("trip", 3).transactions
        assert [txn.amount for txn in recent] == [
            Decimal("5"), Decimal("4"), Decimal("3"),
        ]
    
    def test_recent_uses_configured_default(self, trip):
        """Test the default count comes from settings."""
        for amount in ("1", "2", "3", "4"):
            trip.add_xct("trip", "B", amount)
        assert len(trip.recent_xct("trip").transactions) == 3
    
    def test_recent_on_empty_log(self, trip):
        """Test an empty log is an empty OK result."""
        result = trip.recent_xct("trip", 5)
        assert result.success
        assert result.transactions == []


class TestUnderPaid:
    """Tests for the under-paid query through the facade."""
    
    def test_empty_group(self, ledger):
        """Test EMPTY for a group without members."""
        ledger.add_group("solo")
        assert ledger.under_paid("solo").status == LedgerStatus.EMPTY
    
    def test_ties(self, trip):
        """Test balances [5, 5, 10] return the two members at 5."""
        trip.add_user("trip", "C")
        trip.add_xct("trip", "A", 10)
        trip.add_xct("trip", "B", 5)
        trip.add_xct("trip", "C", 5)
        
        result = trip.under_paid("trip")
        assert result.success
        assert set(result.names) == {"B", "C"}


class TestAuditing:
    """Tests for the audit events left by ledger operations."""
    
    def test_mutations_are_audited(self, trip, trail):
        """Test group, user and transaction events are recorded."""
        trip.add_xct("trip", "A", 10)
        
        types = [e.event_type for e in trail.get_events_for("trip")]
        assert types == [
            AuditEventType.GROUP_CREATED,
            AuditEventType.USER_ADDED,
            AuditEventType.USER_ADDED,
            AuditEventType.TRANSACTION_POSTED,
        ]
        posted = trail.get_recent_events(limit=1)[0]
        assert posted.details["amount"] == "$10.00"
    
    def test_rejections_are_audited(self, trip, trail):
        """Test duplicates and failed lookups leave warnings."""
        trip.add_user("trip", "A")
        trip.add_xct("trip", "Z", 1)
        
        assert trail.get_recent_events(event_type=AuditEventType.DUPLICATE_REJECTED)
        assert trail.get_recent_events(event_type=AuditEventType.LOOKUP_FAILED)
    
    def test_removal_is_correlated(self, trip, trail):
        """Test the removal and purge events share a correlation ID."""
        trip.add_xct("trip", "A", 1)
        trip.add_xct("trip", "A", 2)
        trip.remove_user("trip", "A")
        
        purged = trail.get_recent_events(
            limit=1, event_type=AuditEventType.TRANSACTIONS_PURGED
        )[0]
        removed = trail.get_recent_events(
            limit=1, event_type=AuditEventType.USER_REMOVED
        )[0]
        assert purged.details["purged_count"] == 2
        assert purged.correlation_id == removed.correlation_id
    
    def test_ledger_without_audit_logger(self, settings):
        """Test the ledger works with auditing switched off."""
        ledger = GroupLedger(settings=settings)
        assert ledger.add_group("trip").success
        assert ledger.audit_logger is None


class TestCreateLedger:
    """Tests for the factory."""
    
    def test_audit_enabled(self):
        """Test an audit trail is attached by default."""
        ledger = create_ledger(LedgerSettings(_env_file=None, audit_trail_size=5))
        assert ledger.audit_logger is not None
        assert isinstance(ledger.audit_logger.trail, InMemoryAuditTrail)
    
    def test_audit_disabled(self):
        """Test auditing can be turned off."""
        ledger = create_ledger(LedgerSettings(_env_file=None, audit_enabled=False))
        assert ledger.audit_logger is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
