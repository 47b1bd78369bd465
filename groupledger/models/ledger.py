"""
Core Data Models for Group Ledger

These models define the values that leave the ledger's data structures:
posted transactions and point-in-time balance snapshots.

DESIGN DECISION: Amounts are Decimal end to end. Values are stored exactly
as posted; rounding only happens when an amount is formatted for display.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


ZERO = Decimal("0")


def format_amount(amount: Decimal, places: int = 2, symbol: str = "") -> str:
    """
    Render an amount as fixed-point text, e.g. "10.00" or "-$4.50".
    
    The sign goes in front of the symbol so negative balances read naturally.
    """
    amount = Decimal(amount)
    with localcontext() as ctx:
        # Quantize needs room for every integer digit plus the places.
        ctx.prec = max(ctx.prec, amount.adjusted() + places + 2)
        rounded = amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
        sign = "-" if rounded < 0 else ""
        magnitude = abs(rounded)
    return f"{sign}{symbol}{magnitude:.{places}f}"


def exact_sum(left: Decimal, right: Decimal) -> Decimal:
    """
    Add two amounts without rounding to the context precision.
    
    Balances are running sums of arbitrary posted amounts, so the default
    28-digit context would silently round very large or very precise ones.
    """
    digits = (
        max(left.adjusted(), right.adjusted())
        - min(left.as_tuple().exponent, right.as_tuple().exponent)
        + 2
    )
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, digits)
        return left + right


class Transaction(BaseModel):
    """
    A single signed amount attributed to one member of a group.
    
    The member name is captured at posting time. Transactions are
    immutable; the only thing that can happen to one is deletion when
    its member is removed.
    """
    model_config = ConfigDict(frozen=True)
    
    transaction_id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction identifier"
    )
    user_name: str = Field(
        ...,
        description="Member the amount is attributed to"
    )
    amount: Decimal = Field(
        ...,
        allow_inf_nan=False,
        description="Signed amount; positive means the member paid"
    )
    posted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the transaction was posted (UTC)"
    )
    
    def formatted_amount(self, places: int = 2, symbol: str = "") -> str:
        return format_amount(self.amount, places, symbol)


class UserBalance(BaseModel):
    """Snapshot of one member's running balance."""
    model_config = ConfigDict(frozen=True)
    
    name: str
    balance: Decimal = ZERO
    
    def formatted_balance(self, places: int = 2, symbol: str = "") -> str:
        return format_amount(self.balance, places, symbol)
