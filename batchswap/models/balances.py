"""Balance snapshots captured around a swap submission."""

from __future__ import annotations

import decimal
from dataclasses import dataclass, field, replace
from decimal import Decimal

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)


def compute_delta(before: Decimal, after: Decimal) -> Decimal:
    """Signed change ``after - before`` with no rounding."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return after - before


@dataclass(frozen=True)
class BalanceSnapshot:
    """Before/after balance of one asset for one account.

    Attributes:
        before: Balance captured before submission, None until captured
        after: Balance captured after confirmation, None until captured
    """

    before: Decimal | None = None
    after: Decimal | None = None

    @property
    def delta(self) -> Decimal | None:
        """after - before, or None while either side is missing."""
        if self.before is None or self.after is None:
            return None
        return compute_delta(self.before, self.after)

    @property
    def is_complete(self) -> bool:
        return self.before is not None and self.after is not None


@dataclass(frozen=True)
class Balances:
    """Snapshots for both sides of a swap."""

    token_in: BalanceSnapshot = field(default_factory=BalanceSnapshot)
    token_out: BalanceSnapshot = field(default_factory=BalanceSnapshot)

    def with_before(self, token_in: Decimal, token_out: Decimal) -> Balances:
        return Balances(
            token_in=replace(self.token_in, before=token_in),
            token_out=replace(self.token_out, before=token_out),
        )

    def with_after(self, token_in: Decimal, token_out: Decimal) -> Balances:
        return Balances(
            token_in=replace(self.token_in, after=token_in),
            token_out=replace(self.token_out, after=token_out),
        )

    @property
    def has_before(self) -> bool:
        return self.token_in.before is not None and self.token_out.before is not None
