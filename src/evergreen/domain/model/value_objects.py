"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from evergreen.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount.

    Uses Decimal so cart totals never pick up floating-point drift from
    prices that arrive as JSON floats.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display / wire -------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def to_wire(self) -> float:
        """JSON number for the backend, rounded to cents."""
        return float(self.amount.quantize(Decimal("0.01")))

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity of one cart line."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)

    def increment(self) -> Quantity:
        return Quantity(self.value + 1)

    @staticmethod
    def clamped(raw: int | float | str) -> Quantity:
        """Coerce free-form input into a Quantity, clamping anything below 1.

        Accepts ints, integral floats (``3.0``) and integer strings (``" 4 "``).
        Fractions, NaN, infinities, booleans and non-numeric text are
        rejected with ValidationError rather than guessed at.
        """
        if isinstance(raw, bool):
            raise ValidationError(f"Invalid quantity: {raw!r}")

        if isinstance(raw, str):
            text = raw.strip()
            try:
                value = int(text)
            except ValueError as exc:
                raise ValidationError(f"Invalid quantity: {raw!r}") from exc
        elif isinstance(raw, float):
            if math.isnan(raw) or math.isinf(raw) or not raw.is_integer():
                raise ValidationError(f"Invalid quantity: {raw!r}")
            value = int(raw)
        elif isinstance(raw, int):
            value = raw
        else:
            raise ValidationError(
                f"Quantity must be a number, got {type(raw).__name__}"
            )

        return Quantity(max(value, 1))
