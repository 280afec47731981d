"""OrderLine: one catalog item's quantity within a draft order."""

from __future__ import annotations

from decimal import Decimal

from bookstore.domain.exceptions import InvalidArgument, QuantityOutOfRange
from bookstore.domain.model.observable import Observable
from bookstore.domain.model.value_objects import Money


def _require_int(value: object, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{what} must be an integer, got {type(value).__name__}")
    return value


class OrderLine(Observable):
    """Captures a book's price and stock ceiling at selection time.

    ``item_id``, ``title``, ``unit_price`` and ``max_quantity`` never
    change after creation (price lock).  ``quantity`` is the only mutable
    field and is bounded by ``0 <= quantity <= max_quantity``.

    Observers receive ``"quantity"`` followed by ``"line_total"`` whenever
    the quantity actually changes.
    """

    def __init__(
        self,
        item_id: str,
        title: str,
        unit_price: Money,
        max_quantity: int,
    ) -> None:
        super().__init__()
        self._item_id = item_id
        self._title = title
        self._unit_price = unit_price
        self._max_quantity = max_quantity
        self._quantity = 0

    # --- Factory --------------------------------------------------------------

    @classmethod
    def create(
        cls,
        item_id: str,
        title: str,
        unit_price: Money | Decimal | str | int,
        max_quantity: int,
    ) -> OrderLine:
        """Create an empty line (quantity 0), validating the inputs."""
        if not item_id or not str(item_id).strip():
            raise InvalidArgument("Item ID is required")
        price = unit_price if isinstance(unit_price, Money) else Money.of(unit_price)
        _require_int(max_quantity, "Maximum quantity")
        if max_quantity < 0:
            raise InvalidArgument(
                f"Maximum quantity cannot be negative, got {max_quantity}"
            )
        return cls(str(item_id), title, price, max_quantity)

    # --- Read-only attributes -------------------------------------------------

    @property
    def item_id(self) -> str:
        return self._item_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def unit_price(self) -> Money:
        return self._unit_price

    @property
    def max_quantity(self) -> int:
        return self._max_quantity

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def line_total(self) -> Money:
        return self._unit_price * self._quantity

    # --- Guarded mutation -----------------------------------------------------

    def set_quantity(self, quantity: int) -> None:
        _require_int(quantity, "Quantity")
        if quantity < 0 or quantity > self._max_quantity:
            raise QuantityOutOfRange(self._item_id, quantity, self._max_quantity)
        if quantity == self._quantity:
            return
        self._quantity = quantity
        self._notify("quantity", "line_total")

    def increment(self, by: int = 1) -> None:
        """Raise the quantity; ``QuantityOutOfRange`` once stock runs out."""
        self.set_quantity(self._quantity + _require_int(by, "Increment"))

    def decrement(self, by: int = 1) -> None:
        self.set_quantity(self._quantity - _require_int(by, "Decrement"))

    def __repr__(self) -> str:
        return (
            f"OrderLine(item_id={self._item_id!r}, quantity={self._quantity}, "
            f"max_quantity={self._max_quantity}, unit_price={self._unit_price})"
        )
