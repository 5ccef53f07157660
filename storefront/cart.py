"""
In-memory cart accumulator.

The cart is a process-local list of CartLine entries with at most one line per
recipe id. Adding a recipe that is already in the cart sums the quantities;
there is no per-line removal or quantity edit after adding. The whole cart is
cleared at checkout.

Note: Nothing is persisted. The cart is lost when the process (or the
Streamlit session) ends, and two sessions never share a cart.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from .models import CartLine, CartReceipt, Recipe

logger = logging.getLogger(__name__)

# Pricing rule for a recipe: 1.50 per ingredient, never below 5.00
PRICE_PER_INGREDIENT = Decimal("1.50")
MINIMUM_PRICE = Decimal("5")


def estimate_price(recipe: Recipe) -> Decimal:
    """
    Compute the unit price of a recipe from its ingredient count.

    Args:
        recipe: Full recipe record (with strIngredientN fields)

    Returns:
        max(5, ingredient_count * 1.5) as a Decimal
    """
    count = len(recipe.ingredients())
    return max(MINIMUM_PRICE, PRICE_PER_INGREDIENT * count)


class Cart:
    """
    Append-or-merge list of cart lines with a derived total.

    Lines keep their insertion order.
    """

    def __init__(self) -> None:
        self._lines: List[CartLine] = []

    def _find(self, item_id: str) -> Optional[CartLine]:
        for line in self._lines:
            if line.item_id == item_id:
                return line
        return None

    def add(self, line: CartLine) -> None:
        """
        Add a line to the cart or accumulate quantity if the recipe is already in it.

        The unit price of an existing line is kept.

        Args:
            line: Line to add (quantity >= 1 is enforced by CartLine)
        """
        existing = self._find(line.item_id)
        if existing is not None:
            existing.quantity += line.quantity
            logger.debug("Cart: merged %s, quantity now %d", line.item_id, existing.quantity)
        else:
            self._lines.append(line.model_copy(deep=True))
            logger.debug("Cart: added %s x%d", line.item_id, line.quantity)

    def add_recipe(self, recipe: Recipe, quantity: int = 1, unit_price: Optional[Decimal] = None) -> CartLine:
        """
        Convenience wrapper: build a line for `recipe` and add it.

        Args:
            recipe: Recipe to add
            quantity: Units to add (default 1)
            unit_price: Price per unit; defaults to estimate_price(recipe)

        Returns:
            The line that was added (before merging).
        """
        price = unit_price if unit_price is not None else estimate_price(recipe)
        line = CartLine(item=recipe, quantity=quantity, unit_price=price)
        self.add(line)
        return line

    def items(self) -> List[CartLine]:
        """Return a read-only snapshot of the current lines."""
        return [line.model_copy(deep=True) for line in self._lines]

    def clear(self) -> None:
        self._lines = []

    def total(self) -> Decimal:
        """Sum of quantity * unit_price over all lines."""
        return sum((line.line_total for line in self._lines), Decimal("0"))

    def count(self) -> int:
        """Total number of units in the cart."""
        return sum(line.quantity for line in self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def checkout(self) -> CartReceipt:
        """
        Take a receipt of the current cart and clear it.

        Returns:
            CartReceipt with the lines and total at checkout time.
        """
        receipt = CartReceipt(lines=self.items(), total=self.total())
        logger.info("Checkout: %d lines, total %s", len(receipt.lines), receipt.total)
        self.clear()
        return receipt
