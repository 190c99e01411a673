"""
Purpose: Order creation and total-bill computation.

The total is snapshotted when the order is created: later menu price changes
do not alter existing orders.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Optional, Sequence

from .errors import InvalidInput, MenuItemNotFound
from .models import MenuItem, Order, new_id

MenuItemLookup = Callable[[str], Optional[MenuItem]]


def calculate_total_bill(item_ids: Sequence[str], get_menu_item: MenuItemLookup) -> Decimal:
    """
    Sum of the referenced menu items' prices. Repeated ids are charged once per occurrence.
    """
    total = Decimal("0")
    for item_id in item_ids:
        menu_item = get_menu_item(item_id)
        if menu_item is None:
            raise MenuItemNotFound(item_id)
        total += menu_item.price
    return total


def build_order(
    customer_id: str,
    restaurant_id: str,
    item_ids: Sequence[str],
    get_menu_item: MenuItemLookup,
) -> Order:
    if not item_ids:
        raise InvalidInput("An order needs at least one menu item")

    return Order(
        id=new_id(),
        customer_id=customer_id,
        restaurant_id=restaurant_id,
        items=tuple(item_ids),
        total_bill=calculate_total_bill(item_ids, get_menu_item),
    )
