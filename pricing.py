"""
Project: Restaurant Management API
Description:
Order pricing. Unit prices are always read from the current catalog; an
order's total is recomputed from scratch on every change.
"""

from errors import NotFoundError
from models import db, MenuItem


def catalog_prices(ids):
    """Batch lookup of current unit prices: ``{menu_item_id: price}``."""
    if not ids:
        return {}
    rows = db.session.execute(
        db.select(MenuItem.id, MenuItem.price).where(MenuItem.id.in_(ids))
    ).all()
    return {row.id: row.price for row in rows}


def price_items(lines, lookup=catalog_prices):
    """Total for ``lines`` of ``(menu_item_id, quantity)``.

    Fails as a whole with NotFoundError when any referenced item is missing
    from the catalog; no partial totals are produced.
    """
    lines = list(lines)
    ids = sorted({menu_item_id for menu_item_id, _ in lines})
    prices = lookup(ids)
    missing = [i for i in ids if prices.get(i) is None]
    if missing:
        raise NotFoundError(
            "One or more menu items do not exist.",
            errors=[{"field": "items", "message": f"Unknown menu item {i}"} for i in missing],
        )
    total = sum(prices[menu_item_id] * quantity for menu_item_id, quantity in lines)
    return round(total, 2)
