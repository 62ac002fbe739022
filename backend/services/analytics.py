# backend/services/analytics.py
from collections import Counter, defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from models.order import ORDER_STATUSES

# Cancelled orders never count as revenue
REVENUE_EXCLUDED = {"cancelled"}


def _order_date(order) -> Optional[date]:
    created = order.created_at
    if created is None:
        return None
    if isinstance(created, datetime):
        return created.date()
    return created


def summary(orders: Iterable, total_products: int) -> Dict:
    orders = list(orders)
    return {
        "total_products": total_products,
        "total_orders": len(orders),
        "pending_orders": sum(1 for o in orders if o.status == "pending"),
        "total_revenue": round(sum(float(o.total or 0) for o in orders if o.status not in REVENUE_EXCLUDED), 2),
    }


def daily_revenue(orders: Iterable, days: int = 7, today: date = None) -> List[Dict]:
    """Revenue per day for the last `days` days, missing days filled with zero."""
    today = today or datetime.now(timezone.utc).date()
    start = today - timedelta(days=days - 1)

    by_date = defaultdict(float)
    for o in orders:
        d = _order_date(o)
        if d is None or d < start or d > today or o.status in REVENUE_EXCLUDED:
            continue
        by_date[d] += float(o.total or 0)

    result = []
    for i in range(days):
        current = start + timedelta(days=i)
        result.append({
            "date": current.strftime("%d/%m"),
            "revenue": round(by_date.get(current, 0.0), 2),
        })
    return result


def orders_by_status(orders: Iterable) -> List[Dict]:
    counts = Counter(o.status for o in orders)
    # Known statuses first in lifecycle order, anything else after
    keys = list(ORDER_STATUSES) + sorted(k for k in counts if k not in ORDER_STATUSES)
    return [{"status": k, "count": counts.get(k, 0)} for k in keys]


def top_products(orders: Iterable, limit: int = 5) -> List[Dict]:
    quantities = Counter()
    names = {}
    for o in orders:
        if o.status in REVENUE_EXCLUDED:
            continue
        for it in o.items or []:
            quantities[it["id"]] += int(it.get("quantity", 0))
            names[it["id"]] = it.get("name", "")

    ranked = sorted(quantities.items(), key=lambda kv: (-kv[1], names[kv[0]]))
    return [
        {"product_id": pid, "product_name": names[pid], "total_quantity_sold": qty}
        for pid, qty in ranked[:limit]
    ]
