from datetime import date, datetime
from types import SimpleNamespace

from services import analytics


def _order(total, status="pending", created=None, items=()):
    return SimpleNamespace(total=total, status=status, created_at=created, items=list(items))


TODAY = date(2026, 10, 19)


def test_summary_counts():
    orders = [
        _order(2000),
        _order(5000, status="completed"),
        _order(9999, status="cancelled"),
        _order(1000),
    ]

    out = analytics.summary(orders, total_products=16)

    assert out == {
        "total_products": 16,
        "total_orders": 4,
        "pending_orders": 2,
        "total_revenue": 8000,
    }


def test_daily_revenue_zero_fills_last_seven_days():
    orders = [
        _order(1000, created=datetime(2026, 10, 19, 9, 30)),
        _order(500, created=datetime(2026, 10, 19, 18, 0)),
        _order(2000, created=datetime(2026, 10, 15, 12, 0)),
        _order(7000, created=datetime(2026, 10, 1, 12, 0)),
        _order(3000, status="cancelled", created=datetime(2026, 10, 18, 12, 0)),
        _order(100, created=None),
    ]

    out = analytics.daily_revenue(orders, today=TODAY)

    assert [d["date"] for d in out] == ["13/10", "14/10", "15/10", "16/10", "17/10", "18/10", "19/10"]
    assert [d["revenue"] for d in out] == [0, 0, 2000, 0, 0, 0, 1500]


def test_orders_by_status_keeps_lifecycle_order():
    orders = [_order(1, "completed"), _order(1, "pending"), _order(1, "pending"), _order(1, "legacy")]

    out = analytics.orders_by_status(orders)

    assert out == [
        {"status": "pending", "count": 2},
        {"status": "confirmed", "count": 0},
        {"status": "completed", "count": 1},
        {"status": "cancelled", "count": 0},
        {"status": "legacy", "count": 1},
    ]


def test_top_products_from_snapshots():
    pan = {"id": "p1", "name": "Pan Francés", "price": 1000, "quantity": 3}
    torta = {"id": "c1", "name": "Torta", "price": 35000, "quantity": 1}
    cafe = {"id": "b1", "name": "Café", "price": 2500, "quantity": 2}
    orders = [
        _order(0, items=[pan, torta]),
        _order(0, items=[dict(pan, quantity=2), cafe]),
        _order(0, status="cancelled", items=[dict(torta, quantity=50)]),
    ]

    out = analytics.top_products(orders, limit=2)

    assert out == [
        {"product_id": "p1", "product_name": "Pan Francés", "total_quantity_sold": 5},
        {"product_id": "b1", "product_name": "Café", "total_quantity_sold": 2},
    ]
