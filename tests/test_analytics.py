from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from pos_backend.core.errors import ValidationError
from pos_backend.database.models import Order, OrderItem, OrderStatus, OrderType
from pos_backend.services.analytics_service import SalesAnalyticsAggregator, day_range

_counter = iter(range(1, 10_000))


def placed_order(total, created_at, status=OrderStatus.COMPLETED):
    total = Decimal(total)
    return Order(
        order_number=f"ORD-2026-{next(_counter):06d}-TEST",
        subtotal=total,
        tax_amount=Decimal("0.00"),
        total_amount=total,
        order_type=OrderType.DINE_IN,
        status=status,
        created_at=created_at,
    )


def at(day, hour=12, minute=0):
    return datetime(2026, 3, day, hour, minute, tzinfo=timezone.utc)


def sold(order, item, quantity):
    return OrderItem(
        order_id=order.id,
        menu_item_id=item.id,
        quantity=quantity,
        unit_price=item.price,
        total_price=item.price * quantity,
    )


def test_three_orders_in_range(run_db, seed):
    seed(
        placed_order("100.00", at(10, 0, 0)),
        placed_order("200.00", at(11)),
        placed_order("300.00", at(12, 23, 59), status=OrderStatus.CANCELLED),
        placed_order("999.00", at(13, 0, 0)),
    )

    analytics = run_db(lambda db: SalesAnalyticsAggregator().compute(db, date(2026, 3, 10), date(2026, 3, 12)))

    assert analytics.total_sales == Decimal("600")
    assert analytics.total_orders == 3
    assert analytics.avg_order_value == Decimal("200")


def test_empty_range_has_zero_average(run_db, seed):
    seed(placed_order("100.00", at(1)))

    analytics = run_db(lambda db: SalesAnalyticsAggregator().compute(db, date(2026, 3, 20), date(2026, 3, 21)))

    assert analytics.total_sales == Decimal("0")
    assert analytics.total_orders == 0
    assert analytics.avg_order_value == Decimal("0")
    assert analytics.top_selling_items == []


def test_top_sellers_ranked_by_quantity_with_ties_on_item_id(run_db, seed, menu):
    dosa, coffee, vada = menu["dosa"], menu["coffee"], menu["vada"]
    first, second = seed(placed_order("430.00", at(5)), placed_order("200.00", at(5, 18)))
    seed(
        sold(first, vada, 3),
        sold(first, coffee, 2),
        sold(first, dosa, 1),
        sold(second, dosa, 2),
    )

    analytics = run_db(lambda db: SalesAnalyticsAggregator().compute(db, date(2026, 3, 5), date(2026, 3, 5)))

    ranked = [(item.name, item.quantity) for item in analytics.top_selling_items]
    # Dosa and Vada both sold 3; Dosa has the lower id
    assert ranked == [("Masala Dosa", 3), ("Medu Vada", 3), ("Filter Coffee", 2)]
    assert analytics.top_selling_items[0].revenue == Decimal("300.00")


def test_top_sellers_are_capped(run_db, seed, menu):
    order = seed(placed_order("100.00", at(6)))
    seed(sold(order, menu["dosa"], 1), sold(order, menu["coffee"], 1), sold(order, menu["vada"], 1))

    analytics = run_db(lambda db: SalesAnalyticsAggregator(top_limit=2).compute(db, date(2026, 3, 6), date(2026, 3, 6)))
    assert len(analytics.top_selling_items) == 2


def test_reversed_range_is_rejected():
    with pytest.raises(ValidationError):
        day_range(date(2026, 3, 2), date(2026, 3, 1))


def test_analytics_endpoint_uses_camel_case(client, owner_headers, seed):
    seed(placed_order("100.00", at(10)), placed_order("200.00", at(10, 15)))

    response = client.get(
        "/api/v1/analytics/sales",
        headers=owner_headers,
        params={"startDate": "2026-03-10", "endDate": "2026-03-10"},
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert set(body) == {"totalSales", "totalOrders", "avgOrderValue", "topSellingItems"}
    assert Decimal(body["totalSales"]) == Decimal("300")
    assert body["totalOrders"] == 2
    assert Decimal(body["avgOrderValue"]) == Decimal("150")


def test_analytics_defaults_to_today(client, owner_headers):
    body = client.get("/api/v1/analytics/sales", headers=owner_headers).json()
    assert body["totalOrders"] == 0
    assert Decimal(body["avgOrderValue"]) == 0
