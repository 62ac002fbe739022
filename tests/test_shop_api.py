"""Shopper-facing endpoints via TestClient: catalog, cart and checkout."""

from urllib.parse import unquote

from conftest import VALID_DRAFT
from models.order import Order


class TestCatalog:
    def test_only_active_products_listed(self, client, make_product):
        make_product(name="Pan Francés", price=1000)
        make_product(name="Torta vieja", price=30000, category="pasteles", is_active=False)

        r = client.get("/shop/products")

        assert r.status_code == 200
        assert [p["name"] for p in r.json()] == ["Pan Francés"]

    def test_filter_by_category(self, client, make_product):
        make_product(name="Pan Francés", category="pan")
        make_product(name="Café con Leche", price=3000, category="bebidas")

        r = client.get("/shop/products", params={"category": "bebidas"})
        assert [p["name"] for p in r.json()] == ["Café con Leche"]

        r = client.get("/shop/products", params={"category": "all"})
        assert len(r.json()) == 2

    def test_categories_follow_configured_order(self, client, make_product):
        make_product(name="Jugo Natural", price=4000, category="bebidas")
        make_product(name="Pan Integral", price=2000, category="pan")

        assert client.get("/shop/categories").json() == ["pan", "bebidas"]


class TestCartApi:
    def test_session_cookie_issued_and_reused(self, client, make_product):
        pan = make_product()

        r = client.post("/cart/add", json={"product_id": pan.id})
        assert r.status_code == 200
        assert "cart_session" in client.cookies

        r = client.post("/cart/add", json={"product_id": pan.id})
        body = r.json()
        assert len(body["items"]) == 1
        assert body["items"][0]["quantity"] == 2
        assert body["total"] == 2000

    def test_header_session_for_non_browser_clients(self, client, make_product):
        pan = make_product()
        r = client.post("/cart/add", json={"product_id": pan.id})
        session_id = r.headers["X-Cart-Session"]
        client.cookies.clear()

        r = client.get("/cart", headers={"X-Cart-Session": session_id})

        assert r.json()["count"] == 1

    def test_inactive_or_unknown_product_rejected(self, client, make_product):
        hidden = make_product(is_active=False)

        assert client.post("/cart/add", json={"product_id": hidden.id}).status_code == 404
        assert client.post("/cart/add", json={"product_id": "nope"}).status_code == 404

    def test_update_to_zero_removes_line(self, client, make_product):
        pan = make_product()
        client.post("/cart/add", json={"product_id": pan.id})

        r = client.put(f"/cart/items/{pan.id}", json={"quantity": 4})
        assert r.json()["total"] == 4000

        r = client.put(f"/cart/items/{pan.id}", json={"quantity": 0})
        assert r.json() == {"items": [], "total": 0, "count": 0}

    def test_delete_line_and_clear(self, client, make_product):
        pan = make_product()
        torta = make_product(name="Torta", price=35000, category="pasteles")
        client.post("/cart/add", json={"product_id": pan.id})
        client.post("/cart/add", json={"product_id": torta.id})

        r = client.delete(f"/cart/items/{pan.id}")
        assert [i["id"] for i in r.json()["items"]] == [torta.id]

        r = client.delete("/cart")
        assert r.json()["items"] == []


class TestCheckoutApi:
    def _fill_cart(self, client, make_product):
        pan = make_product(name="Pan", price=1000)
        client.post("/cart/add", json={"product_id": pan.id})
        client.post("/cart/add", json={"product_id": pan.id})
        return pan

    def test_successful_checkout(self, client, make_product, db, dispatcher):
        pan = self._fill_cart(client, make_product)

        r = client.post("/orders/checkout", json=VALID_DRAFT)

        assert r.status_code == 201, r.text
        body = r.json()
        assert body["status"] == "pending"
        assert body["total"] == 2000
        assert body["short_id"] == body["order_id"][:8]
        assert body["whatsapp_url"].startswith("https://wa.me/")
        assert unquote(body["whatsapp_url"].split("text=", 1)[1]) == body["message"]
        assert dispatcher.messages == [body["message"]]

        orders = db.query(Order).all()
        assert len(orders) == 1
        assert orders[0].items == [
            {"id": pan.id, "name": "Pan", "price": 1000.0, "quantity": 2, "image": pan.image_url}
        ]

        assert client.get("/cart").json()["items"] == []

    def test_validation_error_reports_first_rule(self, client, make_product, db, dispatcher):
        self._fill_cart(client, make_product)

        r = client.post("/orders/checkout", json=dict(VALID_DRAFT, phone="12345"))

        assert r.status_code == 400
        assert r.json()["detail"] == "Phone must have 10 digits"
        assert db.query(Order).count() == 0
        assert dispatcher.messages == []
        assert client.get("/cart").json()["count"] == 2

    def test_blank_form_rejected(self, client, make_product, db, dispatcher):
        self._fill_cart(client, make_product)

        r = client.post("/orders/checkout", json={})

        assert r.status_code == 400
        assert r.json()["detail"] == "Name must be at least 2 characters"
        assert db.query(Order).count() == 0
        assert dispatcher.messages == []

    def test_missing_payment_method_is_not_assumed_cash(self, client, make_product, db):
        self._fill_cart(client, make_product)
        draft = dict(VALID_DRAFT)
        del draft["paymentMethod"]

        r = client.post("/orders/checkout", json=draft)

        assert r.status_code == 400
        assert r.json()["detail"] == "Payment method must be cash or transfer"
        assert db.query(Order).count() == 0
        assert client.get("/cart").json()["count"] == 2

    def test_checkout_body_documented(self, client):
        op = client.get("/openapi.json").json()["paths"]["/orders/checkout"]["post"]

        assert "requestBody" in op
        assert op["requestBody"]["required"] is True

    def test_empty_cart_rejected(self, client):
        r = client.post("/orders/checkout", json=VALID_DRAFT)

        assert r.status_code == 400
        assert r.json()["detail"] == "Cart is empty"

    def test_persistence_failure_keeps_cart(self, client, make_product, db, dispatcher, monkeypatch):
        self._fill_cart(client, make_product)
        from services.errors import PersistenceError
        from services.order_store import OrderStore

        def failing_create(self, payload):
            raise PersistenceError()

        monkeypatch.setattr(OrderStore, "create", failing_create)
        r = client.post("/orders/checkout", json=VALID_DRAFT)

        assert r.status_code == 502
        assert r.json()["detail"] == "Could not save order"
        assert dispatcher.messages == []
        assert client.get("/cart").json()["count"] == 2

    def test_order_snapshot_survives_product_changes(self, client, make_product, db, admin_headers):
        pan = self._fill_cart(client, make_product)
        order_id = client.post("/orders/checkout", json=VALID_DRAFT).json()["order_id"]

        client.patch(f"/admin/products/{pan.id}", json={"price": 9999}, headers=admin_headers)
        client.delete(f"/admin/products/{pan.id}", headers=admin_headers)

        r = client.get(f"/admin/orders/{order_id}", headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["items"][0]["price"] == 1000
        assert r.json()["total"] == 2000
