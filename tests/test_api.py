"""End-to-end checks through the FastAPI app."""

from decimal import Decimal

from app.api.results import command_response
from app.db import queries
from app.models.results import CommandResult, ErrorKind


def _add_customer(client, **overrides):
    payload = {"name": "Asha Rao", "phone": "9800000001", "email": "asha@example.com"}
    payload.update(overrides)
    return client.post("/customers/", json=payload)


def _add_product(client, name, price, tax):
    resp = client.post("/products/", json={"name": name, "price": price, "tax": tax})
    assert resp.status_code == 201
    return resp.json()["id"]


class TestHealth:

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestCustomerEndpoints:

    def test_create_list_and_lookup(self, client):
        resp = _add_customer(client)
        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        customer_id = body["id"]

        assert [c["name"] for c in client.get("/customers/").json()] == ["Asha Rao"]
        assert client.get(f"/customers/{customer_id}").json()["phone"] == "9800000001"
        assert client.get("/customers/by-phone", params={"phone": "9800000001"}).json()["id"] == customer_id

    def test_duplicate_phone_is_409(self, client):
        assert _add_customer(client).status_code == 201

        resp = _add_customer(client, name="Other")
        assert resp.status_code == 409
        assert resp.json()["success"] is False
        assert resp.json()["error"] == "conflict"
        assert len(client.get("/customers/").json()) == 1

    def test_validation_errors_are_422_with_field(self, client):
        resp = _add_customer(client, email="nope")
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["loc"][-1] == "email"

        resp = _add_customer(client, name="")
        assert resp.status_code == 422
        assert client.get("/customers/").json() == []

    def test_missing_customer_is_404(self, client):
        assert client.get("/customers/5").status_code == 404
        assert client.get("/customers/by-phone", params={"phone": "x"}).status_code == 404


class TestProductEndpoints:

    def test_string_numbers_are_coerced(self, client):
        product_id = _add_product(client, "Cable", "12.50", "18")

        product = client.get(f"/products/{product_id}").json()
        assert Decimal(product["price"]) == Decimal("12.5")
        assert Decimal(product["tax"]) == Decimal("18")

    def test_over_precise_price_is_422(self, client):
        resp = client.post("/products/", json={"name": "Cable", "price": "12.345", "tax": 0})
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["loc"][-1] == "price"
        assert client.get("/products/").json() == []

    def test_negative_price_is_422(self, client):
        resp = client.post("/products/", json={"name": "Cable", "price": -1, "tax": 0})
        assert resp.status_code == 422

    def test_missing_product_is_404(self, client):
        assert client.get("/products/1").status_code == 404


class TestInvoiceEndpoints:

    def test_create_and_read_back(self, client):
        customer_id = _add_customer(client).json()["id"]
        widget = _add_product(client, "Widget", 100, 10)
        gadget = _add_product(client, "Gadget", 50, 0)

        resp = client.post(
            "/invoices/",
            json={
                "customer_id": customer_id,
                "items": [
                    {"product_id": widget, "price": 100, "tax": 10, "quantity": 2},
                    {"product_id": gadget, "price": 50, "tax": 0, "quantity": 1},
                ],
            },
        )
        assert resp.status_code == 201
        invoice_id = resp.json()["id"]

        history = client.get("/invoices/").json()
        assert [i["id"] for i in history] == [invoice_id]
        assert history[0]["customer_name"] == "Asha Rao"
        assert Decimal(history[0]["total_amount"]) == Decimal("270")
        assert history[0]["created_at"].endswith(("Z", "+00:00"))

        detail = client.get(f"/invoices/{invoice_id}").json()
        assert Decimal(detail["totals"]["subtotal"]) == Decimal("250")
        assert Decimal(detail["totals"]["tax_total"]) == Decimal("20")
        assert len(detail["items"]) == 2

        items = client.get(f"/invoices/{invoice_id}/items").json()
        assert [i["name"] for i in items] == ["Widget", "Gadget"]

    def test_unknown_product_is_409_and_nothing_saved(self, client):
        customer_id = _add_customer(client).json()["id"]
        widget = _add_product(client, "Widget", 100, 10)

        resp = client.post(
            "/invoices/",
            json={
                "customer_id": customer_id,
                "items": [
                    {"product_id": widget, "price": 100, "tax": 10, "quantity": 1},
                    {"product_id": 999, "price": 1, "tax": 0, "quantity": 1},
                ],
            },
        )
        assert resp.status_code == 409
        assert resp.json()["message"] == "Failed to save invoice."
        assert client.get("/invoices/").json() == []

    def test_fractional_total_matches_detail(self, client):
        customer_id = _add_customer(client).json()["id"]
        notebook = _add_product(client, "Notebook", "19.99", "18")

        resp = client.post(
            "/invoices/",
            json={
                "customer_id": customer_id,
                "items": [{"product_id": notebook, "price": "19.99", "tax": "18", "quantity": 3}],
            },
        )
        assert resp.status_code == 201

        detail = client.get(f"/invoices/{resp.json()['id']}").json()
        assert Decimal(detail["total_amount"]) == Decimal("70.76")
        assert Decimal(detail["totals"]["grand_total"]) == Decimal("70.76")
        assert Decimal(detail["items"][0]["price"]) == Decimal("19.99")
        assert Decimal(detail["items"][0]["line_total"]) == Decimal("70.76")

    def test_items_endpoint_loads_items_once(self, client, monkeypatch):
        customer_id = _add_customer(client).json()["id"]
        widget = _add_product(client, "Widget", 100, 10)
        invoice_id = client.post(
            "/invoices/",
            json={
                "customer_id": customer_id,
                "items": [{"product_id": widget, "price": 100, "tax": 10, "quantity": 1}],
            },
        ).json()["id"]

        calls = []
        original = queries.list_invoice_items

        def counting(engine, invoice_id):
            calls.append(invoice_id)
            return original(engine, invoice_id)

        monkeypatch.setattr(queries, "list_invoice_items", counting)

        items = client.get(f"/invoices/{invoice_id}/items").json()
        assert [i["name"] for i in items] == ["Widget"]
        assert calls == [invoice_id]

    def test_empty_items_is_422(self, client):
        resp = client.post("/invoices/", json={"customer_id": 1, "items": []})
        assert resp.status_code == 422

    def test_missing_invoice_is_404(self, client):
        assert client.get("/invoices/3").status_code == 404
        assert client.get("/invoices/3/items").status_code == 404


class TestDraftEndpoints:

    def test_build_preview_and_submit(self, client):
        customer_id = _add_customer(client).json()["id"]
        widget = _add_product(client, "Widget", 100, 10)
        gadget = _add_product(client, "Gadget", 50, 0)

        draft = client.post(f"/drafts/customer?customer_id={customer_id}", json={}).json()
        draft = client.post("/drafts/items", json={"draft": draft, "product_id": widget}).json()
        draft = client.post("/drafts/items", json={"draft": draft, "product_id": gadget}).json()
        draft = client.post(
            "/drafts/quantity", json={"draft": draft, "product_id": widget, "quantity": 2}
        ).json()

        preview = client.post("/drafts/preview", json=draft).json()
        assert Decimal(preview["grand_total"]) == Decimal("270")

        resp = client.post("/drafts/submit", json=draft)
        assert resp.status_code == 201
        saved = client.get(f"/invoices/{resp.json()['id']}").json()
        assert Decimal(saved["total_amount"]) == Decimal(preview["grand_total"])

    def test_remove_line(self, client):
        widget = _add_product(client, "Widget", 100, 10)
        draft = client.post("/drafts/items", json={"product_id": widget}).json()

        draft = client.post("/drafts/remove", json={"draft": draft, "product_id": widget}).json()
        assert draft["items"] == []

    def test_submit_without_customer_is_400(self, client):
        widget = _add_product(client, "Widget", 100, 10)
        draft = client.post("/drafts/items", json={"product_id": widget}).json()

        resp = client.post("/drafts/submit", json=draft)
        assert resp.status_code == 400

    def test_unknown_product_or_customer_is_404(self, client):
        assert client.post("/drafts/items", json={"product_id": 8}).status_code == 404
        assert client.post("/drafts/customer?customer_id=8", json={}).status_code == 404

    def test_fractional_preview_matches_saved_invoice(self, client):
        customer_id = _add_customer(client).json()["id"]
        notebook = _add_product(client, "Notebook", "19.99", "18")

        draft = client.post(f"/drafts/customer?customer_id={customer_id}", json={}).json()
        draft = client.post("/drafts/items", json={"draft": draft, "product_id": notebook}).json()
        draft = client.post(
            "/drafts/quantity", json={"draft": draft, "product_id": notebook, "quantity": 3}
        ).json()

        preview = client.post("/drafts/preview", json=draft).json()
        assert Decimal(preview["grand_total"]) == Decimal("70.76")

        resp = client.post("/drafts/submit", json=draft)
        assert resp.status_code == 201
        saved = client.get(f"/invoices/{resp.json()['id']}").json()
        assert Decimal(saved["total_amount"]) == Decimal(preview["grand_total"])
        assert Decimal(saved["totals"]["tax_total"]) == Decimal(preview["tax_total"])


class TestCommandResponse:

    def test_every_error_kind_has_a_status(self):
        statuses = {
            kind: command_response(CommandResult.fail(kind, "x")).status_code
            for kind in ErrorKind
        }
        assert statuses == {
            ErrorKind.CONFLICT: 409,
            ErrorKind.CONSTRAINT: 409,
            ErrorKind.FAILURE: 500,
        }

    def test_success_is_201(self):
        assert command_response(CommandResult.ok(1)).status_code == 201
