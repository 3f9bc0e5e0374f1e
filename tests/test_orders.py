import pytest


def test_list_orders_empty(client) -> None:
    response = client.get("/api/orders")
    assert response.status_code == 200
    assert response.json() == []


def test_create_order_computes_total(client, make_product) -> None:
    product = make_product(price="10.00")
    response = client.post("/api/orders", json={"product_id": product["id"], "quantity": 3})
    assert response.status_code == 201
    body = response.json()
    assert body["product_id"] == product["id"]
    assert body["quantity"] == 3
    assert body["total_price"] == 30.0
    assert body["created_at"] is not None


@pytest.mark.parametrize("quantity", [3, "3", 3.0])
def test_create_order_accepts_integral_quantity(client, make_product, quantity) -> None:
    product = make_product(price="2.50")
    response = client.post("/api/orders", json={"product_id": product["id"], "quantity": quantity})
    assert response.status_code == 201
    assert response.json()["quantity"] == 3
    assert response.json()["total_price"] == 7.5


@pytest.mark.parametrize("quantity", [0, -2, 1.5, "abc", True])
def test_create_order_invalid_quantity(client, make_product, quantity) -> None:
    product = make_product()
    response = client.post("/api/orders", json={"product_id": product["id"], "quantity": quantity})
    assert response.status_code == 400
    assert response.json() == {"error": "Quantity must be a positive integer"}


@pytest.mark.parametrize("body", [{"quantity": 1}, {"product_id": 1}, {}])
def test_create_order_missing_fields(client, body) -> None:
    response = client.post("/api/orders", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Product ID and quantity are required"}


def test_create_order_bad_product_id(client) -> None:
    response = client.post("/api/orders", json={"product_id": "abc", "quantity": 1})
    assert response.status_code == 400
    assert response.json() == {"error": "Product ID must be an integer"}


def test_create_order_unknown_product(client) -> None:
    response = client.post("/api/orders", json={"product_id": 42, "quantity": 1})
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}
    assert client.get("/api/orders").json() == []


def test_get_order(client, make_product, make_order) -> None:
    order = make_order(make_product()["id"], 2)
    response = client.get(f"/api/orders/{order['id']}")
    assert response.status_code == 200
    assert response.json() == order


def test_update_quantity_uses_current_product_price(client, make_product, make_order) -> None:
    product = make_product(price="4.00")
    order = make_order(product["id"], 1)
    response = client.put(f"/api/orders/{order['id']}", json={"quantity": 4})
    assert response.status_code == 200
    body = response.json()
    assert body["product_id"] == product["id"]
    assert body["quantity"] == 4
    assert body["total_price"] == 16.0
    assert body["created_at"] == order["created_at"]


def test_update_product_uses_existing_quantity(client, make_product, make_order) -> None:
    cheap = make_product(name="Cheap", price="1.00")
    dear = make_product(name="Dear", price="7.25")
    order = make_order(cheap["id"], 4)
    response = client.put(f"/api/orders/{order['id']}", json={"product_id": dear["id"]})
    assert response.status_code == 200
    body = response.json()
    assert body["product_id"] == dear["id"]
    assert body["quantity"] == 4
    assert body["total_price"] == 29.0


def test_update_product_and_quantity(client, make_product, make_order) -> None:
    cheap = make_product(name="Cheap", price="1.00")
    dear = make_product(name="Dear", price="3.00")
    order = make_order(cheap["id"], 4)
    response = client.put(f"/api/orders/{order['id']}", json={"product_id": dear["id"], "quantity": 2})
    assert response.status_code == 200
    assert response.json()["total_price"] == 6.0
    assert response.json()["quantity"] == 2


def test_update_order_empty_body_keeps_total(client, make_product, make_order) -> None:
    product = make_product(price="5.00")
    order = make_order(product["id"], 2)
    # price changes later do not touch existing orders
    client.put(f"/api/products/{product['id']}", json={"price": 100})
    response = client.put(f"/api/orders/{order['id']}", json={})
    assert response.status_code == 200
    assert response.json()["total_price"] == 10.0
    assert client.get(f"/api/orders/{order['id']}").json()["total_price"] == 10.0


def test_update_order_invalid_quantity(client, make_product, make_order) -> None:
    product = make_product()
    order = make_order(product["id"], 2)
    for body in ({"quantity": 0}, {"product_id": product["id"], "quantity": 1.5}):
        response = client.put(f"/api/orders/{order['id']}", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Quantity must be a positive integer"}
    assert client.get(f"/api/orders/{order['id']}").json()["quantity"] == 2


def test_update_order_unknown_product(client, make_product, make_order) -> None:
    order = make_order(make_product()["id"], 2)
    response = client.put(f"/api/orders/{order['id']}", json={"product_id": 999})
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


def test_delete_order(client, make_product, make_order) -> None:
    product = make_product()
    order = make_order(product["id"], 1)
    response = client.delete(f"/api/orders/{order['id']}")
    assert response.status_code == 204
    assert client.get(f"/api/orders/{order['id']}").status_code == 404
    # the product is untouched
    assert client.get(f"/api/products/{product['id']}").status_code == 200


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_missing_order_is_404(client, method) -> None:
    kwargs = {"json": {"quantity": 1}} if method == "put" else {}
    response = getattr(client, method)("/api/orders/999", **kwargs)
    assert response.status_code == 404
    assert response.json() == {"error": "Order not found"}


def test_widget_scenario(client) -> None:
    product = client.post("/api/products", json={"name": "Widget", "price": "19.99"})
    assert product.status_code == 201
    assert product.json()["price"] == 19.99

    order = client.post("/api/orders", json={"product_id": product.json()["id"], "quantity": 3})
    assert order.status_code == 201
    assert order.json()["total_price"] == 59.97

    updated = client.put(f"/api/orders/{order.json()['id']}", json={"quantity": 5})
    assert updated.status_code == 200
    assert updated.json()["total_price"] == 99.95
    assert updated.json()["product_id"] == product.json()["id"]


@pytest.mark.parametrize("quantity", ["1e3000000", "1e400000", 10**40, 2**31])
def test_create_order_quantity_out_of_range(client, make_product, quantity) -> None:
    product = make_product()
    response = client.post("/api/orders", json={"product_id": product["id"], "quantity": quantity})
    assert response.status_code == 400
    assert response.json() == {"error": "Quantity must be a positive integer"}


@pytest.mark.parametrize("product_id", ["1e3000000", 10**40])
def test_create_order_product_id_out_of_range(client, product_id) -> None:
    response = client.post("/api/orders", json={"product_id": product_id, "quantity": 1})
    assert response.status_code == 400
    assert response.json() == {"error": "Product ID must be an integer"}


def test_create_order_total_exceeds_column(client, make_product) -> None:
    product = make_product(price="99999999.99")
    response = client.post("/api/orders", json={"product_id": product["id"], "quantity": 2})
    assert response.status_code == 400
    assert response.json() == {"error": "Total price must not exceed 99999999.99"}
    assert client.get("/api/orders").json() == []


def test_update_order_total_exceeds_column(client, make_product, make_order) -> None:
    product = make_product(price="50000000.00")
    order = make_order(product["id"], 1)
    response = client.put(f"/api/orders/{order['id']}", json={"quantity": 3})
    assert response.status_code == 400
    assert response.json() == {"error": "Total price must not exceed 99999999.99"}
    assert client.get(f"/api/orders/{order['id']}").json() == order


def test_update_order_quantity_out_of_range(client, make_product, make_order) -> None:
    order = make_order(make_product()["id"], 1)
    response = client.put(f"/api/orders/{order['id']}", json={"quantity": "1e3000000"})
    assert response.status_code == 400
    assert response.json() == {"error": "Quantity must be a positive integer"}
