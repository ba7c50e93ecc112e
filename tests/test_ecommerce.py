"""Tests for ecommerce stores and their nested resources."""

import json

import httpx
import pytest

from mailchimp_client.client import MailchimpClient
from mailchimp_client.core.models import ValidationError
from mailchimp_client.resources.ecommerce import (
    Address,
    Cart,
    Customer,
    LineItem,
    Order,
    Product,
    Store,
    Variant,
)

PREFIX = "/3.0"


@pytest.fixture
def routes():
    return {}


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def client(routes, requests_seen):
    def handler(request):
        requests_seen.append(request)
        path = request.url.path.removeprefix(PREFIX)
        status_code, body = routes.get((request.method, path), (204, None))
        content = json.dumps(body).encode() if body is not None else b""
        return httpx.Response(status_code, content=content)

    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    with MailchimpClient(api_key="abc123-us6", http_client=http_client) as client:
        yield client


def calls(requests_seen):
    return [(r.method, r.url.path.removeprefix(PREFIX)) for r in requests_seen]


@pytest.fixture
def store(client, routes):
    routes[("GET", "/ecommerce/stores/s1")] = (200, {"id": "s1", "list_id": "L1", "currency_code": "USD"})
    return client.get_store("s1")


# ===== Stores =====

def test_create_store_omits_unset_fields(client, routes, requests_seen):
    routes[("POST", "/ecommerce/stores")] = (200, {"id": "s1", "name": "Shop"})

    created = client.create_store(Store(id="s1", list_id="L1", currency_code="USD", name="Shop"))

    assert created.name == "Shop"
    assert json.loads(requests_seen[0].content) == {
        "_links": [],
        "id": "s1",
        "list_id": "L1",
        "currency_code": "USD",
        "name": "Shop",
    }


def test_store_list_and_crud(client, routes, requests_seen):
    routes[("GET", "/ecommerce/stores")] = (200, {"stores": [{"id": "s1"}, {"id": "s2"}], "total_items": 2})

    stores = client.get_stores()
    assert [s.id for s in stores.stores] == ["s1", "s2"]

    client.update_store(Store(id="s2", name="Renamed", address=Address(city="Atlanta")))
    assert client.delete_store("s2") is True

    assert calls(requests_seen)[1:] == [
        ("PATCH", "/ecommerce/stores/s2"),
        ("DELETE", "/ecommerce/stores/s2"),
    ]
    assert json.loads(requests_seen[1].content)["address"] == {"city": "Atlanta"}


def test_store_operations_need_store_id(client, requests_seen):
    with pytest.raises(ValidationError):
        client.get_store("")
    with pytest.raises(ValidationError):
        client.update_store(Store(name="no id"))
    with pytest.raises(ValidationError):
        Store().attach(client).get_customers()

    assert requests_seen == []


# ===== Customers, carts and orders =====

def test_customers_from_store(store, routes, requests_seen):
    routes[("GET", "/ecommerce/stores/s1/customers")] = (200, {
        "store_id": "s1",
        "customers": [{"id": "cu1", "email_address": "a@example.com", "opt_in_status": True}],
        "total_items": 1,
    })
    routes[("GET", "/ecommerce/stores/s1/customers/cu1")] = (200, {"id": "cu1", "orders_count": 2})

    customers = store.get_customers()
    assert customers.customers[0].opt_in_status is True

    assert store.get_customer("cu1").orders_count == 2
    store.update_customer(Customer(id="cu1", first_name="Ann"))
    store.delete_customer("cu1")

    assert calls(requests_seen)[-2:] == [
        ("PATCH", "/ecommerce/stores/s1/customers/cu1"),
        ("DELETE", "/ecommerce/stores/s1/customers/cu1"),
    ]


def test_carts_from_store(store, routes, requests_seen):
    routes[("GET", "/ecommerce/stores/s1/carts")] = (200, {
        "carts": [{"id": "ca1", "order_total": 12, "lines": [{"id": "l1", "quantity": 2, "price": 6}]}],
        "total_items": 1,
    })

    carts = store.get_carts()
    cart = carts.carts[0]
    assert cart.order_total == 12.0
    assert cart.lines[0].quantity == 2

    store.create_cart(Cart(
        id="ca2",
        customer=Customer(id="cu1"),
        currency_code="USD",
        order_total=6,
        lines=[LineItem(id="l1", product_id="p1", product_variant_id="v1", quantity=1, price=6)],
    ))
    store.delete_cart("ca2")

    assert calls(requests_seen)[-2:] == [
        ("POST", "/ecommerce/stores/s1/carts"),
        ("DELETE", "/ecommerce/stores/s1/carts/ca2"),
    ]
    body = json.loads(requests_seen[-2].content)
    assert body["customer"]["id"] == "cu1"
    assert body["lines"][0]["product_variant_id"] == "v1"


def test_orders_use_orders_path(store, routes, requests_seen):
    routes[("GET", "/ecommerce/stores/s1/orders")] = (200, {"orders": [{"id": "o1"}], "total_items": 1})
    routes[("GET", "/ecommerce/stores/s1/orders/o1")] = (200, {"id": "o1", "financial_status": "paid"})

    assert store.get_orders().orders[0].id == "o1"
    assert store.get_order("o1").financial_status == "paid"
    store.update_order(Order(id="o1", tracking_code="prec"))

    assert calls(requests_seen)[1:] == [
        ("GET", "/ecommerce/stores/s1/orders"),
        ("GET", "/ecommerce/stores/s1/orders/o1"),
        ("PATCH", "/ecommerce/stores/s1/orders/o1"),
    ]


# ===== Products and variants =====

def test_products_use_products_path_and_carry_store_id(store, routes, requests_seen):
    routes[("GET", "/ecommerce/stores/s1/products")] = (200, {
        "products": [{"id": "p1", "title": "Mug"}, {"id": "p2", "title": "Cap"}],
        "total_items": 2,
    })

    products = store.get_products()

    assert calls(requests_seen)[-1] == ("GET", "/ecommerce/stores/s1/products")
    assert [p.store_id for p in products.products] == ["s1", "s1"]


def test_variant_chain(store, routes, requests_seen):
    """Test that a product fetched from a store can manage its variants."""
    routes[("GET", "/ecommerce/stores/s1/products/p1")] = (200, {"id": "p1", "title": "Mug"})
    routes[("POST", "/ecommerce/stores/s1/products/p1/variants")] = (200, {"id": "v1", "title": "Blue"})

    product = store.get_product("p1")
    assert product.store_id == "s1"

    variant = product.create_variant(Variant(id="v1", title="Blue", price=9.5))
    assert variant.store_id == "s1"
    assert variant.product_id == "p1"

    variant.update()
    variant.delete()

    assert calls(requests_seen)[-3:] == [
        ("POST", "/ecommerce/stores/s1/products/p1/variants"),
        ("PATCH", "/ecommerce/stores/s1/products/p1/variants/v1"),
        ("DELETE", "/ecommerce/stores/s1/products/p1/variants/v1"),
    ]
    # Parent keys are local-only
    created_body = json.loads(requests_seen[-3].content)
    assert "store_id" not in created_body
    assert "product_id" not in created_body
    assert created_body["price"] == 9.5


def test_product_without_store_id_makes_no_call(client, requests_seen):
    product = Product(id="p1").attach(client)

    with pytest.raises(ValidationError):
        product.delete_variant("v1")

    assert requests_seen == []


def test_variant_needs_product_id(client, requests_seen):
    variant = Variant(id="v1", store_id="s1").attach(client)

    with pytest.raises(ValidationError) as exc_info:
        variant.delete()

    assert "product_id" in str(exc_info.value)
    assert requests_seen == []


def test_embedded_variants_are_wired(store, routes, requests_seen):
    """Test that variants embedded in a fetched product can issue calls."""
    routes[("GET", "/ecommerce/stores/s1/products/p1")] = (200, {
        "id": "p1",
        "title": "Mug",
        "variants": [{"id": "v1", "title": "Blue"}, {"id": "v2", "title": "Red"}],
    })

    product = store.get_product("p1")

    for variant in product.variants:
        assert variant.store_id == "s1"
        assert variant.product_id == "p1"
        assert variant.api is product.api

    product.variants[1].delete()

    assert calls(requests_seen)[-1] == ("DELETE", "/ecommerce/stores/s1/products/p1/variants/v2")


def test_products_in_list_wire_their_variants(store, routes, requests_seen):
    routes[("GET", "/ecommerce/stores/s1/products")] = (200, {
        "products": [{"id": "p1", "variants": [{"id": "v1"}]}],
        "total_items": 1,
    })

    variant = store.get_products().products[0].variants[0]
    variant.update()

    assert calls(requests_seen)[-1] == ("PATCH", "/ecommerce/stores/s1/products/p1/variants/v1")
