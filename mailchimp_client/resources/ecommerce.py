"""
Ecommerce stores and their customers, carts, orders, products and variants.

Optional fields default to None so they are left out of request bodies.
Products and variants are nested resources and carry their parent keys
(``store_id``, ``product_id``) as local-only fields set when they are fetched.
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.context import RequestContext
from ..core.params import BasicQueryParams, ExtendedQueryParams
from ..core.schema import ListEnvelope, Resource, api_field, require_id, resource_path

STORES_PATH = "/ecommerce/stores"
STORE_PATH = STORES_PATH + "/{store_id}"

CUSTOMERS_PATH = STORE_PATH + "/customers"
CUSTOMER_PATH = CUSTOMERS_PATH + "/{customer_id}"

CARTS_PATH = STORE_PATH + "/carts"
CART_PATH = CARTS_PATH + "/{cart_id}"

ORDERS_PATH = STORE_PATH + "/orders"
ORDER_PATH = ORDERS_PATH + "/{order_id}"

PRODUCTS_PATH = STORE_PATH + "/products"
PRODUCT_PATH = PRODUCTS_PATH + "/{product_id}"

VARIANTS_PATH = PRODUCT_PATH + "/variants"
VARIANT_PATH = VARIANTS_PATH + "/{variant_id}"


# =============================================================================
# Shared shapes
# =============================================================================


@dataclass
class Address:
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    province: str | None = None
    province_code: str | None = None
    postal_code: str | None = None
    country: str | None = None
    country_code: str | None = None
    longitude: float | None = None
    latitude: float | None = None
    phone: str | None = None
    name: str | None = None
    company: str | None = None


@dataclass
class LineItem:
    id: str = ""
    product_id: str = ""
    product_variant_id: str = ""
    quantity: int = 0
    price: float = 0.0
    product_title: str | None = None
    product_variant_title: str | None = None


@dataclass
class Customer(Resource):
    # Required
    id: str = ""
    email_address: str | None = None
    opt_in_status: bool = False

    # Optional
    company: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    orders_count: int | None = None
    total_spent: float | None = None
    address: Address | None = None

    # Response only
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class CustomerList(ListEnvelope):
    store_id: str = ""
    customers: list[Customer] = field(default_factory=list)

    items_field = "customers"


@dataclass
class Cart(Resource):
    # Required
    id: str = ""
    customer: Customer = field(default_factory=Customer)
    currency_code: str = ""
    order_total: float = 0.0
    lines: list[LineItem] = field(default_factory=list)

    # Optional
    campaign_id: str | None = None
    checkout_url: str | None = None
    tax_total: float | None = None

    # Response only
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class CartList(ListEnvelope):
    store_id: str = ""
    carts: list[Cart] = field(default_factory=list)

    items_field = "carts"


@dataclass
class Order(Resource):
    # Required
    id: str = ""
    customer: Customer = field(default_factory=Customer)
    lines: list[LineItem] = field(default_factory=list)
    currency_code: str = ""
    order_total: float = 0.0

    # Optional
    tax_total: float | None = None
    shipping_total: float | None = None
    tracking_code: str | None = None
    processed_at_foreign: str | None = None
    cancelled_at_foreign: str | None = None
    updated_at_foreign: str | None = None
    campaign_id: str | None = None
    financial_status: str | None = None
    fulfillment_status: str | None = None
    billing_address: Address | None = None
    shipping_address: Address | None = None

    # Response only
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class OrderList(ListEnvelope):
    store_id: str = ""
    orders: list[Order] = field(default_factory=list)

    items_field = "orders"


# =============================================================================
# Products and variants
# =============================================================================


@dataclass
class Variant(Resource):
    store_id: str = api_field(internal=True, default="")
    product_id: str = api_field(internal=True, default="")

    # Required
    id: str = ""
    title: str = ""

    # Optional
    url: str | None = None
    sku: str | None = None
    price: float | None = None
    inventory_quantity: int | None = None
    image_url: str | None = None
    backorders: str | None = None
    visibility: str | None = None

    def can_make_request(self) -> None:
        require_id("variant", store_id=self.store_id, product_id=self.product_id, id=self.id)

    def update(self, context: RequestContext | None = None) -> "Variant":
        """Send this variant's fields as an update."""
        self.can_make_request()
        return self.api.update_variant(self.store_id, self.product_id, self, context=context)

    def delete(self, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.delete_variant(self.store_id, self.product_id, self.id, context=context)


@dataclass
class VariantList(ListEnvelope):
    store_id: str = ""
    variants: list[Variant] = field(default_factory=list)

    items_field = "variants"


@dataclass
class Product(Resource):
    store_id: str = api_field(internal=True, default="")

    # Required
    id: str = ""
    title: str = ""
    variants: list[Variant] = field(default_factory=list)

    # Optional
    handle: str | None = None
    url: str | None = None
    description: str | None = None
    type: str | None = None
    vendor: str | None = None
    image_url: str | None = None
    published_at_foreign: str | None = None

    def attach(self, api: Any, **parents: Any) -> "Product":
        """Bind this product and every embedded variant to the client."""
        super().attach(api, **parents)
        for variant in self.variants:
            variant.attach(api, store_id=self.store_id, product_id=self.id)
        return self

    def can_make_request(self) -> None:
        require_id("product", store_id=self.store_id, id=self.id)

    def get_variants(
        self,
        params: ExtendedQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> VariantList:
        self.can_make_request()
        return self.api.get_variants(self.store_id, self.id, params, context=context)

    def get_variant(self, variant_id: str, context: RequestContext | None = None) -> Variant:
        self.can_make_request()
        return self.api.get_variant(self.store_id, self.id, variant_id, context=context)

    def create_variant(self, body: Variant, context: RequestContext | None = None) -> Variant:
        self.can_make_request()
        return self.api.create_variant(self.store_id, self.id, body, context=context)

    def update_variant(self, body: Variant, context: RequestContext | None = None) -> Variant:
        self.can_make_request()
        return self.api.update_variant(self.store_id, self.id, body, context=context)

    def delete_variant(self, variant_id: str, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.delete_variant(self.store_id, self.id, variant_id, context=context)


@dataclass
class ProductList(ListEnvelope):
    store_id: str = ""
    products: list[Product] = field(default_factory=list)

    items_field = "products"


# =============================================================================
# Stores
# =============================================================================


@dataclass
class Store(Resource):
    # Required
    id: str = ""
    list_id: str = ""
    currency_code: str = ""
    name: str = ""

    # Optional
    platform: str | None = None
    domain: str | None = None
    email_address: str | None = None
    money_format: str | None = None
    primary_locale: str | None = None
    timezone: str | None = None
    phone: str | None = None
    address: Address | None = None

    # Response only
    created_at: str | None = None
    updated_at: str | None = None

    def can_make_request(self) -> None:
        require_id("store", id=self.id)

    # Customers

    def get_customers(self, params: ExtendedQueryParams | None = None, context: RequestContext | None = None) -> CustomerList:
        self.can_make_request()
        return self.api.get_customers(self.id, params, context=context)

    def get_customer(self, customer_id: str, params: BasicQueryParams | None = None, context: RequestContext | None = None) -> Customer:
        self.can_make_request()
        return self.api.get_customer(self.id, customer_id, params, context=context)

    def create_customer(self, body: Customer, context: RequestContext | None = None) -> Customer:
        self.can_make_request()
        return self.api.create_customer(self.id, body, context=context)

    def update_customer(self, body: Customer, context: RequestContext | None = None) -> Customer:
        self.can_make_request()
        return self.api.update_customer(self.id, body, context=context)

    def delete_customer(self, customer_id: str, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.delete_customer(self.id, customer_id, context=context)

    # Carts

    def get_carts(self, params: ExtendedQueryParams | None = None, context: RequestContext | None = None) -> CartList:
        self.can_make_request()
        return self.api.get_carts(self.id, params, context=context)

    def get_cart(self, cart_id: str, params: BasicQueryParams | None = None, context: RequestContext | None = None) -> Cart:
        self.can_make_request()
        return self.api.get_cart(self.id, cart_id, params, context=context)

    def create_cart(self, body: Cart, context: RequestContext | None = None) -> Cart:
        self.can_make_request()
        return self.api.create_cart(self.id, body, context=context)

    def update_cart(self, body: Cart, context: RequestContext | None = None) -> Cart:
        self.can_make_request()
        return self.api.update_cart(self.id, body, context=context)

    def delete_cart(self, cart_id: str, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.delete_cart(self.id, cart_id, context=context)

    # Orders

    def get_orders(self, params: ExtendedQueryParams | None = None, context: RequestContext | None = None) -> OrderList:
        self.can_make_request()
        return self.api.get_orders(self.id, params, context=context)

    def get_order(self, order_id: str, params: BasicQueryParams | None = None, context: RequestContext | None = None) -> Order:
        self.can_make_request()
        return self.api.get_order(self.id, order_id, params, context=context)

    def create_order(self, body: Order, context: RequestContext | None = None) -> Order:
        self.can_make_request()
        return self.api.create_order(self.id, body, context=context)

    def update_order(self, body: Order, context: RequestContext | None = None) -> Order:
        self.can_make_request()
        return self.api.update_order(self.id, body, context=context)

    def delete_order(self, order_id: str, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.delete_order(self.id, order_id, context=context)

    # Products

    def get_products(self, params: ExtendedQueryParams | None = None, context: RequestContext | None = None) -> ProductList:
        self.can_make_request()
        return self.api.get_products(self.id, params, context=context)

    def get_product(self, product_id: str, params: BasicQueryParams | None = None, context: RequestContext | None = None) -> Product:
        self.can_make_request()
        return self.api.get_product(self.id, product_id, params, context=context)

    def create_product(self, body: Product, context: RequestContext | None = None) -> Product:
        self.can_make_request()
        return self.api.create_product(self.id, body, context=context)

    def update_product(self, body: Product, context: RequestContext | None = None) -> Product:
        self.can_make_request()
        return self.api.update_product(self.id, body, context=context)

    def delete_product(self, product_id: str, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.delete_product(self.id, product_id, context=context)


@dataclass
class StoreList(ListEnvelope):
    stores: list[Store] = field(default_factory=list)

    items_field = "stores"


class EcommerceMixin:
    """Ecommerce endpoints, addressed by explicit store (and product) ids."""

    # =========================================================================
    # Stores
    # =========================================================================

    def get_stores(self, params: ExtendedQueryParams | None = None, context: RequestContext | None = None) -> StoreList:
        return self.request("GET", STORES_PATH, params=params, response_type=StoreList, context=context)

    def get_store(self, store_id: str, params: BasicQueryParams | None = None, context: RequestContext | None = None) -> Store:
        require_id("store", store_id=store_id)
        path = resource_path(STORE_PATH, store_id=store_id)
        return self.request("GET", path, params=params, response_type=Store, context=context)

    def create_store(self, body: Store, context: RequestContext | None = None) -> Store:
        return self.request("POST", STORES_PATH, body=body, response_type=Store, context=context)

    def update_store(self, body: Store, context: RequestContext | None = None) -> Store:
        require_id("store", id=body.id)
        path = resource_path(STORE_PATH, store_id=body.id)
        return self.request("PATCH", path, body=body, response_type=Store, context=context)

    def delete_store(self, store_id: str, context: RequestContext | None = None) -> bool:
        require_id("store", store_id=store_id)
        self.request("DELETE", resource_path(STORE_PATH, store_id=store_id), context=context)
        return True

    # =========================================================================
    # Customers
    # =========================================================================

    def get_customers(self, store_id: str, params: ExtendedQueryParams | None = None, context: RequestContext | None = None) -> CustomerList:
        require_id("store", store_id=store_id)
        path = resource_path(CUSTOMERS_PATH, store_id=store_id)
        return self.request("GET", path, params=params, response_type=CustomerList, context=context)

    def get_customer(self, store_id: str, customer_id: str, params: BasicQueryParams | None = None, context: RequestContext | None = None) -> Customer:
        require_id("customer", store_id=store_id, customer_id=customer_id)
        path = resource_path(CUSTOMER_PATH, store_id=store_id, customer_id=customer_id)
        return self.request("GET", path, params=params, response_type=Customer, context=context)

    def create_customer(self, store_id: str, body: Customer, context: RequestContext | None = None) -> Customer:
        require_id("store", store_id=store_id)
        path = resource_path(CUSTOMERS_PATH, store_id=store_id)
        return self.request("POST", path, body=body, response_type=Customer, context=context)

    def update_customer(self, store_id: str, body: Customer, context: RequestContext | None = None) -> Customer:
        require_id("customer", store_id=store_id, id=body.id)
        path = resource_path(CUSTOMER_PATH, store_id=store_id, customer_id=body.id)
        return self.request("PATCH", path, body=body, response_type=Customer, context=context)

    def delete_customer(self, store_id: str, customer_id: str, context: RequestContext | None = None) -> bool:
        require_id("customer", store_id=store_id, customer_id=customer_id)
        self.request("DELETE", resource_path(CUSTOMER_PATH, store_id=store_id, customer_id=customer_id), context=context)
        return True

    # =========================================================================
    # Carts
    # =========================================================================

    def get_carts(self, store_id: str, params: ExtendedQueryParams | None = None, context: RequestContext | None = None) -> CartList:
        require_id("store", store_id=store_id)
        path = resource_path(CARTS_PATH, store_id=store_id)
        return self.request("GET", path, params=params, response_type=CartList, context=context)

    def get_cart(self, store_id: str, cart_id: str, params: BasicQueryParams | None = None, context: RequestContext | None = None) -> Cart:
        require_id("cart", store_id=store_id, cart_id=cart_id)
        path = resource_path(CART_PATH, store_id=store_id, cart_id=cart_id)
        return self.request("GET", path, params=params, response_type=Cart, context=context)

    def create_cart(self, store_id: str, body: Cart, context: RequestContext | None = None) -> Cart:
        require_id("store", store_id=store_id)
        path = resource_path(CARTS_PATH, store_id=store_id)
        return self.request("POST", path, body=body, response_type=Cart, context=context)

    def update_cart(self, store_id: str, body: Cart, context: RequestContext | None = None) -> Cart:
        require_id("cart", store_id=store_id, id=body.id)
        path = resource_path(CART_PATH, store_id=store_id, cart_id=body.id)
        return self.request("PATCH", path, body=body, response_type=Cart, context=context)

    def delete_cart(self, store_id: str, cart_id: str, context: RequestContext | None = None) -> bool:
        require_id("cart", store_id=store_id, cart_id=cart_id)
        self.request("DELETE", resource_path(CART_PATH, store_id=store_id, cart_id=cart_id), context=context)
        return True

    # =========================================================================
    # Orders
    # =========================================================================

    def get_orders(self, store_id: str, params: ExtendedQueryParams | None = None, context: RequestContext | None = None) -> OrderList:
        require_id("store", store_id=store_id)
        path = resource_path(ORDERS_PATH, store_id=store_id)
        return self.request("GET", path, params=params, response_type=OrderList, context=context)

    def get_order(self, store_id: str, order_id: str, params: BasicQueryParams | None = None, context: RequestContext | None = None) -> Order:
        require_id("order", store_id=store_id, order_id=order_id)
        path = resource_path(ORDER_PATH, store_id=store_id, order_id=order_id)
        return self.request("GET", path, params=params, response_type=Order, context=context)

    def create_order(self, store_id: str, body: Order, context: RequestContext | None = None) -> Order:
        require_id("store", store_id=store_id)
        path = resource_path(ORDERS_PATH, store_id=store_id)
        return self.request("POST", path, body=body, response_type=Order, context=context)

    def update_order(self, store_id: str, body: Order, context: RequestContext | None = None) -> Order:
        require_id("order", store_id=store_id, id=body.id)
        path = resource_path(ORDER_PATH, store_id=store_id, order_id=body.id)
        return self.request("PATCH", path, body=body, response_type=Order, context=context)

    def delete_order(self, store_id: str, order_id: str, context: RequestContext | None = None) -> bool:
        require_id("order", store_id=store_id, order_id=order_id)
        self.request("DELETE", resource_path(ORDER_PATH, store_id=store_id, order_id=order_id), context=context)
        return True

    # =========================================================================
    # Products
    # =========================================================================

    def get_products(self, store_id: str, params: ExtendedQueryParams | None = None, context: RequestContext | None = None) -> ProductList:
        require_id("store", store_id=store_id)
        path = resource_path(PRODUCTS_PATH, store_id=store_id)
        return self.request(
            "GET", path,
            params=params, response_type=ProductList, parents={"store_id": store_id}, context=context,
        )

    def get_product(self, store_id: str, product_id: str, params: BasicQueryParams | None = None, context: RequestContext | None = None) -> Product:
        require_id("product", store_id=store_id, product_id=product_id)
        path = resource_path(PRODUCT_PATH, store_id=store_id, product_id=product_id)
        return self.request(
            "GET", path,
            params=params, response_type=Product, parents={"store_id": store_id}, context=context,
        )

    def create_product(self, store_id: str, body: Product, context: RequestContext | None = None) -> Product:
        require_id("store", store_id=store_id)
        path = resource_path(PRODUCTS_PATH, store_id=store_id)
        return self.request(
            "POST", path,
            body=body, response_type=Product, parents={"store_id": store_id}, context=context,
        )

    def update_product(self, store_id: str, body: Product, context: RequestContext | None = None) -> Product:
        require_id("product", store_id=store_id, id=body.id)
        path = resource_path(PRODUCT_PATH, store_id=store_id, product_id=body.id)
        return self.request(
            "PATCH", path,
            body=body, response_type=Product, parents={"store_id": store_id}, context=context,
        )

    def delete_product(self, store_id: str, product_id: str, context: RequestContext | None = None) -> bool:
        require_id("product", store_id=store_id, product_id=product_id)
        self.request("DELETE", resource_path(PRODUCT_PATH, store_id=store_id, product_id=product_id), context=context)
        return True

    # =========================================================================
    # Variants
    # =========================================================================

    def get_variants(self, store_id: str, product_id: str, params: ExtendedQueryParams | None = None, context: RequestContext | None = None) -> VariantList:
        require_id("product", store_id=store_id, product_id=product_id)
        path = resource_path(VARIANTS_PATH, store_id=store_id, product_id=product_id)
        return self.request(
            "GET", path,
            params=params, response_type=VariantList,
            parents={"store_id": store_id, "product_id": product_id}, context=context,
        )

    def get_variant(self, store_id: str, product_id: str, variant_id: str, context: RequestContext | None = None) -> Variant:
        require_id("variant", store_id=store_id, product_id=product_id, variant_id=variant_id)
        path = resource_path(VARIANT_PATH, store_id=store_id, product_id=product_id, variant_id=variant_id)
        return self.request(
            "GET", path,
            response_type=Variant, parents={"store_id": store_id, "product_id": product_id}, context=context,
        )

    def create_variant(self, store_id: str, product_id: str, body: Variant, context: RequestContext | None = None) -> Variant:
        require_id("product", store_id=store_id, product_id=product_id)
        path = resource_path(VARIANTS_PATH, store_id=store_id, product_id=product_id)
        return self.request(
            "POST", path,
            body=body, response_type=Variant,
            parents={"store_id": store_id, "product_id": product_id}, context=context,
        )

    def update_variant(self, store_id: str, product_id: str, body: Variant, context: RequestContext | None = None) -> Variant:
        require_id("variant", store_id=store_id, product_id=product_id, id=body.id)
        path = resource_path(VARIANT_PATH, store_id=store_id, product_id=product_id, variant_id=body.id)
        return self.request(
            "PATCH", path,
            body=body, response_type=Variant,
            parents={"store_id": store_id, "product_id": product_id}, context=context,
        )

    def delete_variant(self, store_id: str, product_id: str, variant_id: str, context: RequestContext | None = None) -> bool:
        require_id("variant", store_id=store_id, product_id=product_id, variant_id=variant_id)
        path = resource_path(VARIANT_PATH, store_id=store_id, product_id=product_id, variant_id=variant_id)
        self.request("DELETE", path, context=context)
        return True
