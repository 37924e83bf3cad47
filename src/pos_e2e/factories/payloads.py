"""
Request Payload Factories

Factory-boy factories producing the JSON bodies the suite posts to the API.
Unique fields come from pos_e2e.factories.identifiers; every field can be
overridden per call.

Usage:
    body = ProductPayloadFactory.build(establishmentId=est_id, price=10.0)
    body = MinimalProductPayloadFactory.build(establishmentId=est_id)
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import factory
from faker import Faker

from pos_e2e.config.settings import get_settings
from pos_e2e.constants.api import TEST_USER_NAME
from pos_e2e.factories.identifiers import (
    unique_cnpj,
    unique_code,
    unique_cpf,
    unique_email,
    unique_phone,
    unique_sku,
)

fake = Faker("pt_BR")


def _ms() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)


class RegistrationPayloadFactory(factory.Factory):
    """POST /auth/register and POST /users."""

    class Meta:
        model = dict

    email = factory.LazyFunction(unique_email)
    password = factory.LazyFunction(lambda: get_settings().test_password)
    name = TEST_USER_NAME
    phone = factory.LazyFunction(unique_phone)


class UserPayloadFactory(RegistrationPayloadFactory):
    """POST /users with a CPF."""

    name = "Created Test User"
    cpf = factory.LazyFunction(unique_cpf)


class AddressFieldsFactory(factory.Factory):
    """Street address fields shared by establishments, customers and addresses."""

    class Meta:
        model = dict

    street = "Rua Teste"
    number = "123"
    neighborhood = "Centro"
    city = "São Paulo"
    state = "SP"
    zipCode = "01000000"


class EstablishmentPayloadFactory(AddressFieldsFactory):
    """POST /establishments."""

    name = factory.LazyFunction(lambda: f"Test Establishment {_ms()}")
    tradeName = "Test"
    cnpj = factory.LazyFunction(unique_cnpj)
    email = factory.LazyFunction(unique_email)
    phone = factory.LazyFunction(unique_phone)


class CategoryPayloadFactory(factory.Factory):
    """POST /categories. establishmentId must be supplied."""

    class Meta:
        model = dict

    name = factory.LazyFunction(lambda: f"{fake.word().title()} Category")
    establishmentId = None
    isActive = True


class ProductPayloadFactory(factory.Factory):
    """POST /products with inventory tracking. establishmentId must be supplied."""

    class Meta:
        model = dict

    name = "E2E Test Product"
    description = "A test product for E2E testing"
    establishmentId = None
    price = 29.90
    cost = 15.00
    sku = factory.LazyFunction(unique_sku)
    trackInventory = True
    currentStock = 100
    minStock = 10
    maxStock = 200
    unit = "un"
    isActive = True
    isAvailable = True


class MinimalProductPayloadFactory(factory.Factory):
    """POST /products with only the required fields."""

    class Meta:
        model = dict

    name = "Minimal Product"
    establishmentId = None
    price = 10.00


class OrderItemFactory(factory.Factory):
    class Meta:
        model = dict

    productId = None
    quantity = 1
    unitPrice = 25.90


class OrderPayloadFactory(factory.Factory):
    """POST /orders. Pass items=[OrderItemFactory.build(...)]."""

    class Meta:
        model = dict

    establishmentId = None
    type = "DINE_IN"
    items = factory.LazyFunction(list)


class CustomerPayloadFactory(factory.Factory):
    """POST /customers (public endpoint)."""

    class Meta:
        model = dict

    name = factory.LazyFunction(fake.name)
    phone = factory.LazyFunction(unique_phone)


class AddressPayloadFactory(AddressFieldsFactory):
    """POST /addresses. customerId must be supplied."""

    customerId = None
    isDefault = False


class CouponPayloadFactory(factory.Factory):
    """POST /coupons."""

    class Meta:
        model = dict

    code = factory.LazyFunction(lambda: unique_code("coupon"))
    establishmentId = None
    discountType = "PERCENTAGE"
    discountValue = 10


class PublicCouponPayloadFactory(CouponPayloadFactory):
    """Public percentage coupon valid for the next 30 days."""

    minOrderAmount = 50.00
    maxUses = 100
    startDate = factory.LazyFunction(lambda: datetime.now(UTC).isoformat())
    endDate = factory.LazyFunction(lambda: (datetime.now(UTC) + timedelta(days=30)).isoformat())
    isActive = True
    isPublic = True


class TablePayloadFactory(factory.Factory):
    """POST /tables."""

    class Meta:
        model = dict

    number = factory.Sequence(lambda n: n + 1)
    establishmentId = None
    capacity = 4


class DynamicPricePayloadFactory(factory.Factory):
    """POST /dynamic-pricing."""

    class Meta:
        model = dict

    productId = None
    name = "Happy Hour"
    priceType = "PERCENTAGE_DISCOUNT"
    value = 20
    isActive = True
