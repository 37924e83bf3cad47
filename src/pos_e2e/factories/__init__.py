"""
Test Data Factories

Unique-value generators and factory-boy payload factories for the e2e suite.

Usage:
    from pos_e2e.factories import ProductPayloadFactory, unique_sku

    body = ProductPayloadFactory.build(establishmentId=est_id)
"""

from pos_e2e.factories.identifiers import (
    unique_cnpj,
    unique_code,
    unique_cpf,
    unique_email,
    unique_phone,
    unique_sku,
)
from pos_e2e.factories.payloads import (
    AddressFieldsFactory,
    AddressPayloadFactory,
    CategoryPayloadFactory,
    CouponPayloadFactory,
    CustomerPayloadFactory,
    DynamicPricePayloadFactory,
    EstablishmentPayloadFactory,
    MinimalProductPayloadFactory,
    OrderItemFactory,
    OrderPayloadFactory,
    ProductPayloadFactory,
    PublicCouponPayloadFactory,
    RegistrationPayloadFactory,
    TablePayloadFactory,
    UserPayloadFactory,
)

__all__ = [
    "AddressFieldsFactory",
    "AddressPayloadFactory",
    "CategoryPayloadFactory",
    "CouponPayloadFactory",
    "CustomerPayloadFactory",
    "DynamicPricePayloadFactory",
    "EstablishmentPayloadFactory",
    "MinimalProductPayloadFactory",
    "OrderItemFactory",
    "OrderPayloadFactory",
    "ProductPayloadFactory",
    "PublicCouponPayloadFactory",
    "RegistrationPayloadFactory",
    "TablePayloadFactory",
    "UserPayloadFactory",
    "unique_cnpj",
    "unique_code",
    "unique_cpf",
    "unique_email",
    "unique_phone",
    "unique_sku",
]
