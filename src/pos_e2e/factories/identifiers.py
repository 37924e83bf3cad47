"""
Unique Identifier Generators

Values for fields the API enforces as unique (email, phone, CPF, CNPJ, SKU,
codes). Each value combines a millisecond timestamp or random digits from
Faker, which keeps collisions within one run unlikely but not impossible.
"""

from __future__ import annotations

import time

from faker import Faker

fake = Faker()

_SUFFIX_CHARS = "abcdefghijklmnopqrstuvwxyz0123456789"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _suffix(length: int = 6) -> str:
    return fake.pystr_format(string_format="?" * length, letters=_SUFFIX_CHARS)


def unique_email() -> str:
    """test_<ms>_<rand>@test.com"""
    return f"test_{_now_ms()}_{_suffix()}@test.com"


def unique_phone() -> str:
    """Sao Paulo mobile number: 119 followed by 8 digits."""
    return f"119{fake.random_int(min=10_000_000, max=99_999_999)}"


def unique_cpf() -> str:
    """11 random digits (no check-digit validation on the API side)."""
    return fake.numerify("#" * 11)


def unique_cnpj() -> str:
    """14 random digits."""
    return fake.numerify("#" * 14)


def unique_sku() -> str:
    return f"SKU{_now_ms()}{_suffix().upper()}"


def unique_code(prefix: str) -> str:
    """Coupon or QR code such as COUPON_1718000000000_A1B2C3."""
    return f"{prefix.upper()}_{_now_ms()}_{_suffix().upper()}"
