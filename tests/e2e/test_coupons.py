"""
Coupons E2E Tests

Percentage and fixed coupons, public listing and validation rules.
Run with: pytest tests/e2e/test_coupons.py -m e2e -v
"""

import pytest

from pos_e2e.constants.api import NIL_UUID
from pos_e2e.core.lifecycle import create_tracked
from pos_e2e.factories import CouponPayloadFactory, PublicCouponPayloadFactory
from pos_e2e.factories.identifiers import unique_code

pytestmark = [pytest.mark.e2e, pytest.mark.asyncio(loop_scope="module")]


@pytest.fixture(scope="module")
def coupon_code() -> str:
    return unique_code("coupon")


class TestCreateCoupon:
    """POST /coupons"""

    async def test_percentage_coupon(self, auth, session, establishment, coupon_code, shared) -> None:
        res = await auth.post(
            "/coupons",
            json=PublicCouponPayloadFactory.build(
                code=coupon_code, establishmentId=establishment["id"]
            ),
        )

        assert res.status_code == 201
        assert res.data["code"] == coupon_code
        assert res.data["discountType"] == "PERCENTAGE"

        shared.coupon_id = res.data["id"]
        session.tracked.add("coupons", shared.coupon_id)

    async def test_fixed_coupon(self, auth, session, establishment) -> None:
        res = await auth.post(
            "/coupons",
            json=CouponPayloadFactory.build(
                code=unique_code("fixed"),
                establishmentId=establishment["id"],
                discountType="FIXED",
                discountValue=15.00,
                isActive=True,
            ),
        )

        assert res.status_code == 201
        assert res.data["discountType"] == "FIXED"
        session.tracked.add("coupons", res.get("id"))

    async def test_duplicate_code(self, auth, establishment, coupon_code) -> None:
        res = await auth.post(
            "/coupons",
            json=CouponPayloadFactory.build(
                code=coupon_code, establishmentId=establishment["id"], discountValue=5
            ),
        )

        assert res.status_code == 409

    async def test_without_code(self, auth, establishment) -> None:
        res = await auth.post(
            "/coupons",
            json={
                "establishmentId": establishment["id"],
                "discountType": "PERCENTAGE",
                "discountValue": 5,
            },
        )

        assert res.status_code == 400


class TestListCoupons:
    """GET /coupons, GET /coupons/public"""

    async def test_public_list(self, api) -> None:
        res = await api.get("/coupons")

        assert res.status_code == 200
        assert isinstance(res.data["data"], list)

    async def test_filter_by_establishment(self, api, establishment) -> None:
        res = await api.get("/coupons", params={"establishmentId": establishment["id"]})

        assert res.status_code == 200

    async def test_public_coupons(self, api) -> None:
        res = await api.get("/coupons/public")

        assert res.status_code == 200
        assert isinstance(res.data, list)


class TestValidateCoupon:
    """POST /coupons/validate"""

    async def test_valid_coupon(self, api, establishment, coupon_code) -> None:
        res = await api.post(
            "/coupons/validate",
            json={"code": coupon_code, "establishmentId": establishment["id"], "orderAmount": 100.00},
        )

        assert res.status_code == 200
        assert "valid" in res.data

    async def test_unknown_coupon(self, api, establishment) -> None:
        res = await api.post(
            "/coupons/validate",
            json={"code": "NONEXISTENT", "establishmentId": establishment["id"], "orderAmount": 100.00},
        )

        assert res.status_code == 404

    @pytest.mark.unsettled
    async def test_order_below_minimum(self, api, establishment, coupon_code) -> None:
        res = await api.post(
            "/coupons/validate",
            json={"code": coupon_code, "establishmentId": establishment["id"], "orderAmount": 10.00},
        )

        assert res.status_code in (200, 400)
        if res.status_code == 200:
            assert res.data["valid"] is False


class TestCouponLookups:
    """GET /coupons/code/:code, GET /coupons/:id"""

    async def test_by_code(self, api, coupon_code) -> None:
        res = await api.get(f"/coupons/code/{coupon_code}")

        assert res.status_code == 200
        assert res.data["code"] == coupon_code

    async def test_by_unknown_code(self, api) -> None:
        res = await api.get("/coupons/code/NONEXISTENT")

        assert res.status_code == 404

    async def test_get(self, api, shared) -> None:
        res = await api.get(f"/coupons/{shared.coupon_id}")

        assert res.status_code == 200
        assert res.data["id"] == shared.coupon_id

    async def test_get_unknown(self, api) -> None:
        res = await api.get(f"/coupons/{NIL_UUID}")

        assert res.status_code == 404


class TestUpdateCoupon:
    """PATCH /coupons/:id"""

    async def test_update_discount(self, auth, shared) -> None:
        res = await auth.patch(
            f"/coupons/{shared.coupon_id}", json={"discountValue": 15, "maxUses": 200}
        )

        assert res.status_code == 200
        assert res.data["discountValue"] == 15

    async def test_toggle_active(self, auth, shared) -> None:
        res = await auth.patch(f"/coupons/{shared.coupon_id}/toggle-active")

        assert res.status_code == 200
        assert "isActive" in res.data


class TestDeleteCoupon:
    """DELETE /coupons/:id"""

    async def test_delete(self, api, auth, establishment) -> None:
        coupon = await create_tracked(
            api,
            "/coupons",
            CouponPayloadFactory.build(
                code=unique_code("del"), establishmentId=establishment["id"], discountValue=5
            ),
        )

        res = await auth.delete(f"/coupons/{coupon['id']}")

        assert res.status_code == 204
