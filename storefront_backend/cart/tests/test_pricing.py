# cart/tests/test_pricing.py

"""
PRICING ENGINE TESTS

GUARANTEES:
- Pack price = price * pack_size * (1 - discount / 100)
- Dietary up-charges are flat and only apply when the product offers them
- Pricing never raises on malformed product data
"""

from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from cart.services.pricing import PricingPolicy, compute_line_price, line_subtotal
from cart.services.snapshot import ProductSnapshot

POLICY = PricingPolicy(
    gluten_free_upcharge=Decimal("1.50"),
    sugar_free_upcharge=Decimal("1.50"),
)


def _product(**overrides):
    data = {"id": "p-1", "name": "Brownie", "price": Decimal("10.00")}
    data.update(overrides)
    return ProductSnapshot(**data)


class PackPricingTests(SimpleTestCase):
    def test_pack_price_applies_size_and_discount(self):
        product = _product(is_pack=True, pack_size=6, pack_discount=Decimal("10"))

        self.assertEqual(compute_line_price(product, is_pack=True, policy=POLICY), Decimal("54.00"))
        self.assertEqual(compute_line_price(product, is_pack=False, policy=POLICY), Decimal("10.00"))

    def test_zero_discount_is_a_valid_discount(self):
        product = _product(price=Decimal("3.00"), is_pack=True, pack_size=4, pack_discount=Decimal("0"))
        self.assertEqual(compute_line_price(product, is_pack=True, policy=POLICY), Decimal("12.00"))

    def test_pack_without_discount_is_plain_multiple(self):
        product = _product(is_pack=True, pack_size=3)
        self.assertEqual(compute_line_price(product, is_pack=True, policy=POLICY), Decimal("30.00"))

    def test_pack_request_on_non_pack_product_is_ignored(self):
        product = _product(is_pack=False, pack_size=6)
        self.assertEqual(compute_line_price(product, is_pack=True, policy=POLICY), Decimal("10.00"))

    def test_pack_with_missing_size_degrades_to_unit_price(self):
        product = _product(is_pack=True, pack_size=None, pack_discount=Decimal("10"))
        self.assertEqual(compute_line_price(product, is_pack=True, policy=POLICY), Decimal("10.00"))

    def test_out_of_range_discount_is_ignored(self):
        product = _product(is_pack=True, pack_size=2, pack_discount=Decimal("150"))
        self.assertEqual(compute_line_price(product, is_pack=True, policy=POLICY), Decimal("20.00"))

    def test_result_is_rounded_half_up_to_cents(self):
        product = _product(price=Decimal("0.35"), is_pack=True, pack_size=3, pack_discount=Decimal("5"))
        # 0.35 * 3 * 0.95 = 0.9975
        self.assertEqual(compute_line_price(product, is_pack=True, policy=POLICY), Decimal("1.00"))


class DietaryUpchargeTests(SimpleTestCase):
    def test_gluten_free_upcharge(self):
        product = _product(price=Decimal("5"), gluten_free_available=True)
        self.assertEqual(
            compute_line_price(product, False, True, False, policy=POLICY),
            Decimal("6.50"),
        )

    def test_unsupported_sugar_free_request_is_a_no_op(self):
        product = _product(price=Decimal("5"), sugar_free_available=False)
        self.assertEqual(
            compute_line_price(product, False, False, True, policy=POLICY),
            compute_line_price(product, False, False, False, policy=POLICY),
        )

    def test_flags_are_independent(self):
        product = _product(price=Decimal("5"), gluten_free_available=True, sugar_free_available=False)
        self.assertEqual(compute_line_price(product, False, True, True, policy=POLICY), Decimal("6.50"))

    def test_upcharges_are_flat_per_pack(self):
        product = _product(
            price=Decimal("2.00"),
            is_pack=True,
            pack_size=6,
            gluten_free_available=True,
            sugar_free_available=True,
        )
        # 2 * 6 + 1.50 + 1.50
        self.assertEqual(compute_line_price(product, True, True, True, policy=POLICY), Decimal("15.00"))

    @override_settings(GLUTEN_FREE_UPCHARGE=Decimal("2.25"), SUGAR_FREE_UPCHARGE=Decimal("0.75"))
    def test_policy_reads_settings(self):
        policy = PricingPolicy.from_settings()
        self.assertEqual(policy.gluten_free_upcharge, Decimal("2.25"))
        self.assertEqual(policy.sugar_free_upcharge, Decimal("0.75"))

        product = _product(price=Decimal("1.00"), gluten_free_available=True, sugar_free_available=True)
        self.assertEqual(compute_line_price(product, False, True, True), Decimal("4.00"))


class PricingTotalityTests(SimpleTestCase):
    def test_garbage_fields_never_raise(self):
        class Broken:
            price = "not-a-number"
            is_pack = True
            pack_size = "abc"
            pack_discount = object()
            gluten_free_available = False
            sugar_free_available = False

        self.assertEqual(compute_line_price(Broken(), True, True, True, policy=POLICY), Decimal("0.00"))

    def test_sub_cent_price_is_rounded_once(self):
        product = _product(price=Decimal("0.125"), is_pack=True, pack_size=4)
        self.assertEqual(compute_line_price(product, is_pack=True, policy=POLICY), Decimal("0.50"))
        self.assertEqual(compute_line_price(product, policy=POLICY), Decimal("0.13"))

    def test_non_finite_fields_degrade(self):
        class Odd:
            price = Decimal("NaN")
            is_pack = True
            pack_size = float("inf")
            pack_discount = Decimal("NaN")
            gluten_free_available = False
            sugar_free_available = False

        self.assertEqual(compute_line_price(Odd(), True, policy=POLICY), Decimal("0.00"))

        odd = Odd()
        odd.price = Decimal("4.00")
        odd.pack_size = 2
        self.assertEqual(compute_line_price(odd, True, policy=POLICY), Decimal("8.00"))

    def test_line_subtotal(self):
        self.assertEqual(line_subtotal(Decimal("54.00"), 3), Decimal("162.00"))
