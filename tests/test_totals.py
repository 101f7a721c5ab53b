from decimal import Decimal

from quotedesk.services.totals import (
    MAX_AMOUNT,
    ZERO,
    calc_totals,
    calc_vat,
    derive_discount,
    document_totals,
    normalize_items,
    to_decimal,
    within_money_range,
)


def test_discounted_total():
    items = normalize_items(
        [
            {"description": "A", "qty": 2, "price": 100},
            {"description": "B", "qty": 1, "price": 50},
        ]
    )
    totals = calc_totals(items, 30)

    assert totals.subtotal == Decimal("250")
    assert totals.discount == Decimal("30")
    assert totals.total == Decimal("220")


def test_discount_capped_at_subtotal_and_floored_at_zero():
    items = normalize_items([{"description": "A", "qty": 1, "price": 100}])

    assert calc_totals(items, 500).total == Decimal("0")
    assert calc_totals(items, 500).discount == Decimal("100")
    assert calc_totals(items, -20).discount == Decimal("0")
    assert calc_totals(items, "abc").total == Decimal("100")


def test_lines_without_description_or_quantity_are_dropped():
    items = normalize_items(
        [
            {"description": "", "qty": 5, "price": 100},
            {"description": "   ", "qty": 1, "price": 10},
            {"description": "zero qty", "qty": 0, "price": 10},
            {"description": "negative qty", "qty": -3, "price": 10},
            None,
        ]
    )

    assert items == []
    assert calc_totals(items, 0).total == Decimal("0")


def test_negative_and_non_numeric_prices_clamp_to_zero():
    items = normalize_items(
        [
            {"description": "A", "qty": "2", "price": "-50"},
            {"description": "B", "qty": 1, "price": "n/a"},
            {"description": "C", "qty": 1.5, "price": "10"},
        ]
    )

    assert [i.price for i in items] == [Decimal("0"), Decimal("0"), Decimal("10")]
    assert calc_totals(items).subtotal == Decimal("15.0")


def test_non_list_items_mean_no_items():
    assert normalize_items(None) == []
    assert normalize_items({"description": "A"}) == []


def test_to_decimal_is_lenient():
    assert to_decimal("12.5") == Decimal("12.5")
    assert to_decimal(True) == Decimal("0")
    assert to_decimal(float("nan")) == Decimal("0")
    assert to_decimal(float("inf")) == Decimal("0")
    assert to_decimal(object()) == Decimal("0")


def test_vat_is_seven_percent_rounded_half_up():
    vat, grand_total = calc_vat(Decimal("220"))
    assert vat == Decimal("15.40")
    assert grand_total == Decimal("235.40")

    # 0.07 * 0.5 = 0.035 -> 0.04
    assert calc_vat(Decimal("0.50"))[0] == Decimal("0.04")


def test_discount_is_derived_from_stored_total():
    assert derive_discount(Decimal("250"), Decimal("220")) == Decimal("30")
    # stored total larger than the recomputed subtotal never yields a negative discount
    assert derive_discount(Decimal("250"), Decimal("300")) == Decimal("0")


def test_document_totals_for_stored_quote():
    items = normalize_items(
        [
            {"description": "A", "qty": 2, "price": 100},
            {"description": "B", "qty": 1, "price": 50},
        ]
    )
    totals = document_totals(items, Decimal("220.00"))

    assert totals.subtotal == Decimal("250")
    assert totals.discount == Decimal("30")
    assert totals.net == Decimal("220")
    assert totals.vat == Decimal("15.40")
    assert totals.grand_total == Decimal("235.40")


def test_subtotal_is_rounded_like_the_stored_total():
    items = normalize_items([{"description": "A", "qty": 1, "price": "0.333"}])
    totals = calc_totals(items)

    assert totals.subtotal == Decimal("0.33")
    assert totals.total == Decimal("0.33")
    assert document_totals(items, totals.total).discount == Decimal("0")


def test_huge_amounts_are_capped_instead_of_raising():
    items = normalize_items([{"description": "A", "qty": "1e26", "price": 100}])

    assert items[0].qty == MAX_AMOUNT
    assert not within_money_range(items)
    assert calc_totals(items).subtotal == MAX_AMOUNT
    assert document_totals(items, MAX_AMOUNT).discount == ZERO
