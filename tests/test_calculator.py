import pytest

from billing.schemas import ChargeSet, LineItem, RoundOffMode
from billing.services.calculator import compute_totals, split_tax, suggest_round_off


def _item(qty, price, gst):
    return LineItem(quantity=qty, sellingPriceinQty=price, gstRate=gst)


def test_empty_list_applies_only_charges():
    """No lines: subtotal and GST are zero, grand total is the charges."""
    charges = ChargeSet(transportation=50, unloading=20, handlingCharge=10, roundOff=3, roundOffMode="sub")
    totals = compute_totals([], charges)
    assert totals.subtotalExclGst == 0.0
    assert totals.totalGst == 0.0
    assert totals.runningSubtotalInclGst == 0.0
    assert totals.perLine == []
    assert totals.grandTotal == pytest.approx(77.0)


def test_empty_list_without_charges_is_all_zero():
    totals = compute_totals([], ChargeSet())
    assert totals.grandTotal == 0.0


def test_single_line_with_transport():
    """1180 inclusive at 18% is 1000 + 180, plus 50 transport."""
    charges = ChargeSet(transportation=50, roundOffMode="add")
    totals = compute_totals([_item(10, 118, 18)], charges)

    line = totals.perLine[0]
    assert line.itemGross == pytest.approx(1180)
    assert line.baseExclGst == pytest.approx(1000)
    assert line.gstAmount == pytest.approx(180)
    assert line.netTotal == pytest.approx(1180)
    assert totals.subtotalExclGst == pytest.approx(1000)
    assert totals.totalGst == pytest.approx(180)
    assert totals.runningSubtotalInclGst == pytest.approx(1180)
    assert totals.grandTotal == pytest.approx(1230)


def test_discount_allocated_by_gross_value():
    """10% of a 177 gross is split 11.8 / 5.9 between the two lines."""
    items = [_item(1, 118, 18), _item(1, 59, 18)]
    totals = compute_totals(items, ChargeSet(discount=17.7))

    assert totals.perLine[0].itemDiscount == pytest.approx(11.8)
    assert totals.perLine[1].itemDiscount == pytest.approx(5.9)
    assert sum(l.itemDiscount for l in totals.perLine) == pytest.approx(17.7)
    # Discount comes off the GST-exclusive base
    assert totals.perLine[0].baseExclGst == pytest.approx(100 - 11.8)
    assert totals.perLine[0].gstAmount == pytest.approx((100 - 11.8) * 0.18)


def test_discount_conservation_mixed_rates():
    items = [_item(3, 250, 18), _item(7.5, 40, 5), _item(2, 1000, 28), _item(1, 99, 0)]
    totals = compute_totals(items, ChargeSet(discount=123.45))
    assert sum(l.itemDiscount for l in totals.perLine) == pytest.approx(123.45)


def test_zero_gross_base_ignores_discount():
    totals = compute_totals([_item(5, 0, 18)], ChargeSet(discount=50))
    line = totals.perLine[0]
    assert line.itemDiscount == 0.0
    assert line.baseExclGst == 0.0
    assert totals.grandTotal == 0.0


def test_discount_larger_than_line_goes_negative():
    """Negative base passes through, GST keeps the same sign."""
    totals = compute_totals([_item(1, 118, 18)], ChargeSet(discount=200))
    line = totals.perLine[0]
    assert line.baseExclGst == pytest.approx(-100)
    assert line.gstAmount == pytest.approx(-18)
    assert line.baseExclGst * line.gstAmount > 0


def test_gst_sign_follows_base():
    items = [_item(2, 500, 12), _item(1, 10, 18), _item(4, 25, 0)]
    totals = compute_totals(items, ChargeSet(discount=30))
    for line in totals.perLine:
        if line.gstAmount != 0:
            assert (line.gstAmount > 0) == (line.baseExclGst > 0)


def test_zero_gst_rate_line():
    totals = compute_totals([_item(2, 50, 0)], ChargeSet())
    assert totals.totalGst == 0.0
    assert totals.subtotalExclGst == pytest.approx(100)


def test_round_off_modes():
    items = [_item(1, 118, 18)]
    added = compute_totals(items, ChargeSet(roundOff=0.5, roundOffMode=RoundOffMode.ADD))
    subtracted = compute_totals(items, ChargeSet(roundOff=0.5, roundOffMode=RoundOffMode.SUB))
    assert added.grandTotal == pytest.approx(118.5)
    assert subtracted.grandTotal == pytest.approx(117.5)


def test_charges_are_not_taxed_or_discounted():
    items = [_item(1, 118, 18)]
    plain = compute_totals(items, ChargeSet())
    charged = compute_totals(items, ChargeSet(transportation=100, unloading=40, handlingCharge=25))
    assert charged.totalGst == plain.totalGst
    assert charged.subtotalExclGst == plain.subtotalExclGst
    assert charged.grandTotal == pytest.approx(plain.grandTotal + 165)


def test_compute_totals_is_repeatable():
    items = [_item(3.3, 17.17, 18), _item(0.7, 999.99, 28)]
    charges = ChargeSet(discount=12.34, transportation=5.5, roundOff=0.21, roundOffMode="sub")
    first = compute_totals(items, charges)
    second = compute_totals(items, charges)
    assert first.model_dump() == second.model_dump()


def test_split_tax_intra_state():
    tax = split_tax(180)
    assert tax.cgst == 90
    assert tax.sgst == 90
    assert tax.igst == 0


def test_split_tax_inter_state():
    tax = split_tax(180, inter_state=True)
    assert tax.igst == 180
    assert tax.cgst == 0
    assert tax.sgst == 0


@pytest.mark.parametrize("amount,expected,mode", [
    (1229.6, 0.4, RoundOffMode.ADD),
    (1230.4, 0.4, RoundOffMode.SUB),
    (1230.0, 0.0, RoundOffMode.ADD),
    (1229.5, 0.5, RoundOffMode.ADD),
])
def test_suggest_round_off(amount, expected, mode):
    delta, got_mode = suggest_round_off(amount)
    assert delta == pytest.approx(expected)
    assert got_mode == mode


def test_suggest_round_off_to_ten():
    delta, mode = suggest_round_off(1234.0, step=10)
    assert delta == pytest.approx(4.0)
    assert mode == RoundOffMode.SUB
