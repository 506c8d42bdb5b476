import pytest

from billing.schemas import EnteredItem, ProductDims, UnitMode
from billing.services.units import normalize_unit, stock_in_unit, suggested_selling_price


DIMS = ProductDims(length=2, breadth=3, psRatio=4, size=1)


def test_sqft_conversion():
    """12 sqft of a 6 sqft piece is 2 pieces at 600 each."""
    item = normalize_unit(EnteredItem(enteredQty=12, sellingPrice=100, gstRate=18), "SQFT", DIMS)
    assert item.quantity == pytest.approx(2)
    assert item.sellingPriceinQty == pytest.approx(600)
    assert item.gstRate == 18


def test_box_conversion():
    item = normalize_unit(EnteredItem(enteredQty=5, sellingPrice=10), UnitMode.BOX, DIMS)
    assert item.quantity == pytest.approx(20)
    assert item.sellingPriceinQty == pytest.approx(60)


def test_tnos_keeps_quantity():
    item = normalize_unit(EnteredItem(enteredQty=5, sellingPrice=10), "TNOS", DIMS)
    assert item.quantity == 5
    assert item.sellingPriceinQty == pytest.approx(60)


def test_unknown_unit_uses_default_branch():
    item = normalize_unit(EnteredItem(enteredQty=5, sellingPrice=10), "PCS", DIMS)
    assert item.quantity == 5
    assert item.sellingPriceinQty == pytest.approx(60)


def test_unit_taken_from_entry_when_not_given():
    item = normalize_unit(EnteredItem(enteredQty=12, sellingPrice=100, unit="sqft"), product_dims=DIMS)
    assert item.quantity == pytest.approx(2)


def test_missing_dims_pass_through():
    entered = EnteredItem(enteredQty=7, sellingPrice=25)
    for mode in ("SQFT", "BOX", "TNOS", "NOS"):
        item = normalize_unit(entered, mode, ProductDims())
        assert item.quantity == 7
        assert item.sellingPriceinQty == 25


@pytest.mark.parametrize("dims", [
    ProductDims(length=2, breadth=3, size=1),
    ProductDims(psRatio=6, size=1),
    ProductDims(length=2, breadth=3, psRatio=6),
])
def test_box_with_partial_dims_passes_through(dims):
    item = normalize_unit(EnteredItem(enteredQty=3, sellingPrice=50), "BOX", dims)
    assert item.quantity == 3
    assert item.sellingPriceinQty == 50


def test_stock_in_unit():
    assert stock_in_unit(10, "SQFT", DIMS) == pytest.approx(60)
    assert stock_in_unit(10, "BOX", DIMS) == pytest.approx(2.5)
    assert stock_in_unit(10, "NOS", DIMS) == 10
    assert stock_in_unit(10, "BOX", ProductDims()) == 10


def test_suggested_price_by_category():
    assert suggested_selling_price(75, "GRANITE") == pytest.approx(100)
    assert suggested_selling_price(60, "SANITARY") == pytest.approx(100)
    assert suggested_selling_price(60, None) == pytest.approx(100)


def test_suggested_price_for_tiles():
    assert suggested_selling_price(78, "TILES", "SQFT", act_length=2, act_breadth=2) == pytest.approx(25)
    assert suggested_selling_price(78, "TILES", "BOX", ps_ratio=5) == pytest.approx(500)
    assert suggested_selling_price(78, "tiles", "NOS") == pytest.approx(100)
    # No actual dimensions: price per piece
    assert suggested_selling_price(78, "TILES", "SQFT") == pytest.approx(100)
