"""
Unit conversion between what the user types and native stock units.

Tiles and slabs are stocked per piece but sold per SQFT, per BOX or per
piece. The calculators only ever see native quantities and native prices,
so every entered pair passes through normalize_unit first.
"""
import config
from ..schemas import EnteredItem, LineItem, ProductDims, UnitMode


def _mode(unit_mode) -> str:
    if isinstance(unit_mode, UnitMode):
        return unit_mode.value
    return str(unit_mode or "").strip().upper()


def normalize_unit(entered: EnteredItem, unit_mode=None, product_dims: ProductDims = None) -> LineItem:
    """
    Convert an entered quantity/price pair to a LineItem.

    SQFT: quantity / area, price * area
    BOX:  quantity * psRatio, price * area
    TNOS and anything else: price * area, quantity unchanged

    When the dimensions needed for a branch are missing the entered figures
    pass through unchanged. BOX needs size, psRatio and area together.
    """
    mode = _mode(unit_mode if unit_mode is not None else entered.unit)
    dims = product_dims or ProductDims()
    area = dims.area

    quantity = entered.enteredQty
    price = entered.sellingPrice

    if mode == UnitMode.SQFT.value:
        if area > 0:
            quantity = entered.enteredQty / area
            price = entered.sellingPrice * area
    elif mode == UnitMode.BOX.value:
        # All box dimensions or nothing; a half-converted line inflates gross
        if dims.size > 0 and dims.psRatio > 0 and area > 0:
            quantity = entered.enteredQty * dims.psRatio
            price = entered.sellingPrice * area
    elif area > 0:
        price = entered.sellingPrice * area

    return LineItem(quantity=quantity, sellingPriceinQty=price, gstRate=entered.gstRate)


def stock_in_unit(count_in_stock: float, unit_mode, product_dims: ProductDims = None) -> float:
    """Stock on hand expressed in the unit the user is selling in."""
    mode = _mode(unit_mode)
    dims = product_dims or ProductDims()
    count = float(count_in_stock or 0.0)

    if mode == UnitMode.SQFT.value and dims.area > 0:
        return count * dims.area
    if mode == UnitMode.BOX.value and dims.psRatio > 0:
        return count / dims.psRatio
    return count


def category_markup(category) -> float:
    cat = str(category or "").strip().upper()
    if cat == "TILES":
        return config.TILES_MARKUP
    if cat == "GRANITE":
        return config.GRANITE_MARKUP
    return config.DEFAULT_MARKUP


def suggested_selling_price(base_price: float, category=None, unit_mode=None,
                            act_length: float = 0.0, act_breadth: float = 0.0,
                            ps_ratio: float = 0.0) -> float:
    """
    Display price derived from the cost price.

    The cost is divided by the category markup. Tiles are additionally
    quoted per SQFT (divided by the actual tile area) or per BOX
    (multiplied by pieces per box).
    """
    price = float(base_price or 0.0) / category_markup(category)
    if str(category or "").strip().upper() != "TILES":
        return price

    mode = _mode(unit_mode)
    act_area = float(act_length or 0.0) * float(act_breadth or 0.0)
    if mode == UnitMode.SQFT.value:
        return price / act_area if act_area > 0 else price
    if mode == UnitMode.BOX.value:
        return price * float(ps_ratio or 0.0) if ps_ratio else price
    return price
