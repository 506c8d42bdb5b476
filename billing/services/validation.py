import logging
import math
import re

import config
from ..errors import ValidationError

logger = logging.getLogger(__name__)

# Leading decimal number, the part a browser's parseFloat would read
_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_float(value, strict):
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and not strict:
        match = _LEADING_NUMBER.match(value)
        return float(match.group()) if match else None
    try:
        return float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return None


def coerce_number(value, field=None, strict=None) -> float:
    """
    Turn a user-entered value into a float.

    None means "not entered" and becomes 0.0 in both modes. Strict mode
    needs the whole value to be a finite number and raises ValidationError
    otherwise. Lenient mode reads the leading number of a string ("12abc"
    is 12) and uses zero when there is none.
    """
    if strict is None:
        strict = config.STRICT_NUMERIC_INPUT
    if value is None:
        return 0.0

    number = _parse_float(value, strict)

    if number is None or not math.isfinite(number):
        if strict:
            raise ValidationError(
                f"{field or 'value'} must be a finite number",
                field=field,
                value=value,
            )
        logger.warning("Unparsable number treated as zero", extra={"field": field, "value": value})
        return 0.0
    return number


def validate_entry(entered):
    """Reject an entered quantity/price/GST triple before unit conversion."""
    if entered.enteredQty <= 0:
        raise ValidationError("Please enter a valid quantity.", field="enteredQty", value=entered.enteredQty)
    if entered.sellingPrice <= 0:
        raise ValidationError("Please enter a valid selling price.", field="sellingPrice", value=entered.sellingPrice)
    if entered.gstRate < 0:
        raise ValidationError("Please enter a valid GST%", field="gstRate", value=entered.gstRate)
    return entered


def validate_line_items(line_items):
    """Check the non-negativity invariants of a line-item list."""
    for i, item in enumerate(line_items):
        if item.quantity < 0:
            raise ValidationError("Quantity cannot be negative", field=f"lineItems[{i}].quantity", value=item.quantity)
        if item.sellingPriceinQty < 0:
            raise ValidationError("Price cannot be negative", field=f"lineItems[{i}].sellingPriceinQty", value=item.sellingPriceinQty)
        if item.gstRate < 0:
            raise ValidationError("GST rate cannot be negative", field=f"lineItems[{i}].gstRate", value=item.gstRate)
    return line_items


def validate_purchase_items(items):
    """Same checks the purchase form runs before an item is accepted."""
    for i, item in enumerate(items):
        if item.quantity <= 0:
            raise ValidationError("Please enter a valid quantity.", field=f"items[{i}].quantity", value=item.quantity)
        if item.billPrice < 0 or item.cashPrice < 0:
            raise ValidationError("Prices cannot be negative", field=f"items[{i}].billPrice", value=item.billPrice)
        if item.gstPercent < 0:
            raise ValidationError("Please enter a valid GST%", field=f"items[{i}].gstPercent", value=item.gstPercent)
    return items
