import math
from typing import List, Tuple

from ..schemas import ChargeSet, LineItem, LineTotals, RoundOffMode, TaxSplit, Totals


def _signed_round_off(charges: ChargeSet) -> float:
    if charges.roundOffMode == RoundOffMode.SUB:
        return -charges.roundOff
    return charges.roundOff


def _grand_total(subtotal: float, charges: ChargeSet) -> float:
    return (
        subtotal
        + charges.transportation
        + charges.unloading
        + charges.handlingCharge
        + _signed_round_off(charges)
    )


def compute_totals(line_items: List[LineItem], charges: ChargeSet = None) -> Totals:
    """
    Compute invoice totals from GST-inclusive line prices.

    The document discount is spread over the lines by gross value and taken
    off each line's GST-exclusive base, so the discount itself carries no
    GST. Figures keep full float precision; rounding happens at the edge.
    """
    charges = charges or ChargeSet()

    if not line_items:
        return Totals(grandTotal=_grand_total(0.0, charges))

    gross_base = sum(item.quantity * item.sellingPriceinQty for item in line_items)
    discount_ratio = charges.discount / gross_base if gross_base > 0 else 0.0

    subtotal_excl_gst = 0.0
    total_gst = 0.0
    running_subtotal = 0.0
    per_line = []

    for item in line_items:
        gst_rate = item.gstRate or 0.0
        item_gross = item.quantity * item.sellingPriceinQty
        item_discount = item_gross * discount_ratio

        base_excl_gst = item_gross / (1 + gst_rate / 100) - item_discount
        gst_amount = base_excl_gst * gst_rate / 100

        subtotal_excl_gst += base_excl_gst
        total_gst += gst_amount
        running_subtotal += base_excl_gst + gst_amount

        per_line.append(LineTotals(
            itemGross=item_gross,
            itemDiscount=item_discount,
            baseExclGst=base_excl_gst,
            gstAmount=gst_amount,
            netTotal=base_excl_gst + gst_amount,
        ))

    return Totals(
        subtotalExclGst=subtotal_excl_gst,
        totalGst=total_gst,
        runningSubtotalInclGst=running_subtotal,
        grandTotal=_grand_total(running_subtotal, charges),
        perLine=per_line,
    )


def split_tax(total_gst: float, inter_state: bool = False) -> TaxSplit:
    """Split GST into CGST/SGST (intra-state) or IGST (inter-state)."""
    if inter_state:
        return TaxSplit(igst=total_gst)
    return TaxSplit(cgst=total_gst / 2, sgst=total_gst / 2)


def suggest_round_off(amount: float, step: float = 1.0) -> Tuple[float, RoundOffMode]:
    """Adjustment that moves amount to the nearest multiple of step, halves up."""
    if step <= 0:
        return 0.0, RoundOffMode.ADD
    # Round the quotient first so 1229.5 / 1 does not land on 1229.4999...
    quotient = round(amount / step, 9)
    target = math.floor(quotient + 0.5) * step
    delta = round(target - amount, 2)
    if delta < 0:
        return -delta, RoundOffMode.SUB
    return delta, RoundOffMode.ADD
