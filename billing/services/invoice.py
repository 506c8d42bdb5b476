from typing import Any, Dict, List

from .calculator import split_tax
from ..schemas import ChargeSet, LineItem, Totals
from ..utils.money import money, money_str


def selled_price(net_total: float, quantity: float) -> float:
    """Effective per-unit price after discount, against the stored 2dp quantity."""
    stored_qty = round(quantity, 2)
    if stored_qty == 0:
        return 0.0
    return net_total / stored_qty


def build_invoice_lines(line_items: List[LineItem], totals: Totals) -> List[Dict[str, Any]]:
    """Per-line figures sent to the billing backend with the invoice."""
    lines = []
    for item, lt in zip(line_items, totals.perLine):
        lines.append({
            "quantity": money_str(item.quantity),
            "sellingPriceinQty": item.sellingPriceinQty,
            "gstRate": item.gstRate or 0.0,
            "itemDiscount": lt.itemDiscount,
            "gstAmount": lt.gstAmount,
            "netTotal": lt.netTotal,
            "selledPrice": selled_price(lt.netTotal, item.quantity),
        })
    return lines


def build_invoice_summary(totals: Totals, charges: ChargeSet, inter_state: bool = False) -> Dict[str, Any]:
    """Document-level figures, each rounded on its own."""
    tax = split_tax(totals.totalGst, inter_state=inter_state)
    return {
        "billingAmount": money_str(totals.runningSubtotalInclGst),
        "subTotal": money_str(totals.subtotalExclGst),
        "gstAmount": money_str(totals.totalGst),
        "cgst": money_str(tax.cgst),
        "sgst": money_str(tax.sgst),
        "igst": money_str(tax.igst),
        "grandTotal": money_str(totals.grandTotal),
        "discount": charges.discount,
        "transportation": charges.transportation,
        "unloading": charges.unloading,
        "handlingCharge": charges.handlingCharge,
        "roundOff": charges.roundOff,
        "roundOffMode": charges.roundOffMode.value,
    }


def build_print_lines(totals: Totals) -> List[Dict[str, float]]:
    return [
        {"index": i, "netTotal": money(lt.netTotal), "gstAmount": money(lt.gstAmount)}
        for i, lt in enumerate(totals.perLine)
    ]
