"""
Purchase-side totals.

A purchase price has a bill part (invoiced, GST on top) and a cash part
(unbilled, no GST). Transport, unloading, damage and any other expenses
are spread over the purchased pieces so each line carries its landed cost.
"""
from typing import List

import config
from ..schemas import PurchaseCharges, PurchaseItem, PurchaseLine, PurchaseTotals, UnitMode


def to_numbers(item: PurchaseItem):
    """Quantity, bill price and cash price per piece."""
    unit = str(item.unit or "").strip().upper()
    quantity = item.quantity
    bill_price = item.billPrice
    cash_price = item.cashPrice

    if unit == UnitMode.BOX.value:
        ratio = item.psRatio or 1.0
        quantity = item.quantity * item.psRatio
        bill_price = item.billPrice / ratio
        cash_price = item.cashPrice / ratio
    elif unit == UnitMode.SQFT.value:
        area = (item.length * item.breadth) or 1.0
        quantity = item.quantity / area
        bill_price = item.billPrice * area
        cash_price = item.cashPrice * area

    return quantity, bill_price, cash_price


def compute_purchase_totals(items: List[PurchaseItem], charges: PurchaseCharges = None) -> PurchaseTotals:
    charges = charges or PurchaseCharges()
    insurance = charges.insurance or 0.0
    insurance_factor = 1 + config.INSURANCE_GST_RATE / 100
    # Half of the GST inside the insurance amount, booked on every line
    insurance_gst_half = (insurance - insurance / insurance_factor) / 2

    total_bill_without_gst = 0.0
    total_bill_gst = 0.0
    total_cgst = 0.0
    total_sgst = 0.0
    total_cash = 0.0
    total_qty = 0.0
    lines = []

    for item in items:
        q, bill_price, cash_price = to_numbers(item)
        gst_percent = item.gstPercent or 0.0

        bill_without_gst = q * bill_price
        gst_amount = bill_without_gst * gst_percent / 100
        cgst = gst_amount / 2 + insurance_gst_half
        sgst = gst_amount / 2 + insurance_gst_half
        cash_part = q * cash_price

        total_bill_without_gst += bill_without_gst
        total_bill_gst += gst_amount
        total_cgst += cgst
        total_sgst += sgst
        total_cash += cash_part
        total_qty += q

        lines.append(PurchaseLine(
            quantityInNumbers=q,
            billPriceInNumbers=bill_price,
            cashPriceInNumbers=cash_price,
            billWithoutGst=bill_without_gst,
            gstAmount=gst_amount,
            cgst=cgst,
            sgst=sgst,
            cashPart=cash_part,
            billPartPriceInNumbers=bill_price * (1 + gst_percent / 100),
        ))

    bill_part_total = total_bill_without_gst + total_bill_gst + insurance

    transport = charges.logisticAmount + charges.localAmount
    transport_base = transport / (1 + config.TRANSPORT_GST_RATE / 100)
    transport_gst = transport - transport_base

    total_other_expenses = (
        transport
        + charges.unloadingCharge
        + charges.damagePrice
        + sum(charges.otherExpenses)
    )
    per_item_other_expense = total_other_expenses / total_qty if total_qty > 0 else 0.0

    for line in lines:
        line.allocatedOtherExpense = per_item_other_expense * line.quantityInNumbers
        line.totalPriceInNumbers = line.billPartPriceInNumbers + line.cashPriceInNumbers + per_item_other_expense

    total_purchase_amount = bill_part_total + total_cash

    return PurchaseTotals(
        billPartTotal=bill_part_total,
        cashPartTotal=total_cash,
        amountWithoutGSTItems=total_bill_without_gst + insurance / insurance_factor,
        gstAmountItems=total_bill_gst,
        cgstItems=total_cgst,
        sgstItems=total_sgst,
        totalTransportationCharges=transport,
        amountWithoutGSTTransport=transport_base,
        gstAmountTransport=transport_gst,
        cgstTransport=transport_gst / 2,
        sgstTransport=transport_gst / 2,
        totalOtherExpenses=total_other_expenses,
        perItemOtherExpense=per_item_other_expense,
        totalPurchaseAmount=total_purchase_amount,
        grandTotalPurchaseAmount=total_purchase_amount + total_other_expenses,
        lines=lines,
    )
