from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, Field, ValidationInfo

import config
from .services.validation import coerce_number


def _to_number(value, info: ValidationInfo):
    return coerce_number(value, field=info.field_name)


# Float fields that go through the strict/lenient coercion first
Number = Annotated[float, BeforeValidator(_to_number)]


class RoundOffMode(str, Enum):
    ADD = "add"
    SUB = "sub"


class UnitMode(str, Enum):
    SQFT = "SQFT"
    BOX = "BOX"
    TNOS = "TNOS"
    NOS = "NOS"


class LineItem(BaseModel):
    """One invoice row in native stock units, price GST-inclusive."""
    quantity: Number = 0.0
    sellingPriceinQty: Number = 0.0
    gstRate: Number = 0.0

    @property
    def grossLineValue(self) -> float:
        return self.quantity * self.sellingPriceinQty


class ChargeSet(BaseModel):
    discount: Number = 0.0
    transportation: Number = 0.0
    unloading: Number = 0.0
    handlingCharge: Number = 0.0
    roundOff: Number = 0.0
    roundOffMode: RoundOffMode = RoundOffMode.ADD


class LineTotals(BaseModel):
    itemGross: float = 0.0
    itemDiscount: float = 0.0
    baseExclGst: float = 0.0
    gstAmount: float = 0.0
    netTotal: float = 0.0


class Totals(BaseModel):
    subtotalExclGst: float = 0.0
    totalGst: float = 0.0
    runningSubtotalInclGst: float = 0.0
    grandTotal: float = 0.0
    perLine: List[LineTotals] = Field(default_factory=list)


class TaxSplit(BaseModel):
    cgst: float = 0.0
    sgst: float = 0.0
    igst: float = 0.0


class ProductDims(BaseModel):
    length: Number = 0.0
    breadth: Number = 0.0
    psRatio: Number = 0.0
    size: Number = 0.0

    @property
    def area(self) -> float:
        return self.length * self.breadth


class EnteredItem(BaseModel):
    """Quantity/price pair as typed on the billing screen."""
    enteredQty: Number = 0.0
    sellingPrice: Number = 0.0
    gstRate: Number = config.DEFAULT_GST_RATE
    unit: str = UnitMode.SQFT.value


class PurchaseItem(BaseModel):
    quantity: Number = 0.0
    billPrice: Number = 0.0
    cashPrice: Number = 0.0
    gstPercent: Number = config.DEFAULT_GST_RATE
    unit: str = UnitMode.NOS.value
    length: Number = 0.0
    breadth: Number = 0.0
    psRatio: Number = 0.0


class PurchaseCharges(BaseModel):
    logisticAmount: Number = 0.0
    localAmount: Number = 0.0
    unloadingCharge: Number = 0.0
    damagePrice: Number = 0.0
    insurance: Number = 0.0
    otherExpenses: List[Number] = Field(default_factory=list)


class PurchaseLine(BaseModel):
    quantityInNumbers: float = 0.0
    billPriceInNumbers: float = 0.0
    cashPriceInNumbers: float = 0.0
    billWithoutGst: float = 0.0
    gstAmount: float = 0.0
    cgst: float = 0.0
    sgst: float = 0.0
    cashPart: float = 0.0
    billPartPriceInNumbers: float = 0.0
    allocatedOtherExpense: float = 0.0
    totalPriceInNumbers: float = 0.0


class PurchaseTotals(BaseModel):
    billPartTotal: float = 0.0
    cashPartTotal: float = 0.0
    amountWithoutGSTItems: float = 0.0
    gstAmountItems: float = 0.0
    cgstItems: float = 0.0
    sgstItems: float = 0.0
    totalTransportationCharges: float = 0.0
    amountWithoutGSTTransport: float = 0.0
    gstAmountTransport: float = 0.0
    cgstTransport: float = 0.0
    sgstTransport: float = 0.0
    totalOtherExpenses: float = 0.0
    perItemOtherExpense: float = 0.0
    totalPurchaseAmount: float = 0.0
    grandTotalPurchaseAmount: float = 0.0
    lines: List[PurchaseLine] = Field(default_factory=list)


# Request bodies

class NormalizeRequest(BaseModel):
    entered: EnteredItem
    dims: ProductDims = Field(default_factory=lambda: ProductDims())


class StockRequest(BaseModel):
    countInStock: Number = 0.0
    unit: str = UnitMode.SQFT.value
    dims: ProductDims = Field(default_factory=lambda: ProductDims())


class SuggestPriceRequest(BaseModel):
    price: Number = 0.0
    category: Optional[str] = None
    unit: str = UnitMode.SQFT.value
    actLength: Number = 0.0
    actBreadth: Number = 0.0
    psRatio: Number = 0.0


class TotalsRequest(BaseModel):
    lineItems: List[LineItem] = Field(default_factory=list)
    charges: ChargeSet = Field(default_factory=lambda: ChargeSet())


class InvoiceRequest(TotalsRequest):
    interState: bool = False


class RoundOffSuggestion(BaseModel):
    roundOff: float = 0.0
    roundOffMode: RoundOffMode = RoundOffMode.ADD


class InvoiceResponse(BaseModel):
    summary: dict = Field(default_factory=dict)
    lines: List[dict] = Field(default_factory=list)
    printLines: List[dict] = Field(default_factory=list)
    roundOffSuggestion: RoundOffSuggestion = Field(default_factory=lambda: RoundOffSuggestion())


class PurchaseRequest(BaseModel):
    items: List[PurchaseItem] = Field(default_factory=list)
    charges: PurchaseCharges = Field(default_factory=lambda: PurchaseCharges())


class ErrorDetail(BaseModel):
    detail: str
    field: Optional[str] = None
