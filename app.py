from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi
from billing.errors import ValidationError as InputValidationError
from billing.schemas import (
    ErrorDetail,
    InvoiceRequest,
    InvoiceResponse,
    LineItem,
    NormalizeRequest,
    PurchaseRequest,
    PurchaseTotals,
    RoundOffSuggestion,
    StockRequest,
    SuggestPriceRequest,
    Totals,
    TotalsRequest,
)
from billing.services.calculator import compute_totals, suggest_round_off
from billing.services.invoice import build_invoice_lines, build_invoice_summary, build_print_lines
from billing.services.purchase import compute_purchase_totals
from billing.services.units import normalize_unit, stock_in_unit, suggested_selling_price
from billing.services.validation import validate_entry, validate_line_items, validate_purchase_items
from billing.logging_conf import setup_logging
import config
import time
from typing import Dict, Any


app = FastAPI(
    title="Billing Pricing API",
    description="""
    Pricing and GST calculations for the billing, invoice-edit and purchase screens.

    ## Features

    * **Invoice Totals**: GST-inclusive line prices, proportional discount, charges and round-off
    * **Unit Conversion**: SQFT / BOX / TNOS entries normalized to stock units
    * **Invoice Payload**: Per-line net totals, effective selling price and CGST/SGST split
    * **Purchase Totals**: Bill and cash parts, transport GST and landed cost per piece

    All figures are computed in full precision and rounded to 2 decimals only
    where they are returned as formatted strings.
    """,
    version="1.0.0",
    debug=config.DEBUG,
    openapi_tags=[
        {
            "name": "Health",
            "description": "Health check and service status endpoints",
        },
        {
            "name": "Units",
            "description": "Unit conversion and display price helpers",
        },
        {
            "name": "Invoice",
            "description": "Invoice totals and submission payload",
        },
        {
            "name": "Purchase",
            "description": "Purchase totals",
        },
    ]
)

logger = setup_logging()
start_ts = time.time()


def custom_openapi():
    """
    OpenAPI schema with the input-rejection body documented.

    Every operation that takes a request body can answer 422 either with
    FastAPI's own validation list or with ErrorDetail from our handler, so
    the 422 schema of those operations lists both.
    """
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        tags=app.openapi_tags,
    )
    schemas = openapi_schema.setdefault("components", {}).setdefault("schemas", {})
    schemas["ErrorDetail"] = ErrorDetail.model_json_schema()
    error_ref = {"$ref": "#/components/schemas/ErrorDetail"}

    for path_item in openapi_schema.get("paths", {}).values():
        for operation in path_item.values():
            if "requestBody" not in operation:
                continue
            response = operation.setdefault("responses", {}).setdefault("422", {"description": "Input rejected"})
            content = response.setdefault("content", {}).setdefault("application/json", {})
            existing = content.get("schema")
            if existing and existing != error_ref:
                content["schema"] = {"anyOf": [error_ref, existing]}
            else:
                content["schema"] = error_ref

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


@app.exception_handler(InputValidationError)
async def input_validation_handler(request: Request, exc: InputValidationError):
    logger.warning(exc.message, extra={"field": exc.field, "value": exc.value})
    return JSONResponse(status_code=422, content=exc.to_dict())


@app.get(
    "/pricing/health",
    tags=["Health"],
    summary="Health Check",
    response_model=Dict[str, Any],
    responses={
        200: {
            "description": "Service is healthy",
            "content": {
                "application/json": {
                    "example": {"status": "ok", "strictInput": True, "uptimeSec": 3600}
                }
            }
        }
    }
)
def health():
    """
    Health check endpoint.

    Returns:
        - status: Service status (always "ok" if endpoint is reachable)
        - strictInput: Whether unparsable numbers are rejected
        - uptimeSec: Service uptime in seconds
    """
    return {
        "status": "ok",
        "strictInput": config.STRICT_NUMERIC_INPUT,
        "uptimeSec": int(time.time() - start_ts)
    }


@app.get(
    "/pricing/version",
    tags=["Health"],
    summary="Version Information",
    response_model=Dict[str, str],
)
def version():
    """Version numbers of the service and its web stack."""
    import fastapi
    import pydantic
    import starlette
    return {
        "service": app.version,
        "fastapi": fastapi.__version__,
        "pydantic": pydantic.VERSION,
        "starlette": starlette.__version__,
    }


@app.post(
    "/pricing/normalize",
    tags=["Units"],
    summary="Normalize Entered Item",
    description="""
    Convert a quantity/price pair entered in SQFT, BOX or TNOS into a line item
    in native stock units. Quantity and price must be positive and GST% non-negative.
    """,
    response_model=LineItem,
)
def normalize(req: NormalizeRequest):
    validate_entry(req.entered)
    return normalize_unit(req.entered, req.entered.unit, req.dims)


@app.post(
    "/pricing/stock",
    tags=["Units"],
    summary="Stock In Unit",
    response_model=Dict[str, float],
)
def stock(req: StockRequest):
    """Stock on hand expressed in the selected selling unit."""
    return {"quantity": stock_in_unit(req.countInStock, req.unit, req.dims)}


@app.post(
    "/pricing/suggest-price",
    tags=["Units"],
    summary="Suggested Selling Price",
    response_model=Dict[str, float],
)
def suggest_price(req: SuggestPriceRequest):
    """Display price from cost using the category markup."""
    price = suggested_selling_price(
        req.price,
        category=req.category,
        unit_mode=req.unit,
        act_length=req.actLength,
        act_breadth=req.actBreadth,
        ps_ratio=req.psRatio,
    )
    return {"sellingPrice": round(price, 2)}


@app.post(
    "/pricing/totals",
    tags=["Invoice"],
    summary="Invoice Totals",
    description="""
    Compute subtotal, GST and grand total for a list of GST-inclusive line items.

    The document discount is allocated to lines by gross value and subtracted
    from each line's GST-exclusive base. Transportation, unloading and handling
    are added to the grand total without GST; round-off is added or subtracted
    according to roundOffMode.
    """,
    response_model=Totals,
    responses={
        200: {
            "description": "Computed totals",
            "content": {
                "application/json": {
                    "example": {
                        "subtotalExclGst": 1000.0,
                        "totalGst": 180.0,
                        "runningSubtotalInclGst": 1180.0,
                        "grandTotal": 1230.0,
                        "perLine": [
                            {
                                "itemGross": 1180.0,
                                "itemDiscount": 0.0,
                                "baseExclGst": 1000.0,
                                "gstAmount": 180.0,
                                "netTotal": 1180.0
                            }
                        ]
                    }
                }
            }
        },
    }
)
def totals(req: TotalsRequest):
    validate_line_items(req.lineItems)
    result = compute_totals(req.lineItems, req.charges)
    logger.info("Computed invoice totals", extra={"lines": len(req.lineItems), "grandTotal": result.grandTotal})
    return result


@app.post(
    "/pricing/invoice",
    tags=["Invoice"],
    summary="Invoice Payload",
    description="""
    Compute totals and return them in the shape the billing backend stores:
    formatted document figures, per-line submission rows, print rows and a
    round-off suggestion for the current grand total.
    """,
    response_model=InvoiceResponse,
)
def invoice(req: InvoiceRequest):
    validate_line_items(req.lineItems)
    try:
        result = compute_totals(req.lineItems, req.charges)
        round_off, mode = suggest_round_off(result.grandTotal, config.ROUND_OFF_STEP)
        logger.info("Built invoice payload", extra={"lines": len(req.lineItems), "grandTotal": result.grandTotal})
        return InvoiceResponse(
            summary=build_invoice_summary(result, req.charges, inter_state=req.interState),
            lines=build_invoice_lines(req.lineItems, result),
            printLines=build_print_lines(result),
            roundOffSuggestion=RoundOffSuggestion(roundOff=round_off, roundOffMode=mode),
        )
    except Exception as e:
        logger.exception("Unexpected error building invoice", extra={"errors": str(e)})
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )


@app.post(
    "/pricing/purchase",
    tags=["Purchase"],
    summary="Purchase Totals",
    description="""
    Compute bill part, cash part, transport GST and per-piece landed cost for a purchase.
    """,
    response_model=PurchaseTotals,
)
def purchase(req: PurchaseRequest):
    validate_purchase_items(req.items)
    try:
        result = compute_purchase_totals(req.items, req.charges)
    except Exception as e:
        logger.exception("Unexpected error computing purchase", extra={"errors": str(e)})
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )
    logger.info("Computed purchase totals", extra={"lines": len(req.items), "grandTotal": result.grandTotalPurchaseAmount})
    return result


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=config.APP_PORT, workers=config.APP_WORKERS)
