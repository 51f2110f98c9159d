"""Stock management endpoints - catalogue, categories, reports and point of sale"""

import logging
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response

from campus_dashboard.api.dependencies import fetch_snapshot, get_request_id, get_settings
from campus_dashboard.api.v1.schemas import (
    AcknowledgementResponse,
    CategoryRowSchema,
    OrderQuoteRequest,
    OrderQuoteResponse,
    ProductListResponse,
    ProductRowSchema,
    StockCategoryRequest,
    StockReportResponse,
    StockSnapshotSchema,
    TimelinePointSchema,
    ValuedProductSchema,
)
from campus_dashboard.config import Settings
from campus_dashboard.domain import stock as derive
from campus_dashboard.domain.csv_export import STOCK_PRODUCT_COLUMNS, export_csv
from campus_dashboard.domain.derivation import ALL, RecordIndex
from campus_dashboard.domain.exceptions import ConfirmationRequiredError, UnknownRecordError
from campus_dashboard.domain.modals import CategoryRemoval, run_confirmation
from campus_dashboard.infrastructure.observability.logging import log_action
from campus_dashboard.infrastructure.observability.metrics import csv_export_counter, record_action
from campus_dashboard.infrastructure.stores import STOCK

router = APIRouter()


@router.get("/stock/products", response_model=ProductListResponse)
async def list_products(
    request: Request,
    search: str = Query(""),
    category: str = Query(ALL, description="Category id or name, or all"),
):
    snapshot = await fetch_snapshot(request, STOCK)
    rows = derive.product_rows(snapshot["products"], snapshot["categories"], search, category)
    return ProductListResponse(
        products=[ProductRowSchema.model_validate(r) for r in rows],
        total=len(rows),
        low_stock_count=derive.low_stock_count(rows),
    )


@router.get("/stock/products/export")
async def export_products(
    request: Request,
    search: str = Query(""),
    category: str = Query(ALL),
    settings: Settings = Depends(get_settings),
):
    """CSV of the currently filtered catalogue"""
    snapshot = await fetch_snapshot(request, STOCK)
    rows = derive.product_rows(snapshot["products"], snapshot["categories"], search, category)
    csv_export_counter.labels(dataset="stock_products").inc()
    return Response(
        content=export_csv(rows, STOCK_PRODUCT_COLUMNS, settings.csv_line_terminator),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="stock-products.csv"'},
    )


@router.get("/stock/categories", response_model=List[CategoryRowSchema])
async def list_categories(request: Request, search: str = Query("")):
    snapshot = await fetch_snapshot(request, STOCK)
    rows = derive.category_rows(snapshot["categories"], snapshot["products"], search)
    return [CategoryRowSchema.model_validate(r) for r in rows]


@router.post("/stock/categories", response_model=AcknowledgementResponse, status_code=202)
async def create_category(
    body: StockCategoryRequest,
    request_id: str = Depends(get_request_id),
):
    record_action("category_create", acknowledged=True)
    log_action(request_id, "category_create", body.name)
    return AcknowledgementResponse(
        action="category_create",
        subject_id=body.name,
        message=f"Category '{body.name}' received",
    )


@router.delete("/stock/categories/{category_id}", response_model=AcknowledgementResponse, status_code=202)
async def delete_category(
    category_id: str,
    request: Request,
    confirm: bool = Query(False),
    request_id: str = Depends(get_request_id),
):
    snapshot = await fetch_snapshot(request, STOCK)
    category = RecordIndex(snapshot["categories"]).get(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")

    try:
        run_confirmation(CategoryRemoval(category=category), confirm)
    except ConfirmationRequiredError as e:
        record_action("category_removal", acknowledged=False)
        logging.warning(f"Category removal not confirmed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    record_action("category_removal", acknowledged=True)
    log_action(request_id, "category_removal", category.id)
    return AcknowledgementResponse(
        action="category_removal",
        subject_id=category.id,
        message=f"Category '{category.name}' removed",
    )


@router.get("/stock/reports", response_model=StockReportResponse)
async def stock_report(request: Request):
    """Inventory snapshot, top valued items and the yearly stock timeline"""
    snapshot = await fetch_snapshot(request, STOCK)
    products, categories = snapshot["products"], snapshot["categories"]
    return StockReportResponse(
        snapshot=StockSnapshotSchema.model_validate(derive.stock_snapshot(products, categories)),
        top_valued=[ValuedProductSchema.model_validate(v) for v in derive.top_valued_products(products, categories)],
        timeline=[TimelinePointSchema.model_validate(p) for p in snapshot["timeline"]],
    )


@router.post("/stock/pos/quote", response_model=OrderQuoteResponse)
async def quote_order(
    body: OrderQuoteRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
    request_id: str = Depends(get_request_id),
):
    """Price a point-of-sale order against current stock levels"""
    snapshot = await fetch_snapshot(request, STOCK)
    try:
        quote = derive.quote_order(
            snapshot["products"],
            [(line.product_id, line.quantity) for line in body.lines],
            tax_rate=settings.pos_tax_rate,
            discount_percent=body.discount_percent,
        )
    except UnknownRecordError as e:
        logging.warning(f"Quote rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    return OrderQuoteResponse.model_validate({**asdict(quote), "payment_method": body.payment_method})
