import matplotlib

matplotlib.use("Agg")  # Set the backend to non-interactive Agg
import matplotlib.pyplot as plt
import csv
import io
import logging

import numpy as np
import pandas as pd
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import crud.column as column_crud
import crud.offer as offer_crud
from db.database import get_db
from display.price import format_currency
from display.render import price_comparison

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comparison", tags=["comparison"])

# metric column -> flag marking the cheapest offer for it
METRICS = {
    "totalPrice": "bestTotal",
    "pricePerPerson": "bestPerPerson",
    "pricePerDay": "bestPerDay",
    "pricePerPersonPerDay": "bestPerPersonPerDay",
}
METRIC_LABELS = {
    "totalPrice": "Cena całkowita",
    "pricePerPerson": "Na osobę",
    "pricePerDay": "Za dzień",
    "pricePerPersonPerDay": "Os./dzień",
}
# The comparison table always shows złoty
COMPARISON_CURRENCY = "PLN"


def _offer_rows(db: Session) -> list[tuple[str, dict[str, str]]]:
    return [
        (offer.id, {v.field_id: v.value for v in offer.values})
        for offer in offer_crud.get_offers(db)
    ]


def comparison_table(db: Session) -> pd.DataFrame:
    rows = price_comparison(_offer_rows(db), column_crud.get_columns(db))
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    for metric, flag in METRICS.items():
        df[flag] = df[metric] == df[metric].min()
    return df


@router.get("/prices")
def read_price_comparison(db: Session = Depends(get_db)):
    try:
        df = comparison_table(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("GET /api/comparison/prices error")
        raise HTTPException(status_code=500, detail="Failed to fetch offers")
    if df.empty:
        return []

    records = []
    for record in df.to_dict(orient="records"):
        record["formatted"] = {
            metric: format_currency(record[metric], COMPARISON_CURRENCY)
            for metric in METRICS
        }
        for flag in METRICS.values():
            record[flag] = bool(record[flag])
        record["personCount"] = int(record["personCount"])
        record["durationDays"] = int(record["durationDays"])
        records.append(record)
    return records


@router.get("/prices/plot")
def get_price_comparison_plot(db: Session = Depends(get_db)):
    try:
        df = comparison_table(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("GET /api/comparison/prices/plot error")
        raise HTTPException(status_code=500, detail="Failed to fetch offers")
    if df.empty:
        raise HTTPException(status_code=404, detail="No offers with prices to compare")

    try:
        fig, axes = plt.subplots(1, len(METRICS), figsize=(4 * len(METRICS), 5))
        positions = np.arange(len(df))

        for ax, (metric, flag) in zip(axes, METRICS.items()):
            colors = ["#22c55e" if best else "#3b82f6" for best in df[flag]]
            ax.bar(positions, df[metric], color=colors)
            ax.set_title(METRIC_LABELS[metric])
            ax.set_xticks(positions)
            ax.set_xticklabels(df["name"], rotation=45, ha="right")
            ax.set_ylabel(COMPARISON_CURRENCY)

        fig.tight_layout()
        buf = io.BytesIO()
        plt.savefig(buf, format="png", bbox_inches="tight", dpi=150)
        buf.seek(0)
        plt.close(fig)

        return StreamingResponse(buf, media_type="image/png")
    except Exception:
        plt.close("all")
        logger.exception("GET /api/comparison/prices/plot error")
        raise HTTPException(status_code=500, detail="Failed to render price plot")


@router.get("/export-csv")
def export_offers_csv(db: Session = Depends(get_db)):
    """Export every offer with one column per user-defined field"""
    try:
        columns = column_crud.get_columns(db)
        offers = [
            (offer.id, {v.field_id: v.value for v in offer.values}, offer.created_at)
            for offer in offer_crud.get_offers(db)
        ]
    except SQLAlchemyError:
        db.rollback()
        logger.exception("GET /api/comparison/export-csv error")
        raise HTTPException(status_code=500, detail="Failed to export offers")

    output = io.StringIO()
    writer = csv.writer(output)

    # Write header
    writer.writerow(["ID"] + [c.label for c in columns] + ["Created At"])

    # Write data
    for offer_id, values, created_at in offers:
        writer.writerow(
            [offer_id]
            + [values.get(c.field_id, "") for c in columns]
            + [created_at]
        )

    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="vacation-offers.csv"'},
    )
