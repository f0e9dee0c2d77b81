import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import crud.column as column_crud
import crud.offer as offer_crud
from db.database import get_db
from display.render import render_cell, render_offer
from models.display import CellParseRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["display"])


@router.post("/display/parse")
def parse_cell(request: CellParseRequest):
    """Render one cell without storing anything, e.g. to preview an edit."""
    return render_cell(
        request.field_id,
        request.label,
        request.value,
        request.person_count,
        request.duration_days,
    )


@router.get("/offers/{offer_id}/display")
def display_offer(offer_id: str, db: Session = Depends(get_db)):
    try:
        db_offer = offer_crud.get_offer(db, offer_id)
        columns = column_crud.get_columns(db)
        values = {v.field_id: v.value for v in db_offer.values} if db_offer else {}
    except SQLAlchemyError:
        db.rollback()
        logger.exception("GET /api/offers/%s/display error", offer_id)
        raise HTTPException(status_code=500, detail="Failed to fetch offer")

    if db_offer is None:
        raise HTTPException(status_code=404, detail="Offer not found")
    return {"id": db_offer.id, "cells": render_offer(values, columns)}
