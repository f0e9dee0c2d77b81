import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import crud.column as crud
from db.database import get_db
from display.field_types import detect_field_type, suggest_icon
from models.column import ColumnCreate, ColumnResponse, IconSuggestion

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/columns", tags=["columns"])


@router.get("", response_model=List[ColumnResponse])
def read_columns(db: Session = Depends(get_db)):
    try:
        return crud.get_columns(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("GET /api/columns error")
        raise HTTPException(status_code=500, detail="Failed to fetch columns")


@router.get("/suggest-icon", response_model=IconSuggestion)
def suggest_column_icon(label: str = Query(..., min_length=1)):
    """Field id, icon and display type a new column with this label would get."""
    label = label.strip()
    if not label:
        raise HTTPException(status_code=400, detail="label is required")
    field_id = crud.resolve_field_id(label)
    return IconSuggestion(
        field_id=field_id,
        label=label,
        icon=suggest_icon(field_id, label),
        field_type=detect_field_type(field_id, label).value,
    )


@router.post("", response_model=ColumnResponse)
def create_column(column: ColumnCreate, db: Session = Depends(get_db)):
    field_id = column.field_id or crud.resolve_field_id(column.label)
    try:
        if crud.get_column_by_field_id(db, field_id) is not None:
            raise HTTPException(
                status_code=409, detail=f"Column '{field_id}' already exists"
            )
        db_column = crud.create_column(db, column.model_copy(update={"field_id": field_id}))
    except IntegrityError:
        db.rollback()
        logger.warning("POST /api/columns duplicate fieldId %s", field_id)
        raise HTTPException(status_code=409, detail=f"Column '{field_id}' already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("POST /api/columns error")
        raise HTTPException(status_code=500, detail="Failed to create column")

    logger.info("Created column %s (%s)", db_column.field_id, db_column.label)
    return db_column


@router.delete("")
def delete_column(
    field_id: str | None = Query(default=None, alias="fieldId"),
    db: Session = Depends(get_db),
):
    if not field_id:
        raise HTTPException(status_code=400, detail="fieldId is required")
    try:
        db_column = crud.delete_column(db, field_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("DELETE /api/columns error")
        raise HTTPException(status_code=500, detail="Failed to delete column")

    if db_column is None:
        raise HTTPException(status_code=404, detail="Column not found")
    logger.info("Deleted column %s and its offer values", field_id)
    return {"success": True}
