import time

from sqlalchemy import func
from sqlalchemy.orm import Session

from display.field_types import slugify, suggest_icon
from models.column import ColumnCreate, OfferColumn
from models.offer import OfferValue


def get_columns(db: Session):
    return db.query(OfferColumn).order_by(OfferColumn.order.asc()).all()


def get_column_by_field_id(db: Session, field_id: str):
    return db.query(OfferColumn).filter(OfferColumn.field_id == field_id).first()


def resolve_field_id(label: str) -> str:
    return slugify(label) or f"col-{int(time.time() * 1000)}"


def next_order(db: Session) -> int:
    last = db.query(func.max(OfferColumn.order)).scalar()
    return 0 if last is None else last + 1


def create_column(db: Session, column: ColumnCreate):
    field_id = column.field_id or resolve_field_id(column.label)
    db_column = OfferColumn(
        field_id=field_id,
        label=column.label,
        icon=column.icon or suggest_icon(field_id, column.label),
        order=next_order(db),
    )
    db.add(db_column)
    db.commit()
    db.refresh(db_column)
    return db_column


def delete_column(db: Session, field_id: str):
    """Delete a column together with every offer value stored for it."""
    db_column = get_column_by_field_id(db, field_id)
    if db_column:
        db.query(OfferValue).filter(OfferValue.field_id == field_id).delete(
            synchronize_session=False
        )
        db.delete(db_column)
        db.commit()
    return db_column
