import json

from sqlalchemy.orm import Session, selectinload

from models.column import utcnow
from models.offer import Offer, OfferValue


def stringify_value(value) -> str:
    """Cells are free text; everything sent by a client is stored as a string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def _build_values(offer_id: str, values: dict) -> list[OfferValue]:
    return [
        OfferValue(offer_id=offer_id, field_id=field_id, value=stringify_value(value))
        for field_id, value in values.items()
    ]


def get_offers(db: Session):
    return (
        db.query(Offer)
        .options(selectinload(Offer.values))
        .order_by(Offer.created_at.desc())
        .all()
    )


def get_offer(db: Session, offer_id: str):
    return db.query(Offer).filter(Offer.id == offer_id).first()


def create_offer(db: Session, values: dict):
    db_offer = Offer()
    db.add(db_offer)
    db.flush()
    db.add_all(_build_values(db_offer.id, values))
    db.commit()
    db.refresh(db_offer)
    return db_offer


def replace_offer_values(db: Session, offer_id: str, values: dict):
    """Swap the whole value set of an offer in a single transaction."""
    db_offer = get_offer(db, offer_id)
    if db_offer is None:
        return None

    db.query(OfferValue).filter(OfferValue.offer_id == offer_id).delete(
        synchronize_session=False
    )
    db.expire(db_offer, ["values"])
    db.add_all(_build_values(offer_id, values))
    db_offer.updated_at = utcnow()
    db.commit()
    db.refresh(db_offer)
    return db_offer


def delete_offer(db: Session, offer_id: str):
    db_offer = get_offer(db, offer_id)
    if db_offer:
        db.delete(db_offer)
        db.commit()
    return db_offer
