import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import crud.offer as crud
from db.database import get_db
from models.offer import OfferResponse, OfferValuesPayload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/offers", tags=["offers"])


@router.get("", response_model=List[OfferResponse])
def read_offers(db: Session = Depends(get_db)):
    try:
        return crud.get_offers(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("GET /api/offers error")
        raise HTTPException(status_code=500, detail="Failed to fetch offers")


@router.post("", response_model=OfferResponse, status_code=201)
def create_offer(payload: OfferValuesPayload, db: Session = Depends(get_db)):
    try:
        db_offer = crud.create_offer(db, payload.values)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("POST /api/offers error")
        raise HTTPException(status_code=500, detail="Failed to create offer")

    logger.info("Created offer %s with %d values", db_offer.id, len(payload.values))
    return db_offer


@router.put("/{offer_id}", response_model=OfferResponse)
def update_offer(offer_id: str, payload: OfferValuesPayload, db: Session = Depends(get_db)):
    try:
        db_offer = crud.replace_offer_values(db, offer_id, payload.values)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("PUT /api/offers/%s error", offer_id)
        raise HTTPException(status_code=500, detail="Failed to update offer")

    if db_offer is None:
        raise HTTPException(status_code=404, detail="Offer not found")
    return db_offer


@router.delete("/{offer_id}")
def delete_offer(offer_id: str, db: Session = Depends(get_db)):
    try:
        db_offer = crud.delete_offer(db, offer_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("DELETE /api/offers/%s error", offer_id)
        raise HTTPException(status_code=500, detail="Failed to delete offer")

    if db_offer is None:
        raise HTTPException(status_code=404, detail="Offer not found")
    logger.info("Deleted offer %s", offer_id)
    return {"success": True}
