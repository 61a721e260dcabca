import logging
from typing import Optional
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Path
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from app.models.wish_model import AttendingStatus, WishModel, WishResponse, WishStats
from app.models.wish_orm import Wish
from app.services.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["wishes"])

WishId = Path(..., description="The ID of the wish")

def count_wishes(db: Session, attending: Optional[AttendingStatus] = None) -> int:
    query = select(func.count()).select_from(Wish)
    if attending is not None:
        query = query.where(Wish.attending == attending)
    return db.scalar(query)

@router.get("/wishes", summary="Get all wishes", response_description="All wishes, most recent first")
def list_wishes(db: Session = Depends(get_db)):
    try:
        wishes = db.scalars(select(Wish).order_by(Wish.timestamp.desc(), Wish.id.desc())).all()
        return {"success": True, "data": [WishResponse.model_validate(wish) for wish in wishes]}
    except Exception:
        logger.exception("Failed to fetch wishes")
        return {"success": False, "error": "Failed to fetch wishes"}

# Harus didaftarkan sebelum /wishes/{id}
@router.get("/wishes/stats", summary="Get wishes statistics", response_description="Counts of wishes by attendance")
def wish_stats(db: Session = Depends(get_db)):
    try:
        stats = WishStats(
            total=count_wishes(db),
            attending=count_wishes(db, AttendingStatus.ATTENDING),
            notAttending=count_wishes(db, AttendingStatus.NOT_ATTENDING),
            maybe=count_wishes(db, AttendingStatus.MAYBE),
        )
        return {"success": True, "data": stats}
    except Exception:
        logger.exception("Failed to fetch statistics")
        return {"success": False, "error": "Failed to fetch statistics"}

@router.get("/wishes/{id}", summary="Get wish by ID", response_description="A specific wish")
def get_wish(id: int = WishId, db: Session = Depends(get_db)):
    try:
        wish = db.get(Wish, id)
        if not wish:
            return {"success": False, "error": "Wish not found"}
        return {"success": True, "data": WishResponse.model_validate(wish)}
    except Exception:
        logger.exception(f"Failed to fetch wish {id}")
        return {"success": False, "error": "Failed to fetch wish"}

@router.post("/wishes", summary="Create new wish", response_description="The created wish")
def create_wish(wish: WishModel, db: Session = Depends(get_db)):
    try:
        record = Wish(
            name=wish.name,
            message=wish.message,
            attending=wish.attending,
            timestamp=datetime.now(timezone.utc),
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        logger.info(f"Created wish {record.id} from {record.name}")
        return {"success": True, "data": WishResponse.model_validate(record)}
    except Exception:
        db.rollback()
        logger.exception("Failed to create wish")
        return {"success": False, "error": "Failed to create wish"}

@router.put("/wishes/{id}", summary="Update wish", response_description="The updated wish")
def update_wish(wish: WishModel, id: int = Path(..., description="The ID of the wish to update"), db: Session = Depends(get_db)):
    try:
        record = db.get(Wish, id)
        if not record:
            raise LookupError(f"Wish {id} does not exist")

        record.name = wish.name
        record.message = wish.message
        record.attending = wish.attending
        db.commit()
        db.refresh(record)
        return {"success": True, "data": WishResponse.model_validate(record)}
    except Exception:
        db.rollback()
        logger.exception(f"Failed to update wish {id}")
        return {"success": False, "error": "Failed to update wish"}

@router.delete("/wishes/{id}", summary="Delete wish", response_description="Deletion result")
def delete_wish(id: int = Path(..., description="The ID of the wish to delete"), db: Session = Depends(get_db)):
    try:
        record = db.get(Wish, id)
        if not record:
            raise LookupError(f"Wish {id} does not exist")

        db.delete(record)
        db.commit()
        return {"success": True, "message": "Wish deleted successfully"}
    except Exception:
        db.rollback()
        logger.exception(f"Failed to delete wish {id}")
        return {"success": False, "error": "Failed to delete wish"}
