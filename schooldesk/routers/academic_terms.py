import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..database import get_db
from ..schemas import AcademicTermCreate, AcademicTermUpdate, StatusUpdate
from . import first_row, utcnow_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/enhanced-academic-terms", tags=["academic-terms"])

TABLE = "academic_terms"


@router.get("")
def list_terms(
    academicYearId: Optional[int] = None,
    status: Optional[str] = None,
    db=Depends(get_db),
):
    try:
        query = db.table(TABLE).select("*")
        if academicYearId:
            query = query.eq("academic_year_id", academicYearId)
        if status:
            query = query.eq("status", status)
        return query.order("created_at", desc=True).execute().data or []
    except Exception:
        logger.exception("Error fetching academic terms")
        raise HTTPException(status_code=500, detail="শিক্ষা পর্ব লোড করতে ত্রুটি। Failed to fetch academic terms")


@router.post("")
def create_term(body: AcademicTermCreate, db=Depends(get_db)):
    record = {
        "name": body.name,
        "name_bn": body.name_bn,
        "academic_year_id": body.academic_year_id,
        "start_date": body.start_date,
        "end_date": body.end_date,
        "description": body.description,
        "description_bn": body.description_bn,
        "status": "upcoming",
    }
    try:
        return first_row(db.table(TABLE).insert(record).execute().data)
    except Exception:
        logger.exception("Error creating academic term")
        raise HTTPException(status_code=500, detail="শিক্ষা পর্ব তৈরি করতে ত্রুটি। Failed to create academic term")


@router.patch("/{term_id}")
def update_term(term_id: int, body: AcademicTermUpdate, db=Depends(get_db)):
    changes = body.model_dump(exclude_unset=True)
    changes["updated_at"] = utcnow_iso()
    try:
        return first_row(db.table(TABLE).update(changes).eq("id", term_id).execute().data)
    except Exception:
        logger.exception("Error updating academic term %s", term_id)
        raise HTTPException(status_code=500, detail="শিক্ষা পর্ব আপডেট করতে ত্রুটি। Failed to update academic term")


@router.delete("/{term_id}")
def delete_term(term_id: int, db=Depends(get_db)):
    try:
        db.table(TABLE).delete().eq("id", term_id).execute()
    except Exception:
        logger.exception("Error deleting academic term %s", term_id)
        raise HTTPException(status_code=500, detail="শিক্ষা পর্ব মুছতে ত্রুটি। Failed to delete academic term")
    return {"message": "Academic term deleted successfully"}


@router.patch("/{term_id}/status")
def update_term_status(term_id: int, body: StatusUpdate, db=Depends(get_db)):
    changes = {"status": body.status, "updated_at": utcnow_iso()}
    try:
        return first_row(db.table(TABLE).update(changes).eq("id", term_id).execute().data)
    except Exception:
        logger.exception("Error updating academic term status %s", term_id)
        raise HTTPException(status_code=500, detail="শিক্ষা পর্বের স্ট্যাটাস আপডেট করতে ত্রুটি। Failed to update term status")
