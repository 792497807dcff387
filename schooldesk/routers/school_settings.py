import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..database import get_db
from ..schemas import SchoolBranding, SchoolInfo, SchoolSettingsUpdate
from . import first_row, utcnow_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["school-settings"])

TABLE = "school_settings"
SOURCE = "supabase_postgresql"


def default_row() -> dict:
    """Row inserted the first time the settings page is opened."""
    return {
        "school_id": 1,
        "name": "New Supabase School",
        "name_in_bangla": "নতুন সুপাবেস স্কুল",
        "address": "Dhaka, Bangladesh",
        "address_in_bangla": "ঢাকা, বাংলাদেশ",
        "email": "admin@school.edu.bd",
        "phone": "+8801700000000",
        "website": "https://school.edu.bd",
        "school_type": "school",
        "establishment_year": date.today().year,
        "eiin": "000000",
        "timezone": "Asia/Dhaka",
        "language": "bn",
        "date_format": "DD/MM/YYYY",
        "currency": "BDT",
        "academic_year_start": "01/01",
        "week_starts_on": "sunday",
        "enable_notifications": True,
        "enable_sms": False,
        "enable_email": True,
        "auto_backup": True,
        "data_retention": 365,
        "max_students": 500,
        "max_teachers": 50,
        "allow_online_payments": False,
        "primary_color": "#3B82F6",
        "secondary_color": "#10B981",
        "accent_color": "#F59E0B",
        "use_watermark": True,
        "use_letterhead": True,
    }


def blank_settings() -> dict:
    """Answer for the settings form while no row exists yet; nothing is stored."""
    return {
        "id": None,
        "school_id": 1,
        "name": "",
        "name_in_bangla": "",
        "address": "",
        "address_in_bangla": "",
        "email": "",
        "phone": "",
        "website": "",
        "school_type": "school",
        "establishment_year": date.today().year,
        "eiin": "",
        "principal_name": "",
        "primary_color": "#3B82F6",
        "secondary_color": "#10B981",
        "accent_color": "#F59E0B",
        "motto": "",
        "motto_bn": "",
        "use_watermark": True,
        "use_letterhead": True,
        "logo_url": "",
        "timezone": "Asia/Dhaka",
        "language": "bn",
        "date_format": "DD/MM/YYYY",
        "currency": "BDT",
        "academic_year_start": "01/01",
        "week_starts_on": "sunday",
        "enable_notifications": True,
        "enable_sms": False,
        "enable_email": True,
        "auto_backup": True,
        "data_retention": 365,
        "max_students": 500,
        "max_teachers": 50,
        "allow_online_payments": False,
        "created_at": None,
        "updated_at": None,
    }


def _current(db) -> Optional[dict]:
    return first_row(db.table(TABLE).select("*").limit(1).execute().data)


def _save(db, changes: dict) -> Optional[dict]:
    """Update the single settings row, or insert it when there is none."""
    existing = _current(db)
    changes = {**changes, "updated_at": utcnow_iso()}
    if existing is None:
        return first_row(db.table(TABLE).insert(changes).execute().data)
    return first_row(db.table(TABLE).update(changes).eq("id", existing["id"]).execute().data)


def _columns(body: BaseModel) -> dict:
    return body.model_dump(exclude_none=True)


# ----------------------- School settings -----------------------

@router.get("/api/school/settings")
def get_school_settings(db=Depends(get_db)):
    try:
        row = _current(db)
    except Exception:
        logger.exception("Error fetching school settings")
        raise HTTPException(status_code=500, detail="সেটিংস লোড করতে ত্রুটি। Failed to fetch school settings")
    return row if row is not None else blank_settings()


@router.get("/api/enhanced-school/settings")
def get_enhanced_settings(db=Depends(get_db)):
    try:
        return _current(db)
    except Exception:
        logger.exception("Error fetching school settings")
        raise HTTPException(status_code=500, detail="সেটিংস লোড করতে ত্রুটি। Failed to fetch school settings")


@router.put("/api/enhanced-school/info")
def update_school_info(body: SchoolInfo, db=Depends(get_db)):
    try:
        return _save(db, _columns(body))
    except Exception:
        logger.exception("Error updating school info")
        raise HTTPException(status_code=500, detail="স্কুলের তথ্য আপডেট করতে ত্রুটি। Failed to update school info")


@router.put("/api/enhanced-school/branding")
def update_school_branding(body: SchoolBranding, db=Depends(get_db)):
    try:
        return _save(db, _columns(body))
    except Exception:
        logger.exception("Error updating school branding")
        raise HTTPException(status_code=500, detail="ব্র্যান্ডিং আপডেট করতে ত্রুটি। Failed to update school branding")


@router.get("/api/supabase/school/settings")
def get_or_create_settings(db=Depends(get_db)):
    try:
        row = _current(db)
        if row is None:
            logger.info("Creating default school settings")
            created = first_row(db.table(TABLE).insert(default_row()).execute().data)
            return {"success": True, "data": created, "source": SOURCE, "action": "created_default"}
    except Exception:
        logger.exception("Error fetching school settings")
        raise HTTPException(status_code=500, detail="সেটিংস লোড করতে ত্রুটি। Failed to fetch school settings from Supabase")
    return {"success": True, "data": row, "source": SOURCE}


@router.post("/api/supabase/school/settings")
def save_settings(body: SchoolSettingsUpdate, db=Depends(get_db)):
    changes = _columns(body)
    try:
        existing = _current(db)
        if existing is None:
            created = first_row(db.table(TABLE).insert({**default_row(), **changes}).execute().data)
            return {"success": True, "data": created, "action": "created", "source": SOURCE}
        changes["updated_at"] = utcnow_iso()
        updated = first_row(db.table(TABLE).update(changes).eq("id", existing["id"]).execute().data)
    except Exception:
        logger.exception("Error updating school settings")
        raise HTTPException(status_code=500, detail="সেটিংস আপডেট করতে ত্রুটি। Failed to update school settings in Supabase")
    return {"success": True, "data": updated, "action": "updated", "source": SOURCE}
