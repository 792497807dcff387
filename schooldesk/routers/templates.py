import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..database import get_db
from ..schemas import (
    DashboardTemplateCreate,
    DashboardTemplateUpdate,
    FavoriteUpdate,
    TemplateCreate,
)
from . import first_row

logger = logging.getLogger(__name__)

router = APIRouter(tags=["templates"])

TABLE = "document_templates"

DASHBOARD_COLUMNS = (
    "id, name, name_bn, type, category, description, description_bn, icon, "
    "required_credits, usage_count, last_used, difficulty, estimated_time, "
    "is_active, is_popular"
)


# ----------------------- Enhanced templates -----------------------

@router.get("/api/enhanced-templates")
def list_enhanced_templates(
    type: Optional[str] = None,
    category: Optional[str] = None,
    isActive: Optional[bool] = None,
    db=Depends(get_db),
):
    try:
        query = db.table(TABLE).select("*")
        if type:
            query = query.eq("type", type)
        if category:
            query = query.eq("category", category)
        if isActive is not None:
            query = query.eq("is_active", isActive)
        return query.order("created_at", desc=True).execute().data or []
    except Exception:
        logger.exception("Error fetching templates")
        raise HTTPException(status_code=500, detail="টেমপ্লেট লোড করতে ত্রুটি। Failed to fetch templates")


@router.post("/api/enhanced-templates")
def create_enhanced_template(body: TemplateCreate, db=Depends(get_db)):
    record = {
        "name": body.name,
        "name_bn": body.name_bn,
        "type": body.type,
        "description": body.description,
        "description_bn": body.description_bn,
        "category": body.category,
        "category_bn": body.category_bn,
        "settings": body.settings,
        "created_by": body.created_by,
        "tags": body.tags,
        "is_default": False,
        "is_active": True,
    }
    try:
        return first_row(db.table(TABLE).insert(record).execute().data)
    except Exception:
        logger.exception("Error creating template")
        raise HTTPException(status_code=500, detail="টেমপ্লেট তৈরি করতে ত্রুটি। Failed to create template")


@router.patch("/api/enhanced-templates/{template_id}/favorite")
def set_template_favorite(template_id: int, body: FavoriteUpdate, db=Depends(get_db)):
    try:
        rows = db.table(TABLE).update({"is_favorite": body.is_favorite}).eq("id", template_id).execute().data
    except Exception:
        logger.exception("Error updating template favorite %s", template_id)
        raise HTTPException(status_code=500, detail="টেমপ্লেট আপডেট করতে ত্রুটি। Failed to update template favorite")
    return first_row(rows)


# ----------------------- Document dashboard -----------------------

def _dashboard_template(template: dict, bengali: bool) -> dict:
    name = template.get("name")
    description = template.get("description")
    if bengali:
        name = template.get("name_bn") or name
        description = template.get("description_bn") or description
    return {
        "id": template.get("id"),
        "documentId": template.get("type"),
        "name": name,
        "nameBn": template.get("name_bn"),
        "category": template.get("category"),
        "description": description,
        "descriptionBn": template.get("description_bn"),
        "icon": template.get("icon"),
        "creditsRequired": template.get("required_credits") or 1,
        "usageCount": template.get("usage_count") or 0,
        "lastUsed": template.get("last_used"),
        "difficulty": template.get("difficulty"),
        "estimatedTime": template.get("estimated_time"),
        "isActive": template.get("is_active"),
        "isPopular": template.get("is_popular"),
        "generated": 0,
    }


@router.get("/api/supabase/documents/templates")
def list_dashboard_templates(
    category: Optional[str] = None,
    search: Optional[str] = None,
    isActive: Optional[bool] = None,
    lang: Optional[str] = None,
    db=Depends(get_db),
):
    try:
        query = db.table(TABLE).select(DASHBOARD_COLUMNS)
        if category and category != "all":
            query = query.eq("category", category)
        if isActive is not None:
            query = query.eq("is_active", isActive)
        rows = query.order("is_popular", desc=True).order("name").execute().data
    except Exception:
        logger.exception("Error fetching document templates from Supabase")
        raise HTTPException(status_code=500, detail="টেমপ্লেট লোড করতে ত্রুটি। Failed to fetch document templates")

    templates = [_dashboard_template(row, lang == "bn") for row in rows or []]
    if search:
        term = search.lower()
        templates = [
            t for t in templates
            if term in (t["name"] or "").lower() or term in (t["description"] or "").lower()
        ]
    return templates


@router.get("/api/supabase/documents/categories")
def list_dashboard_categories(db=Depends(get_db)):
    try:
        rows = db.table(TABLE).select("category, is_active").eq("is_active", True).execute().data
    except Exception:
        logger.exception("Error fetching categories from Supabase")
        raise HTTPException(status_code=500, detail="ক্যাটাগরি লোড করতে ত্রুটি। Failed to fetch categories")

    counts = {}
    for row in rows or []:
        category = row.get("category")
        entry = counts.setdefault(category, {"name": category, "count": 0})
        entry["count"] += 1
    return list(counts.values())


@router.post("/api/supabase/documents/templates")
def create_dashboard_template(body: DashboardTemplateCreate, db=Depends(get_db)):
    record = {
        "name": body.name,
        "name_bn": body.name_bn,
        "type": body.type,
        "category": body.category,
        "description": body.description,
        "description_bn": body.description_bn,
        "icon": body.icon,
        "required_credits": body.credits_required or 1,
        "is_active": True,
        "difficulty": body.difficulty or "easy",
        "estimated_time": body.estimated_time,
    }
    try:
        return first_row(db.table(TABLE).insert(record).execute().data)
    except Exception:
        logger.exception("Error creating document template in Supabase")
        raise HTTPException(status_code=500, detail="টেমপ্লেট তৈরি করতে ত্রুটি। Failed to create document template")


@router.patch("/api/supabase/documents/templates/{template_id}")
def update_dashboard_template(template_id: int, body: DashboardTemplateUpdate, db=Depends(get_db)):
    changes = {
        "name": body.name,
        "name_bn": body.name_bn,
        "description": body.description,
        "description_bn": body.description_bn,
        "is_active": body.is_active,
        "is_popular": body.is_popular,
        "required_credits": body.credits_required,
    }
    changes = {key: value for key, value in changes.items() if value is not None}
    try:
        rows = db.table(TABLE).update(changes).eq("id", template_id).execute().data
    except Exception:
        logger.exception("Error updating document template %s in Supabase", template_id)
        raise HTTPException(status_code=500, detail="টেমপ্লেট আপডেট করতে ত্রুটি। Failed to update document template")
    return first_row(rows)
