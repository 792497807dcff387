import json
import logging
import re
from collections import Counter
from datetime import datetime, timezone
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from .. import config
from ..auth import get_current_user
from ..bilingual import (
    bengali_date,
    document_description_bn,
    document_difficulty,
    document_estimated_time,
    document_icon,
    document_name_bn,
)
from ..credits import InsufficientCreditsError, available_credits, charge_generation
from ..database import get_db
from ..drafts import DOCUMENT_TYPES, Draft, build_draft
from ..pdf_export import export_pdf
from ..previews import build_preview, render_html
from ..schemas import DocumentRequest, GenerateRequest
from . import parse_timestamp

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])

TEMPLATE_FIELDS = ["student_name", "student_id", "class", "school_name"]


# ----------------------- Templates -----------------------

def _enrich(template: dict, generated: int) -> dict:
    doc_type = template.get("type")
    return {
        "id": template.get("id"),
        "type": doc_type,
        "name": template.get("name"),
        "nameBn": document_name_bn(doc_type),
        "description": template.get("description"),
        "descriptionBn": document_description_bn(doc_type),
        "category": template.get("category"),
        "creditsRequired": template.get("required_credits"),
        "generated": generated,
        "isPopular": generated > config.POPULAR_THRESHOLD,
        "icon": document_icon(doc_type),
        "difficulty": document_difficulty(doc_type),
        "estimatedTime": document_estimated_time(doc_type),
        "path": f"/documents/{doc_type}",
    }


def _generation_counts(db) -> Counter:
    rows = db.table("document_generations").select("document_type").execute().data
    return Counter(row.get("document_type") for row in rows or [])


@router.get("/templates")
def list_templates(db=Depends(get_db)):
    try:
        templates = (
            db.table("document_templates").select("*").eq("is_active", True).execute().data
        )
        counts = _generation_counts(db)
    except Exception:
        logger.exception("Error fetching document templates")
        raise HTTPException(status_code=500, detail="টেমপ্লেট লোড করতে ত্রুটি। Failed to fetch document templates")

    enriched = [_enrich(t, counts.get(t.get("type"), 0)) for t in templates or []]
    enriched.sort(key=lambda t: t["generated"], reverse=True)
    return enriched


@router.get("/templates/{doc_type}")
def get_template(doc_type: str, db=Depends(get_db)):
    try:
        query = db.table("document_templates").select("*")
        if doc_type.isdigit():
            query = query.eq("id", int(doc_type))
        else:
            query = query.eq("type", doc_type)
        rows = query.eq("is_active", True).limit(1).execute().data
        template = rows[0] if rows else None
        counts = _generation_counts(db) if template else Counter()
    except Exception:
        logger.exception("Error fetching document template %s", doc_type)
        raise HTTPException(status_code=500, detail="টেমপ্লেট লোড করতে ত্রুটি। Failed to fetch document template")

    if template is None:
        raise HTTPException(status_code=404, detail="Document template not found")

    enriched = _enrich(template, counts.get(template.get("type"), 0))
    enriched["fields"] = json.dumps(TEMPLATE_FIELDS)
    enriched["templateData"] = json.dumps(
        {"size": "a4", "layout": "standard", "fields": TEMPLATE_FIELDS}
    )
    enriched["isActive"] = template.get("is_active")
    return enriched


# ----------------------- Usage -----------------------

@router.get("/stats")
def document_stats(user: dict = Depends(get_current_user), db=Depends(get_db)):
    try:
        generations = (
            db.table("document_generations")
            .select("credits_used, created_at")
            .eq("user_id", user["id"])
            .execute()
            .data
        ) or []
        remaining = available_credits(db)
    except Exception:
        logger.exception("Error fetching document stats")
        raise HTTPException(status_code=500, detail="পরিসংখ্যান লোড করতে ত্রুটি। Failed to fetch document statistics")

    now = datetime.now(timezone.utc)
    monthly_used = 0
    for row in generations:
        created = row.get("created_at")
        if created:
            created = parse_timestamp(created)
            if (created.year, created.month) == (now.year, now.month):
                monthly_used += 1

    return {
        "totalGenerated": len(generations),
        "creditsUsed": sum(int(row.get("credits_used") or 0) for row in generations),
        "creditsRemaining": remaining,
        "monthlyLimit": config.MONTHLY_LIMIT,
        "monthlyUsed": monthly_used,
    }


@router.get("/recent")
def recent_documents(user: dict = Depends(get_current_user), db=Depends(get_db)):
    try:
        rows = (
            db.table("document_generations")
            .select("*")
            .eq("user_id", user["id"])
            .order("created_at", desc=True)
            .limit(10)
            .execute()
            .data
        )
    except Exception:
        logger.exception("Error fetching recent documents")
        raise HTTPException(status_code=500, detail="সাম্প্রতিক ডকুমেন্ট লোড করতে ত্রুটি। Failed to fetch recent documents")

    activities = []
    for row in rows or []:
        created = row.get("created_at")
        activities.append(
            {
                "title": "ডকুমেন্ট তৈরি সম্পন্ন",
                "description": f"{document_name_bn(row.get('document_type'))} - {row.get('credits_used')} ক্রেডিট ব্যবহৃত",
                "time": bengali_date(parse_timestamp(created)) if created else "",
                "type": "success",
            }
        )
    return activities


@router.post("/generate")
def generate_document(
    body: GenerateRequest, user: dict = Depends(get_current_user), db=Depends(get_db)
):
    try:
        return charge_generation(db, user["id"], body.document_type, body.document_data)
    except LookupError:
        raise HTTPException(status_code=404, detail="Document template not found")
    except InsufficientCreditsError as e:
        raise HTTPException(status_code=400, detail=e.detail())
    except Exception:
        logger.exception("Error generating document %s", body.document_type)
        raise HTTPException(status_code=500, detail="ডকুমেন্ট তৈরি করতে ত্রুটি। Failed to generate document")


# ----------------------- Drafts -----------------------

def _draft_or_422(doc_type: str, body: DocumentRequest) -> Draft:
    try:
        return build_draft(doc_type, body.draft)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


def _known_type(doc_type: str):
    if doc_type not in DOCUMENT_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown document type: {doc_type}")


@router.post("/{doc_type}/compute")
def compute_draft(doc_type: str, body: DocumentRequest):
    _known_type(doc_type)
    draft = _draft_or_422(doc_type, body)
    return {"documentType": doc_type, "filename": draft.pdf_filename(), **draft.computed()}


@router.post("/{doc_type}/preview", response_class=HTMLResponse)
def preview_draft(doc_type: str, body: DocumentRequest):
    _known_type(doc_type)
    draft = _draft_or_422(doc_type, body)
    preview = build_preview(draft, body.settings)
    return HTMLResponse(render_html(preview, body.settings))


@router.post("/{doc_type}/pdf")
def export_draft(doc_type: str, body: DocumentRequest):
    if doc_type not in DOCUMENT_TYPES:
        logger.warning("PDF export requested for unknown document type %s", doc_type)
        return Response(status_code=204)

    draft = _draft_or_422(doc_type, body)
    pdf = export_pdf(build_preview(draft, body.settings), body.settings)
    if pdf is None:
        return Response(status_code=204)

    filename = draft.pdf_filename()
    # quoted-string form: ASCII only, no quote or backslash
    fallback = re.sub(r'["\\]', "", filename.encode("ascii", "ignore").decode()) or "document.pdf"
    disposition = f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": disposition},
    )
