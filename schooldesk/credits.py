"""
Credit accounting for document generation.

The balance is never cached: it is the sum of every credit transaction for the
school instance, read fresh on each request. A generation is two inserts, the
generation row and a negative credit transaction. When the second insert fails
the first row is deleted again before the error propagates.
"""

import logging
from typing import Any, Dict, Optional

from . import config

logger = logging.getLogger(__name__)


class InsufficientCreditsError(Exception):
    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient credits: required {required}, available {available}")

    def detail(self) -> Dict[str, Any]:
        return {
            "error": "Insufficient credits",
            "required": self.required,
            "available": self.available,
        }


def find_template(db, document_type: str) -> Optional[dict]:
    rows = (
        db.table("document_templates")
        .select("*")
        .eq("type", document_type)
        .eq("is_active", True)
        .limit(1)
        .execute()
        .data
    )
    return rows[0] if rows else None


def available_credits(db) -> int:
    rows = (
        db.table("credit_transactions")
        .select("amount")
        .eq("school_instance_id", config.SCHOOL_INSTANCE_ID)
        .execute()
        .data
    )
    if not rows:
        return config.DEFAULT_CREDITS
    return sum(int(row.get("amount") or 0) for row in rows)


def charge_generation(db, user_id: Any, document_type: str, document_data: Dict[str, Any]) -> Dict[str, Any]:
    """Record one generation of ``document_type`` and deduct its credits.

    Raises LookupError for an unknown or inactive template and
    InsufficientCreditsError when the balance cannot cover it. Neither writes.
    """
    template = find_template(db, document_type)
    if template is None:
        raise LookupError(document_type)

    required = int(template.get("required_credits") or 0)
    available = available_credits(db)
    if available < required:
        raise InsufficientCreditsError(required, available)

    generation = (
        db.table("document_generations")
        .insert(
            {
                "user_id": user_id,
                "document_type": document_type,
                "document_name": template.get("name"),
                "credits_used": required,
                "status": "completed",
                "metadata": document_data,
            }
        )
        .execute()
        .data
    )
    generation_id = generation[0].get("id") if generation else None

    try:
        db.table("credit_transactions").insert(
            {
                "school_instance_id": config.SCHOOL_INSTANCE_ID,
                "type": "usage",
                "amount": -required,
                "description": f"Document generation: {template.get('name')}",
                "reference": document_type,
            }
        ).execute()
    except Exception:
        logger.exception("Credit deduction failed for %s, removing generation %s", document_type, generation_id)
        if generation_id is not None:
            db.table("document_generations").delete().eq("id", generation_id).execute()
        raise

    logger.info("User %s generated %s for %s credits", user_id, document_type, required)
    return {
        "success": True,
        "message": "Document generated successfully",
        "creditsUsed": required,
        "remainingCredits": available - required,
    }
