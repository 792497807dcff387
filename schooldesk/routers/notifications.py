import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..auth import get_current_user
from ..database import get_db
from ..schemas import (
    EnhancedNotificationCreate,
    NotificationCreate,
    NotificationIds,
    NotificationSend,
)
from . import first_row, utcnow_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications"])

TABLE = "notifications"
ENHANCED_TABLE = "enhanced_notifications"

IDS_REQUIRED = "বিজ্ঞপ্তি ID প্রয়োজন। Notification IDs required."

DEMO_NOTIFICATIONS = [
    {
        "title": "Math Test Tomorrow",
        "title_bn": "আগামীকাল গণিত পরীক্ষা",
        "message": "Your child has a math test scheduled for tomorrow at 10:00 AM. Please ensure they are prepared.",
        "message_bn": "আপনার সন্তানের আগামীকাল সকাল ১০টায় গণিত পরীক্ষা রয়েছে। অনুগ্রহ করে তাদের প্রস্তুত রাখুন।",
        "type": "warning",
        "priority": "high",
        "category": "Academic",
        "category_bn": "শিক্ষাগত",
        "action_required": True,
    },
    {
        "title": "Fee Payment Successful",
        "title_bn": "ফি পরিশোধ সফল",
        "message": "Monthly tuition fee of ৳3,500 has been successfully processed via bKash.",
        "message_bn": "বিকাশের মাধ্যমে ৳৩,৫০০ মাসিক বেতন সফলভাবে পরিশোধ হয়েছে।",
        "type": "success",
        "priority": "medium",
        "category": "Payment",
        "category_bn": "পেমেন্ট",
        "action_required": False,
    },
    {
        "title": "Excellent Performance",
        "title_bn": "চমৎকার পারফরমেন্স",
        "message": "Congratulations! Your child scored 95% in the recent English test.",
        "message_bn": "অভিনন্দন! আপনার সন্তান সাম্প্রতিক ইংরেজি পরীক্ষায় ৯৫% নম্বর পেয়েছে।",
        "type": "success",
        "priority": "medium",
        "category": "Achievement",
        "category_bn": "অর্জন",
        "action_required": False,
    },
]


def _transform(row: dict) -> dict:
    return {
        "id": row.get("id"),
        "title": row.get("title") or "Notification",
        "titleBn": row.get("title_bn") or "বিজ্ঞপ্তি",
        "message": row.get("message"),
        "messageBn": row.get("message_bn") or row.get("message"),
        "type": row.get("type"),
        "priority": row.get("priority"),
        "isRead": bool(row.get("is_read")),
        "createdAt": row.get("created_at"),
        "category": row.get("category") or "General",
        "categoryBn": row.get("category_bn") or "সাধারণ",
        "actionRequired": bool(row.get("action_required")),
        "sender": row.get("sender"),
    }


# ----------------------- Notifications -----------------------

@router.get("/api/notifications")
def list_notifications(user: dict = Depends(get_current_user), db=Depends(get_db)):
    try:
        rows = (
            db.table(TABLE)
            .select("*")
            .eq("recipient_id", user["id"])
            .order("created_at", desc=True)
            .limit(50)
            .execute()
            .data
        )
    except Exception:
        logger.exception("Error loading notifications")
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি লোড করতে ত্রুটি। Error loading notifications.")
    return {"success": True, "data": [_transform(row) for row in rows or []]}


@router.post("/api/notifications")
def create_notification(
    body: NotificationCreate, user: dict = Depends(get_current_user), db=Depends(get_db)
):
    record = {
        "title": body.title,
        "title_bn": body.title_bn or body.title,
        "message": body.message,
        "message_bn": body.message_bn or body.message,
        "type": body.type,
        "priority": body.priority,
        "category": body.category or "General",
        "category_bn": body.category_bn or "সাধারণ",
        "recipient_id": body.recipient_id or user["id"],
        "action_required": body.action_required,
        "is_read": False,
        "created_by": user["id"],
    }
    try:
        rows = db.table(TABLE).insert(record).execute().data
    except Exception:
        logger.exception("Error creating notification")
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি তৈরি করতে ত্রুটি। Error creating notification.")
    return {
        "success": True,
        "message": "বিজ্ঞপ্তি তৈরি হয়েছে! Notification created successfully!",
        "data": first_row(rows),
    }


@router.patch("/api/notifications/mark-read")
def mark_read(body: NotificationIds, user: dict = Depends(get_current_user), db=Depends(get_db)):
    if not body.notification_ids:
        raise HTTPException(status_code=400, detail=IDS_REQUIRED)
    try:
        (
            db.table(TABLE)
            .update({"is_read": True, "read_at": utcnow_iso()})
            .eq("recipient_id", user["id"])
            .in_("id", body.notification_ids)
            .execute()
        )
    except Exception:
        logger.exception("Error marking notifications as read")
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি আপডেট করতে ত্রুটি। Error updating notifications.")
    return {"success": True, "message": "বিজ্ঞপ্তি পড়া হিসেবে চিহ্নিত! Notifications marked as read!"}


@router.patch("/api/notifications/mark-all-read")
def mark_all_read(user: dict = Depends(get_current_user), db=Depends(get_db)):
    try:
        rows = (
            db.table(TABLE)
            .update({"is_read": True, "read_at": utcnow_iso()})
            .eq("recipient_id", user["id"])
            .eq("is_read", False)
            .execute()
            .data
        )
    except Exception:
        logger.exception("Error marking all notifications as read")
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি আপডেট করতে ত্রুটি। Error updating notifications.")
    return {
        "success": True,
        "message": "সব বিজ্ঞপ্তি পড়া হিসেবে চিহ্নিত! All notifications marked as read!",
        "data": {"count": len(rows or [])},
    }


@router.get("/api/notifications/stats")
def notification_stats(user: dict = Depends(get_current_user), db=Depends(get_db)):
    try:
        rows = db.table(TABLE).select("*").eq("recipient_id", user["id"]).execute().data or []
    except Exception:
        logger.exception("Error loading notification stats")
        raise HTTPException(status_code=500, detail="পরিসংখ্যান লোড করতে ত্রুটি। Error loading statistics.")
    return {
        "success": True,
        "data": {
            "total": len(rows),
            "unread": sum(1 for n in rows if not n.get("is_read")),
            "urgent": sum(1 for n in rows if "urgent" in (n.get("priority"), n.get("type"))),
            "actionRequired": sum(1 for n in rows if n.get("action_required")),
        },
    }


@router.post("/api/notifications/send")
def send_notification(body: NotificationSend, db=Depends(get_db)):
    record = {
        "title": body.title,
        "title_bn": body.title_bn or body.title,
        "message": body.message,
        "message_bn": body.message_bn or body.message,
        "type": body.type,
        "priority": body.priority,
        "category": body.category,
        "category_bn": body.category_bn,
        "is_live": body.is_live,
        "action_required": body.action_required,
        "sender": body.sender,
        "is_read": False,
    }
    try:
        rows = db.table(TABLE).insert(record).execute().data
    except Exception:
        logger.exception("Error sending notification")
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি পাঠাতে ত্রুটি। Failed to send notification")
    return {"success": True, "data": first_row(rows)}


@router.post("/api/notifications/demo")
def create_demo_notifications(user: dict = Depends(get_current_user), db=Depends(get_db)):
    records = [
        {**sample, "recipient_id": user["id"], "is_read": False, "created_by": user["id"]}
        for sample in DEMO_NOTIFICATIONS
    ]
    try:
        db.table(TABLE).insert(records).execute()
    except Exception:
        logger.exception("Error creating sample notifications")
        raise HTTPException(
            status_code=500,
            detail="নমুনা বিজ্ঞপ্তি তৈরি করতে ত্রুটি। Error creating sample notifications.",
        )
    return {
        "success": True,
        "message": "নমুনা বিজ্ঞপ্তি তৈরি হয়েছে! Sample notifications created!",
        "data": {"count": len(records)},
    }


@router.delete("/api/notifications/delete")
def delete_notifications(body: NotificationIds, db=Depends(get_db)):
    if not body.notification_ids:
        raise HTTPException(status_code=400, detail=IDS_REQUIRED)
    # one IN statement, so the ids are removed together
    try:
        db.table(TABLE).delete().in_("id", body.notification_ids).execute()
    except Exception:
        logger.exception("Error deleting notifications")
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি মুছতে ত্রুটি। Failed to delete notifications")
    return {
        "success": True,
        "message": f"{len(body.notification_ids)} বিজ্ঞপ্তি মুছে ফেলা হয়েছে! notifications deleted!",
    }


@router.patch("/api/notifications/{notification_id}/read")
def mark_one_read(notification_id: int, db=Depends(get_db)):
    try:
        (
            db.table(TABLE)
            .update({"is_read": True, "read_at": utcnow_iso()})
            .eq("id", notification_id)
            .execute()
        )
    except Exception:
        logger.exception("Error marking notification %s as read", notification_id)
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি আপডেট করতে ত্রুটি। Failed to mark notification as read")
    return {"success": True}


@router.delete("/api/notifications/{notification_id}")
def delete_notification(notification_id: int, db=Depends(get_db)):
    try:
        db.table(TABLE).delete().eq("id", notification_id).execute()
    except Exception:
        logger.exception("Error deleting notification %s", notification_id)
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি মুছতে ত্রুটি। Failed to delete notification")
    return {"success": True, "message": "বিজ্ঞপ্তি মুছে ফেলা হয়েছে! Notification deleted!"}


# ----------------------- Enhanced notifications -----------------------

@router.get("/api/enhanced-notifications")
def list_enhanced_notifications(
    priority: Optional[str] = None,
    type: Optional[str] = None,
    isRead: Optional[bool] = None,
    db=Depends(get_db),
):
    try:
        query = db.table(ENHANCED_TABLE).select("*")
        if priority:
            query = query.eq("priority", priority)
        if type:
            query = query.eq("type", type)
        if isRead is not None:
            query = query.eq("is_read", isRead)
        return query.order("created_at", desc=True).execute().data or []
    except Exception:
        logger.exception("Error fetching enhanced notifications")
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি লোড করতে ত্রুটি। Failed to fetch notifications")


@router.post("/api/enhanced-notifications")
def create_enhanced_notification(body: EnhancedNotificationCreate, db=Depends(get_db)):
    record = {
        "title": body.title,
        "title_bn": body.title_bn,
        "message": body.message,
        "message_bn": body.message_bn,
        "type": body.type or "info",
        "priority": body.priority or "medium",
        "user_id": body.user_id,
    }
    try:
        return first_row(db.table(ENHANCED_TABLE).insert(record).execute().data)
    except Exception:
        logger.exception("Error creating enhanced notification")
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি তৈরি করতে ত্রুটি। Failed to create notification")


@router.patch("/api/enhanced-notifications/{notification_id}/read")
def read_enhanced_notification(notification_id: int, db=Depends(get_db)):
    try:
        rows = db.table(ENHANCED_TABLE).update({"is_read": True}).eq("id", notification_id).execute().data
    except Exception:
        logger.exception("Error updating enhanced notification %s", notification_id)
        raise HTTPException(status_code=500, detail="বিজ্ঞপ্তি আপডেট করতে ত্রুটি। Failed to update notification")
    return first_row(rows)
