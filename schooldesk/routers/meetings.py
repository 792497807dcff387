import logging
import time
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException

from ..auth import get_current_user
from ..database import get_db
from ..schemas import MeetingCreate, StatusUpdate, VideoConferenceCreate, VideoConferenceStatus
from . import first_row, utcnow_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["meetings"])

TABLE = "video_conferences"


def _millis() -> int:
    return int(time.time() * 1000)


def _transform(meeting: dict, user: dict) -> dict:
    now = datetime.now(timezone.utc)
    name = meeting.get("name") or meeting.get("title")
    description = meeting.get("description")
    return {
        "id": meeting.get("id"),
        "title": name,
        "titleBn": meeting.get("name_bn") or meeting.get("title_bn") or name,
        "description": description or "Video conference meeting",
        "descriptionBn": meeting.get("description_bn") or description or "ভিডিও কনফারেন্স মিটিং",
        "startTime": meeting.get("start_time") or now.isoformat(),
        "endTime": meeting.get("end_time") or (now + timedelta(hours=1)).isoformat(),
        "status": meeting.get("status") or "scheduled",
        "participants": meeting.get("current_participants") or 0,
        "maxParticipants": meeting.get("max_participants") or 50,
        "meetingId": meeting.get("meeting_id") or f"MEET-{meeting.get('id')}",
        "isRecording": meeting.get("is_recording") or False,
        "type": meeting.get("type") or "class",
        "duration": meeting.get("duration") or 60,
        "hostId": meeting.get("host") or user.get("id"),
        "hostName": meeting.get("host_name") or user.get("name") or "Host",
        "roomId": meeting.get("room_id") or f"room-{meeting.get('id')}",
        "createdAt": meeting.get("created_at"),
    }


# ----------------------- Meetings -----------------------

@router.get("/api/meetings")
def list_meetings(user: dict = Depends(get_current_user), db=Depends(get_db)):
    try:
        meetings = db.table(TABLE).select("*").order("created_at", desc=True).execute().data
    except Exception:
        logger.exception("Error fetching meetings")
        raise HTTPException(status_code=500, detail="মিটিং ডেটা লোড করতে ত্রুটি। Error loading meetings data.")
    return {"success": True, "data": [_transform(m, user) for m in meetings or []]}


@router.post("/api/meetings")
def create_meeting(body: MeetingCreate, user: dict = Depends(get_current_user), db=Depends(get_db)):
    stamp = _millis()
    record = {
        "name": body.title,
        "name_bn": body.title_bn,
        "description": body.description,
        "description_bn": body.description_bn,
        "type": body.meeting_type,
        "start_time": body.scheduled_time,
        "duration": body.duration,
        "max_participants": body.max_participants or 50,
        "host": user["id"],
        "host_name": user.get("name") or "Host",
        "meeting_id": f"MEET_{stamp}",
        "room_id": f"room_{stamp}",
        "status": "scheduled",
        "current_participants": 0,
        "is_recording": False,
    }
    try:
        rows = db.table(TABLE).insert(record).execute().data
    except Exception:
        logger.exception("Error creating meeting")
        raise HTTPException(status_code=500, detail="মিটিং তৈরি করতে ত্রুটি। Error creating meeting.")
    return {
        "success": True,
        "data": first_row(rows),
        "message": "মিটিং সফলভাবে তৈরি হয়েছে। Meeting created successfully.",
    }


@router.get("/api/meetings/stats")
def meeting_stats(db=Depends(get_db)):
    try:
        meetings = db.table(TABLE).select("*").execute().data or []
    except Exception:
        logger.exception("Error fetching meeting stats")
        raise HTTPException(status_code=500, detail="পরিসংখ্যান লোড করতে ত্রুটি। Error loading statistics.")

    def count(status):
        return sum(1 for m in meetings if m.get("status") == status)

    return {
        "success": True,
        "data": {
            "totalMeetings": len(meetings),
            "scheduledMeetings": count("scheduled"),
            "ongoingMeetings": count("ongoing"),
            "completedMeetings": count("completed"),
            "totalParticipants": sum(m.get("current_participants") or 0 for m in meetings),
        },
    }


@router.patch("/api/meetings/{meeting_id}/status")
def update_meeting_status(meeting_id: int, body: StatusUpdate, db=Depends(get_db)):
    try:
        rows = db.table(TABLE).update({"status": body.status}).eq("id", meeting_id).execute().data
    except Exception:
        logger.exception("Error updating meeting status")
        raise HTTPException(
            status_code=500,
            detail="মিটিং স্ট্যাটাস আপডেট করতে ত্রুটি। Error updating meeting status.",
        )
    return {
        "success": True,
        "data": first_row(rows),
        "message": "মিটিং স্ট্যাটাস আপডেট হয়েছে। Meeting status updated.",
    }


# ----------------------- Video conferences -----------------------

@router.get("/api/video-conferences")
def list_video_conferences(db=Depends(get_db)):
    try:
        return db.table(TABLE).select("*").order("created_at", desc=True).execute().data or []
    except Exception:
        logger.exception("Error fetching video conferences")
        raise HTTPException(status_code=500, detail="ভিডিও কনফারেন্স লোড করতে ত্রুটি। Failed to fetch video conferences")


@router.post("/api/video-conferences")
def create_video_conference(body: VideoConferenceCreate, db=Depends(get_db)):
    record = {
        "name": body.name,
        "name_bn": body.name_bn,
        "subject": body.subject,
        "host": body.host,
        "start_time": body.start_time,
        "max_participants": body.max_participants,
        "meeting_id": f"MEET_{_millis()}",
        "status": "upcoming",
    }
    try:
        return first_row(db.table(TABLE).insert(record).execute().data)
    except Exception:
        logger.exception("Error creating video conference")
        raise HTTPException(status_code=500, detail="ভিডিও কনফারেন্স তৈরি করতে ত্রুটি। Failed to create video conference")


@router.patch("/api/video-conferences/{conference_id}/status")
def update_video_conference_status(conference_id: int, body: VideoConferenceStatus, db=Depends(get_db)):
    changes = {
        "status": body.status,
        "is_recording": body.is_recording,
        "end_time": utcnow_iso() if body.status == "ended" else None,
    }
    try:
        return first_row(db.table(TABLE).update(changes).eq("id", conference_id).execute().data)
    except Exception:
        logger.exception("Error updating video conference %s", conference_id)
        raise HTTPException(status_code=500, detail="ভিডিও কনফারেন্স আপডেট করতে ত্রুটি। Failed to update video conference")
