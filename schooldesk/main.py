import logging
import os
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .database import get_db, is_fallback
from .routers import (
    academic_terms,
    auth,
    documents,
    meetings,
    notifications,
    payments,
    school_settings,
    templates,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="School Desk API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (
    auth,
    documents,
    meetings,
    notifications,
    payments,
    templates,
    academic_terms,
    school_settings,
):
    app.include_router(module.router)


# ----------------------- Health -----------------------
@app.get("/")
def read_root():
    return {"message": "School Desk API running"}


@app.get("/health")
def health():
    return {"ok": True, "time": datetime.now(timezone.utc).isoformat()}


@app.get("/test")
def test_database(db=Depends(get_db)):
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "supabase_url": "✅ Set" if config.supabase_url() else "❌ Not Set",
        "supabase_key": "✅ Set" if config.supabase_key() else "❌ Not Set",
        "connection_status": "Not Connected",
    }
    if is_fallback(db):
        response["database"] = "❌ Fallback client in use"
        return response
    try:
        db.table("document_templates").select("id").limit(1).execute()
        response["database"] = "✅ Connected & Working"
        response["connection_status"] = "Connected"
    except Exception as e:
        logger.exception("Database check failed")
        response["database"] = f"⚠️ Connected but Error: {str(e)[:50]}"
    return response


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
