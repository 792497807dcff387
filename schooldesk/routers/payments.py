import logging
import math
import secrets
import string
import time
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..auth import get_current_user
from ..database import get_db
from ..schemas import PaymentCreate, PaymentProcessRequest, StatusUpdate
from . import first_row, utcnow_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])

TABLE = "payment_transactions"

MOBILE_BANKING = {"bkash", "nagad", "rocket"}

# method -> (gateway, fee rate, gateway id prefix, gateway status)
GATEWAYS = {
    "bkash": ("bKash", 0.0185, "BK", "completed"),
    "nagad": ("Nagad", 0.0199, "NG", "completed"),
    "rocket": ("Rocket", 0.0180, "RK", "completed"),
    "bank": ("Bank Transfer", 0.0, "BT", "pending"),
    "card": ("Card Payment", 0.029, "CD", "completed"),
}

_ALPHABET = string.ascii_lowercase + string.digits


def _transaction_id() -> str:
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"TXN_{int(time.time() * 1000)}_{suffix}"


def gateway_fee(method: str, amount: float) -> int:
    # half-up, so 18.5 rounds to 19
    return math.floor(amount * GATEWAYS[method][1] + 0.5)


# ----------------------- Payments -----------------------

@router.post("/api/payments/process")
def process_payment(body: PaymentProcessRequest, db=Depends(get_db)):
    method = body.method
    if method in MOBILE_BANKING and not body.phone_number:
        raise HTTPException(
            status_code=400,
            detail="মোবাইল ব্যাংকিং এর জন্য ফোন নম্বর প্রয়োজন। Phone number required for mobile banking.",
        )
    if method not in GATEWAYS:
        raise HTTPException(status_code=400, detail="অসমর্থিত পেমেন্ট পদ্ধতি। Unsupported payment method.")

    gateway, _, prefix, gateway_status = GATEWAYS[method]
    transaction_id = _transaction_id()
    gateway_transaction_id = f"{prefix}{transaction_id}"
    status = "pending" if gateway_status == "pending" else "success"
    fees = gateway_fee(method, body.amount)

    record = {
        "transaction_id": transaction_id,
        "amount": body.amount,
        "fees": fees,
        "payment_method": method,
        "gateway": gateway,
        "payer_phone": body.phone_number,
        "category": "fee_payment",
        "description": f"Fee payment via {method}",
        "date": date.today().isoformat(),
        "reference_number": gateway_transaction_id,
        "fee_ids": body.fee_ids,
        "status": status,
        "created_by": body.user_id,
    }
    try:
        row = first_row(db.table(TABLE).insert(record).execute().data) or {}
    except Exception:
        logger.exception("Payment processing error")
        raise HTTPException(status_code=500, detail="পেমেন্ট প্রক্রিয়াকরণে ত্রুটি। Payment processing error.")

    logger.info("Processed %s payment %s for fees %s", gateway, transaction_id, body.fee_ids)
    return {
        "success": True,
        "message": (
            "পেমেন্ট সফল হয়েছে! Payment successful!"
            if status == "success"
            else "পেমেন্ট প্রক্রিয়াকরণ হচ্ছে! Payment processing!"
        ),
        "data": {
            "transactionId": transaction_id,
            "gatewayTransactionId": gateway_transaction_id,
            "amount": body.amount,
            "fees": fees,
            "status": status,
            "method": method,
            "timestamp": row.get("created_at"),
        },
    }


@router.get("/api/payments/history")
def payment_history(user: dict = Depends(get_current_user), db=Depends(get_db)):
    try:
        rows = (
            db.table(TABLE)
            .select("*")
            .eq("created_by", user["id"])
            .eq("category", "fee_payment")
            .order("created_at")
            .execute()
            .data
        )
    except Exception:
        logger.exception("Payment history error")
        raise HTTPException(status_code=500, detail="পেমেন্ট ইতিহাস লোড করতে ত্রুটি। Error loading payment history.")
    return {
        "success": True,
        "data": [
            {
                "id": txn.get("id"),
                "amount": txn.get("amount"),
                "method": txn.get("payment_method"),
                "description": txn.get("description"),
                "date": txn.get("date"),
                "referenceNumber": txn.get("reference_number"),
            }
            for txn in rows or []
        ],
    }


@router.get("/api/payments/verify/{transaction_id}")
def verify_payment(transaction_id: str, db=Depends(get_db)):
    try:
        rows = db.table(TABLE).select("*").eq("transaction_id", transaction_id).limit(1).execute().data
    except Exception:
        logger.exception("Payment verification error")
        raise HTTPException(status_code=500, detail="পেমেন্ট যাচাইকরণে ত্রুটি। Payment verification error.")
    if not rows:
        raise HTTPException(status_code=404, detail="লেনদেন খুঁজে পাওয়া যায়নি। Transaction not found.")
    txn = rows[0]
    return {
        "success": True,
        "data": {
            "amount": txn.get("amount"),
            "status": txn.get("status"),
            "referenceNumber": txn.get("reference_number"),
            "date": txn.get("date"),
        },
    }


# ----------------------- Enhanced payments -----------------------

@router.get("/api/enhanced-payments")
def list_enhanced_payments(
    status: Optional[str] = None,
    paymentMethod: Optional[str] = None,
    db=Depends(get_db),
):
    try:
        query = db.table(TABLE).select("*")
        if status:
            query = query.eq("status", status)
        if paymentMethod:
            query = query.eq("payment_method", paymentMethod)
        return query.order("created_at", desc=True).execute().data or []
    except Exception:
        logger.exception("Error fetching payments")
        raise HTTPException(status_code=500, detail="পেমেন্ট লোড করতে ত্রুটি। Failed to fetch payments")


@router.get("/api/enhanced-payments/stats")
def enhanced_payment_stats(db=Depends(get_db)):
    try:
        rows = db.table(TABLE).select("id, amount, status").execute().data or []
    except Exception:
        logger.exception("Error fetching payment stats")
        raise HTTPException(status_code=500, detail="পেমেন্ট পরিসংখ্যান লোড করতে ত্রুটি। Failed to fetch payment stats")
    successful = [row for row in rows if row.get("status") == "success"]
    return {
        "totalTransactions": len(rows),
        "successfulTransactions": len(successful),
        "totalAmount": sum(float(row.get("amount") or 0) for row in successful),
    }


@router.post("/api/enhanced-payments")
def create_enhanced_payment(body: PaymentCreate, db=Depends(get_db)):
    record = {
        "transaction_id": f"TXN_{int(time.time() * 1000)}",
        "amount": body.amount,
        "payment_method": body.payment_method,
        "payer_name": body.payer_name,
        "payer_phone": body.payer_phone,
        "description": body.description,
        "description_bn": body.description_bn,
        "student_id": body.student_id,
        "status": "pending",
    }
    try:
        return first_row(db.table(TABLE).insert(record).execute().data)
    except Exception:
        logger.exception("Error creating payment")
        raise HTTPException(status_code=500, detail="পেমেন্ট তৈরি করতে ত্রুটি। Failed to create payment")


@router.patch("/api/enhanced-payments/{payment_id}/status")
def update_enhanced_payment_status(payment_id: int, body: StatusUpdate, db=Depends(get_db)):
    changes = {
        "status": body.status,
        "completed_at": utcnow_iso() if body.status == "success" else None,
    }
    try:
        return first_row(db.table(TABLE).update(changes).eq("id", payment_id).execute().data)
    except Exception:
        logger.exception("Error updating payment %s", payment_id)
        raise HTTPException(status_code=500, detail="পেমেন্ট আপডেট করতে ত্রুটি। Failed to update payment")
