# parking_api/services/payment_service.py
"""
Payment ledger: one payment per booking.
Transitions are driven by booking_service only: PENDING → PAID → REFUNDED.
"""

from parking_api.models.enums import PaymentStatus
from parking_api.models.payment import Payment
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)


def open_payment(amount: int, user_id) -> Payment:
    return Payment(amount=amount, user_id=user_id, status=PaymentStatus.PENDING)


def mark_paid(payment: Payment) -> None:
    payment.status = PaymentStatus.PAID
    logger.info(f"Payment {payment.id} marked PAID ({payment.amount})")


def refund_if_paid(payment: Payment) -> bool:
    """Refund a PAID payment. Returns True when a refund was issued."""
    if payment is None or payment.status != PaymentStatus.PAID:
        return False
    payment.status = PaymentStatus.REFUNDED
    logger.info(f"Payment {payment.id} REFUNDED ({payment.amount})")
    return True
