from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import require_gym
from gymcrm.api.payment.types import CreateOrderInput, VerifyInput
from gymcrm.core.dates import is_subscription_active, subscription_period
from gymcrm.core.logging_config import get_logger, log_security_event
from gymcrm.crud.gymsCrud import activate_subscription
from gymcrm.crud.subscriptionPlansCrud import get_plan_by_duration
from gymcrm.db.postgresql import get_db
from gymcrm.models import Gym
from gymcrm.services.payment_service import PaymentGateway, PaymentGatewayError, get_payment_gateway

logger = get_logger("payment.routes")

router = APIRouter(prefix="/payment", tags=["payment"])


@router.post("/create-order")
async def create_order(
    data: CreateOrderInput,
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    duration = "yearly" if (data.plan_type or "").lower() == "yearly" else "monthly"
    plan = await get_plan_by_duration(db, duration)
    if plan is None:
        raise HTTPException(status_code=400, detail="Subscription plan not found")
    if not plan.price:
        raise HTTPException(status_code=400, detail="Amount is required")

    try:
        order = await gateway.create_order(
            plan.price, currency=data.currency, receipt=data.receipt, notes=data.notes
        )
    except PaymentGatewayError as e:
        logger.error(f"Razorpay order creation error: {e}")
        raise HTTPException(status_code=500, detail="Error creating order")
    return {"success": True, "order": order}


@router.post("/verify")
async def verify_payment(
    data: VerifyInput,
    gym: Gym = Depends(require_gym),
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    if not gateway.verify_signature(data.razorpay_order_id, data.razorpay_payment_id, data.razorpay_signature):
        log_security_event("invalid_payment_signature", f"gym {gym.id} order {data.razorpay_order_id}")
        raise HTTPException(status_code=400, detail="Invalid signature")

    if is_subscription_active(gym.subscription_end_date):
        raise HTTPException(
            status_code=400,
            detail="Subscription is still active. Renewal is only allowed after expiry.",
        )

    start, end, label = subscription_period(data.plan_type)
    await activate_subscription(db, gym.id, start=start, end=end, duration_label=label)
    logger.info(f"Gym {gym.id} subscription active until {end:%Y-%m-%d} ({label})")
    return {"success": True, "message": "Payment verified and subscription updated successfully"}
