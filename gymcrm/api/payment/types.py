from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from gymcrm.api.types import CamelModel


class CreateOrderInput(CamelModel):
    plan_type: Optional[str] = None
    currency: Optional[str] = None
    receipt: Optional[str] = None
    notes: Optional[Dict[str, Any]] = None


class VerifyInput(BaseModel):
    """Field names follow Razorpay's checkout callback"""

    model_config = ConfigDict(populate_by_name=True)

    razorpay_order_id: str = Field(min_length=1)
    razorpay_payment_id: str = Field(min_length=1)
    razorpay_signature: str = Field(min_length=1)
    plan_type: Optional[str] = Field(default=None, alias="planType")
