from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field

from gymcrm.api.types import CamelModel

TransactionType = Literal[
    "MEMBERSHIP_JOINING", "MEMBERSHIP_RENEWAL", "INVOICE_PAYMENT", "PERSONAL_TRAINING", "OTHER"
]
PaymentMode = Literal["cash", "card", "upi", "bank_transfer", "other"]
TransactionStatus = Literal["PENDING", "SUCCESS", "FAILED", "CANCELLED"]


class TransactionCreate(CamelModel):
    customer_id: int
    transaction_type: TransactionType
    amount: Decimal = Field(ge=0)
    payment_mode: PaymentMode
    transaction_date: Optional[datetime] = None
    membership_type: Optional[str] = None
    description: Optional[str] = None
    status: TransactionStatus = "SUCCESS"
    invoice_id: Optional[int] = None


class TransactionUpdate(CamelModel):
    """Only these fields may change after a transaction is recorded"""

    amount: Optional[Decimal] = Field(default=None, ge=0)
    payment_mode: Optional[PaymentMode] = None
    description: Optional[str] = None
    transaction_date: Optional[datetime] = None
    status: Optional[TransactionStatus] = None


class TransactionOut(CamelModel):
    id: int
    customer_id: int
    gym_id: Optional[int] = None
    invoice_id: Optional[int] = None
    transaction_type: str
    transaction_date: datetime
    amount: float
    membership_type: str
    payment_mode: str
    description: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
