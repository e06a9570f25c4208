from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from gymcrm.api.transactions.types import PaymentMode
from gymcrm.api.types import CamelModel


class AssignmentInput(CamelModel):
    customer_id: int
    trainer_id: int
    start_date: date
    duration: int = Field(ge=1)
    fees: Decimal = Field(ge=0)
    payment_mode: PaymentMode = "cash"


class AssignmentUpdate(CamelModel):
    customer_id: int
    trainer_id: int
    start_date: date
    duration: int = Field(ge=1)
    fees: Decimal = Field(ge=0)


class TrainingRenewInput(CamelModel):
    start_date: date
    duration: int = Field(ge=1)
    fees: Decimal = Field(ge=0)
    payment_mode: PaymentMode = "cash"
    transaction_date: Optional[datetime] = None


class AssignmentOut(CamelModel):
    id: int
    customer_id: int
    customer_name: Optional[str] = None
    trainer_id: int
    trainer_name: Optional[str] = None
    start_date: date
    duration: int
    end_date: date
    fees: float
    created_at: Optional[datetime] = None

    @classmethod
    def from_assignment(cls, assignment, customer=None, trainer=None) -> "AssignmentOut":
        customer = customer or assignment.customer
        trainer = trainer or assignment.trainer
        return cls(
            id=assignment.id,
            customer_id=assignment.customer_id,
            customer_name=customer.name if customer else None,
            trainer_id=assignment.trainer_id,
            trainer_name=trainer.name if trainer else None,
            start_date=assignment.start_date,
            duration=assignment.duration,
            end_date=assignment.end_date,
            fees=assignment.fees,
            created_at=assignment.created_at,
        )


class TrainingRenewalOut(CamelModel):
    will_extend: bool
    start_date: date
    end_date: date
