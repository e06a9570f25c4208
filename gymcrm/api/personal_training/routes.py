from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import check_subscription
from gymcrm.api.invoices.types import InvoiceOut
from gymcrm.api.personal_training.types import (
    AssignmentInput, AssignmentOut, AssignmentUpdate, TrainingRenewalOut, TrainingRenewInput,
)
from gymcrm.api.transactions.types import TransactionOut
from gymcrm.core.dates import membership_end
from gymcrm.crud.customersCrud import get_customer
from gymcrm.crud.personalTrainingCrud import delete_assignment, get_assignment, list_assignments, update_assignment
from gymcrm.crud.staffCrud import get_staff
from gymcrm.db.postgresql import get_db
from gymcrm.models import User
from gymcrm.services import personal_training_service

router = APIRouter(prefix="/personal-training", tags=["personal-training"])


async def _load(db: AsyncSession, user: User, assignment_id: int):
    assignment = await get_assignment(db, user.id, assignment_id)
    if assignment is None:
        raise HTTPException(status_code=404, detail="Personal training assignment not found")
    return assignment


async def _parties(db: AsyncSession, user: User, customer_id: int, trainer_id: int):
    customer = await get_customer(db, user.id, customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    trainer = await get_staff(db, user.id, trainer_id)
    if trainer is None:
        raise HTTPException(status_code=404, detail="Trainer not found")
    return customer, trainer


def _billing(result) -> dict:
    return {
        "transaction": TransactionOut.model_validate(result.transaction).dump(),
        "invoice": InvoiceOut.model_validate(result.invoice).dump(),
    }


@router.get("")
async def assignments_list(user: User = Depends(check_subscription), db: AsyncSession = Depends(get_db)):
    rows = await list_assignments(db, user.id)
    return {"success": True, "assignments": [AssignmentOut.from_assignment(row).dump() for row in rows]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def assignments_create(
    data: AssignmentInput,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    customer, trainer = await _parties(db, user, data.customer_id, data.trainer_id)
    try:
        result = await personal_training_service.assign_training(
            db,
            user=user,
            customer=customer,
            trainer=trainer,
            start_date=data.start_date,
            duration=data.duration,
            fees=data.fees,
            payment_mode=data.payment_mode,
        )
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Error creating personal training assignment")
    return {
        "success": True,
        "assignment": AssignmentOut.from_assignment(result.assignment, customer, trainer).dump(),
        **_billing(result),
    }


@router.put("/{assignment_id}")
async def assignments_update(
    assignment_id: int,
    data: AssignmentUpdate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    assignment = await _load(db, user, assignment_id)
    customer, trainer = await _parties(db, user, data.customer_id, data.trainer_id)
    assignment = await update_assignment(
        db,
        assignment,
        customer=customer,
        trainer=trainer,
        start_date=data.start_date,
        duration=data.duration,
        end_date=membership_end(data.start_date, data.duration),
        fees=data.fees,
    )
    return {"success": True, "assignment": AssignmentOut.from_assignment(assignment, customer, trainer).dump()}


@router.delete("/{assignment_id}")
async def assignments_delete(
    assignment_id: int, user: User = Depends(check_subscription), db: AsyncSession = Depends(get_db)
):
    if not await delete_assignment(db, user.id, assignment_id):
        raise HTTPException(status_code=404, detail="Personal training assignment not found")
    return {"success": True, "message": "Personal training assignment deleted successfully"}


@router.post("/{assignment_id}/renew")
async def assignments_renew(
    assignment_id: int,
    data: TrainingRenewInput,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    assignment = await _load(db, user, assignment_id)
    customer, trainer = await _parties(db, user, assignment.customer_id, assignment.trainer_id)
    try:
        result = await personal_training_service.renew_training(
            db,
            user=user,
            assignment=assignment,
            customer=customer,
            start_date=data.start_date,
            duration=data.duration,
            fees=data.fees,
            payment_mode=data.payment_mode,
            transaction_date=data.transaction_date,
        )
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Error renewing personal training")
    window = result.window
    return {
        "success": True,
        "assignment": AssignmentOut.from_assignment(result.assignment, customer, trainer).dump(),
        "renewal": TrainingRenewalOut(
            will_extend=window.will_extend, start_date=window.start_date, end_date=window.end_date
        ).dump(),
        **_billing(result),
    }
