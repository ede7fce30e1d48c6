from datetime import date
from typing import List, Optional
from fastapi import HTTPException, APIRouter, Query
from fastapi.params import Depends
from sqlmodel import Session
from src.api.common.utils.database import get_db
from src.api.common.utils.datetime import get_current_date
from src.api.contracts.schemas.payment_record import (
    PaymentRecordCreate, PaymentRecordRead, PaymentRecordUpdate
)
from src.api.contracts.services.payment_record_service import PaymentRecordService
from src.api.rent_periods.schemas import PaymentRecordSaveResponse


router = APIRouter(prefix="/contracts/{contract_id}/payment-records",
                   tags=["payment-records"])


def get_payment_record_service(db: Session = Depends(get_db)):
    return PaymentRecordService(db)


@router.get("", response_model=List[PaymentRecordRead])
def get_payment_records(
    contract_id: int,
    payment_record_service: PaymentRecordService = Depends(get_payment_record_service)
):
    """Get the payment history of a contract"""
    records = payment_record_service.get_payment_records(contract_id)
    return [PaymentRecordRead.model_validate(record) for record in records]


@router.post("", response_model=PaymentRecordSaveResponse)
def create_payment_record(
    contract_id: int,
    record_data: PaymentRecordCreate,
    today: Optional[date] = Query(default=None),
    payment_record_service: PaymentRecordService = Depends(get_payment_record_service)
):
    """
    Record a payment. The response reports the unpaid past periods the
    payment settles as a back payment, if any.
    """
    saved = payment_record_service.create_payment_record(
        contract_id, record_data, today or get_current_date())
    if saved is None:
        raise HTTPException(status_code=404, detail="Contract not found")
    record, back_payment_match = saved
    return PaymentRecordSaveResponse(
        payment_record=PaymentRecordRead.model_validate(record),
        back_payment_match=back_payment_match,
    )


@router.put("/{record_id}", response_model=PaymentRecordSaveResponse)
def update_payment_record(
    contract_id: int,
    record_id: int,
    record_data: PaymentRecordUpdate,
    today: Optional[date] = Query(default=None),
    payment_record_service: PaymentRecordService = Depends(get_payment_record_service)
):
    """Update a payment record"""
    saved = payment_record_service.update_payment_record(
        contract_id, record_id, record_data, today or get_current_date())
    if saved is None:
        raise HTTPException(status_code=404, detail="Payment record not found")
    record, back_payment_match = saved
    return PaymentRecordSaveResponse(
        payment_record=PaymentRecordRead.model_validate(record),
        back_payment_match=back_payment_match,
    )


@router.delete("/{record_id}")
def delete_payment_record(
    contract_id: int,
    record_id: int,
    payment_record_service: PaymentRecordService = Depends(get_payment_record_service)
):
    """Delete a payment record"""
    if not payment_record_service.delete_payment_record(contract_id, record_id):
        raise HTTPException(status_code=404, detail="Payment record not found")
    return {"message": "Payment record deleted successfully"}
