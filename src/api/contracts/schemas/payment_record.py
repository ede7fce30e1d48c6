from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from src.api.common.constants.contracts import DEFAULT_PAYMENT_METHOD


class PaymentRecordBase(BaseModel):
    """Base schema for payment record data"""
    payment_date: date
    amount: float = Field(gt=0)
    method: str = DEFAULT_PAYMENT_METHOD
    is_confirmed: bool = False

    model_config = ConfigDict(from_attributes=True,
                              arbitrary_types_allowed=True)


class PaymentRecordCreate(PaymentRecordBase):
    """Schema for recording a new payment"""
    pass


class PaymentRecordRead(BaseModel):
    """
    Schema for reading payment record data.
    Amounts are not re-validated so that legacy rows still load.
    """
    id: int
    payment_date: date
    amount: float
    method: str = DEFAULT_PAYMENT_METHOD
    is_confirmed: bool = False
    contract_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True,
                              arbitrary_types_allowed=True)


class PaymentRecordUpdate(BaseModel):
    """Schema for updating payment record data"""
    payment_date: Optional[date] = None
    amount: Optional[float] = Field(default=None, gt=0)
    method: Optional[str] = None
    is_confirmed: Optional[bool] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("payment_date", "amount", "method", "is_confirmed")
    @classmethod
    def reject_null(cls, value):
        # Omit a field to keep its value; these columns cannot be cleared
        if value is None:
            raise ValueError("field cannot be null")
        return value


class AnnualPaymentScheduleEntry(BaseModel):
    """Due date and amount of one annual payment"""
    due_date: date
    amount: float = Field(gt=0)

    model_config = ConfigDict(from_attributes=True)
