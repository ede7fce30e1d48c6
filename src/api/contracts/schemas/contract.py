from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from src.api.common.constants.contracts import PaymentCycle
from src.api.contracts.schemas.payment_record import AnnualPaymentScheduleEntry, PaymentRecordRead


class ContractBase(BaseModel):
    """Base schema for lease contract data"""
    contract_internal_id: str
    property_id: str = ""
    tenant_id: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rent_amount: int = Field(gt=0)
    payment_cycle: PaymentCycle = PaymentCycle.MONTHLY
    annual_discount: bool = False
    payment_due_day: int = Field(default=1, ge=1, le=31)

    model_config = ConfigDict(from_attributes=True,
                              arbitrary_types_allowed=True)


class ContractCreate(ContractBase):
    """Schema for creating a new contract"""
    annual_payment_dates: List[AnnualPaymentScheduleEntry] = []

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class ContractRead(BaseModel):
    """
    Schema for reading contract data together with its payment history.
    This is the record the rent period engine works on, so fields are
    intentionally lenient: bad data yields empty periods, not errors.
    """
    id: int
    contract_internal_id: str = ""
    property_id: str = ""
    tenant_id: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rent_amount: int
    payment_cycle: PaymentCycle = PaymentCycle.MONTHLY
    annual_discount: bool = False
    payment_due_day: int = 1
    annual_payment_dates: List[AnnualPaymentScheduleEntry] = []
    payment_records: List[PaymentRecordRead] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True,
                              arbitrary_types_allowed=True)


class ContractUpdate(BaseModel):
    """Schema for updating contract data"""
    contract_internal_id: Optional[str] = None
    property_id: Optional[str] = None
    tenant_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rent_amount: Optional[int] = Field(default=None, gt=0)
    payment_cycle: Optional[PaymentCycle] = None
    annual_discount: Optional[bool] = None
    payment_due_day: Optional[int] = Field(default=None, ge=1, le=31)
    annual_payment_dates: Optional[List[AnnualPaymentScheduleEntry]] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator(
        "contract_internal_id", "property_id", "tenant_id", "rent_amount",
        "payment_cycle", "annual_discount", "payment_due_day"
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value
