from typing import List, Optional
from datetime import date
from sqlmodel import Field, Relationship
from src.api.common.models.base import BaseModel, TimestampMixin
from src.api.common.constants.contracts import PaymentCycle, DEFAULT_PAYMENT_METHOD


class PaymentRecord(BaseModel, TimestampMixin, table=True):
    """
    A rent payment received for a contract.
    Only confirmed records take part in period matching and reconciliation.
    """
    id: int = Field(default=None, primary_key=True)

    # Note: must match the lowercase table name that SQLModel generates
    contract_id: int = Field(foreign_key="contract.id", index=True)
    contract: "Contract" = Relationship(back_populates="payment_records")

    payment_date: date = Field(index=True)
    amount: float
    method: str = Field(default=DEFAULT_PAYMENT_METHOD)
    is_confirmed: bool = Field(default=False)

    class Config:
        from_attributes = True
        arbitrary_types_allowed = True


class AnnualPaymentSchedule(BaseModel, TimestampMixin, table=True):
    """Scheduled due date and amount for contracts paid annually"""
    id: int = Field(default=None, primary_key=True)

    contract_id: int = Field(foreign_key="contract.id", index=True)
    contract: "Contract" = Relationship(back_populates="annual_payment_dates")

    due_date: date
    amount: float

    class Config:
        from_attributes = True
        arbitrary_types_allowed = True


class Contract(BaseModel, TimestampMixin, table=True):
    """
    Model to store lease contracts between a tenant and a property
    """
    id: int = Field(default=None, primary_key=True)
    contract_internal_id: str = Field(index=True)

    # References owned by the tenant and property records
    property_id: str = Field(default="", index=True)
    tenant_id: str = Field(default="", index=True)

    # Lease terms
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None, index=True)
    rent_amount: int
    payment_cycle: PaymentCycle = Field(default=PaymentCycle.MONTHLY)
    annual_discount: bool = Field(default=False)
    payment_due_day: int = Field(default=1)

    # Relationships
    payment_records: List[PaymentRecord] = Relationship(
        back_populates="contract",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "PaymentRecord.payment_date",
        })
    annual_payment_dates: List[AnnualPaymentSchedule] = Relationship(
        back_populates="contract",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "AnnualPaymentSchedule.due_date",
        })

    class Config:
        from_attributes = True
        arbitrary_types_allowed = True
