from datetime import date
from typing import List, Optional, Tuple
from fastapi.logger import logger
from sqlmodel import Session, select
from src.api.common.constants.contracts import PaymentCycle
from src.api.contracts.models.contract import Contract, PaymentRecord
from src.api.contracts.schemas.contract import ContractRead
from src.api.contracts.schemas.payment_record import (
    PaymentRecordCreate, PaymentRecordRead, PaymentRecordUpdate
)
from src.api.rent_periods.schemas import BackPaymentMatch
from src.api.rent_periods.services.payment_matcher import auto_match_back_payments


def format_back_payment_message(period_numbers: List[int], total_amount: float) -> str:
    if len(period_numbers) == 1:
        return (f"Back payment matched to period {period_numbers[0]} "
                f"(amount: {total_amount:,.0f})")
    periods = ", ".join(str(number) for number in period_numbers)
    return (f"Back payment matched to periods {periods} "
            f"({len(period_numbers)} periods, total amount: {total_amount:,.0f})")


class PaymentRecordService:
    def __init__(self, db: Session):
        self.db = db

    def get_payment_records(self, contract_id: int) -> List[PaymentRecord]:
        """Get all payment records of a contract, oldest first"""
        return self.db.exec(
            select(PaymentRecord)
            .where(PaymentRecord.contract_id == contract_id)
            .order_by(PaymentRecord.payment_date)
        ).all()

    def get_payment_record(self, contract_id: int, record_id: int) -> Optional[PaymentRecord]:
        record = self.db.get(PaymentRecord, record_id)
        if not record or record.contract_id != contract_id:
            return None
        return record

    def create_payment_record(
        self,
        contract_id: int,
        record_data: PaymentRecordCreate,
        today: date
    ) -> Optional[Tuple[PaymentRecord, Optional[BackPaymentMatch]]]:
        """
        Record a payment for a contract.

        Payments on non-annual contracts are confirmed on save and then offered
        to the oldest unpaid past periods as a back payment.

        Returns:
            The stored record and the back payment match, if any.
            None when the contract does not exist.
        """
        contract = self.db.get(Contract, contract_id)
        if not contract:
            return None

        record = PaymentRecord(
            contract_id=contract_id,
            payment_date=record_data.payment_date,
            amount=record_data.amount,
            method=record_data.method,
            is_confirmed=self._confirm_on_save(contract, record_data.is_confirmed),
        )
        contract.payment_records.append(record)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)

        logger.info(
            f"Contract {contract_id}: recorded payment {record.id} of {record.amount} "
            f"on {record.payment_date}")
        return record, self._match_back_payment(contract, record, today)

    def update_payment_record(
        self,
        contract_id: int,
        record_id: int,
        record_data: PaymentRecordUpdate,
        today: date
    ) -> Optional[Tuple[PaymentRecord, Optional[BackPaymentMatch]]]:
        """Update a payment record and re-run back payment matching for it"""
        contract = self.db.get(Contract, contract_id)
        record = self.get_payment_record(contract_id, record_id)
        if not contract or not record:
            return None

        for key, value in record_data.model_dump(exclude_unset=True).items():
            setattr(record, key, value)
        record.is_confirmed = self._confirm_on_save(contract, record.is_confirmed)
        record.touch()

        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record, self._match_back_payment(contract, record, today)

    def delete_payment_record(self, contract_id: int, record_id: int) -> bool:
        record = self.get_payment_record(contract_id, record_id)
        if not record:
            return False
        self.db.delete(record)
        self.db.commit()
        logger.info(f"Contract {contract_id}: removed payment {record_id}")
        return True

    @staticmethod
    def _confirm_on_save(contract: Contract, is_confirmed: bool) -> bool:
        # Annual payments are confirmed by hand against the schedule
        if contract.payment_cycle != PaymentCycle.ANNUALLY:
            return True
        return bool(is_confirmed)

    def _match_back_payment(
        self,
        contract: Contract,
        record: PaymentRecord,
        today: date
    ) -> Optional[BackPaymentMatch]:
        self.db.refresh(contract)
        matched_periods = auto_match_back_payments(
            ContractRead.model_validate(contract),
            PaymentRecordRead.model_validate(record),
            today
        )
        if not matched_periods:
            return None

        period_numbers = [period.period_number for period in matched_periods]
        total_amount = sum(period.amount for period in matched_periods)
        return BackPaymentMatch(
            payment_record_id=record.id,
            period_numbers=period_numbers,
            total_amount=total_amount,
            message=format_back_payment_message(period_numbers, total_amount),
        )
