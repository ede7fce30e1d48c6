import pytest
from datetime import date

from src.api.common.constants.contracts import PaymentCycle
from src.api.contracts.models.contract import PaymentRecord
from src.api.contracts.schemas.payment_record import PaymentRecordCreate, PaymentRecordUpdate
from src.api.contracts.services.payment_record_service import (
    PaymentRecordService,
    format_back_payment_message,
)


TODAY = date(2025, 3, 10)


class TestBackPaymentMessage:
    """Test the confirmation message for back payments"""

    def test_single_period(self):
        assert format_back_payment_message([1], 20000) == \
            "Back payment matched to period 1 (amount: 20,000)"

    def test_several_periods(self):
        assert format_back_payment_message([1, 2, 3], 60000) == \
            "Back payment matched to periods 1, 2, 3 (3 periods, total amount: 60,000)"


class TestPaymentRecordService:
    """Test PaymentRecordService class"""

    def test_create_payment_is_confirmed_for_monthly_contract(self, test_session, test_data_factory):
        """Test payments on non-annual contracts are confirmed on save"""
        service = PaymentRecordService(test_session)
        contract = test_data_factory.create_contract(test_session)

        record, match = service.create_payment_record(
            contract.id,
            PaymentRecordCreate(payment_date=date(2025, 1, 3), amount=20000),
            TODAY,
        )

        assert record.id is not None
        assert record.is_confirmed is True
        assert record.contract_id == contract.id
        # Dated inside January, so this is a regular payment, not a back payment
        assert match is None

    def test_create_back_payment_reports_matched_periods(self, test_session, test_data_factory):
        """Test a two month payment is matched to the unpaid past periods"""
        service = PaymentRecordService(test_session)
        contract = test_data_factory.create_contract(test_session)

        record, match = service.create_payment_record(
            contract.id,
            PaymentRecordCreate(payment_date=TODAY, amount=40000),
            TODAY,
        )

        assert match is not None
        assert match.payment_record_id == record.id
        assert match.period_numbers == [1, 2]
        assert match.total_amount == 40000
        assert match.message == \
            "Back payment matched to periods 1, 2 (2 periods, total amount: 40,000)"

    def test_create_back_payment_skips_paid_periods(self, test_session, test_data_factory):
        """Test periods already settled are not offered to a new payment"""
        service = PaymentRecordService(test_session)
        contract = test_data_factory.create_contract(test_session)
        test_data_factory.create_payment_record(
            test_session, contract.id, payment_date=date(2025, 1, 3))
        test_session.refresh(contract)

        _, match = service.create_payment_record(
            contract.id,
            PaymentRecordCreate(payment_date=TODAY, amount=20000),
            TODAY,
        )

        assert match.period_numbers == [2]
        assert match.message == "Back payment matched to period 2 (amount: 20,000)"

    def test_create_partial_back_payment_has_no_match(self, test_session, test_data_factory):
        """Test a payment that does not divide into whole periods is not matched"""
        service = PaymentRecordService(test_session)
        contract = test_data_factory.create_contract(test_session)

        _, match = service.create_payment_record(
            contract.id,
            PaymentRecordCreate(payment_date=TODAY, amount=50000),
            TODAY,
        )

        assert match is None

    def test_create_annual_payment_keeps_confirmation_flag(self, test_session, test_data_factory):
        """Test annual payments are only confirmed when asked to"""
        service = PaymentRecordService(test_session)
        contract = test_data_factory.create_contract(
            test_session,
            payment_cycle=PaymentCycle.ANNUALLY,
            annual_payment_dates=[(date(2025, 1, 1), 120000)],
        )

        unconfirmed, match = service.create_payment_record(
            contract.id,
            PaymentRecordCreate(payment_date=date(2025, 1, 2), amount=120000),
            TODAY,
        )
        confirmed, _ = service.create_payment_record(
            contract.id,
            PaymentRecordCreate(payment_date=date(2025, 1, 2), amount=120000, is_confirmed=True),
            TODAY,
        )

        assert unconfirmed.is_confirmed is False
        assert confirmed.is_confirmed is True
        assert match is None

    def test_create_payment_for_missing_contract(self, test_session):
        """Test recording a payment for a non-existent contract"""
        service = PaymentRecordService(test_session)

        result = service.create_payment_record(
            999, PaymentRecordCreate(payment_date=TODAY, amount=20000), TODAY)

        assert result is None

    def test_create_payment_rejects_non_positive_amount(self):
        """Test payment amounts must be positive"""
        with pytest.raises(ValueError):
            PaymentRecordCreate(payment_date=TODAY, amount=0)

    def test_get_payment_records_ordered_by_date(self, test_session, test_data_factory):
        """Test the payment history is returned oldest first"""
        service = PaymentRecordService(test_session)
        contract = test_data_factory.create_contract(test_session)
        test_data_factory.create_payment_record(test_session, contract.id, payment_date=date(2025, 3, 3))
        test_data_factory.create_payment_record(test_session, contract.id, payment_date=date(2025, 1, 3))

        result = service.get_payment_records(contract.id)

        assert [r.payment_date for r in result] == [date(2025, 1, 3), date(2025, 3, 3)]

    def test_get_payment_record_of_other_contract(self, test_session, test_data_factory):
        """Test a record is not returned under the wrong contract"""
        service = PaymentRecordService(test_session)
        contract = test_data_factory.create_contract(test_session)
        other = test_data_factory.create_contract(test_session, contract_internal_id="C-2")
        record = test_data_factory.create_payment_record(test_session, contract.id)

        assert service.get_payment_record(contract.id, record.id) is not None
        assert service.get_payment_record(other.id, record.id) is None

    def test_update_payment_record(self, test_session, test_data_factory):
        """Test updating a payment re-runs back payment matching"""
        service = PaymentRecordService(test_session)
        contract = test_data_factory.create_contract(test_session)
        record = test_data_factory.create_payment_record(
            test_session, contract.id, payment_date=TODAY, amount=10000)
        test_session.refresh(contract)

        updated, match = service.update_payment_record(
            contract.id, record.id, PaymentRecordUpdate(amount=40000), TODAY)

        assert updated.amount == 40000
        assert updated.payment_date == TODAY
        assert match.period_numbers == [1, 2]

    def test_update_missing_payment_record(self, test_session, test_data_factory):
        """Test updating a non-existent record"""
        service = PaymentRecordService(test_session)
        contract = test_data_factory.create_contract(test_session)

        assert service.update_payment_record(
            contract.id, 999, PaymentRecordUpdate(amount=1), TODAY) is None

    def test_delete_payment_record(self, test_session, test_data_factory):
        """Test deleting a payment record"""
        service = PaymentRecordService(test_session)
        contract = test_data_factory.create_contract(test_session)
        record = test_data_factory.create_payment_record(test_session, contract.id)
        record_id = record.id

        assert service.delete_payment_record(contract.id, record_id) is True
        assert test_session.get(PaymentRecord, record_id) is None
        assert service.delete_payment_record(contract.id, record_id) is False
