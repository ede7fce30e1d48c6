import pytest
import os
from datetime import date
from sqlmodel import Session, SQLModel, create_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("ENV", "test")
os.environ.setdefault("SQLITE_URL", "sqlite://")

# Import all models to ensure they're registered with SQLModel
from src.api.common.constants.contracts import PaymentCycle
from src.api.contracts.models.contract import Contract, PaymentRecord, AnnualPaymentSchedule
from src.api.contracts.schemas.contract import ContractRead
from src.api.contracts.schemas.payment_record import AnnualPaymentScheduleEntry, PaymentRecordRead


@pytest.fixture
def test_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def test_session(test_engine):
    """Create a test database session"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture
def sample_contract_data():
    """Sample monthly contract data for testing"""
    return {
        "contract_internal_id": "C-2025-001",
        "property_id": "prop-1",
        "tenant_id": "tenant-1",
        "start_date": date(2025, 1, 1),
        "end_date": date(2025, 6, 30),
        "rent_amount": 20000,
        "payment_cycle": PaymentCycle.MONTHLY,
        "payment_due_day": 5,
    }


def make_payment(record_id: int, payment_date: date, amount: float, is_confirmed: bool = True) -> PaymentRecordRead:
    return PaymentRecordRead(
        id=record_id,
        payment_date=payment_date,
        amount=amount,
        method="transfer",
        is_confirmed=is_confirmed,
    )


def make_contract(**kwargs) -> ContractRead:
    """Build a contract record for the rent period engine"""
    data = {
        "id": 1,
        "contract_internal_id": "C-2025-001",
        "start_date": date(2025, 1, 1),
        "end_date": date(2025, 6, 30),
        "rent_amount": 20000,
        "payment_cycle": PaymentCycle.MONTHLY,
        "payment_due_day": 5,
        "payment_records": [],
        "annual_payment_dates": [],
    }
    data.update(kwargs)
    data["annual_payment_dates"] = [
        entry if isinstance(entry, AnnualPaymentScheduleEntry)
        else AnnualPaymentScheduleEntry(due_date=entry[0], amount=entry[1])
        for entry in data["annual_payment_dates"]
    ]
    return ContractRead(**data)


@pytest.fixture
def payment_factory():
    return make_payment


@pytest.fixture
def contract_factory():
    return make_contract


# Test data factories
class TestDataFactory:
    @staticmethod
    def create_contract(session: Session, **kwargs) -> Contract:
        """Create a test contract"""
        data = {
            "contract_internal_id": "C-2025-001",
            "property_id": "prop-1",
            "tenant_id": "tenant-1",
            "start_date": date(2025, 1, 1),
            "end_date": date(2025, 6, 30),
            "rent_amount": 20000,
            "payment_cycle": PaymentCycle.MONTHLY,
            "payment_due_day": 5,
        }
        schedule = kwargs.pop("annual_payment_dates", [])
        data.update(kwargs)

        contract = Contract(**data)
        contract.annual_payment_dates = [
            AnnualPaymentSchedule(due_date=due_date, amount=amount)
            for due_date, amount in schedule
        ]
        session.add(contract)
        session.commit()
        session.refresh(contract)
        return contract

    @staticmethod
    def create_payment_record(session: Session, contract_id: int, **kwargs) -> PaymentRecord:
        """Create a test payment record"""
        data = {
            "payment_date": date(2025, 1, 3),
            "amount": 20000,
            "method": "transfer",
            "is_confirmed": True,
        }
        data.update(kwargs)

        record = PaymentRecord(contract_id=contract_id, **data)
        session.add(record)
        session.commit()
        session.refresh(record)
        return record


@pytest.fixture
def test_data_factory():
    """Provide test data factory"""
    return TestDataFactory
