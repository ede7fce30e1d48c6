from src.api.contracts.models.contract import AnnualPaymentSchedule, Contract, PaymentRecord  # noqa: F401
from src.api.common.utils.database import engine
from sqlmodel import SQLModel


# Import all models to register them with SQLModel


def init_db():
    """Initialize the database by creating all tables"""
    print("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    print("Database tables created successfully.")


if __name__ == "__main__":
    init_db()
