from datetime import date
from typing import List, Optional
from sqlmodel import Session, select
from src.api.contracts.models.contract import AnnualPaymentSchedule, Contract
from src.api.contracts.schemas.contract import ContractCreate, ContractRead, ContractUpdate


class ContractService:
    def __init__(self, db: Session):
        self.db = db

    def create_contract(self, contract_data: ContractCreate) -> Contract:
        """Create a new contract with its annual payment schedule"""
        contract = Contract(
            **contract_data.model_dump(exclude={"annual_payment_dates"}))
        contract.annual_payment_dates = [
            AnnualPaymentSchedule(due_date=entry.due_date, amount=entry.amount)
            for entry in contract_data.annual_payment_dates
        ]

        self.db.add(contract)
        self.db.commit()
        self.db.refresh(contract)
        return contract

    def get_contract(self, contract_id: int) -> Optional[Contract]:
        """Get a contract by ID"""
        return self.db.get(Contract, contract_id)

    def get_contract_snapshot(self, contract_id: int) -> Optional[ContractRead]:
        """Get a contract with its payment history as a read-only record"""
        contract = self.get_contract(contract_id)
        if not contract:
            return None
        return ContractRead.model_validate(contract)

    def get_contracts(self, skip: int = 0, limit: int = 100) -> List[Contract]:
        """Get contracts with pagination"""
        return self.db.exec(
            select(Contract).order_by(Contract.id).offset(skip).limit(limit)).all()

    def get_all_contracts(self) -> List[Contract]:
        return self.db.exec(select(Contract).order_by(Contract.id)).all()

    def get_contracts_by_tenant(self, tenant_id: str) -> List[Contract]:
        """Get all contracts for a tenant"""
        return self.db.exec(select(Contract).where(Contract.tenant_id == tenant_id)).all()

    def get_contracts_by_property(self, property_id: str) -> List[Contract]:
        """Get all contracts for a property"""
        return self.db.exec(select(Contract).where(Contract.property_id == property_id)).all()

    def get_active_contracts(self, target_date: date) -> List[Contract]:
        """Contracts that have not ended on the target date"""
        return self.db.exec(
            select(Contract).where(Contract.end_date >= target_date)).all()

    def update_contract(self, contract_id: int, contract_data: ContractUpdate) -> Optional[Contract]:
        """Update contract terms, replacing the annual schedule when one is given"""
        contract = self.db.get(Contract, contract_id)
        if not contract:
            return None

        contract_data_dict = contract_data.model_dump(
            exclude_unset=True, exclude={"annual_payment_dates"})
        for key, value in contract_data_dict.items():
            setattr(contract, key, value)

        if contract_data.annual_payment_dates is not None:
            contract.annual_payment_dates = [
                AnnualPaymentSchedule(due_date=entry.due_date, amount=entry.amount)
                for entry in contract_data.annual_payment_dates
            ]

        if contract.start_date and contract.end_date and contract.start_date > contract.end_date:
            self.db.rollback()
            raise ValueError("start_date must not be after end_date")

        contract.touch()
        self.db.add(contract)
        self.db.commit()
        self.db.refresh(contract)
        return contract

    def delete_contract(self, contract_id: int) -> bool:
        """Delete a contract and its payment records"""
        contract = self.db.get(Contract, contract_id)
        if not contract:
            return False
        self.db.delete(contract)
        self.db.commit()
        return True
