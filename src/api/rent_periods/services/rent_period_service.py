from datetime import date
from typing import List, Optional
from sqlmodel import Session

from src.api.contracts.services.contract_service import ContractService
from src.api.rent_periods.constants import ReconciliationConstants, StatusKind
from src.api.rent_periods.schemas import (
    ContractPeriodsResponse, ContractStatusResult, DashboardSummary,
    ExpiringContract, RentPeriodView, StatusResult
)
from src.api.rent_periods.services.payment_matcher import compute_periods
from src.api.rent_periods.services.period_scheduler import expected_cycle_amount
from src.api.rent_periods.services.status_classifier import (
    classify_contract, classify_contracts, classify_period
)


class RentPeriodService:
    """Read-side views of stored contracts, recomputed on every call."""

    def __init__(self, db: Session):
        self.db = db
        self.contract_service = ContractService(db)

    def get_contract_periods(self, contract_id: int, today: date) -> Optional[ContractPeriodsResponse]:
        contract = self.contract_service.get_contract_snapshot(contract_id)
        if contract is None:
            return None

        periods = [
            RentPeriodView(**period.model_dump(), status=classify_period(period, today))
            for period in compute_periods(contract, today)
        ]
        return ContractPeriodsResponse(
            contract_id=contract.id,
            today=today,
            expected_cycle_amount=expected_cycle_amount(contract),
            periods=periods,
        )

    def get_contract_status(self, contract_id: int, today: date) -> Optional[StatusResult]:
        contract = self.contract_service.get_contract_snapshot(contract_id)
        if contract is None:
            return None
        return classify_contract(contract, today)

    def get_contract_statuses(self, today: date) -> List[ContractStatusResult]:
        return classify_contracts(self.contract_service.get_all_contracts(), today)

    def get_dashboard(self, today: date) -> DashboardSummary:
        """Active contract count, contracts about to expire and contracts with rent due"""
        contracts = self.contract_service.get_all_contracts()

        expiring: List[ExpiringContract] = []
        active_count = 0
        for contract in contracts:
            if not contract.end_date or contract.end_date < today:
                continue
            active_count += 1
            days_left = (contract.end_date - today).days
            if days_left <= ReconciliationConstants.EXPIRING_SOON_DAYS:
                expiring.append(ExpiringContract(
                    contract_id=contract.id,
                    contract_internal_id=contract.contract_internal_id,
                    end_date=contract.end_date,
                    days_left=days_left,
                ))

        results = classify_contracts(contracts, today)
        return DashboardSummary(
            today=today,
            active_contracts=active_count,
            expiring_contracts=sorted(expiring, key=lambda item: item.days_left),
            payment_due_contract_ids=[
                result.contract_id for result in results
                if result.status.kind == StatusKind.PAYMENT_DUE
            ],
            failed_contract_ids=[
                result.contract_id for result in results if not result.ok
            ],
        )
