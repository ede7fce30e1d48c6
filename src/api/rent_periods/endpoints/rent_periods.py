from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from src.api.common.utils.database import get_db
from src.api.common.utils.datetime import get_current_date
from src.api.rent_periods.schemas import (
    ContractPeriodsResponse, ContractStatusResult, DashboardSummary, StatusResult
)
from src.api.rent_periods.services.rent_period_service import RentPeriodService

router = APIRouter(tags=["rent-periods"])


def get_rent_period_service(db: Session = Depends(get_db)):
    return RentPeriodService(db)


@router.get("/contracts/{contract_id}/periods", response_model=ContractPeriodsResponse)
def get_contract_periods(
    contract_id: int,
    today: Optional[date] = Query(default=None),
    rent_period_service: RentPeriodService = Depends(get_rent_period_service)
):
    """Billing periods of a contract with their payment and display status"""
    periods = rent_period_service.get_contract_periods(
        contract_id, today or get_current_date())
    if periods is None:
        raise HTTPException(status_code=404, detail="Contract not found")
    return periods


@router.get("/contracts/{contract_id}/status", response_model=StatusResult)
def get_contract_status(
    contract_id: int,
    today: Optional[date] = Query(default=None),
    rent_period_service: RentPeriodService = Depends(get_rent_period_service)
):
    """Derived status of a contract"""
    status = rent_period_service.get_contract_status(
        contract_id, today or get_current_date())
    if status is None:
        raise HTTPException(status_code=404, detail="Contract not found")
    return status


@router.get("/contract-statuses", response_model=List[ContractStatusResult])
def get_contract_statuses(
    today: Optional[date] = Query(default=None),
    rent_period_service: RentPeriodService = Depends(get_rent_period_service)
):
    """Statuses of all contracts; a contract that fails is reported, not fatal"""
    return rent_period_service.get_contract_statuses(today or get_current_date())


@router.get("/dashboard", response_model=DashboardSummary)
def get_dashboard(
    today: Optional[date] = Query(default=None),
    rent_period_service: RentPeriodService = Depends(get_rent_period_service)
):
    """Contracts expiring soon and contracts with rent due"""
    return rent_period_service.get_dashboard(today or get_current_date())
