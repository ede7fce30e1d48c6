from typing import List, Optional
from fastapi import HTTPException, APIRouter, Query
from fastapi.params import Depends
from sqlmodel import Session
from src.api.common.utils.database import get_db
from src.api.contracts.schemas.contract import ContractCreate, ContractRead, ContractUpdate
from src.api.contracts.services.contract_service import ContractService


router = APIRouter(prefix="/contracts", tags=["contracts"])


def get_contract_service(db: Session = Depends(get_db)):
    return ContractService(db)


@router.post("", response_model=ContractRead)
def create_contract(
    contract_data: ContractCreate,
    contract_service: ContractService = Depends(get_contract_service)
):
    """Create a new contract"""
    contract = contract_service.create_contract(contract_data)
    return ContractRead.model_validate(contract)


@router.get("", response_model=List[ContractRead])
def get_contracts(
    skip: int = 0,
    limit: int = 100,
    tenant_id: Optional[str] = Query(default=None),
    property_id: Optional[str] = Query(default=None),
    contract_service: ContractService = Depends(get_contract_service)
):
    """List contracts, optionally for one tenant or property"""
    if tenant_id is not None:
        contracts = contract_service.get_contracts_by_tenant(tenant_id)
    elif property_id is not None:
        contracts = contract_service.get_contracts_by_property(property_id)
    else:
        contracts = contract_service.get_contracts(skip=skip, limit=limit)
    return [ContractRead.model_validate(contract) for contract in contracts]


@router.get("/{contract_id}", response_model=ContractRead)
def get_contract(
    contract_id: int,
    contract_service: ContractService = Depends(get_contract_service)
):
    """Get a contract by ID"""
    contract = contract_service.get_contract_snapshot(contract_id)
    if not contract:
        raise HTTPException(status_code=404, detail="Contract not found")
    return contract


@router.put("/{contract_id}", response_model=ContractRead)
def update_contract(
    contract_id: int,
    contract_data: ContractUpdate,
    contract_service: ContractService = Depends(get_contract_service)
):
    """Update contract terms"""
    try:
        contract = contract_service.update_contract(contract_id, contract_data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if not contract:
        raise HTTPException(status_code=404, detail="Contract not found")
    return ContractRead.model_validate(contract)


@router.delete("/{contract_id}")
def delete_contract(
    contract_id: int,
    contract_service: ContractService = Depends(get_contract_service)
):
    """Delete a contract"""
    if not contract_service.delete_contract(contract_id):
        raise HTTPException(status_code=404, detail="Contract not found")
    return {"message": "Contract deleted successfully"}
