from fastapi import APIRouter
from src.api.contracts.endpoints.contract import router as contract_router
from src.api.contracts.endpoints.payment_record import router as payment_record_router
from src.api.rent_periods.endpoints.rent_periods import router as rent_periods_router

api_router = APIRouter()

# Include all domain routers
api_router.include_router(contract_router)
api_router.include_router(payment_record_router)
api_router.include_router(rent_periods_router)
