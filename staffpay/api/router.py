from fastapi import APIRouter

from staffpay.api.employees import employees_router
from staffpay.api.payments import employee_payments_router
from staffpay.api.reports import reports_router

api_router = APIRouter()
api_router.include_router(employees_router)
api_router.include_router(employee_payments_router)
api_router.include_router(reports_router)
