from fastapi import APIRouter
from service_car.api.endpoints import cars, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])

# Resource endpoints
api_router.include_router(cars.router, prefix="/cars", tags=["cars"])
