from fastapi import APIRouter

from .api import router as api_json_router
from .calculator import router as calculator_router
from .debug import router as debug_router

api_router = APIRouter()
api_router.include_router(calculator_router, tags=["calculator"])
api_router.include_router(api_json_router, prefix="/api", tags=["api"])
api_router.include_router(debug_router, tags=["debug"])
