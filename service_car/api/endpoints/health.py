from fastapi import APIRouter, Depends
from typing import Any
from sqlalchemy import text
from sqlmodel import Session

from service_car.core.config import settings
from service_car.db.session import get_db

router = APIRouter()

@router.get("", response_model=dict[str, Any])
def health_check(db: Session = Depends(get_db)) -> Any:
    """
    Health check endpoint. Also pings the record store.
    """
    db.exec(text("SELECT 1"))
    return {"status": "ok", "service": settings.PROJECT_NAME, "version": settings.VERSION}
