"""
Car Repository Module

Thin persistence layer over a SQLModel session. Endpoints and services go
through this class instead of building statements themselves, so the store
can be swapped without touching the enrichment logic.
"""
import logging
from typing import List, Optional
from sqlmodel import Session, select

from service_car.models.car import Car, MAX_ID

logger = logging.getLogger(__name__)


class CarRepository:
    """
    Record store for Car rows.

    No locking is added on top of the database: concurrent writers get
    whatever isolation the underlying engine provides.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[Car]:
        """Return every stored car, ordered by id."""
        statement = select(Car).order_by(Car.id)
        return list(self.db.exec(statement).all())

    def find_by_id(self, car_id: int) -> Optional[Car]:
        # Out-of-range ids cannot be stored, so they cannot match a row
        if not -MAX_ID - 1 <= car_id <= MAX_ID:
            return None
        return self.db.get(Car, car_id)

    def save(self, car: Car) -> Car:
        """
        Insert or update a car.

        Args:
            car: Car to persist. When `id` is None the store assigns one.

        Returns:
            Car: The persisted car, refreshed from the database
        """
        is_new = car.id is None
        self.db.add(car)
        self.db.commit()
        self.db.refresh(car)
        logger.info("%s car id=%s", "Created" if is_new else "Updated", car.id)
        return car
