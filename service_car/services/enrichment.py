"""
Attach remote client data to stored cars at read time.
"""
from typing import Dict, Iterable, List, Optional

from service_car.models.car import Car, CarRead
from service_car.schemas.client import Client
from service_car.services.client_service import ClientService


class CarEnricher:
    """
    Build `CarRead` values with their `client` filled in.

    Cars are processed one after another in input order. By default every
    car with a `clientId` costs one remote call, even when several cars share
    the same client; `deduplicate=True` resolves each id once per batch.
    Stored `Car` rows are never modified.
    """

    def __init__(self, client_service: ClientService, deduplicate: bool = False):
        self.client_service = client_service
        self.deduplicate = deduplicate

    def enrich_one(self, car: Car) -> CarRead:
        return self._enrich(car, None)

    def enrich(self, cars: Iterable[Car]) -> List[CarRead]:
        seen: Optional[Dict[int, Optional[Client]]] = {} if self.deduplicate else None
        return [self._enrich(car, seen) for car in cars]

    def _enrich(self, car: Car, seen: Optional[Dict[int, Optional[Client]]]) -> CarRead:
        enriched = CarRead.model_validate(car)
        if car.clientId is None:
            return enriched

        if seen is not None and car.clientId in seen:
            client = seen[car.clientId]
        else:
            client = self.client_service.find_client_by_id(car.clientId)
            if seen is not None:
                seen[car.clientId] = client

        enriched.client = client
        return enriched
