"""
Car Endpoints Module

This module provides the list, read and create endpoints for cars.
Read endpoints enrich every car with its client, fetched from the remote
client service; create stores the payload and returns it unenriched.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from service_car.db.repository import CarRepository
from service_car.models.car import Car, CarCreate, CarRead
from service_car.services.enrichment import CarEnricher
from service_car.api import deps

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[CarRead])
def list_cars(
    repository: CarRepository = Depends(deps.get_car_repository),
    enricher: CarEnricher = Depends(deps.get_car_enricher),
):
    """
    Retrieve every car, each with its client attached.

    One remote lookup is issued per car that references a client, in list
    order. A client that cannot be fetched is returned as null.

    Args:
        repository: Car record store
        enricher: Attaches remote client data

    Returns:
        List[CarRead]: All stored cars
    """
    cars = repository.find_all()
    logger.debug("Enriching %d cars", len(cars))
    return enricher.enrich(cars)


@router.get("/{car_id}", response_model=CarRead)
def read_car(
    car_id: int,
    repository: CarRepository = Depends(deps.get_car_repository),
    enricher: CarEnricher = Depends(deps.get_car_enricher),
):
    """
    Get a specific car by ID, with its client attached.

    Args:
        car_id: ID of the car to retrieve
        repository: Car record store
        enricher: Attaches remote client data

    Returns:
        CarRead: The requested car

    Raises:
        HTTPException 404: If the car doesn't exist
    """
    car = repository.find_by_id(car_id)
    if not car:
        raise HTTPException(status_code=404, detail="Car not found")

    return enricher.enrich_one(car)


@router.post("", response_model=CarRead)
def create_car(
    car_in: CarCreate,
    repository: CarRepository = Depends(deps.get_car_repository),
):
    """
    Create a new car.

    The store assigns the id. The response is not enriched, so `client`
    is always null here.

    Args:
        car_in: Car data to create (must include make and model)
        repository: Car record store

    Returns:
        CarRead: The newly created car
    """
    db_car = Car(**car_in.model_dump())
    return repository.save(db_car)
