"""
API Dependencies Module

This module provides the FastAPI dependency functions that wire the record
store, the remote client resolver and the enrichment step into the
endpoints. Tests replace any of them through `app.dependency_overrides`.
"""
import requests
from fastapi import Depends, Request
from sqlmodel import Session

from service_car.core.config import settings
from service_car.db.repository import CarRepository
from service_car.db.session import get_db
from service_car.services.client_service import ClientService
from service_car.services.discovery import ServiceResolver
from service_car.services.enrichment import CarEnricher


def get_car_repository(db: Session = Depends(get_db)) -> CarRepository:
    return CarRepository(db)


def get_http_session(request: Request) -> requests.Session:
    """
    Return the application's shared HTTP session.

    The session is opened in the application lifespan and closed on
    shutdown, so all remote lookups reuse its connection pool. It is shared
    by all worker threads for concurrent `get` calls only; its pool size
    comes from CLIENT_SERVICE_POOL_SIZE.
    """
    return request.app.state.http


def get_service_resolver() -> ServiceResolver:
    return ServiceResolver(settings.SERVICE_REGISTRY)


def get_client_service(
    http: requests.Session = Depends(get_http_session),
    resolver: ServiceResolver = Depends(get_service_resolver),
) -> ClientService:
    return ClientService(
        http,
        resolver,
        service_name=settings.CLIENT_SERVICE_NAME,
        timeout=settings.CLIENT_SERVICE_TIMEOUT,
        fail_open=settings.CLIENT_LOOKUP_FAIL_OPEN,
    )


def get_car_enricher(
    client_service: ClientService = Depends(get_client_service),
) -> CarEnricher:
    return CarEnricher(client_service, deduplicate=settings.DEDUPLICATE_CLIENT_LOOKUPS)
