"""
Client Service Module

Looks up client records in the remote client service over HTTP.

Every call is a single blocking ``GET <base>/api/clients/{id}`` issued
through an injected ``requests.Session``; the session is created once per
application so connections are pooled between lookups. There is no retry
and no caching: each call hits the remote service.
"""
import logging
from typing import Optional

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter

from service_car.schemas.client import Client
from service_car.services.discovery import ServiceNotFound, ServiceResolver

logger = logging.getLogger(__name__)


def build_http_session(pool_size: int = 10) -> requests.Session:
    """
    Create the session shared by every lookup.

    Lookups run concurrently from the request worker threads and only
    issue `get` calls; headers and adapters are fixed after creation.
    The adapter keeps up to `pool_size` connections per host and blocks
    further threads until one is returned, instead of opening and
    discarding extra connections.
    """
    adapter = HTTPAdapter(pool_connections=1, pool_maxsize=pool_size, pool_block=True)
    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class RemoteUnavailable(Exception):
    """The client service could not produce a usable Client."""

    def __init__(self, client_id: int, reason: str):
        super().__init__(f"Client {client_id} unavailable: {reason}")
        self.client_id = client_id
        self.reason = reason


class ClientService:
    """
    Remote client resolver.

    Args:
        http: Shared HTTP session used for every request
        resolver: Maps `service_name` to a base URL
        service_name: Logical name of the client service
        timeout: Connect/read timeout in seconds, None waits forever
        fail_open: When True, failures are logged and yield None.
            When False, `RemoteUnavailable` propagates to the caller.
    """

    def __init__(
        self,
        http: requests.Session,
        resolver: ServiceResolver,
        service_name: str = "SERVICE-CLIENT",
        timeout: Optional[float] = 5.0,
        fail_open: bool = True,
    ):
        self.http = http
        self.resolver = resolver
        self.service_name = service_name
        self.timeout = timeout
        self.fail_open = fail_open

    def client_url(self, client_id: int) -> str:
        base_url = self.resolver.resolve(self.service_name)
        return f"{base_url}/api/clients/{client_id}"

    def fetch_client(self, client_id: int) -> Client:
        """
        Fetch a client, raising on any failure.

        Raises:
            RemoteUnavailable: Unknown service, network error, timeout,
                non-2xx status or a body that is not a valid Client
        """
        try:
            url = self.client_url(client_id)
        except ServiceNotFound as exc:
            raise RemoteUnavailable(client_id, str(exc)) from exc

        try:
            response = self.http.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise RemoteUnavailable(client_id, str(exc)) from exc
        except ValueError as exc:
            raise RemoteUnavailable(client_id, f"invalid JSON body: {exc}") from exc

        if payload is None:
            raise RemoteUnavailable(client_id, "empty body")

        try:
            return Client.model_validate(payload)
        except ValidationError as exc:
            raise RemoteUnavailable(client_id, f"invalid client payload: {exc}") from exc

    def find_client_by_id(self, client_id: int) -> Optional[Client]:
        """
        Fetch a client, applying the configured failure policy.

        Returns:
            Client or None when the lookup failed and the service is fail-open
        """
        try:
            return self.fetch_client(client_id)
        except RemoteUnavailable as exc:
            if not self.fail_open:
                raise
            logger.warning("Client lookup failed: %s", exc)
            return None
