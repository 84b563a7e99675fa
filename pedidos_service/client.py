import time
from typing import List, Optional

import httpx  # Para llamadas HTTP
from loguru import logger
from pydantic import TypeAdapter

from pedidos_service.schemas import RemoteUser
from shared.observability import EXTERNAL_CALL_COUNT, EXTERNAL_CALL_LATENCY, TRACE_HEADER

TARGET_SERVICE = "usuarios-service"

_users_adapter = TypeAdapter(List[RemoteUser])


class UsersServiceError(Exception):
    """Base error for a failed call to the usuarios service."""


class UsersServiceUnavailable(UsersServiceError):
    """The usuarios service could not be reached (refused, DNS, timeout...)."""


class InvalidUsersResponse(UsersServiceError):
    """The usuarios service answered, but not with a list of users."""


class UsersClient:
    """
    Async client for the usuarios directory.

    A new ``httpx.AsyncClient`` is opened per call; ``transport`` lets tests
    plug in ``httpx.MockTransport`` or ``httpx.ASGITransport``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        service_name: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.service_name = service_name
        self.transport = transport

    async def list_users(self, trace_id: Optional[str] = None) -> List[RemoteUser]:
        """Fetch the full user list. Raises UsersServiceError subclasses on failure."""
        url = f"{self.base_url}/usuarios"
        headers = {TRACE_HEADER: trace_id} if trace_id else {}
        start_time = time.time()

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                resp = await client.get(url, headers=headers)
            except httpx.RequestError as e:
                logger.error("Error calling usuarios service: {!r}", e, extra={"trace_id": trace_id, "url": url})
                self._record_call("error")
                raise UsersServiceUnavailable(str(e) or type(e).__name__) from e

        EXTERNAL_CALL_LATENCY.labels(
            service=self.service_name,
            target_service=TARGET_SERVICE
        ).observe(time.time() - start_time)

        if resp.status_code != 200:
            logger.error(f"Usuarios service answered {resp.status_code}", extra={"trace_id": trace_id})
            self._record_call("error")
            raise InvalidUsersResponse(f"unexpected status {resp.status_code}")

        try:
            users = _users_adapter.validate_python(resp.json())
        except ValueError as e:  # JSON inválido o esquema inesperado
            logger.error("Malformed payload from usuarios service: {}", e, extra={"trace_id": trace_id})
            self._record_call("error")
            raise InvalidUsersResponse("malformed user list") from e

        self._record_call("success")
        logger.info(f"Fetched {len(users)} users from usuarios service", extra={"trace_id": trace_id})
        return users

    def _record_call(self, status: str) -> None:
        EXTERNAL_CALL_COUNT.labels(
            service=self.service_name,
            target_service=TARGET_SERVICE,
            status=status
        ).inc()
