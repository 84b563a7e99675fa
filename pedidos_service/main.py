import os
from typing import Any, Union

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from pedidos_service.aggregation import aggregate_user_orders
from pedidos_service.client import InvalidUsersResponse, UsersClient, UsersServiceUnavailable
from pedidos_service.models import Order, orders_db
from pedidos_service.schemas import ErrorResponse, UserOrdersResponse
from shared.config import Settings, get_settings
from shared.observability import ERROR_COUNT, configure_logging, instrument_app
from shared.store import InMemoryRecordStore, RecordStore

SERVICE_NAME = "pedidos-service"

settings = get_settings()
configure_logging(settings)

_store: RecordStore[Any, Order] = InMemoryRecordStore(orders=orders_db)


def get_store() -> RecordStore[Any, Order]:
    """Record store dependency, overridable in tests."""
    return _store


def get_users_client(config: Settings = Depends(get_settings)) -> UsersClient:
    """Client for the usuarios service, built from the configured base URL and timeout."""
    return UsersClient(config.usuarios_base_url, config.usuarios_timeout, SERVICE_NAME)


def _endpoint_label(request: Request) -> str:
    """Route template for metric labels, so ids do not create new series."""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


router = APIRouter()


@router.get("/pedidos/{id_usuario}", response_model=Union[UserOrdersResponse, ErrorResponse])
async def get_user_orders(
    id_usuario: int,
    request: Request,
    store: RecordStore = Depends(get_store),
    users_client: UsersClient = Depends(get_users_client),
):
    trace_id = getattr(request.state, "trace_id", None)
    logger.info(f"Fetching orders for user {id_usuario}", extra={"trace_id": trace_id})

    # Llamada al servicio de usuarios con propagación del trace_id
    users = await users_client.list_users(trace_id)
    result = aggregate_user_orders(id_usuario, users, store.list_orders())

    if isinstance(result, ErrorResponse):
        # Ausencia de datos, no un fallo: se responde 200 con cuerpo de error
        logger.warning(f"User {id_usuario} not found", extra={"trace_id": trace_id})
        ERROR_COUNT.labels(service=SERVICE_NAME, endpoint=_endpoint_label(request), error_type="user_not_found").inc()
    else:
        logger.info(f"User {id_usuario} has {len(result.orders)} orders", extra={"trace_id": trace_id})
    return result


app = FastAPI(title="Pedidos Service")
instrument_app(app, SERVICE_NAME)
app.include_router(router, prefix=settings.pedidos_api_prefix)


@app.exception_handler(UsersServiceUnavailable)
async def users_unavailable_handler(request: Request, exc: UsersServiceUnavailable):
    ERROR_COUNT.labels(service=SERVICE_NAME, endpoint=_endpoint_label(request), error_type="users_unavailable").inc()
    return JSONResponse(status_code=503, content={"detail": "Servicio de usuarios no disponible"})


@app.exception_handler(InvalidUsersResponse)
async def invalid_users_response_handler(request: Request, exc: InvalidUsersResponse):
    ERROR_COUNT.labels(service=SERVICE_NAME, endpoint=_endpoint_label(request), error_type="users_bad_response").inc()
    return JSONResponse(status_code=502, content={"detail": "Respuesta inválida del servicio de usuarios"})


@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("Invalid request {}: {}", request.url.path, exc.errors())
    ERROR_COUNT.labels(service=SERVICE_NAME, endpoint=_endpoint_label(request), error_type="invalid_input").inc()
    return await request_validation_exception_handler(request, exc)


if __name__ == "__main__":
    port = int(os.getenv("PORT", 8081))
    logger.info(f"Starting Pedidos Service on port {port}")
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=port)
