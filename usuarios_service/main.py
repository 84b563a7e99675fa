import os
from typing import Any, List

from fastapi import APIRouter, Depends, FastAPI
from loguru import logger

from shared.config import get_settings
from shared.observability import configure_logging, instrument_app
from shared.store import InMemoryRecordStore, RecordStore
from usuarios_service.models import User, users_db
from usuarios_service.schemas import UserResponse

SERVICE_NAME = "usuarios-service"

settings = get_settings()
configure_logging(settings)

_store: RecordStore[User, Any] = InMemoryRecordStore(users=users_db)


def get_store() -> RecordStore[User, Any]:
    """Record store dependency, overridable in tests."""
    return _store


router = APIRouter()


@router.get("/usuarios", response_model=List[UserResponse])
async def get_users(store: RecordStore = Depends(get_store)):
    users = store.list_users()
    logger.info(f"Fetching all users ({len(users)})")
    return users


app = FastAPI(title="Usuarios Service")
instrument_app(app, SERVICE_NAME)
app.include_router(router, prefix=settings.usuarios_api_prefix)


if __name__ == "__main__":
    port = int(os.getenv("PORT", 8080))
    logger.info(f"Starting Usuarios Service on port {port}")
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=port)
