from typing import List, Optional
from pydantic import BaseModel, Field

class RemoteUser(BaseModel):
    """User as returned by the usuarios service, read by wire name only."""
    id: int
    name: str = Field(alias="nombre")

    class Config:
        strict = True  # sin coerción: "1", 1.0 o true no son ids válidos

class OrderResponse(BaseModel):
    id: Optional[int] = None
    user_id: int = Field(alias="idUsuario")
    product: str = Field(alias="producto")

    class Config:
        from_attributes = True
        populate_by_name = True

class UserOrdersResponse(BaseModel):
    user: RemoteUser = Field(alias="usuario")
    orders: List[OrderResponse] = Field(alias="pedidos")

    class Config:
        populate_by_name = True

class ErrorResponse(BaseModel):
    error: str
