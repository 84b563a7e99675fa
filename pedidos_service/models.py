from typing import List, Optional
from pydantic import BaseModel

class Order(BaseModel):
    id: Optional[int] = None  # sin persistencia no hay id asignado
    user_id: int
    product: str

# Datos semilla en memoria
orders_db: List[Order] = [
    Order(user_id=1, product="Computador"),
    Order(user_id=2, product="Teléfono"),
]
