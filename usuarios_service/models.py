from typing import List
from pydantic import BaseModel

class User(BaseModel):
    id: int
    name: str

# Datos semilla en memoria
users_db: List[User] = [
    User(id=1, name="Ana"),
    User(id=2, name="Luis"),
]
