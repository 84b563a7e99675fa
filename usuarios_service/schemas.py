from pydantic import BaseModel, Field

class UserResponse(BaseModel):
    id: int
    name: str = Field(alias="nombre")

    class Config:
        from_attributes = True
        populate_by_name = True  # Permite construir por nombre de atributo
