from pydantic import BaseModel, Field


# Modelo para cadastro de usuário
class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
