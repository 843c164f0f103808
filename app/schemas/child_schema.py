from pydantic import Field, field_validator
from datetime import date, datetime
from typing import Optional

from app.schemas.base_schema import CamelModel


def _coerce_birth_date(value):
    # Aceita "2024-05-01" ou um timestamp ISO completo vindo do cliente
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    if isinstance(value, datetime):
        return value.date()
    return value


class ChildCreate(CamelModel):
    name: str = Field(..., min_length=1)
    birth_date: date
    gender: str = Field(..., min_length=1)

    normalize_birth_date = field_validator("birth_date", mode="before")(_coerce_birth_date)


class ChildUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    birth_date: Optional[date] = None
    gender: Optional[str] = Field(None, min_length=1)

    normalize_birth_date = field_validator("birth_date", mode="before")(_coerce_birth_date)

    # Campo enviado como null não pode apagar coluna obrigatória
    @field_validator("name", "birth_date", "gender", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field may not be null")
        return value


class ChildResponse(CamelModel):
    id: int
    name: str
    birth_date: date
    gender: str
