from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="nome", min_length=1)
    author: str = Field(..., alias="autor", min_length=1)
    price: float = Field(..., alias="preco", ge=0, strict=True)
    quantity: int = Field(..., alias="quantidade", ge=0, strict=True)


class BookCreate(BookBase):
    pass


class Book(BookBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
