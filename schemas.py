from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

# Pydantic schemas
# request bodies take loose types, validators.py decides what is acceptable
# so the client gets the same messages whatever shape the value had.
# json_schema_extra keeps the documented contract in the openapi schema

class ProductCreate(BaseModel):
    model_config = ConfigDict(json_schema_extra={"required": ["name", "price"]})

    name: Any = Field(None, examples=["Smartphone"],
                      json_schema_extra={"type": "string", "maxLength": 100})
    description: Optional[str] = Field(None, examples=["Latest model smartphone"])
    price: Any = Field(None, examples=[599.99],
                       json_schema_extra={"type": "number", "format": "float", "minimum": 0})

class ProductUpdate(ProductCreate):
    model_config = ConfigDict(json_schema_extra={})

class OrderCreate(BaseModel):
    model_config = ConfigDict(json_schema_extra={"required": ["product_id", "quantity"]})

    product_id: Any = Field(None, examples=[1], json_schema_extra={"type": "integer"})
    quantity: Any = Field(None, examples=[2], json_schema_extra={"type": "integer", "minimum": 1})

class OrderUpdate(OrderCreate):
    model_config = ConfigDict(json_schema_extra={})


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    price: float

class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    quantity: int
    total_price: float
    created_at: Optional[datetime] = None


class ErrorOut(BaseModel):
    error: str

class StatusOut(BaseModel):
    message: str
    documentation: str
