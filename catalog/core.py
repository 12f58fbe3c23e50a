# catalog/core.py
from datetime import datetime
from decimal import Decimal
from typing import Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, field_serializer

class ProductIn(BaseModel):
    # Everything is optional at the schema level so a missing field
    # becomes a 400 with our message instead of FastAPI's 422.
    name: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None

    def missing_required(self) -> bool:
        return not (self.name and self.price and self.description and self.category)

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Decimal
    description: str
    category: str
    image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("price")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)

class Message(BaseModel):
    message: str

def _make_product_values(p: ProductIn) -> Dict[str, Any]:
    return {
        "name": p.name,
        "price": p.price,
        "description": p.description,
        "category": p.category,
        "image": p.image,
    }
