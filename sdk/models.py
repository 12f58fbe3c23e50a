# sdk/models.py
from pydantic import BaseModel, Field
from typing import Optional

class Rating(BaseModel):
    rate: float = Field(0, ge=0, le=5)
    count: int = Field(0, ge=0)

class Product(BaseModel):
    id: int
    title: str
    category: str
    price: float
    description: str = ""
    image: Optional[str] = None
    rating: Optional[Rating] = None
    # Inventory is its own field; rating.count is never used as stock.
    stock: Optional[int] = None

class ProductPayload(BaseModel):
    title: str
    price: float
    description: str
    image: str
    category: str
