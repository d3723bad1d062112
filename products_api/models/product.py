from sqlmodel import SQLModel, Field
from typing import Optional

# Largest value a signed 64-bit INTEGER column holds
SQL_INTEGER_MAX = 2**63 - 1


class ProductBase(SQLModel):
    name: str = Field(index=True)
    price: float
    color: Optional[str] = None
    stock: int = Field(default=0)


class Product(ProductBase, table=True):
    __tablename__ = "products"

    # Assigned by the store on insert, never by the client
    id: Optional[int] = Field(default=None, primary_key=True)

