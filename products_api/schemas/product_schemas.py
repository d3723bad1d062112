from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from products_api.models.product import SQL_INTEGER_MAX


class ProductPayload(BaseModel):
    """Request body accepted by POST /products and PUT /products/{id}.

    Strict types: ``"10"`` is not a stock count and ``true`` is not a price.
    Unknown keys, including a client-supplied ``id``, are dropped.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {"name": "Chair", "price": 49.99, "color": "red", "stock": 10}
        },
    )

    name: str = Field(strict=True, min_length=1)
    price: float = Field(strict=True, ge=0, allow_inf_nan=False)
    color: Optional[str] = Field(default=None, strict=True)
    stock: int = Field(strict=True, ge=0, le=SQL_INTEGER_MAX)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    color: Optional[str]
    stock: int

    model_config = ConfigDict(from_attributes=True)


class ProductDeletedResponse(BaseModel):
    message: str = "Product deleted"
    success: bool = True
    id: int


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    message: str
    success: bool = False
    status_code: int
    errors: Optional[List[FieldError]] = None
