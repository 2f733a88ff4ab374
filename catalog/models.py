# catalog/models.py
from pydantic import AfterValidator, BaseModel, Field, StrictInt, StrictStr, field_validator
from typing import Optional, List
from typing_extensions import Annotated

from . import config


def _check_name(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


def _check_category(value: str) -> str:
    if value not in config.ALLOWED_CATEGORIES:
        raise ValueError("must be one of: " + ", ".join(config.ALLOWED_CATEGORIES))
    return value


Name = Annotated[StrictStr, AfterValidator(_check_name)]
Category = Annotated[StrictStr, AfterValidator(_check_category)]
Price = Annotated[float, Field(gt=0, strict=True, allow_inf_nan=False)]
Stock = Annotated[StrictInt, Field(ge=0)]
Rating = Annotated[float, Field(ge=0, le=5, strict=True, allow_inf_nan=False)]


class ProductIn(BaseModel):
    """Body of POST /products. Every field is required."""
    name: Name
    category: Category
    description: StrictStr
    price: Price
    stock: Stock
    rating: Rating
    image: StrictStr


class ProductPatch(BaseModel):
    """Body of PATCH /products/{id}. Any subset of the ProductIn fields."""
    name: Optional[Name] = None
    category: Optional[Category] = None
    description: Optional[StrictStr] = None
    price: Optional[Price] = None
    stock: Optional[Stock] = None
    rating: Optional[Rating] = None
    image: Optional[StrictStr] = None

    @field_validator("*", mode="before")
    @classmethod
    def _no_nulls(cls, value):
        # defaults never reach validators, so None here was sent explicitly
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class Product(BaseModel):
    id: int
    name: str
    category: str
    description: str
    price: float
    stock: int
    rating: float
    image: str


class ErrorOut(BaseModel):
    error: str


class CategoriesOut(BaseModel):
    categories: List[str]
