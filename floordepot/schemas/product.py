# floordepot/schemas/product.py
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from floordepot.core.formatting import (
    format_currency,
    split_image_urls,
    to_direct_image_url,
)


class ProductCategory(str, Enum):
    CERAMICA_PISO = "Cerámicas de Piso"
    CERAMICA_MURO = "Cerámicas de Muro"
    PORCELANATO = "Porcelanatos"
    PISO_FLOTANTE = "Pisos Flotantes"
    PISO_VINILICO = "Pisos Vinílicos SPC"


# Pseudo-categories understood by the catalog filters
FILTER_ALL = "TODOS"
FILTER_FEATURED = "DESTACADOS"


class ProductFields(BaseModel):
    """
    Editable product fields, shared by the stored product and the payloads.

    Wire names (`yield`, `isFeatured`) are used as aliases; Python code
    uses snake_case.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    category: str = ProductCategory.PORCELANATO.value
    format: str = ""
    yield_m2: float = Field(default=0.0, alias="yield", description="m² per box")
    price: float = Field(default=0.0, description="Sale price per m²")
    finish: str = ""
    code: str = ""
    description: str = ""
    images: list[str] = Field(default_factory=list)

    # Private fields (admin only)
    cost: float = 0.0
    provider: str = ""

    is_featured: bool = Field(default=False, alias="isFeatured")

    @property
    def box_price(self) -> float:
        """Price of a full box; a missing yield counts as one m²."""
        return (self.price or 0) * (self.yield_m2 or 1)


class Product(ProductFields):
    """
    A catalog entry as held in memory after decoding a sheet row.

    `id` and `created_at` are assigned once and never edited.
    """

    id: str = ""
    created_at: Any = Field(default=None, alias="createdAt")


class ProductWrite(ProductFields):
    """
    Payload for creating or replacing a product.

    - `images` accepts a list or a comma-separated string.
    - price / yield cannot be negative.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    yield_m2: float = Field(default=0.0, ge=0, alias="yield")
    price: float = Field(default=0.0, ge=0)

    @field_validator("images", mode="before")
    @classmethod
    def normalize_images(cls, v: Any) -> list[str]:
        return split_image_urls(v)

    @field_validator("name", "category", "format", "finish", "code", "provider")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class ProductCreate(ProductWrite):
    pass


class ProductUpdate(ProductWrite):
    """Full replacement of the editable fields (id and createdAt are kept)."""


class ProductPublic(BaseModel):
    """
    Product representation for the public storefront.

    Never carries cost or provider.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    category: str
    format: str
    yield_m2: float = Field(alias="yield")
    price: float
    finish: str
    code: str
    description: str
    images: list[str]
    image_urls: list[str]
    is_featured: bool = Field(alias="isFeatured")
    box_price: float
    price_display: str
    box_price_display: str

    @classmethod
    def from_product(cls, product: Product) -> "ProductPublic":
        return cls(
            id=product.id,
            name=product.name,
            category=product.category,
            format=product.format,
            yield_m2=product.yield_m2,
            price=product.price,
            finish=product.finish,
            code=product.code,
            description=product.description,
            images=product.images,
            image_urls=[to_direct_image_url(url) for url in product.images],
            is_featured=product.is_featured,
            box_price=product.box_price,
            price_display=format_currency(product.price),
            box_price_display=format_currency(product.box_price),
        )


class ProductAdmin(Product):
    """
    Full product for the admin panel, with display-ready amounts.
    """

    image_urls: list[str] = Field(default_factory=list)
    price_display: str = ""
    cost_display: str = ""

    @classmethod
    def from_product(cls, product: Product) -> "ProductAdmin":
        return cls(
            **product.model_dump(),
            image_urls=[to_direct_image_url(url) for url in product.images],
            price_display=format_currency(product.price),
            cost_display=format_currency(product.cost),
        )


class WhatsAppLink(BaseModel):
    product_id: str
    url: str
