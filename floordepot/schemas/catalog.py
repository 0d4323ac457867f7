# floordepot/schemas/catalog.py
from datetime import datetime

from pydantic import ConfigDict, HttpUrl, field_validator
from sqlmodel import SQLModel


class CatalogStatus(SQLModel):
    """
    Sync status shown in the footer ("Última act: ...").
    """

    configured: bool
    loading: bool
    polling: bool
    last_updated: datetime | None = None
    product_count: int = 0


class EndpointConfigRead(SQLModel):
    configured: bool
    source: str | None = None


class EndpointConfigUpdate(SQLModel):
    """
    Payload for connecting the catalog to an Apps Script deployment.
    """

    model_config = ConfigDict(extra="forbid")

    # Scheme-less values ("script.google.com/x") are rejected here
    url: HttpUrl

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v):
        return v.strip() if isinstance(v, str) else v


class CategoryOption(SQLModel):
    value: str
    label: str
