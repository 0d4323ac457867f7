# floordepot/models/setting.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class AppSetting(SQLModel, table=True):
    """
    Named configuration value persisted on the local machine.

    Known keys:
      - "sheet_url": Apps Script web app URL entered by the administrator
    """

    __tablename__ = "app_settings"

    key: str = Field(
        primary_key=True,
        max_length=64,
        description="Setting name",
    )

    value: str = Field(
        description="Raw setting value",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last write timestamp (UTC)",
    )
