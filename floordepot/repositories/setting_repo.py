# floordepot/repositories/setting_repo.py
from datetime import datetime, timezone

from sqlmodel import Session

from floordepot.models.setting import AppSetting


class SettingRepository:
    """
    Data access layer for AppSetting.

    Responsibilities:
      - Pure DB operations (get / upsert / delete by key)
      - No FastAPI, no HTTP, no business logic
    """

    def get(self, session: Session, key: str) -> AppSetting | None:
        """Return a setting by key, or None if not stored."""
        return session.get(AppSetting, key)

    def upsert(self, session: Session, key: str, value: str) -> AppSetting:
        """Insert or overwrite a setting and return the persisted row."""
        setting = session.get(AppSetting, key)
        if setting is None:
            setting = AppSetting(key=key, value=value)
        else:
            setting.value = value
            setting.updated_at = datetime.now(timezone.utc)
        session.add(setting)
        session.commit()
        session.refresh(setting)
        return setting

    def delete(self, session: Session, key: str) -> bool:
        """Delete a setting. Returns False if nothing was stored."""
        setting = session.get(AppSetting, key)
        if setting is None:
            return False
        session.delete(setting)
        session.commit()
        return True
