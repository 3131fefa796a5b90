from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

Language = Literal["en", "ar"]


class SystemSettings(BaseModel):
    """Typed view over the ``system_variables`` key/value rows."""

    default_language: Language = "en"
    ai_suggestions_enabled: bool = False
    last_backup_time: Optional[datetime] = None


class SystemSettingsUpdate(BaseModel):
    # last_backup_time is written by the backup job only
    default_language: Optional[Language] = None
    ai_suggestions_enabled: Optional[bool] = None
