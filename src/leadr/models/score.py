"""
Score model — a single entry on a board.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class Score(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = ""
    account_id: Optional[str] = None
    game_id: Optional[str] = None
    board_id: str = ""
    player_name: str = ""
    value: float = 0.0
    value_display: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("id", "board_id", "player_name", "value", mode="before")
    @classmethod
    def _null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default()
        return value

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_object_only(cls, value: Any) -> Any:
        # Anything but a JSON object reads as no metadata.
        return value if isinstance(value, dict) else None

    @property
    def display_value(self) -> str:
        """Server-formatted value when present, otherwise the raw number."""
        if self.value_display:
            return self.value_display
        return f"{self.value:g}"
