"""
Board model — a leaderboard configuration as returned by /v1/client/boards.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Board(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = ""
    account_id: Optional[str] = None
    game_id: Optional[str] = None
    name: str = ""
    slug: str = ""
    short_code: Optional[str] = None
    icon: Optional[str] = None
    unit: Optional[str] = None        # "points", "seconds", ...
    is_active: bool = False
    is_published: bool = False
    sort_direction: Optional[str] = None  # "ascending" | "descending"
    keep_strategy: Optional[str] = None   # "all" | "highest" | "latest"
    tags: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("id", "name", "slug", "is_active", "is_published", "tags", mode="before")
    @classmethod
    def _null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value
