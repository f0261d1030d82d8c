"""
Session model — response of the session bootstrap and refresh endpoints.
"""

import math
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Session(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    device_id: Optional[str] = Field(default=None, alias="id")
    game_id: Optional[str] = None
    account_id: Optional[str] = None
    status: Optional[str] = None
    expires_in: int = 0

    # Never printed; the SDK persists these and drops the Session object.
    access_token: str = Field(min_length=1, repr=False)
    refresh_token: str = Field(min_length=1, repr=False)

    @field_validator("expires_in", mode="before")
    @classmethod
    def _whole_seconds(cls, value: Any) -> Any:
        if value is None:
            return 0
        if isinstance(value, float) and math.isfinite(value):
            return int(value)
        return value
