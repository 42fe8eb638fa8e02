from __future__ import annotations

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


class PersonRecord(BaseModel):
    """Wire/app record shape for one directory entry; immutable once built."""

    id: int = Field(gt=0)
    entry_number: int = Field(gt=0)
    name: str = Field(min_length=1)
    created_at: AwareDatetime
    twitter_handle: str | None = None
    instagram_handle: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def has_social_handles(self) -> bool:
        return bool(self.twitter_handle or self.instagram_handle)
