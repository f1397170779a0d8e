"""Data schemas for the Talea application."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, NonNegativeInt, field_validator


class Tier(str, Enum):
    """Access level of the current user."""

    ANONYMOUS = "anonymous"
    FREEMIUM = "freemium"
    PREMIUM = "premium"


class UserIdentity(BaseModel):
    """Identity handed out by the auth collaborator.

    Identities are replaced wholesale on sign-in, sign-up and sign-out and
    never mutated in place.
    """

    id: str = Field(validation_alias=AliasChoices("id", "uid"))
    is_anonymous: bool = Field(default=True, validation_alias=AliasChoices("is_anonymous", "isAnonymous"))
    is_premium: bool = Field(default=False, validation_alias=AliasChoices("is_premium", "isPremium"))
    email: Optional[str] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("id")
    @classmethod
    def _require_id(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("identity id must not be empty")
        return cleaned


class QuotaState(BaseModel):
    """Snapshot of the trial-save and AI-usage counters."""

    remaining_saves: NonNegativeInt
    trial_expired: bool = False
    ai_usage_today: NonNegativeInt = 0
    last_usage_date: date

    model_config = ConfigDict(frozen=True)


class TrialInfo(BaseModel):
    used_saves: NonNegativeInt
    max_saves: NonNegativeInt


class SaveOutcome(str, Enum):
    SAVED = "saved"
    UNSAVED = "unsaved"
    BLOCKED = "blocked"


class NotificationType(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """A toast message for the UI to render."""

    id: str
    type: NotificationType
    title: str
    message: str
    timestamp: float
    duration_ms: NonNegativeInt = 5000

    model_config = ConfigDict(frozen=True)

    def expires_at(self) -> Optional[float]:
        """Return the epoch second the toast disappears, ``None`` if sticky."""

        if not self.duration_ms:
            return None
        return self.timestamp + self.duration_ms / 1000


class UpgradeTrigger(str, Enum):
    """What caused the upgrade prompt to open."""

    SAVE_LIMIT = "save-limit"
    AI_LIMIT = "ai-limit"
    UPGRADE_BUTTON = "upgrade-button"
    DEFAULT = "default"


class UpgradePrompt(BaseModel):
    trigger: UpgradeTrigger
    title: str
    subtitle: str
    description: str
    button_text: str


class TaleType(str, Enum):
    VIDEO = "video"
    HOTEL = "hotel"
    EVENT = "event"
    RESTAURANT = "restaurant"
    ATTRACTION = "attraction"


class Tale(BaseModel):
    """A catalog item representing a travel experience."""

    id: str
    type: TaleType
    title: str
    description: str
    location: str
    image_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("image_url", "imageUrl"))
    category: Optional[str] = None
    personality_type: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("personality_type", "personalityType"),
    )
    rating: Optional[float] = None
    price: Optional[float] = None
    price_range: Optional[str] = Field(default=None, validation_alias=AliasChoices("price_range", "priceRange"))
    tags: List[str] = Field(default_factory=list)
    featured: bool = False
    event_date: Optional[date] = Field(default=None, validation_alias=AliasChoices("event_date", "date"))
    duration: Optional[str] = None
    cuisine: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    star_rating: Optional[int] = Field(default=None, validation_alias=AliasChoices("star_rating", "starRating"))
    video_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("video_url", "videoUrl"))

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("tags", "cuisine", "amenities", mode="before")
    @classmethod
    def _coerce_list(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class FavoriteEntry(BaseModel):
    """One tale in a user's favorites list."""

    id: str
    title: str = ""
    type: Optional[str] = None
    timestamp: datetime

    model_config = ConfigDict(frozen=True)


class Trip(BaseModel):
    """A planned trip collecting tales the traveller wants to do."""

    id: str
    user_id: str = Field(alias="userId")
    name: str
    destination: str = ""
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    tale_ids: List[str] = Field(default_factory=list, alias="taleIds")

    model_config = ConfigDict(populate_by_name=True)


__all__ = [
    "FavoriteEntry",
    "Notification",
    "NotificationType",
    "QuotaState",
    "SaveOutcome",
    "Tale",
    "TaleType",
    "Tier",
    "TrialInfo",
    "Trip",
    "UpgradePrompt",
    "UpgradeTrigger",
    "UserIdentity",
]
