from datetime import datetime
from typing import ClassVar, Literal

from pydantic import Field, field_validator

from spendwise.schemas.common import HEX_COLOR, PatchModel, RequestModel, RowModel


class ProfileSync(RequestModel):
    email: str | None = Field(default=None, max_length=255)
    full_name: str | None = Field(default=None, max_length=200)
    avatar_url: str | None = Field(default=None, max_length=1000)


class ProfileUpdate(PatchModel):
    nullable: ClassVar[tuple] = ("display_name", "bio", "avatar_url")

    display_name: str | None = Field(default=None, max_length=100)
    bio: str | None = Field(default=None, max_length=500)
    avatar_url: str | None = Field(default=None, max_length=1000)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    theme: Literal["light", "dark", "system"] | None = None
    accent_color: str | None = Field(default=None, pattern=HEX_COLOR)
    language: Literal["id", "en"] | None = None
    date_format: str | None = Field(default=None, max_length=20)
    notification_budget: bool | None = None
    notification_goals: bool | None = None
    notification_achievements: bool | None = None
    privacy_hide_amounts: bool | None = None
    onboarding_completed: bool | None = None

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, value):
        if value is None:
            return value
        if not value.isalpha():
            raise ValueError("Currency must be a 3-letter code")
        return value.upper()


class ProfileOut(RowModel):
    id: str
    clerk_id: str
    email: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    display_name: str | None = None
    bio: str | None = None
    currency: str
    theme: str
    accent_color: str
    language: str
    date_format: str
    notification_budget: bool
    notification_goals: bool
    notification_achievements: bool
    privacy_hide_amounts: bool
    onboarding_completed: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


def settings_view(profile) -> dict:
    return {
        "displayName": profile.display_name,
        "bio": profile.bio,
        "avatarUrl": profile.avatar_url,
        "currency": profile.currency,
        "theme": profile.theme,
        "accentColor": profile.accent_color,
        "language": profile.language,
        "dateFormat": profile.date_format,
        "notificationBudget": profile.notification_budget,
        "notificationGoals": profile.notification_goals,
        "notificationAchievements": profile.notification_achievements,
        "privacyHideAmounts": profile.privacy_hide_amounts,
    }
