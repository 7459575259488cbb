"""User settings schemas."""
from pydantic import BaseModel, Field

from brandsite.core.config import settings
from brandsite.modules.config.schemas import Theme

# Fields that can never change after the record is created
IMMUTABLE_FIELDS = ("RealName", "Email")


class UserSettings(BaseModel):
    """A user's settings record as stored and returned."""
    user_id: str = Field(alias=settings.USER_ID_KEY)
    email: str = Field(default="", alias="Email")
    real_name: str = Field(default="", alias="RealName")
    display_name: str = Field(default="", alias="DisplayName")
    avatar_url: str = Field(default="", alias="AvatarURL")
    timezone: str = Field(default=settings.DEFAULT_TIMEZONE, alias="Timezone")

    email_notifications: bool = Field(default=True, alias="EmailNotifications")
    marketing_emails: bool = Field(default=False, alias="MarketingEmails")
    project_updates: bool = Field(default=True, alias="ProjectUpdates")
    system_notifications: bool = Field(default=True, alias="SystemNotifications")

    theme_preference: Theme = Field(default=Theme.AUTO, alias="ThemePreference")
    date_format: str = Field(default="MM/DD/YYYY", alias="DateFormat")
    show_email_publicly: bool = Field(default=False, alias="ShowEmailPublicly")
    analytics_opt_out: bool = Field(default=False, alias="AnalyticsOptOut")

    created_at: str | None = Field(default=None, alias="CreatedAt")
    updated_at: str | None = Field(default=None, alias="UpdatedAt")

    def to_item(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")

    class Config:
        populate_by_name = True
        extra = "allow"


class UserCreate(BaseModel):
    """Body of a create-user request; omitted fields take the record defaults."""
    email: str | None = Field(default=None, alias="Email")
    real_name: str | None = Field(default=None, alias="RealName")
    display_name: str | None = Field(default=None, alias="DisplayName")
    avatar_url: str | None = Field(default=None, alias="AvatarURL")
    timezone: str | None = Field(default=None, alias="Timezone")
    email_notifications: bool | None = Field(default=None, alias="EmailNotifications")
    marketing_emails: bool | None = Field(default=None, alias="MarketingEmails")
    project_updates: bool | None = Field(default=None, alias="ProjectUpdates")
    system_notifications: bool | None = Field(default=None, alias="SystemNotifications")
    theme_preference: Theme | None = Field(default=None, alias="ThemePreference")
    date_format: str | None = Field(default=None, alias="DateFormat")
    show_email_publicly: bool | None = Field(default=None, alias="ShowEmailPublicly")
    analytics_opt_out: bool | None = Field(default=None, alias="AnalyticsOptOut")

    class Config:
        populate_by_name = True
