"""Registration and login attempts inspected by the bot-risk engine."""

from datetime import datetime

from pydantic import BaseModel, Field

from models.schemas.job import EMAIL_PATTERN


class RegistrationAttempt(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[a-zA-Z0-9_-]+$")
    recaptcha_token: str | None = None
    timestamp: datetime = Field(default_factory=datetime.now)


class LoginAttempt(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    recaptcha_token: str | None = None
    device_fingerprint: str | None = None
    user_agent: str | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
