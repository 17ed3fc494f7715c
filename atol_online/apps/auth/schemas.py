from pydantic import BaseModel, ConfigDict, field_validator

from ...core.constraints import MAX_LENGTH_LOGIN, MAX_LENGTH_PASSWORD


class AtolCredentialsIn(BaseModel):
    login: str
    password: str

    @field_validator("login")
    @classmethod
    def validate_login(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Логин не может быть пустым")
        if len(v) > MAX_LENGTH_LOGIN:
            raise ValueError(f"Логин должен содержать не более {MAX_LENGTH_LOGIN} символов")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Пароль не может быть пустым")
        if len(v) > MAX_LENGTH_PASSWORD:
            raise ValueError(f"Пароль должен содержать не более {MAX_LENGTH_PASSWORD} символов")
        return v


class AtolCredentialsOut(BaseModel):
    login: str
    has_password: bool = True


class TokenContent(BaseModel):
    """Тело ответа на запрос токена."""

    model_config = ConfigDict(extra="allow")

    token: str | None = None
    error: dict | None = None
    timestamp: str | None = None
