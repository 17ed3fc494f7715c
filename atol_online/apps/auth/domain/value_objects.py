from dataclasses import dataclass


@dataclass(frozen=True)
class TokenHeader:
    """Value Object для заголовка авторизации."""

    token: str

    def to_dict(self) -> dict:
        return {"Token": self.token}
