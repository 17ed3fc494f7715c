from dataclasses import dataclass


@dataclass
class AtolCredentials:
    """Доменная сущность учётных данных АТОЛ Онлайн."""

    login: str
    password: str

    def to_auth_payload(self) -> dict:
        """Тело запроса на получение токена."""
        return {"login": self.login, "pass": self.password}

    def to_dict_safe(self) -> dict:
        """Преобразовать в словарь без пароля."""
        return {
            "login": self.login,
            "has_password": bool(self.password),
        }
