from __future__ import annotations

import hmac
from abc import ABC, abstractmethod
from typing import Optional

from app.config import Settings, get_settings


class CredentialChecker(ABC):
    """Decides whether a presented admin credential is acceptable."""

    @abstractmethod
    def verify(self, credential: Optional[str]) -> bool:
        raise NotImplementedError


class StaticKeyChecker(CredentialChecker):
    """Accepts exactly one shared key. An unset key accepts nothing."""

    def __init__(self, token: Optional[str]):
        self._token = token

    def verify(self, credential: Optional[str]) -> bool:
        if not self._token or credential is None:
            return False
        return hmac.compare_digest(
            credential.encode("utf-8"),
            self._token.encode("utf-8"),
        )


def build_credential_checker(settings: Optional[Settings] = None) -> CredentialChecker:
    settings = settings or get_settings()
    return StaticKeyChecker(settings.ADMIN_TOKEN)


__all__ = ["CredentialChecker", "StaticKeyChecker", "build_credential_checker"]
