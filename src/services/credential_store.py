"""Stored GitHub connection (user + token)."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import SecretStr, ValidationError

from ..schemas import Credential, Identity

logger = logging.getLogger(__name__)


def credential_from_connection(data: Dict[str, Any]) -> Optional[Credential]:
    """Build a credential from a `{"user": {...}, "token": "..."}` connection."""
    user = data.get("user") or {}
    token = data.get("token")
    if not isinstance(user, dict) or not user.get("login") or token is None:
        return None
    try:
        return Credential(
            identity=Identity(
                login=user["login"],
                display_name=user.get("name") or "",
                avatar_url=user.get("avatar_url") or "",
            ),
            token=SecretStr(str(token)),
        )
    except ValidationError as e:
        logger.warning("Ignoring malformed GitHub connection: %s", e.error_count())
        return None


class FileCredentialStore:
    """Credential store backed by a JSON file on disk."""

    def __init__(self, path: str):
        self.path = Path(path)

    def get(self) -> Optional[Credential]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to read GitHub connection from %s: %s", self.path, e)
            return None
        if not isinstance(data, dict):
            return None
        return credential_from_connection(data)

    def save(self, credential: Credential) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "user": {
                "login": credential.identity.login,
                "name": credential.identity.display_name,
                "avatar_url": credential.identity.avatar_url,
            },
            "token": credential.token.get_secret_value(),
        }
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
        logger.info("Cleared stored GitHub connection at %s", self.path)


class InMemoryCredentialStore:
    """Credential store holding a single credential in memory."""

    def __init__(self, credential: Optional[Credential] = None):
        self._credential = credential

    def get(self) -> Optional[Credential]:
        return self._credential

    def save(self, credential: Credential) -> None:
        self._credential = credential

    def clear(self) -> None:
        self._credential = None
