"""
Client session: the bearer token and the signed-in user.
The session is an explicit object handed to the API client; it is persisted
to a JSON file so the terminal client stays signed in between runs.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

logger = logging.getLogger(__name__)


class Session:
    """Token plus public user, backed by an optional JSON file."""

    def __init__(self, store_path: Optional[Union[str, Path]] = None):
        self.store_path = Path(store_path).expanduser() if store_path else None
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def auth_headers(self) -> Dict[str, str]:
        """Authorization header for protected calls, empty when signed out."""
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def load(self) -> bool:
        """
        Restore a saved session.

        Returns:
            True if a token was restored
        """
        if not self.store_path or not self.store_path.exists():
            return False

        try:
            data = json.loads(self.store_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {self.store_path}: {e}")
            return False

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed session file {self.store_path}")
            return False

        token = data.get("token")
        user = data.get("user")
        self.token = token if isinstance(token, str) else None
        self.user = user if isinstance(user, dict) else None
        logger.debug(f"Loaded session for {self.user.get('email') if self.user else 'unknown user'}")
        return self.is_authenticated

    def establish(self, token: str, user: Dict[str, Any]) -> None:
        """Adopt a token after login or signup and persist it."""
        self.token = token
        self.user = user

        if self.store_path:
            self.store_path.parent.mkdir(parents=True, exist_ok=True)
            self.store_path.write_text(
                json.dumps({"token": token, "user": user}),
                encoding="utf-8",
            )
        logger.info(f"Signed in as {user.get('email')}")

    def clear(self) -> None:
        """Forget the token and remove the saved session."""
        self.token = None
        self.user = None

        if self.store_path and self.store_path.exists():
            self.store_path.unlink()
        logger.info("Signed out")
