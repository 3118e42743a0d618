"""Service for Discord API interactions."""
from typing import Any, Dict, List, Optional

import requests
from nacl.signing import VerifyKey
from nacl.exceptions import BadSignatureError

from .config import Config
from .discord_types import InviteTargetType
from .observability import init_observability

logger, _ = init_observability('activities-bot-discord', app=None)

INVITE_MAX_AGE = 604800  # one week
INVITE_MAX_USES = 0  # unlimited


class DiscordAPIError(Exception):
    """Raised when Discord answers a REST call with a non-2xx status."""

    def __init__(self, status_code: int, message: str, details: str = ''):
        self.status_code = status_code
        self.details = details
        super().__init__(f"HTTP {status_code}: {message}")


class DiscordService:
    """Service for Discord API interactions."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.verify_key = VerifyKey(bytes.fromhex(config.public_key))

    def verify_signature(self, signature: str, timestamp: str, body: bytes) -> bool:
        """Verify Discord request signature."""
        try:
            message = timestamp.encode() + body
            self.verify_key.verify(message, bytes.fromhex(signature))
            return True
        except (BadSignatureError, ValueError) as e:
            logger.warning("Signature verification failed", error_type=type(e).__name__)
            return False

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bot {self.config.bot_token}",
            "Content-Type": "application/json"
        }

    def _request(self, method: str, path: str, payload: Any = None, correlation_id: str = None) -> Any:
        url = f"{self.config.api_base_url}{path}"
        headers = self._headers()
        if correlation_id:
            headers['X-Correlation-ID'] = correlation_id

        response = self.session.request(
            method,
            url,
            headers=headers,
            json=payload,
            timeout=self.config.request_timeout
        )

        if response.status_code not in (200, 201, 204):
            logger.error(
                "Discord API returned error",
                correlation_id=correlation_id,
                method=method,
                path=path,
                status_code=response.status_code,
                response_text=response.text[:200]
            )
            raise DiscordAPIError(response.status_code, f"{method} {path} failed", response.text[:200])

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def get_commands(self, correlation_id: str = None) -> List[Dict[str, Any]]:
        """List the global commands currently registered for the application."""
        return self._request(
            'GET',
            f"/applications/{self.config.application_id}/commands",
            correlation_id=correlation_id
        ) or []

    def bulk_overwrite_commands(self, commands: List[Dict[str, Any]], correlation_id: str = None) -> List[Dict[str, Any]]:
        """Replace the whole set of global commands in one call."""
        return self._request(
            'PUT',
            f"/applications/{self.config.application_id}/commands",
            payload=commands,
            correlation_id=correlation_id
        ) or []

    def create_invite(self, channel_id: str, target_application_id: str, correlation_id: str = None) -> Dict[str, Any]:
        """Create a voice channel invite that launches an embedded application."""
        payload = {
            'max_age': INVITE_MAX_AGE,
            'max_uses': INVITE_MAX_USES,
            'target_application_id': target_application_id,
            'target_type': InviteTargetType.EMBEDDED_APPLICATION,
            'temporary': False
        }
        logger.info(
            "Creating activity invite",
            correlation_id=correlation_id,
            channel_id=channel_id,
            target_application_id=target_application_id
        )
        return self._request(
            'POST',
            f"/channels/{channel_id}/invites",
            payload=payload,
            correlation_id=correlation_id
        )
