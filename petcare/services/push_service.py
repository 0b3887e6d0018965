import logging
from threading import Lock
from typing import List, Optional

from ..config import FIREBASE_CREDENTIALS_PATH

logger = logging.getLogger(__name__)


class PushSender:
    """Firebase Cloud Messaging sender, initialized lazily on first use"""

    def __init__(self, credentials_path: Optional[str] = None):
        self._credentials_path = (
            FIREBASE_CREDENTIALS_PATH if credentials_path is None else credentials_path
        ).strip()
        self._lock = Lock()
        self._initialized = False
        self._enabled = False
        self._messaging = None

    @property
    def enabled(self) -> bool:
        self._ensure_initialized()
        return self._enabled

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        with self._lock:
            if self._initialized:
                return
            if not self._credentials_path:
                self._initialized = True
                self._enabled = False
                logger.info("Push sender disabled: FIREBASE_CREDENTIALS_PATH not set")
                return

            import firebase_admin
            from firebase_admin import credentials, messaging

            try:
                cred = credentials.Certificate(self._credentials_path)
                if not firebase_admin._apps:  # pylint: disable=protected-access
                    firebase_admin.initialize_app(cred)
                self._messaging = messaging
                self._enabled = True
                logger.info("Push sender initialized")
            except Exception:
                self._enabled = False
                logger.exception("Push sender disabled: Firebase init failed")
            finally:
                self._initialized = True

    def send(self, tokens: List[str], title: str, body: str, data: Optional[dict] = None) -> int:
        """Send one notification to every token; returns the number delivered"""
        self._ensure_initialized()
        if not self._enabled or not tokens:
            return 0
        try:
            message = self._messaging.MulticastMessage(
                notification=self._messaging.Notification(title=title, body=body),
                tokens=tokens,
                data={key: str(value) for key, value in (data or {}).items()},
            )
            batch = self._messaging.send_each_for_multicast(message)
            if batch.failure_count:
                logger.warning(f"⚠️ Push delivery failed for {batch.failure_count}/{len(tokens)} tokens")
            return batch.success_count
        except Exception:
            logger.exception("Push send failed")
            return 0


push_sender = PushSender()
