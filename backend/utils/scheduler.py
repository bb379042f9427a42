# backend/utils/scheduler.py
import hashlib
import hmac
import logging
from datetime import datetime, timedelta
from typing import Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)


class SchedulerError(Exception):
    pass


class DeletionScheduler:
    """Client for the delayed-callback service that fires account deletions."""

    def __init__(
        self,
        base_url: str = None,
        token: str = None,
        signing_key: str = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport = None,
    ):
        self.base_url = (base_url if base_url is not None else settings.SCHEDULER_URL).rstrip("/")
        self.token = token if token is not None else settings.SCHEDULER_TOKEN
        self.signing_key = signing_key if signing_key is not None else settings.SCHEDULER_SIGNING_KEY
        self.timeout = timeout
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def schedule(self, callback_url: str, user_id: str, delay_seconds: int) -> Optional[str]:
        # Ask the service to POST {"userId": ...} to callback_url after the delay
        if not self.enabled:
            return None
        payload = {
            "url": callback_url,
            "body": {"userId": user_id},
            "delaySeconds": delay_seconds,
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(f"{self.base_url}/messages", json=payload, headers=self._headers())
                response.raise_for_status()
                return response.json().get("messageId")
        except (httpx.RequestError, httpx.HTTPStatusError, ValueError) as e:
            logger.error(f"Scheduler publish error: {e}")
            raise SchedulerError(str(e)) from e

    def cancel(self, message_id: str) -> None:
        if not self.enabled or not message_id:
            return
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.delete(f"{self.base_url}/messages/{message_id}", headers=self._headers())
                response.raise_for_status()
        except (httpx.RequestError, httpx.HTTPStatusError) as e:
            logger.error(f"Scheduler cancel error: {e}")
            raise SchedulerError(str(e)) from e

    def sign(self, body: bytes) -> str:
        return hmac.new(self.signing_key.encode("utf-8"), body, hashlib.sha256).hexdigest()

    def verify_callback_signature(self, body: bytes, signature: Optional[str]) -> bool:
        # Without a signing key callbacks are accepted unsigned (local development)
        if not self.signing_key:
            return True
        if not signature:
            return False
        return hmac.compare_digest(self.sign(body), signature)


def scheduled_time(now: datetime) -> datetime:
    return now + timedelta(hours=settings.ACCOUNT_DELETION_DELAY_HOURS)


deletion_scheduler = DeletionScheduler()


def get_scheduler() -> DeletionScheduler:
    return deletion_scheduler
