import requests
import logging
import os
import time
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_WEBHOOK = os.getenv("ORDER_WEBHOOK_URL") or None
DEFAULT_RETRIES = int(os.getenv("ORDER_WEBHOOK_RETRIES", "3"))

ORDER_CREATED = "order.created"
ORDER_STATUS_CHANGED = "order.status_changed"


class OrderNotifier:
    """Posts order events to an external webhook (confirmation mails, fulfilment tools).

    With no webhook configured the notifier is disabled and ``notify`` returns
    False without sending anything. Delivery failures are logged, never raised.
    """

    def __init__(self, webhook_url: Optional[str] = None, max_retries: int = None, backoff: float = 0.5):
        self.webhook = webhook_url if webhook_url is not None else DEFAULT_WEBHOOK
        self.max_retries = max_retries if max_retries is not None else DEFAULT_RETRIES
        self.backoff = backoff
        logger.debug("OrderNotifier initialized with webhook=%s max_retries=%s", self.webhook, self.max_retries)

    @property
    def enabled(self) -> bool:
        return bool(self.webhook)

    def notify(self, event: str, payload: Dict[str, Any]) -> bool:
        if not self.enabled:
            logger.debug("Webhook disabled, skipping event=%s", event)
            return False

        headers = {"Content-Type": "application/json"}
        # same event for the same order must be processed once downstream
        if "order_id" in payload:
            headers["Idempotency-Key"] = f"{event}-{payload['order_id']}-{payload.get('status', '')}"
        body = {"event": event, **payload}

        for attempt in range(1, self.max_retries + 1):
            try:
                resp = requests.post(self.webhook, json=body, timeout=5, headers=headers)
                resp.raise_for_status()
                logger.info("Delivered event=%s status=%s", event, resp.status_code)
                return True
            except requests.RequestException as e:
                logger.warning("Attempt %s: failed to deliver event=%s: %s", attempt, event, e)
            if attempt < self.max_retries:
                time.sleep(self.backoff * attempt)
        logger.error("Giving up on event=%s after %s attempts", event, self.max_retries)
        return False
