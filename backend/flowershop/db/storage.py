from typing import Any
import json
import logging

from sqlalchemy.exc import IntegrityError

from flowershop.db.session import get_session
from flowershop.models.storage import StoredRecord

logger = logging.getLogger(__name__)

SHOP_SCOPE = "shop"

ORDERS_KEY = "orders"
USER_KEY = "user"
CART_KEY = "cart"


def read_record(scope: str, key: str, default: Any = None) -> Any:
    """Return the decoded value under (scope, key), or ``default`` when absent.

    A value that no longer parses is treated as absent: the row is deleted so
    the next write starts clean.
    """
    session = get_session()
    try:
        record = session.get(StoredRecord, (scope, key))
        if record is None:
            return default
        try:
            return json.loads(record.value)
        except ValueError as e:
            logger.warning("Dropping malformed record scope=%s key=%s: %s", scope, key, e)
            session.delete(record)
            session.commit()
            return default
    finally:
        session.close()


def write_record(scope: str, key: str, value: Any) -> None:
    """Insert or overwrite the value under (scope, key).

    Two writers can both miss the row and race to insert it; the loser rolls
    back and retries as an update.
    """
    encoded = json.dumps(value)
    session = get_session()
    try:
        for attempt in range(2):
            record = session.get(StoredRecord, (scope, key))
            if record is None:
                record = StoredRecord(scope=scope, key=key, value=encoded)
            else:
                record.value = encoded
            session.add(record)
            try:
                session.commit()
                return
            except IntegrityError:
                session.rollback()
                if attempt:
                    raise
                logger.debug("Insert race on scope=%s key=%s, retrying as update", scope, key)
    finally:
        session.close()


def remove_record(scope: str, key: str) -> None:
    session = get_session()
    try:
        record = session.get(StoredRecord, (scope, key))
        if record is not None:
            session.delete(record)
            session.commit()
    finally:
        session.close()
