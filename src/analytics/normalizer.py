"""
Product List Normalizer

`orders.products` is stored either as a native list of line documents or,
for rows that came through an old import, as a single-quoted JSON-like
string such as::

    "[{'productId': 'a1...', 'quantity': 2, 'priceAtPurchase': 10}]"

Both forms normalize to an ordered list of `OrderLine`.
"""

import json
from enum import Enum
from typing import Any, List

import structlog
from pydantic import ValidationError

from src.analytics.errors import MalformedProductList
from src.database.models import OrderLine

logger = structlog.get_logger(__name__)


class MalformedListPolicy(str, Enum):
    """What to do with a legacy string that does not parse to a list"""
    DEGRADE_TO_EMPTY = "degrade_to_empty"
    RAISE = "raise"


def parse_legacy_products(raw: str) -> List[Any]:
    """
    Parse the legacy string form.

    Every single quote becomes a double quote before JSON parsing.

    Raises:
        MalformedProductList: If the text is not JSON or not a JSON array
    """
    try:
        parsed = json.loads(raw.replace("'", '"'))
    except (ValueError, RecursionError) as e:
        # Deeply nested arrays exhaust the decoder stack
        raise MalformedProductList(f"Unparseable product list: {type(e).__name__}: {e}") from e

    if not isinstance(parsed, list):
        raise MalformedProductList(
            f"Product list parsed to {type(parsed).__name__}, expected list"
        )
    return parsed


def _to_lines(items: List[Any]) -> List[OrderLine]:
    lines = []
    for item in items:
        if isinstance(item, OrderLine):
            lines.append(item)
            continue
        try:
            lines.append(OrderLine.model_validate(item))
        except ValidationError as e:
            logger.debug("Dropping unreadable order line", item=repr(item), errors=e.error_count())
    return lines


def normalize_products(
    raw: Any,
    policy: MalformedListPolicy = MalformedListPolicy.DEGRADE_TO_EMPTY,
) -> List[OrderLine]:
    """
    Normalize a stored product list.

    Args:
        raw: Native list, legacy string, or anything else read from the field
        policy: Handling of unparseable legacy strings. The default returns
            an empty list without telling the caller.

    Returns:
        List of order lines in stored order; lines whose fields cannot be
        read are dropped
    """
    if isinstance(raw, (list, tuple)):
        return _to_lines(list(raw))

    if isinstance(raw, str):
        try:
            return _to_lines(parse_legacy_products(raw))
        except MalformedProductList:
            if policy == MalformedListPolicy.RAISE:
                raise
            logger.debug("Legacy product list degraded to empty", raw=raw[:200])
            return []

    return []
