"""
JSON Field Helpers

Ingredients, instructions, tags, score breakdowns and weather snapshots are
stored as serialized JSON text. Older rows were sometimes written twice-encoded
or truncated, so reads go through parse_or_default instead of json.loads.
"""

import json
import logging

logger = logging.getLogger(__name__)


def parse_or_default(value, default):
    """
    Best-effort parse of a stored JSON field.

    Returns the parsed value when it has the same container type as
    `default` (list or dict), otherwise `default`. Handles values that were
    JSON-encoded twice and values that are already decoded.
    """
    if value is None or value == '':
        return default

    parsed = value
    if isinstance(parsed, (bytes, bytearray)):
        parsed = parsed.decode('utf-8', errors='replace')

    if isinstance(parsed, str):
        try:
            parsed = json.loads(parsed)
            # Double-encoded: the first pass yields another JSON string
            if isinstance(parsed, str):
                parsed = json.loads(parsed)
        except (json.JSONDecodeError, TypeError, ValueError):
            logger.warning("Unparseable JSON field, using default: %.60r", value)
            return default

    if default is not None and not isinstance(parsed, type(default)):
        logger.warning("JSON field has type %s, expected %s",
                       type(parsed).__name__, type(default).__name__)
        return default
    return parsed


def dump_field(value):
    """Serialize a field for storage; None stays NULL."""
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)
