"""Decorators for bridge services."""

import functools

from iconbox.config.logging import get_logger
from iconbox.exceptions import IconboxError

from .bridge_types import bridge_error, bridge_ok, error_code, to_payload

logger = get_logger(__name__)


def bridge_command(method):
    """Decorator: wrap a service method's result or exception in a bridge envelope.

    Library errors become error envelopes with their code; anything else is
    logged with its traceback and reported as ``internal``.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return bridge_ok(to_payload(method(self, *args, **kwargs)))
        except IconboxError as e:
            logger.warning("%s failed: %s", method.__name__, e)
            return bridge_error(e.message, error_code(e))
        except Exception as e:
            logger.exception("Unexpected error in %s", method.__name__)
            return bridge_error(str(e))

    return wrapper
