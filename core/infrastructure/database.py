"""
Database utilities shared by the ORM repositories.
"""

import contextlib
import logging
from typing import Iterator

from django.db import InterfaceError, OperationalError

from core.domain.exceptions import UpstreamFailureError

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def translate_database_errors(operation: str) -> Iterator[None]:
    """
    Turn connectivity failures into UpstreamFailureError.

    Integrity and programming errors pass through unchanged.

    Usage:
        with translate_database_errors("licenses.find_by_key"):
            # Database operations
            pass
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logger.error("Database unavailable during %s: %s", operation, e, exc_info=True)
        raise UpstreamFailureError("Datastore unavailable") from e
