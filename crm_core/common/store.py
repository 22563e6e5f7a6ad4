# backend/crm_core/common/store.py
from __future__ import annotations

import functools
import logging
from typing import Callable, TypeVar

from django.db import InterfaceError, OperationalError

from crm_core.common.api.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


def store_guard(fn: F) -> F:
    """
    Fail closed when the record store is unreachable.

    Connection-level failures (OperationalError / InterfaceError) become
    StoreUnavailable so callers can tell an outage apart from "no rows".
    Integrity and data errors are not touched; services handle those.

    Apply OUTSIDE @transaction.atomic so the rollback happens first.
    """

    @functools.wraps(fn)
    def _wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error("Record store unavailable during %s: %s", fn.__qualname__, exc)
            raise StoreUnavailable() from exc

    return _wrapper  # type: ignore[return-value]
