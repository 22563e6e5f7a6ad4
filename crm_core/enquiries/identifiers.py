# backend/crm_core/enquiries/identifiers.py
from __future__ import annotations

import datetime
import logging
import threading
from typing import Callable

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Max

from crm_core.common.api.exceptions import ConflictError
from crm_core.enquiries.models import Enquiry

logger = logging.getLogger(__name__)

DEFAULT_ALLOCATION_ATTEMPTS = 5


def format_enquiry_id(seq: int) -> str:
    return f"ENQ-{seq:04d}"


def format_matter_code(year: int, number: int) -> str:
    return f"MAT-{year}-{number:03d}"


class IdentifierGenerator:
    """
    Mints human-readable identifiers from the durable store.

    Enquiry ids:  ENQ-0001, one past the highest enquiry_seq on record.
    Matter codes: MAT-2025-001, one past the number of other enquiries
                  converted in the same calendar year.

    Read-then-derive races, so the generator owns a mutex and every
    "read, compute, insert" runs inside it. Unique constraints on
    enquiry_seq / enquiry_id / matter_code catch writers in other
    processes; a lost race is retried with a fresh read.
    """

    def __init__(self, lock: threading.Lock | None = None, *, max_attempts: int | None = None):
        self._lock = lock if lock is not None else threading.Lock()
        self._max_attempts = max_attempts

    @property
    def lock(self):
        return self._lock

    @property
    def max_attempts(self) -> int:
        if self._max_attempts is not None:
            return self._max_attempts
        return int(getattr(settings, "CRM_ID_ALLOCATION_ATTEMPTS", DEFAULT_ALLOCATION_ATTEMPTS))

    def _atomic(self):
        return transaction.atomic()

    # -----------------------------
    # Enquiry ids
    # -----------------------------

    def next_enquiry_seq(self) -> int:
        current = Enquiry.objects.aggregate(m=Max("enquiry_seq"))["m"] or 0
        return current + 1

    def next_enquiry_id(self) -> str:
        return format_enquiry_id(self.next_enquiry_seq())

    def allocate_enquiry(self, build: Callable[[int, str], Enquiry]) -> Enquiry:
        """
        Run build(seq, enquiry_id) inside the critical section and one transaction.

        build must insert the enquiry (and anything that has to commit with it,
        such as its audit entry) and return it.
        """
        attempts = self.max_attempts
        with self._lock:
            for attempt in range(1, attempts + 1):
                try:
                    with self._atomic():
                        seq = self.next_enquiry_seq()
                        return build(seq, format_enquiry_id(seq))
                except IntegrityError as exc:
                    logger.warning(
                        "Enquiry id allocation collided (attempt %d/%d): %s",
                        attempt,
                        attempts,
                        exc,
                    )

        raise ConflictError(f"Could not allocate an enquiry id after {attempts} attempts.")

    # -----------------------------
    # Matter codes
    # -----------------------------

    def next_matter_code(self, conversion_date: datetime.date, *, exclude_pk: int | None = None) -> str:
        """
        Caller holds self.lock while the returned code is written.
        """
        # Imported here: payments depends on enquiries.
        from crm_core.payments.models import Payment

        year = conversion_date.year
        converted = Enquiry.objects.filter(
            conversion_date__gte=datetime.date(year, 1, 1),
            conversion_date__lte=datetime.date(year, 12, 31),
        )
        if exclude_pk is not None:
            converted = converted.exclude(pk=exclude_pk)

        number = converted.count() + 1
        code = format_matter_code(year, number)

        # Deletions can leave the count below a code that is still in use,
        # either on an enquiry or on a payment that outlived its enquiry.
        while (
            Enquiry.objects.filter(matter_code=code).exists()
            or Payment.objects.filter(matter_code=code).exists()
        ):
            number += 1
            code = format_matter_code(year, number)
        return code


default_generator = IdentifierGenerator()
