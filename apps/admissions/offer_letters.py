# apps/admissions/offer_letters.py
"""
Offer letter generation hook.

The PDF itself is produced outside this app. ``ADMISSIONS_OFFER_LETTER_GENERATOR``
names a callable ``(admission, admitted_at) -> str`` whose return value is
stored on the admission as the offer letter reference.
"""
import logging
from datetime import timedelta

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


def reference_offer_letter(admission, admitted_at):
    """Default generator: reserve the media path the rendering job writes to."""
    valid_until = admitted_at + timedelta(days=settings.ADMISSIONS_OFFER_LETTER_VALID_DAYS)
    reference = f"{settings.MEDIA_URL}offer-letters/{admission.temporary_id}.pdf"
    logger.info(
        "Offer letter reserved",
        extra={
            "temporary_id": admission.temporary_id,
            "reference": reference,
            "valid_until": valid_until.isoformat(),
        },
    )
    return reference


def get_offer_letter_generator():
    return import_string(settings.ADMISSIONS_OFFER_LETTER_GENERATOR)
