"""
Celery tasks for background processing.
"""

import logging
from dataclasses import asdict
from typing import Dict, Optional

from celery import shared_task
from django.conf import settings
from django.db import DatabaseError

from apps.calculators.application.dto import PruneResultDTO
from apps.calculators.infrastructure.persistence.repositories import SavedCalculationRepository

logger = logging.getLogger(__name__)


@shared_task(name="prune_saved_calculations")
def prune_saved_calculations(retention_days: Optional[int] = None) -> Dict:
    """
    Delete saved calculations older than the retention window.

    Args:
        retention_days: Age limit in days; defaults to CALCULATION_RETENTION_DAYS

    Returns:
        Dict with operation results
    """
    if retention_days is None:
        retention_days = settings.CALCULATION_RETENTION_DAYS

    if retention_days < 1:
        return asdict(PruneResultDTO(
            success=False,
            deleted=0,
            retention_days=retention_days,
            errors=["retention_days must be at least 1"],
        ))

    logger.info("Pruning saved calculations older than %s days", retention_days)

    try:
        deleted = SavedCalculationRepository.delete_older_than(retention_days)
    except DatabaseError as e:
        logger.exception("Pruning saved calculations failed")
        return asdict(PruneResultDTO(
            success=False,
            deleted=0,
            retention_days=retention_days,
            errors=[str(e)],
        ))

    logger.info("Deleted %s saved calculations", deleted)
    return asdict(PruneResultDTO(success=True, deleted=deleted, retention_days=retention_days))
