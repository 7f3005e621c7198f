import pytest
from rest_framework.test import APIClient

from core.celery import app as celery_app


@pytest.fixture(autouse=True, scope="session")
def celery_eager():
    """Run Celery tasks in-process during tests."""
    # The app uses namespace="CELERY", so settings live under CELERY_* keys.
    celery_app.conf.update(
        CELERY_TASK_ALWAYS_EAGER=True,
        CELERY_TASK_EAGER_PROPAGATES=True,
    )
    yield


@pytest.fixture
def api_client():
    """DRF API client."""
    return APIClient()
