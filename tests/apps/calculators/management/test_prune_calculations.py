from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.calculators.infrastructure.persistence.models import SavedCalculation
from tests.apps.calculators.factories import create_calculation


@pytest.mark.django_db
class TestPruneCalculationsCommand:
    """Tests for the prune_calculations management command."""

    def test_sync_mode(self):
        create_calculation(age_days=60)
        create_calculation(age_days=1)
        out = StringIO()

        call_command("prune_calculations", "--days", "30", "--sync", stdout=out)

        assert "Deleted 1 saved calculations" in out.getvalue()
        assert SavedCalculation.objects.count() == 1

    def test_dispatches_task(self):
        create_calculation(age_days=60)
        out = StringIO()

        call_command("prune_calculations", "--days", "30", stdout=out)

        assert "Task dispatched with ID" in out.getvalue()
        assert SavedCalculation.objects.count() == 0

    def test_rejects_non_positive_days(self):
        with pytest.raises(CommandError):
            call_command("prune_calculations", "--days", "0", "--sync", stdout=StringIO())
