from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.calculators.application.tasks import prune_saved_calculations


class Command(BaseCommand):
    help = 'Delete saved calculations older than the retention window'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            dest='days',
            type=int,
            default=None,
            help='Retention window in days (defaults to CALCULATION_RETENTION_DAYS)'
        )
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Execute synchronously instead of using Celery task queue'
        )

    def handle(self, **options):
        days = options['days']
        if days is None:
            days = settings.CALCULATION_RETENTION_DAYS

        if days < 1:
            raise CommandError('--days must be at least 1')

        self.stdout.write(
            self.style.SUCCESS(
                f'Pruning saved calculations older than {days} days...'
            )
        )

        if options['sync']:
            self.stdout.write('Running in synchronous mode...')
            result = prune_saved_calculations(days)

            if not result['success']:
                raise CommandError(f"Failed: {'; '.join(result['errors']) or 'Unknown error'}")

            self.stdout.write(
                self.style.SUCCESS(
                    f"Deleted {result['deleted']} saved calculations"
                )
            )
        else:
            self.stdout.write('Dispatching Celery task...')
            task = prune_saved_calculations.delay(days)

            self.stdout.write(
                self.style.SUCCESS(
                    f'Task dispatched with ID: {task.id}'
                )
            )
            self.stdout.write(
                'Use "celery -A core inspect active" to check task status'
            )
