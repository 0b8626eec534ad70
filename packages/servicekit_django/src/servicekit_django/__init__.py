"""Django integration for servicekit: ``transaction.atomic`` boundary, Celery queue and worker probe."""
