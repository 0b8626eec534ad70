from .celery import CeleryQueue

__all__ = ["CeleryQueue"]
