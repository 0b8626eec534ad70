"""Shared pytest fixtures for servicekit tests."""

import pytest


# Every test starts from the same core settings and restores them afterwards.
@pytest.fixture(autouse=True)
def servicekit_settings():
    from servicekit.conf import settings

    with settings.override(
        ENVIRONMENT="test",
        WRAP_IN_TRANSACTION=True,
        TRANSACTION_PROVIDER="servicekit.services.transaction:NullTransactionProvider",
        WORKER_PROBE=None,
        QUEUE_BACKEND="inline",
        FORCE=False,
        SKIP_CALLBACKS=False,
    ) as s:
        yield s


# Reset queue registry between tests to avoid cross-test bleed
@pytest.fixture(autouse=True)
def reset_queue_registry():
    from servicekit.queues import registry as _reg

    saved = dict(_reg._QUEUE_REGISTRY)
    _reg._QUEUE_SINGLETONS.clear()
    yield
    _reg._QUEUE_REGISTRY.clear()
    _reg._QUEUE_REGISTRY.update(saved)
    _reg._QUEUE_SINGLETONS.clear()


# A queue backend that records jobs instead of running them
@pytest.fixture
def FakeQueue():
    from servicekit.queues import BaseServiceQueue

    class _FakeQueue(BaseServiceQueue):
        jobs: list = []

        def enqueue(self, job, *, queue=None) -> str:
            type(self).jobs.append({"job": job, "queue": queue})
            return f"JOB-{len(type(self).jobs)}"

    _FakeQueue.jobs = []
    return _FakeQueue


@pytest.fixture
def register_fake_queue(FakeQueue):
    def _register(name: str = "fake"):
        from servicekit.queues import register_queue, get_queue_instance

        register_queue(name, FakeQueue)
        # warm singleton
        get_queue_instance(name)
        return FakeQueue

    return _register


@pytest.fixture
def worker_alive(servicekit_settings):
    """Make the configured worker probe report a live worker."""

    class _AliveProbe:
        def is_alive(self) -> bool:
            return True

    servicekit_settings["WORKER_PROBE"] = _AliveProbe
    return _AliveProbe
