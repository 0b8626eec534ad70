import types

import pytest

from servicekit.queues import ServiceJob, get_queue_instance
from servicekit.services import BaseService, ServiceDispatchError
from servicekit_django.queues.celery import CeleryQueue


class Report(BaseService):
    def __init__(self, account_id: int):
        self.account_id = account_id

    def deferred_process(self):
        return {"account": self.account_id}


@pytest.fixture
def fake_apply_async(monkeypatch):
    calls = {}

    def _apply_async(args=None, kwargs=None, queue=None, **options):
        calls["apply_async"] = {"args": args, "kwargs": kwargs, "queue": queue, "options": options}
        return types.SimpleNamespace(id="TASK-XYZ")

    import servicekit_django.tasks as tasks_mod

    monkeypatch.setattr(tasks_mod.run_service_job, "apply_async", _apply_async)
    return calls


def test_celery_backend_registered_by_app_ready():
    assert isinstance(get_queue_instance("celery"), CeleryQueue)


def test_enqueue_makes_task_call(fake_apply_async, servicekit_settings):
    servicekit_settings["CELERY_QUEUE"] = "services"
    job = ServiceJob(service="billing:Report", params={"account_id": 7}, traceparent="00-a-b-01")

    task_id = CeleryQueue().enqueue(job)

    assert task_id == "TASK-XYZ"
    call = fake_apply_async["apply_async"]
    assert call["queue"] == "services"
    assert call["kwargs"] == {"service": "billing:Report", "params": {"account_id": 7}, "traceparent": "00-a-b-01"}


def test_explicit_queue_wins_over_setting(fake_apply_async, servicekit_settings):
    servicekit_settings["CELERY_QUEUE"] = "services"
    CeleryQueue().enqueue(ServiceJob(service="x:Y"), queue="priority")
    assert fake_apply_async["apply_async"]["queue"] == "priority"


def test_deferred_service_enqueues_through_celery(fake_apply_async, servicekit_settings):
    servicekit_settings.update(ENVIRONMENT="production", QUEUE_BACKEND="celery")

    assert Report.call(account_id=3) == "TASK-XYZ"
    sent = fake_apply_async["apply_async"]["kwargs"]
    assert sent["service"] == Report.identifier()
    assert sent["params"] == {"account_id": 3}


def test_broker_failure_becomes_dispatch_error(monkeypatch, servicekit_settings):
    import servicekit_django.tasks as tasks_mod

    def _down(*args, **kwargs):
        raise ConnectionError("broker unreachable")

    monkeypatch.setattr(tasks_mod.run_service_job, "apply_async", _down)
    servicekit_settings.update(ENVIRONMENT="production", QUEUE_BACKEND="celery")
    with pytest.raises(ServiceDispatchError):
        Report.call(account_id=1)


def test_task_body_runs_the_deferred_entry_point():
    from servicekit_django.tasks import run_service_job

    # calling the task object directly runs it in-process
    assert run_service_job(service=Report.identifier(), params={"account_id": 9}) == {"account": 9}
