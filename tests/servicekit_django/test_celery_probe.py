import types

from servicekit.services import AsyncDispatchDecision, DispatchMode
from servicekit_django.probes import CeleryWorkerProbe


def _app(replies, seen=None):
    def inspect(timeout=None):
        if seen is not None:
            seen["timeout"] = timeout
        return types.SimpleNamespace(ping=lambda: replies)

    return types.SimpleNamespace(control=types.SimpleNamespace(inspect=inspect))


def test_probe_reports_live_worker():
    seen = {}
    probe = CeleryWorkerProbe(timeout=0.25, app=_app({"celery@host": {"ok": "pong"}}, seen))
    assert probe.is_alive() is True
    assert seen["timeout"] == 0.25


def test_probe_without_replies():
    assert CeleryWorkerProbe(app=_app(None)).is_alive() is False
    assert CeleryWorkerProbe(app=_app({})).is_alive() is False


def test_probe_timeout_defaults_to_setting(servicekit_settings):
    servicekit_settings["WORKER_PROBE_TIMEOUT"] = 2.5
    assert CeleryWorkerProbe().timeout == 2.5


def test_probe_drives_dispatch_decision(servicekit_settings):
    alive = CeleryWorkerProbe(app=_app({"celery@host": {"ok": "pong"}}))
    dead = CeleryWorkerProbe(app=_app(None))
    servicekit_settings["ENVIRONMENT"] = "development"

    servicekit_settings["WORKER_PROBE"] = alive
    assert AsyncDispatchDecision().decide() is DispatchMode.ENQUEUE
    servicekit_settings["WORKER_PROBE"] = dead
    assert AsyncDispatchDecision().decide() is DispatchMode.INLINE
