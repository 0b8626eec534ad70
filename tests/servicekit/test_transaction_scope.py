import pytest

from servicekit.services import ExecutionError, NullTransactionProvider, TransactionScope
from servicekit.services.transaction import TransactionProvider, get_transaction_provider


class RecordingProvider:
    def __init__(self):
        self.events = []

    def run_in_transaction(self, fn):
        self.events.append("begin")
        try:
            result = fn()
        except Exception:
            self.events.append("rollback-unwind")
            raise
        self.events.append("commit")
        return result

    def rollback_current(self):
        self.events.append("rollback-marked")


def test_value_is_returned_inside_the_boundary():
    provider = RecordingProvider()
    result = TransactionScope(provider, enabled=True).run(lambda: 5)
    assert result.ok and result.value == 5
    assert provider.events == ["begin", "commit"]


def test_execution_error_is_captured_and_rollback_requested():
    provider = RecordingProvider()

    def fail():
        raise ExecutionError("nope")

    result = TransactionScope(provider, enabled=True).run(fail)
    assert not result.ok
    assert isinstance(result.error, ExecutionError)
    assert provider.events == ["begin", "rollback-marked", "commit"]


def test_unexpected_error_unwinds_through_provider():
    provider = RecordingProvider()

    def boom():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        TransactionScope(provider, enabled=True).run(boom)
    assert provider.events == ["begin", "rollback-unwind"]


def test_disabled_scope_skips_provider():
    provider = RecordingProvider()
    result = TransactionScope(provider, enabled=False).run(lambda: "x")
    assert result.value == "x"
    assert provider.events == []


def test_enabled_defaults_to_setting(servicekit_settings):
    servicekit_settings["WRAP_IN_TRANSACTION"] = False
    assert TransactionScope().enabled is False
    servicekit_settings["WRAP_IN_TRANSACTION"] = "yes"
    assert TransactionScope().enabled is True


def test_provider_from_settings_accepts_path_class_or_instance(servicekit_settings):
    assert isinstance(get_transaction_provider(), NullTransactionProvider)

    servicekit_settings["TRANSACTION_PROVIDER"] = RecordingProvider
    assert isinstance(get_transaction_provider(), RecordingProvider)

    instance = RecordingProvider()
    servicekit_settings["TRANSACTION_PROVIDER"] = instance
    assert get_transaction_provider() is instance
    assert isinstance(instance, TransactionProvider)


def test_invalid_provider_is_rejected(servicekit_settings):
    servicekit_settings["TRANSACTION_PROVIDER"] = object()
    with pytest.raises(TypeError):
        get_transaction_provider()
