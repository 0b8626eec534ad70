import pytest

from servicekit.services import AmbiguousProcessError, BaseService, DefinitionError, ProcessResolver
from servicekit.services.resolver import DEFERRED_ENTRY, SYNC_ENTRY


def test_sync_entry_point():
    class Svc(BaseService):
        def process(self):
            return 1

    entry = ProcessResolver.resolve(Svc)
    assert entry.name == SYNC_ENTRY
    assert entry.deferred is False


def test_deferred_entry_point():
    class Svc(BaseService):
        def deferred_process(self):
            return 1

    entry = ProcessResolver.resolve(Svc)
    assert entry.name == DEFERRED_ENTRY
    assert entry.deferred is True


def test_no_entry_point_resolves_to_none():
    class Svc(BaseService):
        pass

    assert ProcessResolver.resolve(Svc) is None


def test_resolution_is_cached_per_type():
    class Svc(BaseService):
        def process(self):
            return 1

    first = ProcessResolver.resolve(Svc)
    assert ProcessResolver.resolve(Svc) is first
    assert "_servicekit_entry_point" in Svc.__dict__


def test_subtype_resolves_independently():
    class Parent(BaseService):
        def process(self):
            return 1

    ProcessResolver.resolve(Parent)

    class Child(Parent):
        def deferred_process(self):
            return 2

    with pytest.raises(AmbiguousProcessError):
        ProcessResolver.resolve(Child)
    assert ProcessResolver.resolve(Parent).name == SYNC_ENTRY


def test_both_entry_points_fail_at_construction_before_any_hook():
    calls = []

    class Both(BaseService):
        before_callbacks = ("hook",)

        def hook(self):
            calls.append("hook")

        def process(self):
            calls.append("process")

        def deferred_process(self):
            calls.append("deferred")

    with pytest.raises(DefinitionError):
        Both()
    with pytest.raises(AmbiguousProcessError):
        Both.call()
    assert calls == []
