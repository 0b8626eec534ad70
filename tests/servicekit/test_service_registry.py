import pytest

from servicekit.exceptions import RegistryLookupError
from servicekit.services import BaseService, ServiceRegistry, resolve_service


class Registered(BaseService):
    def process(self):
        return "registered"


def test_subclasses_register_themselves():
    assert ServiceRegistry.get(Registered.identifier()) is Registered
    assert Registered.identifier() in ServiceRegistry.identifiers()


def test_identifier_format():
    assert Registered.identifier() == f"{Registered.__module__}:Registered"


def test_resolve_imports_unregistered_modules(monkeypatch):
    ident = Registered.identifier()
    monkeypatch.delitem(ServiceRegistry._store, ident)
    assert ServiceRegistry.get(ident) is None

    assert resolve_service(ident) is Registered
    assert ServiceRegistry.get(ident) is Registered


def test_resolve_rejects_importable_non_services():
    with pytest.raises(RegistryLookupError):
        resolve_service("servicekit.services.transaction:NullTransactionProvider")


def test_unknown_identifier_raises_lookup_error():
    with pytest.raises(RegistryLookupError):
        resolve_service("nowhere.at_all:Missing")
    with pytest.raises(LookupError):
        resolve_service("tests.somewhere:func.<locals>.Gone")


def test_redefinition_replaces_previous_class():
    def make():
        class Local(BaseService):
            def process(self):
                return 1

        return Local

    first = make()
    second = make()
    assert ServiceRegistry.get(second.identifier()) is second
    assert first.identifier() == second.identifier()


def test_register_rejects_non_classes():
    with pytest.raises(TypeError):
        ServiceRegistry.register("not a class")
