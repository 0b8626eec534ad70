import pytest

from servicekit.services import BaseService, CallbackRegistry


def test_registry_keeps_registration_order():
    reg = CallbackRegistry("Svc")
    reg.register_before("a")
    reg.register_before("b")
    reg.register_after("z")
    assert reg.before == ("a", "b")
    assert reg.after == ("z",)


def test_registry_rejects_non_string_names():
    reg = CallbackRegistry("Svc")
    with pytest.raises(TypeError):
        reg.register_before(123)
    with pytest.raises(TypeError):
        reg.register_after("")


def test_derive_copies_lists():
    parent = CallbackRegistry("Parent", before=("a",))
    child = parent.derive("Child")
    child.register_before("b")
    parent.register_before("c")
    assert parent.before == ("a", "c")
    assert child.before == ("a", "b")


def test_class_body_declarations_are_registered():
    class Svc(BaseService):
        before_callbacks = ("load", "check")
        after_callbacks = "notify"

        def process(self):
            return None

    assert Svc._callbacks.before == ("load", "check")
    assert Svc._callbacks.after == ("notify",)


def test_subtype_registration_does_not_leak_to_parent_or_siblings():
    class Parent(BaseService):
        before_callbacks = ("a",)

        def process(self):
            return None

    class ChildOne(Parent):
        before_callbacks = ("b",)

    class ChildTwo(Parent):
        pass

    ChildOne.register_before("c")
    Parent.register_after("p")

    assert Parent._callbacks.before == ("a",)
    assert ChildOne._callbacks.before == ("a", "b", "c")
    assert ChildTwo._callbacks.before == ("a",)
    # registered on the parent after the children were created
    assert ChildOne._callbacks.after == ()
    assert Parent._callbacks.after == ("p",)


def test_each_type_owns_its_registry():
    class A(BaseService):
        def process(self):
            return None

    class B(BaseService):
        def process(self):
            return None

    assert A._callbacks is not B._callbacks
    assert A._callbacks is not BaseService._callbacks
