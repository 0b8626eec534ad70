import pytest

from servicekit.services import BaseService, ExecutionError, service


class ChargeCard(BaseService):
    def __init__(self, amount: int, currency: str = "USD", declined: bool = False, **extra):
        self.amount = amount
        self.currency = currency
        self.declined = declined
        self.extra = extra

    def process(self):
        if self.declined:
            self.errors.add("card declined")
            return None
        self.notices.add(f"charged {self.amount} {self.currency}")
        return {"amount": self.amount, "currency": self.currency, **self.extra}


class Checkout(BaseService):
    charge = service(ChargeCard, currency="EUR")

    def __init__(self, amount: int, declined: bool = False):
        self.amount = amount
        self.declined = declined

    def process(self):
        self.notices.add("checkout started")
        receipt = self.charge(amount=self.amount, declined=self.declined)
        return receipt


def test_child_notices_are_merged_after_host_entries():
    svc = Checkout(amount=10)
    assert svc.call() == {"amount": 10, "currency": "EUR"}
    assert svc.notices.messages == ["checkout started", "charged 10 EUR"]


def test_child_failure_is_recorded_on_the_host():
    svc = Checkout(amount=10, declined=True)
    with pytest.raises(ExecutionError) as exc_info:
        svc.call()
    assert exc_info.value.messages == ["card declined"]


def test_host_context_feeds_child_parameters():
    class Host(BaseService):
        charge = service(ChargeCard)

        def __init__(self):
            self.context = {"amount": 1, "order": "A-1"}

        def process(self):
            return self.charge(currency="GBP")

    assert Host.call() == {"amount": 1, "currency": "GBP", "order": "A-1"}


def test_explicit_handler_replaces_merge():
    seen = []

    class Host(BaseService):
        charge = service(ChargeCard)

        def process(self):
            return self.charge(amount=5, handler=lambda value, outcome: seen.append(outcome.notice))

    svc = Host()
    assert svc.call() == {"amount": 5, "currency": "USD"}
    assert seen == ["charged 5 USD"]
    assert svc.notices.messages == []


def test_descriptor_on_class_returns_declaration():
    assert isinstance(Checkout.charge, service)
    assert Checkout.charge.service_cls is ChargeCard


def test_child_failure_propagates_into_a_forced_host():
    trail = []

    class Host(BaseService):
        charge = service(ChargeCard, declined=True)

        def process(self):
            self.notices.add("host started")
            self.charge(amount=3)
            trail.append("after charge")
            return "host value"

    svc = Host()
    with pytest.raises(ExecutionError) as exc_info:
        svc.call(force=True)
    assert exc_info.value.messages == ["card declined"]
    assert svc.errors.messages == ["card declined"]
    assert svc.notices.messages == ["host started"]
    assert trail == []


def test_handler_returning_a_value_consumes_child_failure():
    class Host(BaseService):
        charge = service(ChargeCard, declined=True)

        def process(self):
            return self.charge(amount=3, handler=lambda value, outcome: {"declined": outcome.errors})

    assert Host.call() == {"declined": ["card declined"]}


def test_helper_is_exported_from_the_packages():
    import servicekit
    import servicekit.services

    assert servicekit.services.service is service
    assert servicekit.service is service
    assert isinstance(service, type)
