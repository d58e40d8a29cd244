import pytest

from apps.messaging.services import start_conversation


@pytest.fixture
def alice(make_employee):
    return make_employee(name='Alice', permissions=['Finance']).user


@pytest.fixture
def bob(make_employee):
    return make_employee(name='Bob', permissions=['Store Management']).user


@pytest.fixture
def carol(make_employee):
    return make_employee(name='Carol', permissions=['Quality Control']).user


@pytest.fixture
def direct_conversation(alice, bob):
    return start_conversation(creator=alice, participant_ids=[bob.id])
