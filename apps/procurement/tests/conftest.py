import pytest


@pytest.fixture
def procurement_employee(make_employee):
    return make_employee(permissions=['Procurement'], role='Procurement Officer', department='Procurement')


@pytest.fixture
def procurement_client(client_for, procurement_employee):
    return client_for(procurement_employee.user)


@pytest.fixture
def store_clerk(make_employee):
    return make_employee(permissions=['Store Management:view', 'Store Management:create'], role='Store Clerk')


@pytest.fixture
def supplier(make_supplier):
    return make_supplier(name='Bwambale Coffee Farm', origin='Kasese')
