"""Fixtures for the Ordering domain.

Ordering tests run inside the ordering domain context. The catalogue and
identity domains are initialised too, because the API resolves products and
actors through them.
"""

import os

import pytest


@pytest.fixture(scope="session")
def _domains(request):
    """Initialize ordering, catalogue and identity once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    identity.init()
    catalogue.init()
    ordering.init()
    return {"ordering": ordering, "catalogue": catalogue, "identity": identity}


@pytest.fixture(scope="session", autouse=True)
def setup_db(_domains):
    from shared.utils.db import drop_db, setup_db

    for domain in _domains.values():
        setup_db(domain)

    yield

    for domain in _domains.values():
        drop_db(domain)


def _reset(domain):
    from protean import current_domain

    with domain.domain_context():
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        for _, broker in current_domain.brokers.items():
            broker._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def run_around_tests(_domains):
    """Push the ordering context before each test, cleanup every domain after."""
    ctx = _domains["ordering"].domain_context()
    ctx.push()

    yield

    ctx.pop()
    for domain in _domains.values():
        _reset(domain)


# ---------------------------------------------------------------------------
# Product references, as resolved from the catalogue for AddToCart
# ---------------------------------------------------------------------------
@pytest.fixture()
def product_a():
    return {
        "product_id": "prod-a",
        "name": "Product A",
        "unit_price": 50.0,
        "image": "https://img/a.jpg",
        "stock_count": 10,
        "in_stock": True,
    }


@pytest.fixture()
def product_b():
    return {
        "product_id": "prod-b",
        "name": "Product B",
        "unit_price": 30.0,
        "image": "https://img/b.jpg",
        "stock_count": 1,
        "in_stock": True,
    }


@pytest.fixture()
def sold_out():
    return {
        "product_id": "prod-x",
        "name": "Sold Out Lamp",
        "unit_price": 20.0,
        "image": None,
        "stock_count": 0,
        "in_stock": False,
    }


@pytest.fixture()
def shipping_details():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
        "street": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "United States",
    }


@pytest.fixture()
def card_details():
    return {
        "card_number": "4242 4242 4242 4242",
        "card_name": "Jane Doe",
        "expiry": "12/29",
        "cvv": "123",
    }
