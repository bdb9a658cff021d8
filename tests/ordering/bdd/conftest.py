"""Shared BDD fixtures for the Ordering domain."""

import pytest


@pytest.fixture()
def context():
    """Mutable scenario state shared between steps."""
    return {"cart_id": None, "checkout_id": None, "order_id": None, "error": None, "patches": []}


@pytest.fixture(autouse=True)
def _stop_patches(context):
    yield
    for patcher in context["patches"]:
        patcher.stop()
