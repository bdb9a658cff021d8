"""Checkout form checks.

Each check returns a dict of ``field -> [message]`` in the shape Protean's
``ValidationError`` expects; an empty dict means the form is acceptable.
"""

import re

from ordering.shared.address import ADDRESS_FIELDS

CARD_NUMBER_PATTERN = re.compile(r"[0-9]{16}")
EXPIRY_PATTERN = re.compile(r"[0-9]{2}/[0-9]{2}")
CVV_PATTERN = re.compile(r"[0-9]{3,4}")

SHIPPING_MESSAGES = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "email": "Email is required",
    "street": "Address is required",
    "city": "City is required",
    "state": "State is required",
    "zip_code": "ZIP code is required",
    "country": "Country is required",
}


def _blank(value):
    return value is None or not str(value).strip()


def normalize_card_number(card_number):
    return re.sub(r"\s", "", card_number or "")


def shipping_errors(fields: dict) -> dict:
    return {name: [SHIPPING_MESSAGES[name]] for name in ADDRESS_FIELDS if _blank(fields.get(name))}


def payment_errors(card_number, card_name, expiry, cvv) -> dict:
    errors = {}
    if not CARD_NUMBER_PATTERN.fullmatch(normalize_card_number(card_number)):
        errors["card_number"] = ["Enter a valid 16-digit card number"]
    if _blank(card_name):
        errors["card_name"] = ["Cardholder name is required"]
    if not EXPIRY_PATTERN.fullmatch(expiry or ""):
        errors["expiry"] = ["Enter expiry as MM/YY"]
    if not CVV_PATTERN.fullmatch(cvv or ""):
        errors["cvv"] = ["Enter a valid CVV"]
    return errors
