"""
auth/validation.py -- Field-level validation for adapter configuration.

The administrator sees one fixed message for any malformed address, whatever
the underlying reason. The codec's own error text is logged at DEBUG only.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from core.address import InvalidAddressFormat, parse_ipv4
from core.config import INVALID_ADDRESS_MESSAGE

if TYPE_CHECKING:
    from auth.models import AdapterDescriptor

logger = logging.getLogger("subnetauthn.validation")


class FieldValidationError(ValueError):
    """A configuration field value was rejected."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def validate_ipv4_field(name: str, value: str) -> None:
    """Raise FieldValidationError unless value is a valid dotted quad."""
    try:
        parse_ipv4(value)
    except InvalidAddressFormat as exc:
        logger.debug("Rejected %r for field %r: %s", value, name, exc)
        raise FieldValidationError(name, INVALID_ADDRESS_MESSAGE) from exc


def validate_configuration(descriptor: AdapterDescriptor, values: Mapping[str, str]) -> dict[str, str]:
    """Run every field validator against the candidate values.

    Fields absent from values are checked against their default. Returns a
    {field_name: message} dict; empty means the configuration is acceptable.
    """
    errors: dict[str, str] = {}
    for f in descriptor.fields:
        value = values.get(f.name, f.default)
        for validator in f.validators:
            try:
                validator(f.name, value)
            except FieldValidationError as exc:
                errors[f.name] = exc.message
                break
    return errors
