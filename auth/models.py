"""
auth/models.py -- Descriptor dataclasses for the subnet adapter.

Pattern: Data class (pure data container, zero logic). The descriptor is the
static capability declaration a hosting server reads: which attributes the
adapter returns and which configuration fields an administrator fills in.

Layer rule: no imports from api/.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

# A field validator receives (field_name, value) and raises
# auth.validation.FieldValidationError when the value is rejected.
FieldValidator = Callable[[str, str], None]


@dataclass(frozen=True)
class FieldDescriptor:
    """One free-text configuration field shown to the administrator."""

    name: str  # also the key in the configuration mapping
    description: str
    default: str = ""
    validators: tuple[FieldValidator, ...] = ()


@dataclass(frozen=True)
class AdapterDescriptor:
    """Metadata advertised to the host: contract and configuration GUI.

    contract lists the attribute names returned on SUCCESS. supports_extended_contract
    is False -- the contract is fixed at ip_address and role.
    """

    name: str
    contract: frozenset[str]
    description: str
    fields: tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    supports_extended_contract: bool = False

    def field_by_name(self, name: str) -> FieldDescriptor | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None
