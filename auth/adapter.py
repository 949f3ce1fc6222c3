"""
auth/adapter.py -- Subnet authentication adapter.

Authenticates a client by the network address it connects from (or the last
proxy hop, as resolved by the caller). A client inside the configured subnet
is authenticated with the GUEST role. When the adapter runs downstream of
another authentication step and that step established a username, the role
is CORP_USER instead -- "first confirm network location, then confirm
corporate identity" without this adapter knowing how the username was proven.

Non-loopback IPv6 clients always fail: subnet matching is defined over four
octets only. The IPv6 loopback is treated as 127.0.0.1 so local deployments
that report "::1" for localhost still work.

Concurrency contract:
  configure() must complete before the first lookup() and must not run while
  lookups are in flight. Nothing enforces this; the host is responsible for
  it. Given that, lookup() reads only the immutable SubnetConfig and is safe
  to call from many threads without locking.

Layer rule: imports from core/ only. No imports from api/.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, NoReturn

from auth.models import AdapterDescriptor, FieldDescriptor
from auth.validation import validate_ipv4_field
from core.address import InvalidAddressFormat, classify_source_address, parse_ipv4, to_dotted_quad
from core.config import Settings
from core.models import (
    ATTR_IP_ADDRESS,
    ATTR_ROLE,
    CHAINED_ATTR_USERNAME,
    ROLE_CORP_USER,
    ROLE_GUEST,
    AuthnOutcome,
    AuthnStatus,
    SubnetConfig,
)
from core.subnet import contains

logger = logging.getLogger("subnetauthn.adapter")

# ---------------------------------------------------------------------------
# Configuration field names (keys in the configuration mapping)
# ---------------------------------------------------------------------------

CONFIG_BASE_ADDRESS = "Network Base Address"
CONFIG_SUBNET_MASK = "Subnet Mask"

DEFAULT_BASE_ADDRESS = "0.0.0.0"
DEFAULT_SUBNET_MASK = "255.255.255.0"

DESCRIPTOR = AdapterDescriptor(
    name="Sample Subnet Adapter",
    contract=frozenset({ATTR_IP_ADDRESS, ATTR_ROLE}),
    description="Set the details of the subnet to identify your SSO clients",
    fields=(
        FieldDescriptor(
            name=CONFIG_BASE_ADDRESS,
            description="Enter the base IPv4 address to identify the authenticated subnet",
            default=DEFAULT_BASE_ADDRESS,
            validators=(validate_ipv4_field,),
        ),
        FieldDescriptor(
            name=CONFIG_SUBNET_MASK,
            description="Enter the IPv4 subnet mask to identify the authenticated subnet",
            default=DEFAULT_SUBNET_MASK,
            validators=(validate_ipv4_field,),
        ),
    ),
)


class AdapterProcessingError(Exception):
    """An unexpected runtime problem the adapter cannot turn into an outcome.

    Distinct from a FAILURE outcome: a malformed source address or an
    unconfigured adapter is a system/input error, not a policy rejection.
    """


class SubnetAdapter:
    """IdP authentication adapter keyed on the client's IPv4 subnet."""

    def __init__(self) -> None:
        self._config: SubnetConfig | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> SubnetAdapter:
        """Build an adapter configured from application settings."""
        adapter = cls()
        adapter.configure(
            {
                CONFIG_BASE_ADDRESS: settings.network_base_address,
                CONFIG_SUBNET_MASK: settings.subnet_mask,
            }
        )
        return adapter

    # ------------------------------------------------------------------
    # Host-facing metadata
    # ------------------------------------------------------------------

    @property
    def descriptor(self) -> AdapterDescriptor:
        """The same descriptor object on every call."""
        return DESCRIPTOR

    def adapter_info(self) -> dict[str, Any] | None:
        """No additional adapter metadata (e.g. AuthnContext) is advertised."""
        return None

    @property
    def config(self) -> SubnetConfig | None:
        return self._config

    @property
    def configured(self) -> bool:
        return self._config is not None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(self, configuration: Mapping[str, str]) -> SubnetConfig:
        """Parse base address and mask from the configuration mapping.

        Both values are parsed before the instance changes, so a bad value
        raises InvalidAddressFormat and leaves the adapter as it was: still
        unusable on first configuration, still on the old subnet otherwise.
        """
        base = parse_ipv4(configuration.get(CONFIG_BASE_ADDRESS, DEFAULT_BASE_ADDRESS))
        mask = parse_ipv4(configuration.get(CONFIG_SUBNET_MASK, DEFAULT_SUBNET_MASK))
        self._config = SubnetConfig(base=base, mask=mask)
        logger.info("Subnet adapter configured (base=%s, mask=%s)", base, mask)
        return self._config

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def lookup(
        self,
        source_address: str,
        partner_entity_id: str | None = None,
        chained_attributes: Mapping[str, Any] | None = None,
    ) -> AuthnOutcome:
        """Decide whether the client at source_address is authenticated.

        Args:
            source_address: Network-layer source address text as resolved by
                the caller. No proxy headers are consulted here.
            partner_entity_id: The SP the client is signing on to. Logged only.
            chained_attributes: Attributes from an upstream adapter, if any.
                Only a non-None "username" entry is consulted.

        Returns a SUCCESS outcome with ip_address and role, or a FAILURE
        outcome with no attributes.

        Raises AdapterProcessingError if the adapter is unconfigured or the
        address is neither IPv6 nor a valid dotted quad.
        """
        config = self._config
        if config is None:
            raise AdapterProcessingError("Subnet adapter used before configuration completed")

        logger.info("Client '%s' is trying to sign on to SP '%s'", source_address, partner_entity_id)

        candidate = classify_source_address(source_address)
        if candidate is None:
            logger.debug("Rejecting non-loopback IPv6 client %s", source_address)
            return AuthnOutcome(status=AuthnStatus.FAILURE)

        try:
            address = parse_ipv4(candidate)
        except InvalidAddressFormat as exc:
            raise AdapterProcessingError(f"Unrecognized client address: {source_address!r}") from exc

        if not contains(address, config.base, config.mask):
            logger.debug("Client %s is outside subnet %s/%s", address, config.base, config.mask)
            return AuthnOutcome(status=AuthnStatus.FAILURE)

        if chained_attributes is not None and chained_attributes.get(CHAINED_ATTR_USERNAME) is not None:
            role = ROLE_CORP_USER
        else:
            role = ROLE_GUEST

        logger.debug("Client %s authenticated with role %s", address, role)
        return AuthnOutcome(
            status=AuthnStatus.SUCCESS,
            attributes={ATTR_IP_ADDRESS: to_dotted_quad(address), ATTR_ROLE: role},
        )

    def lookup_legacy(self, *args: Any, **kwargs: Any) -> NoReturn:
        """Deprecated host entry point. Use lookup()."""
        raise NotImplementedError("Legacy lookup is not supported; use lookup()")

    def logout(
        self,
        authn_identifiers: Mapping[str, Any] | None = None,
        resume_path: str | None = None,
    ) -> bool:
        """Nothing to tear down -- the adapter keeps no session state."""
        return True
