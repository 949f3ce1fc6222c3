"""
api/routes/v1/authn.py -- Subnet authentication decision endpoints.

Routes:
  POST /api/v1/authn/lookup             -- run the decision for one transaction
  POST /api/v1/authn/logout             -- logout callback; always succeeds
  GET  /api/v1/authn/adapter            -- adapter descriptor (contract + fields)
  POST /api/v1/authn/adapter/validate   -- field-level check of candidate config

Callers are hosting protocol servers, not browsers. SUCCESS and FAILURE are
both 200 responses -- a FAILURE is a normal answer, not an HTTP error.
AdapterProcessingError propagates to the handler in api/main.py (400).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from api.limiter import LOOKUP_RATE_LIMIT, limiter
from api.models import (
    ConfigValidationRequest,
    ConfigValidationResponse,
    DescriptorResponse,
    LogoutRequest,
    LogoutResponse,
    LookupRequest,
    LookupResponse,
)
from auth.adapter import SubnetAdapter
from auth.validation import validate_configuration

logger = logging.getLogger("subnetauthn.api")

router = APIRouter()


@limiter.limit(LOOKUP_RATE_LIMIT)  # must be ABOVE @router to preserve FastAPI introspection
@router.post("/authn/lookup", response_model=LookupResponse)
def lookup(request: Request, body: LookupRequest) -> LookupResponse:
    """Authenticate a client by its network address.

    Uses body.source_address when the hosting server supplies it, otherwise
    the peer address of this HTTP request. chained_attributes carries the
    result of an upstream adapter; a non-null "username" upgrades the role.
    """
    adapter: SubnetAdapter = request.app.state.adapter
    source_address = body.source_address
    if not source_address:
        source_address = request.client.host if request.client else ""

    outcome = adapter.lookup(
        source_address,
        partner_entity_id=body.partner_entity_id,
        chained_attributes=body.chained_attributes,
    )
    return LookupResponse.from_outcome(outcome)


@router.post("/authn/logout", response_model=LogoutResponse)
async def logout(request: Request, body: LogoutRequest) -> LogoutResponse:
    """Answer the host's logout callback."""
    adapter: SubnetAdapter = request.app.state.adapter
    return LogoutResponse(success=adapter.logout(body.authn_identifiers, body.resume_path))


@router.get("/authn/adapter", response_model=DescriptorResponse)
async def describe_adapter(request: Request) -> DescriptorResponse:
    """Return the attribute contract and configuration fields."""
    adapter: SubnetAdapter = request.app.state.adapter
    return DescriptorResponse.from_descriptor(adapter.descriptor)


@router.post("/authn/adapter/validate", response_model=ConfigValidationResponse)
async def validate_adapter_config(request: Request, body: ConfigValidationRequest) -> ConfigValidationResponse:
    """Validate candidate field values without applying them.

    Each rejected field maps to the fixed message "Not a valid IP address".
    Fields left out are checked against their defaults.
    """
    adapter: SubnetAdapter = request.app.state.adapter
    errors = validate_configuration(adapter.descriptor, body.fields)
    if errors:
        logger.info("Rejected adapter configuration: %s", sorted(errors))
    return ConfigValidationResponse(valid=not errors, errors=errors)
