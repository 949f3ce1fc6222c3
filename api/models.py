"""
API request and response models for the SubnetAuthN decision service.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in core/models.py and
auth/models.py, which own the internal domain representation. Route handlers
map between the two.
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from auth.models import AdapterDescriptor
from core.models import AuthnOutcome, AuthnStatus

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class LookupRequest(BaseModel):
    """Request body for POST /api/v1/authn/lookup.

    source_address is the client address the hosting server already resolved
    (after any proxy handling of its own). When omitted, the socket peer of
    this HTTP request is used instead. The address is passed on verbatim;
    surrounding whitespace makes it malformed.
    """

    source_address: Optional[str] = Field(default=None, max_length=64)
    partner_entity_id: Annotated[str, StringConstraints(strip_whitespace=True, max_length=1024)] = ""
    chained_attributes: Optional[dict[str, Any]] = None


class LogoutRequest(BaseModel):
    """Request body for POST /api/v1/authn/logout. Contents are ignored."""

    authn_identifiers: dict[str, Any] = Field(default_factory=dict)
    resume_path: Optional[str] = None


class ConfigValidationRequest(BaseModel):
    """Candidate configuration keyed by field name, e.g. {"Subnet Mask": "255.0.0.0"}."""

    fields: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class LookupResponse(BaseModel):
    """Authentication outcome. attributes is empty on FAILURE."""

    model_config = ConfigDict(frozen=True)

    status: AuthnStatus
    attributes: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_outcome(cls, outcome: AuthnOutcome) -> "LookupResponse":
        return cls(
            status=outcome.status,
            attributes=dict(outcome.attributes),
        )


class LogoutResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool


class FieldInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    default: str


class DescriptorResponse(BaseModel):
    """Response for GET /api/v1/authn/adapter."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    contract: list[str]
    supports_extended_contract: bool
    fields: list[FieldInfo]

    @classmethod
    def from_descriptor(cls, descriptor: AdapterDescriptor) -> "DescriptorResponse":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            contract=sorted(descriptor.contract),
            supports_extended_contract=descriptor.supports_extended_contract,
            fields=[FieldInfo(name=f.name, description=f.description, default=f.default) for f in descriptor.fields],
        )


class ConfigValidationResponse(BaseModel):
    """valid is True when errors is empty."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
    configured: bool
