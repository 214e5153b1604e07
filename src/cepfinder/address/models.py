"""
Data models shared by fetchers, the registry and the race coordinator.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

# AddressResult fields a provider may map payload keys onto.
ADDRESS_FIELDS = ("state", "city", "street", "postal_code", "neighborhood")


class AddressResult(BaseModel):
    """
    Normalized, provider-agnostic outcome of a successful lookup.
    """

    source: str = Field("", description="Name of the provider that answered")
    state: str = ""
    city: str = ""
    street: str = ""
    postal_code: str = ""
    neighborhood: str = ""

    model_config = {"frozen": True}


class ClientConfig(BaseModel):
    """
    Read-only transport settings handed to every fetcher at launch.
    """

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    headers: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @field_validator("timeout")
    @classmethod
    def check_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


class ProviderConfig(BaseModel):
    """
    Declarative description of one lookup provider.
    """

    id: str = Field(..., description="Unique identifier for the provider")
    name: str = Field(..., description="Source tag stamped on results")
    url_template: str = Field(
        ..., description="Endpoint URL with a {postal_code} placeholder"
    )
    fields: Dict[str, str] = Field(
        default_factory=dict,
        description="AddressResult field -> payload key",
    )
    error_field: Optional[str] = Field(
        None, description="Payload key whose truthy value means 'not found'"
    )
    fetcher_type: str = Field(default="json", description="Registered fetcher type")

    @field_validator("url_template")
    @classmethod
    def check_placeholder(cls, v):
        if "{postal_code}" not in v:
            raise ValueError("url_template must contain '{postal_code}'")
        return v

    @field_validator("fields")
    @classmethod
    def check_fields(cls, v):
        unknown = set(v) - set(ADDRESS_FIELDS)
        if unknown:
            raise ValueError(f"Unknown address fields: {', '.join(sorted(unknown))}")
        return v

    def url_for(self, postal_code: str) -> str:
        return self.url_template.format(postal_code=postal_code)
