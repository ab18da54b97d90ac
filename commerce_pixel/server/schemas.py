from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StorefrontEvent(BaseModel):
    """Raw lifecycle event as posted by the storefront pixel."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    client_id: Optional[str] = Field(default=None, alias="clientId")
    timestamp: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    context: Dict[str, Any] = Field(default_factory=dict)

    def to_event(self) -> Dict[str, Any]:
        """Back to the storefront's camelCase shape for the mapping rules."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EventAccepted(BaseModel):
    event: str
    subscribers: int


class HealthResponse(BaseModel):
    status: str
    sink: str
    sink_initialized: bool
    subscriptions: List[str] = Field(default_factory=list)
