"""Pydantic DTOs (Data Transfer Objects) for the client directory."""

from datetime import datetime

from pydantic import BaseModel, Field

from client_console.application.views.state import ViewStatus
from client_console.domain.entities import ClientDraft, ClientStatus


class ClientWrite(BaseModel):
    """Full client record as submitted by the editor — used for create and update."""

    name: str = Field(..., max_length=255, examples=["Acme Corp"])
    agent_name: str = Field(..., max_length=255, examples=["AcmeBot"])
    full_name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255, examples=["ops@acme.test"])
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=2048)
    description: str | None = None
    google_drive_links: list[str] = Field(default_factory=list)
    website_urls: list[str] = Field(default_factory=list)
    status: ClientStatus = ClientStatus.ACTIVE

    def to_draft(self) -> ClientDraft:
        return ClientDraft(
            name=self.name,
            agent_name=self.agent_name,
            full_name=self.full_name or "",
            email=self.email or "",
            company=self.company or "",
            website=self.website or "",
            description=self.description or "",
            google_drive_links=list(self.google_drive_links),
            website_urls=list(self.website_urls),
            status=self.status,
        )


class ClientResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    name: str
    agent_name: str
    full_name: str | None
    email: str | None
    company: str | None
    website: str | None
    description: str | None
    google_drive_links: list[str]
    website_urls: list[str]
    status: ClientStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientPageResponse(BaseModel):
    """One page of the directory."""

    items: list[ClientResponse]
    total: int
    page: int
    page_size: int
    has_next_page: bool
    has_previous_page: bool


class ClientStatsResponse(BaseModel):
    total: int
    active: int
    inactive: int


class ActivityResponse(BaseModel):
    id: str
    description: str
    created_at: datetime

    model_config = {"from_attributes": True}


class CommonQueryResponse(BaseModel):
    id: str
    query_text: str
    frequency: int

    model_config = {"from_attributes": True}


class ErrorLogResponse(BaseModel):
    id: str
    error_type: str
    message: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ActivitySection(BaseModel):
    status: ViewStatus
    error: str | None = None
    items: list[ActivityResponse] = Field(default_factory=list)


class CommonQuerySection(BaseModel):
    status: ViewStatus
    error: str | None = None
    items: list[CommonQueryResponse] = Field(default_factory=list)


class ErrorLogSection(BaseModel):
    status: ViewStatus
    error: str | None = None
    items: list[ErrorLogResponse] = Field(default_factory=list)


class ClientDetailResponse(BaseModel):
    """Client plus its three independently loaded sections."""

    status: ViewStatus
    error: str | None = None
    client: ClientResponse | None = None
    activities: ActivitySection
    common_queries: CommonQuerySection
    error_logs: ErrorLogSection
