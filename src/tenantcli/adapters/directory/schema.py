"""Pydantic models describing directory service (Microsoft Graph) payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DirectoryBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class DirectoryObject(DirectoryBaseModel):
    id: str
    display_name: str | None = Field(default=None, alias="displayName")


class AdministrativeUnit(DirectoryObject):
    description: str | None = None
    visibility: str | None = None
    membership_type: str | None = Field(default=None, alias="membershipType")
    membership_rule: str | None = Field(default=None, alias="membershipRule")
    is_member_management_restricted: bool | None = Field(
        default=None, alias="isMemberManagementRestricted"
    )


class CollectionPage(DirectoryBaseModel):
    value: list[dict[str, object]] = Field(default_factory=list)
    next_link: str | None = Field(default=None, alias="@odata.nextLink")


class GraphErrorDetail(DirectoryBaseModel):
    code: str | None = None
    message: str | None = None


class GraphErrorResponse(DirectoryBaseModel):
    error: GraphErrorDetail
