"""Pydantic models describing object-path service payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ObjectPathBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ContextInfo(ObjectPathBaseModel):
    form_digest_value: str = Field(alias="FormDigestValue")
    form_digest_timeout_seconds: int = Field(default=1800, alias="FormDigestTimeoutSeconds")
    web_full_url: str | None = Field(default=None, alias="WebFullUrl")


class ErrorInfo(ObjectPathBaseModel):
    error_message: str | None = Field(default=None, alias="ErrorMessage")
    error_code: int | None = Field(default=None, alias="ErrorCode")
    error_type_name: str | None = Field(default=None, alias="ErrorTypeName")
    error_value: str | None = Field(default=None, alias="ErrorValue")
    trace_correlation_id: str | None = Field(default=None, alias="TraceCorrelationId")

    def describe(self) -> str:
        if self.error_message:
            return self.error_message
        if self.error_type_name:
            return self.error_type_name
        if self.error_code is not None:
            return f"The batch request failed with error code {self.error_code}"
        return "The batch request failed"


class SiteProperties(ObjectPathBaseModel):
    title: str | None = Field(default=None, alias="Title")
    url: str | None = Field(default=None, alias="Url")
    template: str | None = Field(default=None, alias="Template")
    status: str | None = Field(default=None, alias="Status")


class SitePropertiesEnumerable(ObjectPathBaseModel):
    child_items: list[SiteProperties] = Field(default_factory=list, alias="_Child_Items_")
    next_start_index: str | None = Field(default=None, alias="NextStartIndexFromSharePoint")

    @field_validator("next_start_index", mode="before")
    @classmethod
    def _normalize_next_start_index(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return _blank_to_none(value)


class ODataErrorMessage(ObjectPathBaseModel):
    value: str | None = None


class ODataErrorDetail(ObjectPathBaseModel):
    code: str | None = None
    message: ODataErrorMessage | str | None = None

    @property
    def text(self) -> str | None:
        if isinstance(self.message, ODataErrorMessage):
            return self.message.value
        return self.message


class ODataErrorResponse(ObjectPathBaseModel):
    error: ODataErrorDetail | None = None
    odata_error: ODataErrorDetail | None = Field(default=None, alias="odata.error")

    @property
    def message(self) -> str | None:
        detail = self.error or self.odata_error
        return detail.text if detail is not None else None
