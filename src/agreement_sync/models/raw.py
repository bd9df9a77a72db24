"""Raw agreement representation before normalization."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawAgreement(BaseModel):
    """
    Flexible raw record from the agreement API or a fixture file.
    Shape varies by source version: flat fields or a nested customFields map.
    """

    model_config = ConfigDict(extra="allow")

    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def custom_fields(self) -> dict[str, Any]:
        """customFields map, or an empty dict when absent or not a mapping."""
        cf = self.data.get("customFields")
        return cf if isinstance(cf, dict) else {}

    def merged_with(self, detail: "RawAgreement") -> "RawAgreement":
        """
        Overlay a detail payload on this (list-level) payload.
        Detail values win; customFields maps are merged key by key.
        """
        data = {**self.data, **detail.data}
        if self.custom_fields or detail.custom_fields:
            data["customFields"] = {**self.custom_fields, **detail.custom_fields}
        return RawAgreement(data=data)
