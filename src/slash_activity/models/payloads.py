"""Typed payloads for shortcut activities.

The store keeps payloads as opaque text. These models encode and decode the
JSON documents the application records for each activity type.
"""

from pydantic import BaseModel, ConfigDict, Field

from slash_activity.models.enums import ActivityType


class _Payload(BaseModel):
    model_config = ConfigDict(
        # Serialize with the camelCase keys the web application expects
        populate_by_name=True,
        extra="ignore",
    )

    def to_json(self) -> str:
        """Encode as the stored payload string."""
        return self.model_dump_json(by_alias=True)


class ShortcutCreatePayload(_Payload):
    """Payload recorded when a shortcut is created."""

    shortcut_id: int = Field(alias="shortcutId")


class ShortcutViewPayload(_Payload):
    """Payload recorded when a shortcut is visited."""

    shortcut_id: int = Field(alias="shortcutId")
    ip: str = ""
    referer: str = ""
    user_agent: str = Field(default="", alias="userAgent")
    params: dict[str, list[str]] = Field(default_factory=dict)


PAYLOAD_MODELS: dict[ActivityType, type[_Payload]] = {
    ActivityType.SHORTCUT_CREATE: ShortcutCreatePayload,
    ActivityType.SHORTCUT_VIEW: ShortcutViewPayload,
}


def decode_payload(activity_type: ActivityType, payload: str) -> _Payload:
    """Parse a stored payload string into the model for its activity type.

    Raises:
        pydantic.ValidationError: If the payload does not match the model.
    """
    return PAYLOAD_MODELS[activity_type].model_validate_json(payload)
