"""Data models for slash-activity."""

from slash_activity.models.activity import Activity, FindActivity
from slash_activity.models.enums import ActivityLevel, ActivityType
from slash_activity.models.payloads import (
    PAYLOAD_MODELS,
    ShortcutCreatePayload,
    ShortcutViewPayload,
    decode_payload,
)

__all__ = [
    "Activity",
    "ActivityLevel",
    "ActivityType",
    "FindActivity",
    "PAYLOAD_MODELS",
    "ShortcutCreatePayload",
    "ShortcutViewPayload",
    "decode_payload",
]
