"""Configuration for slash-activity."""

from slash_activity.config.settings import LoggingSettings, StoreSettings

__all__ = ["LoggingSettings", "StoreSettings"]
