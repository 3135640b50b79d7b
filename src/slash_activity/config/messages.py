"""User-facing messages for the slash-activity CLI."""

PROJECT_TAGLINE = "Append-only activity log for shortcut events"

SUCCESS_MESSAGES = {
    "initialized": "Activity store ready at {path}",
    "created": "Recorded activity #{id} ({type}/{level})",
}

ERROR_MESSAGES = {
    "payload_conflict": "Use either --payload or --shortcut-id, not both",
    "invalid_format": "Unknown output format '{value}'. Use one of: {choices}",
    "store_failed": "Activity store error: {error}",
}

INFO_MESSAGES = {
    "no_match": "No matching activity",
    "list_summary": "{count} activit{suffix}",
}
