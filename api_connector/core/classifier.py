"""
Shape classification of arbitrary JSON payloads.

The payload schema is unknown, so the presentation kind is decided with
structural heuristics:

1. unwrap one `{"data": ...}` envelope,
2. turn the working value into a list of candidate items,
3. flatten one per-item `{"attributes": ...}` envelope,
4. look for media fields on the first record,
5. infer table columns from the first record only.
"""

from typing import Any

from .json_value import JsonKind, first_present, get_field, has_field, is_array, is_object
from .models import ClassifiedPayload, PayloadKind

MIME_KEYS = ("mime", "mimeType", "mime_type")
URL_KEYS = ("url",)

# surfaced specially (id, timestamps), secrets, or relational/moderation noise
IGNORED_COLUMNS = frozenset(
    [
        "id",
        "documentId",
        "password",
        "resetPasswordToken",
        "confirmationToken",
        "createdAt",
        "updatedAt",
        "publishedAt",
        "created_at",
        "updated_at",
        "published_at",
        "localizations",
        "locale",
        "provider",
        "blocked",
        "formats",
    ]
)
LEADING_COLUMNS = ["id"]
TRAILING_COLUMNS = ["createdAt", "publishedAt"]


def unwrap_envelope(payload: Any) -> Any:
    """Unwraps exactly one `data` envelope level."""
    if has_field(payload, "data"):
        return payload["data"]
    return payload


def candidate_items(value: Any) -> list[Any]:
    if is_array(value):
        return list(value)
    if is_object(value):
        return [value]
    return []


def effective_record(item: Any) -> dict[str, Any]:
    """Flattens an `attributes` envelope, keeping the item's own id."""
    if not is_object(item):
        return {"value": item}
    attributes = get_field(item, "attributes", JsonKind.OBJECT)
    if attributes is None:
        return item
    if "id" in item and "id" not in attributes:
        return {"id": item["id"], **attributes}
    return attributes


def is_media_record(record: dict[str, Any]) -> bool:
    return (
        first_present(record, MIME_KEYS, JsonKind.STRING) is not None
        and first_present(record, URL_KEYS, JsonKind.STRING) is not None
    )


def infer_columns(record: dict[str, Any]) -> list[str]:
    columns = [key for key in record if key not in IGNORED_COLUMNS]
    return LEADING_COLUMNS + columns + TRAILING_COLUMNS


def classify(payload: Any) -> ClassifiedPayload:
    """Decides how a successful payload is presented. Never raises."""
    items = [effective_record(item) for item in candidate_items(unwrap_envelope(payload))]
    if not items:
        return ClassifiedPayload(kind=PayloadKind.EMPTY)
    if is_media_record(items[0]):
        return ClassifiedPayload(kind=PayloadKind.MEDIA, items=items)
    return ClassifiedPayload(kind=PayloadKind.TABULAR, items=items, columns=infer_columns(items[0]))
