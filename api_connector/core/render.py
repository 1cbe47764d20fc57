"""
Presentation contracts for classified payloads: media tiles and table rows.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any
from urllib.parse import urljoin, urlsplit

from .. import config
from .json_value import JsonKind, get_field, get_path, is_array, is_object

PLACEHOLDER = "-"
OBJECT_PLACEHOLDER = "[Object]"
TRUE_LABEL = "TRUE"
FALSE_LABEL = "FALSE"
PUBLISHED_LABEL = "Published"
DRAFT_LABEL = "Draft"


@dataclass
class MediaTile:
    thumbnail_url: str | None
    label: str
    dimensions: str | None = None
    size_kb: int | None = None
    file_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Row:
    cells: list[str]
    status: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Table:
    columns: list[str]
    headers: list[str]
    rows: list[Row] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": self.columns,
            "headers": self.headers,
            "rows": [row.to_dict() for row in self.rows],
        }


def origin_of(url: str) -> str | None:
    """scheme://host[:port] of an absolute url, or None."""
    try:
        parts = urlsplit(url)
        host, port = parts.hostname, parts.port
    except ValueError:
        return None
    if not parts.scheme or not host:
        return None
    if ":" in host:
        host = f"[{host}]"
    return f"{parts.scheme}://{host}" + (f":{port}" if port else "")


def resolve_thumbnail(path: Any, base_url: str) -> str | None:
    """Resolves a relative media path against the resource's own origin."""
    if not isinstance(path, str) or not path:
        return None
    try:
        if urlsplit(path).scheme:
            return path
    except ValueError:
        return None
    origin = origin_of(base_url)
    if origin is None:
        return None
    return urljoin(f"{origin}/", path)


def _file_type(record: dict[str, Any]) -> str | None:
    ext = get_field(record, "ext", JsonKind.STRING)
    if ext:
        return ext.lstrip(".").upper() or None
    mime = get_field(record, "mime", JsonKind.STRING)
    if mime and "/" in mime:
        return mime.split("/", 1)[1].upper() or None
    return None


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _dimensions(width: float | None, height: float | None) -> str | None:
    if width is None or height is None:
        return None
    return "x".join(str(int(v)) if float(v).is_integer() else str(v) for v in (width, height))


def render_media(items: list[dict[str, Any]], base_url: str) -> list[MediaTile]:
    tiles = []
    for record in items:
        thumbnail = get_path(record, "formats", "thumbnail", "url") or get_field(record, "url")
        width, height = _number(get_field(record, "width")), _number(get_field(record, "height"))
        size = _number(get_field(record, "size"))
        name = get_field(record, "name", JsonKind.STRING)
        tiles.append(
            MediaTile(
                thumbnail_url=resolve_thumbnail(thumbnail, base_url),
                label=name or PLACEHOLDER,
                dimensions=_dimensions(width, height),
                size_kb=round(size) if size is not None else None,
                file_type=_file_type(record),
            )
        )
    return tiles


def is_timestamp_column(column: str) -> bool:
    return column.endswith(("At", "_at"))


def column_label(column: str) -> str:
    if column.endswith("At"):
        return column[: -len("At")]
    return column


def lookup(record: dict[str, Any], column: str) -> Any:
    """Reads a column, falling back from `createdAt` to `created_at`."""
    value = record.get(column)
    if value is None and column.endswith("At"):
        value = record.get(column[: -len("At")] + "_at")
    return value


def format_date(value: Any) -> str:
    if not isinstance(value, str):
        return PLACEHOLDER
    try:
        return datetime.fromisoformat(value).strftime("%x")
    except ValueError:
        return PLACEHOLDER


def format_cell(column: str, value: Any) -> str:
    if value is None:
        return PLACEHOLDER
    if isinstance(value, bool):
        return TRUE_LABEL if value else FALSE_LABEL
    if is_timestamp_column(column) and isinstance(value, str):
        return format_date(value)
    if is_object(value) or is_array(value):
        return OBJECT_PLACEHOLDER
    return str(value)


def publication_status(record: dict[str, Any]) -> str | None:
    for key in ("publishedAt", "published_at"):
        if key in record:
            return PUBLISHED_LABEL if record[key] else DRAFT_LABEL
    return None


def render_table(
    items: list[dict[str, Any]], columns: list[str], limit: int | None = None
) -> list[Row]:
    """Renders a preview of the first `limit` items, one cell per column."""
    if limit is None:
        limit = config.TABLE_PREVIEW_ROWS
    return [
        Row(
            cells=[format_cell(column, lookup(record, column)) for column in columns],
            status=publication_status(record),
        )
        for record in items[:limit]
    ]


def build_table(items: list[dict[str, Any]], columns: list[str]) -> Table:
    return Table(
        columns=list(columns),
        headers=[column_label(column) for column in columns],
        rows=render_table(items, columns),
    )
