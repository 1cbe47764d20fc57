from datetime import datetime

import pytest

from api_connector.core.classifier import classify
from api_connector.core.render import (
    build_table,
    column_label,
    format_cell,
    origin_of,
    render_media,
    render_table,
    resolve_thumbnail,
)

BASE_URL = "http://host:1337/api/things"


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/uploads/x.png", "http://host:1337/uploads/x.png"),
        ("uploads/x.png", "http://host:1337/uploads/x.png"),
        ("https://cdn.example/x.png", "https://cdn.example/x.png"),
        ("http://other/x.png", "http://other/x.png"),
        ("", None),
        (None, None),
        (12, None),
    ],
)
def test_resolve_thumbnail(path, expected):
    assert resolve_thumbnail(path, BASE_URL) == expected


def test_resolve_thumbnail_unresolvable_base():
    assert resolve_thumbnail("/uploads/x.png", "not a url") is None


def test_origin_of():
    assert origin_of("https://user:pw@example.com:8443/a/b?c=d") == "https://example.com:8443"
    assert origin_of("http://[::1]:8080/x") == "http://[::1]:8080"
    assert origin_of("/relative") is None


def test_render_media():
    items = classify(
        {
            "data": [
                {
                    "id": 1,
                    "attributes": {
                        "name": "x.png",
                        "mime": "image/png",
                        "url": "/uploads/x.png",
                        "formats": {"thumbnail": {"url": "/uploads/thumbnail_x.png"}},
                        "width": 640,
                        "height": 480,
                        "size": 12.6,
                        "ext": ".png",
                    },
                },
                {"id": 2, "attributes": {"mime": "application/pdf", "url": "https://cdn.example/y.pdf"}},
            ]
        }
    ).items
    first, second = render_media(items, BASE_URL)
    assert first.thumbnail_url == "http://host:1337/uploads/thumbnail_x.png"
    assert first.label == "x.png"
    assert first.dimensions == "640x480"
    assert first.size_kb == 13
    assert first.file_type == "PNG"
    assert second.thumbnail_url == "https://cdn.example/y.pdf"
    assert second.label == "-"
    assert second.dimensions is None
    assert second.size_kb is None
    assert second.file_type == "PDF"


def test_render_media_placeholder_thumbnail():
    (tile,) = render_media([{"mime": "image/png", "url": 42}], BASE_URL)
    assert tile.thumbnail_url is None


@pytest.mark.parametrize("column", ["active", "publishedAt", "title"])
def test_boolean_cells(column):
    assert format_cell(column, True) == "TRUE"
    assert format_cell(column, False) == "FALSE"


def test_timestamp_cells():
    assert format_cell("createdAt", "2024-01-01") == datetime(2024, 1, 1).strftime("%x")
    assert format_cell("updated_at", "2024-03-05T10:00:00") == datetime(2024, 3, 5).strftime("%x")
    assert format_cell("createdAt", "yesterday") == "-"
    # not a timestamp-like column
    assert format_cell("title", "2024-01-01") == "2024-01-01"


def test_other_cells():
    assert format_cell("meta", {"a": 1}) == "[Object]"
    assert format_cell("tags", ["a", "b"]) == "[Object]"
    assert format_cell("count", 3) == "3"
    assert format_cell("ratio", 1.5) == "1.5"
    assert format_cell("title", "A") == "A"
    assert format_cell("title", None) == "-"


def test_render_table_missing_column_is_placeholder():
    classified = classify([{"a": 1, "b": 2}, {"a": 3}])
    rows = render_table(classified.items, classified.columns)
    assert [row.cells for row in rows] == [
        ["-", "1", "2", "-", "-"],
        ["-", "3", "-", "-", "-"],
    ]


def test_render_table_is_capped():
    items = [{"id": i} for i in range(25)]
    assert len(render_table(items, ["id"])) == 10
    assert len(render_table(items, ["id"], limit=3)) == 3
    assert render_table(items, ["id"], limit=0) == []


def test_render_table_snake_case_timestamps():
    rows = render_table([{"id": 1, "created_at": "2024-01-01"}], ["id", "createdAt"])
    assert rows[0].cells == ["1", datetime(2024, 1, 1).strftime("%x")]


def test_publication_status():
    items = [
        {"id": 1, "publishedAt": "2024-01-01"},
        {"id": 2, "publishedAt": None},
        {"id": 3, "published_at": "2024-01-01"},
        {"id": 4},
    ]
    statuses = [row.status for row in render_table(items, ["id"])]
    assert statuses == ["Published", "Draft", "Published", None]


def test_build_table_headers():
    table = build_table([{"id": 1, "title": "A"}], ["id", "title", "createdAt", "publishedAt"])
    assert table.headers == ["id", "title", "created", "published"]
    assert table.to_dict()["rows"][0]["cells"][:2] == ["1", "A"]


def test_column_label():
    assert column_label("lastAttemptAt") == "lastAttempt"
    assert column_label("updated_at") == "updated_at"
