"""Custom OpenAPI schema hooks for drf-spectacular.

Every operation is tagged with exactly one feature group so Swagger UI shows
one section per console screen.
"""

from __future__ import annotations

from typing import Any

# Method names that contain operations in the OpenAPI path item
_HTTP_METHODS = {"get", "post", "put", "patch", "delete", "options", "head"}


PATTERN_TAGS = [
    ("/api/v1/auth/", "Authentication"),
    ("/api/v1/roster/", "Roster"),
    ("/api/v1/templates/", "Work Templates"),
    ("/api/v1/collection/", "Collection"),
    ("/api/v1/approvals/", "Approvals"),
    ("/api/v1/documents/", "Documents"),
    ("/api/v1/calendar/", "Calendar"),
    ("/api/v1/schema/", "Meta"),
]

ALL_TAGS = [t for _, t in PATTERN_TAGS]


def assign_group_tag(path: str) -> str | None:
    """Return the first matching tag name for a given path."""
    for prefix, tag in PATTERN_TAGS:
        if path.startswith(prefix):
            return tag
    return None


def group_tags(result: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
    """Post-processing hook overwriting each operation's ``tags``."""
    paths = result.get("paths", {})
    for path, path_item in paths.items():  # type: ignore[assignment]
        tag = assign_group_tag(path)
        if not tag:
            continue
        for method, op_obj in path_item.items():
            if method.lower() not in _HTTP_METHODS:
                continue
            if not isinstance(op_obj, dict):
                continue
            op_obj["tags"] = [tag]

    # Declared tags keep PATTERN_TAGS order
    existing = {t.get("name") for t in result.get("tags", [])}
    tag_list = result.setdefault("tags", [])
    for tag in ALL_TAGS:
        if tag not in existing:
            tag_list.append({"name": tag})
            existing.add(tag)
    return result
