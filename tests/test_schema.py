import pytest
from rest_framework.test import APIClient

from config.schema import assign_group_tag
from config.schema import group_tags


@pytest.mark.parametrize(
    ("path", "tag"),
    [
        ("/api/v1/auth/login/", "Authentication"),
        ("/api/v1/collection/requests/{id}/export/", "Collection"),
        ("/api/v1/calendar/month/", "Calendar"),
        ("/health/", None),
    ],
)
def test_assign_group_tag(path, tag):
    assert assign_group_tag(path) == tag


def test_group_tags_overwrites_operation_tags():
    result = {
        "paths": {
            "/api/v1/documents/": {"get": {"tags": ["documents"]}, "parameters": []},
        },
    }
    out = group_tags(result)
    assert out["paths"]["/api/v1/documents/"]["get"]["tags"] == ["Documents"]
    assert {"name": "Documents"} in out["tags"]


@pytest.mark.django_db
def test_schema_endpoint_renders():
    res = APIClient().get("/api/v1/schema/", {"format": "json"})
    assert res.status_code == 200
