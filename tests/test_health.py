import json
from unittest import mock

import pytest
from django.test import Client


@pytest.mark.django_db
class TestHealth:
    def setup_method(self):
        self.client = Client()

    def test_ok_without_redis(self):
        res = self.client.get("/health/")
        body = json.loads(res.content)
        assert res.status_code == 200
        assert body["status"] == "ok"
        assert body["components"]["roster"] == {"ok": True, "employees": 4}
        assert body["components"]["redis"]["ok"] is True

    def test_missing_roster_degrades(self, settings, tmp_path):
        settings.ROSTER_PATH = str(tmp_path / "missing.csv")
        res = self.client.get("/health/")
        body = json.loads(res.content)
        assert res.status_code == 503
        assert body["status"] == "degraded"
        assert body["components"]["roster"]["ok"] is False

    def test_unreachable_redis(self, settings):
        settings.REDIS_URL = "redis://localhost:1/0"
        with mock.patch("config.health.redis.Redis.from_url") as from_url:
            from_url.return_value.ping.side_effect = ConnectionError("refused")
            res = self.client.get("/health/")
        body = json.loads(res.content)
        assert res.status_code == 503
        assert body["components"]["redis"] == {"ok": False, "error": "refused"}
