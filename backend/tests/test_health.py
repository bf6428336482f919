from storefront.db import get_db
from storefront.main import app


def test_health_ok(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body == {"status": "ok", "db": True}


def test_health_degraded_when_db_unreachable(client, db_session):
    class BrokenSession:
        def execute(self, *args, **kwargs):
            from sqlalchemy.exc import OperationalError

            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app.dependency_overrides[get_db] = lambda: BrokenSession()
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "degraded", "db": False}
