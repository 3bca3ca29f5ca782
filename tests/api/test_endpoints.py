"""
API endpoint tests
"""

import io
import zipfile
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from api.main import app
from api.dependencies import get_session_factory
from core.config import settings


@pytest_asyncio.fixture
async def client(session_factory):
    """Create test client with the session factory pointed at the test database"""

    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _upload(archive_bytes, filename="data.zip"):
    return {"file": (filename, archive_bytes, "application/zip")}


@pytest.mark.asyncio
async def test_health_endpoint_database_connected(client):
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database_connected"] is True
    assert "X-Request-ID" in response.headers
    assert "X-API-Latency-ms" in response.headers


@pytest.mark.asyncio
async def test_import_returns_aggregates(client, build_archive, scenario_csv):
    response = await client.post(
        "/api/v0/prices",
        files=_upload(build_archive({"data.csv": scenario_csv}))
    )

    assert response.status_code == 200
    assert response.json() == {
        "total_items": 3,
        "total_categories": 2,
        "total_price": 12.24,
    }


@pytest.mark.asyncio
async def test_import_rejects_non_zip_filename(client, build_archive, scenario_csv):
    response = await client.post(
        "/api/v0/prices",
        files=_upload(build_archive({"data.csv": scenario_csv}), filename="data.csv")
    )

    assert response.status_code == 400
    assert response.json()["error_type"] == "FormatError"


@pytest.mark.asyncio
async def test_import_invalid_container(client):
    response = await client.post("/api/v0/prices", files=_upload(b"not a zip"))

    assert response.status_code == 400
    data = response.json()
    assert data["error_type"] == "FormatError"
    assert data["detail"] == "container unreadable"
    assert data["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_import_missing_csv_member(client, build_archive):
    response = await client.post(
        "/api/v0/prices",
        files=_upload(build_archive({"readme.txt": "nothing here"}))
    )

    assert response.status_code == 400
    assert response.json()["error_type"] == "NotFoundError"
    assert response.json()["detail"] == "no tabular member"


@pytest.mark.asyncio
async def test_import_header_only(client, build_archive):
    response = await client.post(
        "/api/v0/prices",
        files=_upload(build_archive({"data.csv": "id,name,category,price,create_date\n"}))
    )

    assert response.status_code == 400
    assert response.json()["error_type"] == "EmptyDatasetError"


@pytest.mark.asyncio
async def test_import_upload_over_limit(client, build_archive, scenario_csv, monkeypatch):
    """Oversized uploads get the same error body as other rejections"""
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 16)

    response = await client.post(
        "/api/v0/prices",
        files=_upload(build_archive({"data.csv": scenario_csv}))
    )

    assert response.status_code == 413
    data = response.json()
    assert data["error_type"] == "PayloadTooLargeError"
    assert data["detail"] == "upload too large"
    assert data["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_import_member_expands_over_limit(client, build_archive, monkeypatch):
    monkeypatch.setattr(settings, "MAX_EXTRACTED_BYTES", 64)

    response = await client.post(
        "/api/v0/prices",
        files=_upload(build_archive({"data.csv": "id,name,category,price,create_date\n" + "1,A,B,1,2024\n" * 20}))
    )

    assert response.status_code == 413
    assert response.json()["detail"] == "tabular member too large"


@pytest.mark.asyncio
async def test_import_without_file_field(client):
    response = await client.post("/api/v0/prices", data={"other": "value"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_export_after_import(client, build_archive, scenario_csv):
    await client.post("/api/v0/prices", files=_upload(build_archive({"data.csv": scenario_csv})))

    response = await client.get("/api/v0/prices")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert response.headers["content-disposition"] == "attachment; filename=data.zip"

    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        lines = archive.read("data.csv").decode("utf-8").splitlines()

    assert lines[0] == "id,name,category,price,create_date"
    assert [line.split(",", 1)[1] for line in lines[1:]] == [
        "Apple,Fruit,1.50,2024-01-01",
        "Banana,Fruit,0.75,2024-01-02",
        "Widget,Hardware,9.99,bad-date-ok",
    ]


@pytest.mark.asyncio
async def test_persistence_failure_maps_to_500(client, build_archive, scenario_csv, test_engine):
    """A dropped table surfaces as a server-side failure"""
    async with test_engine.begin() as conn:
        await conn.exec_driver_sql("DROP TABLE prices")

    response = await client.post(
        "/api/v0/prices",
        files=_upload(build_archive({"data.csv": scenario_csv}))
    )

    assert response.status_code == 500
    assert response.json()["error_type"] == "PersistenceError"
