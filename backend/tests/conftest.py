import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.dependencies import get_image_uploader
from app.main import create_app


class FakeUploader:
    """Stands in for Cloudinary; records what was uploaded."""

    def __init__(self):
        self.uploads = []

    def upload(self, content: bytes, folder=None) -> str:
        self.uploads.append(content)
        return f"https://images.example.com/{len(self.uploads)}.jpg"


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def client(uploader):
    settings = Settings(database_url="sqlite://", cloudinary_cloud_name=None, _env_file=None)
    app = create_app(settings)
    app.dependency_overrides[get_image_uploader] = lambda: uploader
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db(client):
    session = client.app.state.database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_product(client):
    def _make(name="Leche entera", **fields):
        response = client.post("/api/products/", json={"name": name, **fields})
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_store(client):
    def _make(name="Tienda Centro", **fields):
        response = client.post("/api/stores/", json={"name": name, **fields})
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def set_price(client):
    def _set(product_id, store_id, price, **fields):
        response = client.post(
            "/api/prices/",
            json={"productId": product_id, "storeId": store_id, "price": price, **fields},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _set
