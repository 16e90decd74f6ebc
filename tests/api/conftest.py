"""Shared fixtures for API tests."""

from collections.abc import AsyncGenerator, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.advert.generator import AdvertGenerator
from storefront.api.products import get_advert_generator
from storefront.infrastructure.database import get_session
from storefront.main import app


class StubTextProvider:
    """Text provider returning canned text, or raising a canned error."""

    def __init__(self) -> None:
        self.text: str = "<h1>Fast</h1>\n<p>Buy it\tnow</p>"
        self.error: Exception | None = None
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def text_provider() -> StubTextProvider:
    """Stub text-generation provider."""
    return StubTextProvider()


@pytest.fixture
def client(
    session_factory: async_sessionmaker[AsyncSession],
    text_provider: StubTextProvider,
) -> Iterator[TestClient]:
    """Create test client bound to the temporary database and stub provider."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_advert_generator] = lambda: AdvertGenerator(text_provider)

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def category(client: TestClient) -> dict:
    """Create a category through the API."""
    return client.post("/categories", json={"name": "Laptops"}).json()["data"]


@pytest.fixture
def mark(client: TestClient) -> dict:
    """Create a mark through the API."""
    return client.post("/marks", json={"name": "Acme"}).json()["data"]


@pytest.fixture
def product(client: TestClient, category: dict, mark: dict) -> dict:
    """Create a product through the API."""
    response = client.post(
        "/products",
        json={
            "name": "Acme Book 14",
            "description": "Light 14-inch laptop",
            "price": 999.9,
            "stock": 7,
            "categoryId": category["id"],
            "markId": mark["id"],
        },
    )
    return response.json()["data"]
