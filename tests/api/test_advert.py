"""Tests for GET /products/advert/{id}."""

from fastapi.testclient import TestClient
from google.api_core import exceptions as google_exceptions

from storefront.domain.exceptions import ProviderUnavailableError


class TestGenerateAdvert:
    """Tests for advert generation over HTTP."""

    def test_text_is_default(self, client: TestClient, product: dict, text_provider) -> None:
        """Without a format the advert is plain text, sanitized."""
        text_provider.text = "Fast laptop.\nBuy it\tnow."

        response = client.get(f"/products/advert/{product['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": "Fast laptop. Buy it now."}
        prompt = text_provider.prompts[0]
        assert "Acme Book 14" in prompt
        assert "Brand: Acme" in prompt
        assert "Product category: Laptops" in prompt
        assert "flow continuously" in prompt

    def test_html_format(self, client: TestClient, product: dict, text_provider) -> None:
        """format=html asks for HTML and still strips line breaks."""
        response = client.get(f"/products/advert/{product['id']}", params={"format": "html"})

        assert response.json()["data"] == "<h1>Fast</h1> <p>Buy it now</p>"
        assert "<h1>" in text_provider.prompts[0]

    def test_unknown_format_is_bad_request(
        self, client: TestClient, product: dict, text_provider
    ) -> None:
        """Only text and html are accepted."""
        response = client.get(f"/products/advert/{product['id']}", params={"format": "pdf"})

        assert response.status_code == 400
        assert text_provider.prompts == []

    def test_unknown_product_is_not_found(self, client: TestClient, text_provider) -> None:
        """Unknown products answer 404 without calling the provider."""
        response = client.get("/products/advert/999")

        assert response.status_code == 404
        assert text_provider.prompts == []

    def test_empty_output_is_server_error(
        self, client: TestClient, product: dict, text_provider
    ) -> None:
        """A provider that returns nothing yields 500."""
        text_provider.text = "  \n "

        response = client.get(f"/products/advert/{product['id']}")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Error generating text"}

    def test_rejected_request_is_server_error(
        self, client: TestClient, product: dict, text_provider
    ) -> None:
        """Untyped errors are answered by the error middleware with the envelope."""
        text_provider.error = google_exceptions.PermissionDenied("bad key")

        response = client.get(f"/products/advert/{product['id']}")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal Server Error"}
        assert response.headers["X-Request-ID"]

    def test_unavailable_provider_is_503(
        self, client: TestClient, product: dict, text_provider
    ) -> None:
        """Timeouts and exhausted retries answer 503."""
        text_provider.error = ProviderUnavailableError("stub", 3, "timed out")

        response = client.get(f"/products/advert/{product['id']}")

        assert response.status_code == 503
        assert response.json()["success"] is False
