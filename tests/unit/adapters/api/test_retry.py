"""
Tests unitaires pour le mecanisme de retry avec backoff exponentiel.

Ces tests verifient:
- RateLimitError capture le header Retry-After
- with_retry relance sur RateLimitError avec backoff exponentiel
- request_with_retry detecte les 429 et relance automatiquement
- Les autres erreurs HTTP et de transport deviennent des ApiError, sans retry
"""

import httpx
import pytest
import respx

from src.adapters.api.retry import (
    ApiError,
    RateLimitError,
    check_response,
    request_with_retry,
    with_retry,
)

URL = "http://bakarr.test/api/anime"


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_rate_limit_error_stores_retry_after(self) -> None:
        """RateLimitError stocke la valeur Retry-After."""
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_rate_limit_error_without_retry_after(self) -> None:
        error = RateLimitError(retry_after=None)
        assert error.retry_after is None


class TestCheckResponse:
    """Tests pour check_response."""

    def test_success_passes_through(self) -> None:
        response = httpx.Response(200, json={"ok": True})
        assert check_response(response) is response

    def test_retry_after_date_is_ignored(self) -> None:
        """Un Retry-After au format date HTTP donne retry_after=None."""
        response = httpx.Response(
            429, headers={"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"}
        )

        with pytest.raises(RateLimitError) as exc_info:
            check_response(response)

        assert exc_info.value.retry_after is None

    def test_not_found_keeps_status(self) -> None:
        with pytest.raises(ApiError) as exc_info:
            check_response(httpx.Response(404, text="Anime not found"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Anime not found"


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_with_retry_retries_on_rate_limit_error(self) -> None:
        """with_retry relance quand RateLimitError est levee."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def flaky_function() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise RateLimitError(retry_after=1)
            return "success"

        result = await flaky_function()
        assert result == "success"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_with_retry_stops_after_max_attempts(self) -> None:
        call_count = 0

        @with_retry(max_attempts=2, max_wait=1)
        async def always_fails() -> str:
            nonlocal call_count
            call_count += 1
            raise RateLimitError(retry_after=1)

        with pytest.raises(RateLimitError):
            await always_fails()
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_with_retry_does_not_retry_api_errors(self) -> None:
        """with_retry ne relance pas les ApiError."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def raises_api_error() -> str:
            nonlocal call_count
            call_count += 1
            raise ApiError("bad request", status_code=400)

        with pytest.raises(ApiError):
            await raises_api_error()
        assert call_count == 1  # Pas de retry


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_then_succeeds(self, respx_mock: respx.Router) -> None:
        """request_with_retry reussit apres un 429 initial."""
        route = respx_mock.get(URL).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(200, json={"success": True, "data": []}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL, max_attempts=3)

        assert response.status_code == 200
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_raises_rate_limit_after_exhaustion(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "30"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(client, "GET", URL, max_attempts=2)

        assert exc_info.value.retry_after == 30
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_unauthorized_means_expired_session(self, respx_mock: respx.Router) -> None:
        """Un 401 indique une cle invalide ou une session expiree."""
        respx_mock.get(URL).mock(return_value=httpx.Response(401, text="Unauthorized"))

        async with httpx.AsyncClient() as client:
            with pytest.raises(ApiError) as exc_info:
                await request_with_retry(client, "GET", URL)

        assert exc_info.value.status_code == 401
        assert "session expiree" in exc_info.value.message

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_uses_response_text(self, respx_mock: respx.Router) -> None:
        """Les autres erreurs HTTP portent le texte de la reponse, sans retry."""
        route = respx_mock.get(URL).mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(ApiError) as exc_info:
                await request_with_retry(client, "GET", URL)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal Server Error"
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_uses_envelope_error(self, respx_mock: respx.Router) -> None:
        respx_mock.get(URL).mock(
            return_value=httpx.Response(
                400, json={"success": False, "data": None, "error": "Path not found"}
            )
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(ApiError) as exc_info:
                await request_with_retry(client, "GET", URL)

        assert exc_info.value.message == "Path not found"

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_becomes_api_error(self, respx_mock: respx.Router) -> None:
        respx_mock.get(URL).mock(side_effect=httpx.ConnectError("connection refused"))

        async with httpx.AsyncClient() as client:
            with pytest.raises(ApiError) as exc_info:
                await request_with_retry(client, "GET", URL)

        assert exc_info.value.status_code is None
        assert "injoignable" in exc_info.value.message
