"""
Erreurs de l'API du serveur et relance sur rate limiting.

Seul le 429 est relance (backoff exponentiel avec jitter, tenacity). Un 401
signale une cle invalide ou une session expiree ; les autres statuts d'erreur
et les erreurs de transport deviennent des ApiError immediatement.

Usage:
    response = await request_with_retry(client, "GET", "/api/anime")
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class ApiError(Exception):
    """
    Erreur de l'API du serveur (HTTP, transport ou enveloppe en echec).

    Attributes:
        status_code: Code HTTP de la reponse, None pour une erreur de transport
            ou une enveloppe {success: false}
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RateLimitError(Exception):
    """
    Le serveur a repondu 429 Too Many Requests.

    Attributes:
        retry_after: Delai demande par le header Retry-After en secondes,
            None s'il est absent ou n'est pas un nombre
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Trop de requetes, nouvel essai dans {retry_after}s")


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """Decorateur tenacity : relance une coroutine tant qu'elle leve RateLimitError."""
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    # Le header peut aussi etre une date HTTP, ignoree ici
    if value and value.strip().isdigit():
        return int(value)
    return None


def _error_message(response: httpx.Response) -> str:
    """Message de l'enveloppe {error} s'il existe, sinon le corps brut."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return response.text or f"Erreur API: {response.status_code}"


def check_response(response: httpx.Response) -> httpx.Response:
    """
    Convertit un statut d'erreur en exception.

    Raises:
        RateLimitError: Sur 429
        ApiError: Sur 401 et tout autre statut >= 400
    """
    if response.status_code == 429:
        raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
    if response.status_code == 401:
        raise ApiError("Cle API invalide ou session expiree", status_code=401)
    if response.is_error:
        raise ApiError(_error_message(response), status_code=response.status_code)
    return response


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    **kwargs,
) -> httpx.Response:
    """
    Envoie une requete et la relance sur 429, jusqu'a max_attempts essais.

    Les kwargs sont transmis a client.request() (json, params...).

    Raises:
        RateLimitError: Toujours 429 apres le dernier essai
        ApiError: Serveur injoignable ou statut d'erreur
    """

    @with_retry(max_attempts=max_attempts)
    async def _send() -> httpx.Response:
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            raise ApiError(f"Serveur injoignable: {e}") from e
        return check_response(response)

    return await _send()
