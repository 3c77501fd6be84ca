"""
Relance des requetes TMDB limitees ou en erreur passagere.

TMDB limite le debit des requetes : une reponse 429 porte en general un
header Retry-After, respecte tel quel (plafonne a max_wait). Sans cette
indication, et pour les reponses 502/503/504, le delai suit un backoff
exponentiel avec jitter. Toute autre erreur HTTP remonte sans relance.

Usage:
    response = await request_with_retry(client, "GET", "/search/tv", params=params)
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

# Reponses serveur considerees comme passageres
TRANSIENT_STATUS_CODES = frozenset({502, 503, 504})


class RetryableResponseError(Exception):
    """
    Reponse HTTP qui justifie une nouvelle tentative.

    Attributes:
        status_code: Code HTTP recu
        retry_after: Delai demande par le serveur en secondes, ou None
    """

    def __init__(self, status_code: int, retry_after: Optional[int] = None) -> None:
        self.status_code = status_code
        self.retry_after = retry_after
        message = f"HTTP {status_code}"
        if retry_after is not None:
            message += f" (retry after: {retry_after}s)"
        super().__init__(message)


class RateLimitError(RetryableResponseError):
    """429 Too Many Requests."""

    def __init__(self, retry_after: Optional[int] = None) -> None:
        super().__init__(429, retry_after)


class TransientServerError(RetryableResponseError):
    """502, 503 ou 504 : le serveur est momentanement indisponible."""


class wait_retry_after:
    """
    Strategie d'attente tenacity : Retry-After s'il est fourni, sinon
    backoff exponentiel aleatoire entre 1 et max_wait secondes.
    """

    def __init__(self, max_wait: int = 60) -> None:
        self._max_wait = max_wait
        self._fallback = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def __call__(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        hint = getattr(error, "retry_after", None)
        if hint is not None:
            return float(min(hint, self._max_wait))
        return self._fallback(retry_state)


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Requete TMDB relancee",
        error=str(error),
        attempt=retry_state.attempt_number,
    )


def _retry_options(max_attempts: int, max_wait: int) -> dict:
    return {
        "retry": retry_if_exception_type(RetryableResponseError),
        "wait": wait_retry_after(max_wait),
        "stop": stop_after_attempt(max_attempts),
        "before_sleep": _log_retry,
        "reraise": True,
    }


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur relancant une coroutine sur RetryableResponseError.

    Args:
        max_attempts: Nombre maximum de tentatives
        max_wait: Attente maximale entre deux tentatives, en secondes
    """
    return retry(**_retry_options(max_attempts, max_wait))


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Lit le header Retry-After (en secondes) s'il est numerique."""
    if value and value.strip().isdigit():
        return int(value)
    return None


def _check_retryable(response: httpx.Response) -> None:
    if response.status_code == 429:
        raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
    if response.status_code in TRANSIENT_STATUS_CODES:
        raise TransientServerError(
            response.status_code, _parse_retry_after(response.headers.get("Retry-After"))
        )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Envoie une requete et la relance tant que la reponse est 429 ou 5xx passagere.

    Args:
        client: Client httpx async (base_url deja configuree)
        method: Methode HTTP
        url: Chemin relatif a base_url
        max_attempts: Nombre maximum de tentatives
        max_wait: Attente maximale entre deux tentatives, en secondes
        **kwargs: Transmis a client.request() (params, headers...)

    Returns:
        La reponse, avec un statut 2xx/3xx

    Raises:
        RateLimitError / TransientServerError: Tentatives epuisees
        httpx.HTTPStatusError: Autre statut d'erreur (404 compris), sans relance
        httpx.TransportError: Echec reseau
    """
    async for attempt in AsyncRetrying(**_retry_options(max_attempts, max_wait)):
        with attempt:
            response = await client.request(method, url, **kwargs)
            _check_retryable(response)
    response.raise_for_status()
    return response
