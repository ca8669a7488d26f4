"""
Relance des requetes refusees pour depassement de quota (HTTP 429).

AniList (90 requetes/minute) et Jikan (3/seconde, 60/minute) repondent 429
quand le quota est depasse. AniList indique le delai dans Retry-After :
il est respecte (plafonne a max_wait). Sans header, le delai suit un
backoff exponentiel avec jitter.

Usage:
    response = await request_with_retry(client, "GET", "/anime/21/full")
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Reponse 429 Too Many Requests d'une source.

    Attributes:
        retry_after: Delai demande par la source (header Retry-After), ou None.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


class wait_retry_after:
    """
    Strategie d'attente tenacity : Retry-After si connu, sinon backoff exponentiel.

    Args:
        max_wait: Plafond du delai, en secondes
    """

    def __init__(self, max_wait: float) -> None:
        self._max_wait = max_wait
        self._fallback = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def __call__(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return float(min(error.retry_after, self._max_wait))
        return self._fallback(retry_state)


def _log_retry(retry_state: RetryCallState) -> None:
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        f"Quota depasse, tentative {retry_state.attempt_number} echouee, "
        f"nouvel essai dans {delay:.1f}s"
    )


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur pour relancer une coroutine sur RateLimitError.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre deux tentatives en secondes (defaut: 60)
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_retry_after(max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    # Retry-After peut aussi etre une date HTTP, ignoree ici
    if value and value.strip().isdigit():
        return int(value)
    return None


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Requete HTTP relancee tant que la source repond 429.

    Args:
        client: Client httpx de la source
        method: Methode HTTP
        url: URL, relative a la base_url du client
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives
        **kwargs: Transmis a client.request()

    Raises:
        RateLimitError: Toujours 429 apres la derniere tentative
        httpx.HTTPStatusError: Autre statut d'erreur, sans relance
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _send() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _send()
