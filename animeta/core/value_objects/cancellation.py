"""
Jeton d'annulation cooperative d'un rafraichissement.

Un seul jeton traverse tout l'orchestrateur. Il est verifie avant et entre
les appels aux sources ; un appel deja lance n'est jamais interrompu de force.
"""


class RefreshCancelledError(Exception):
    """Annulation cooperative observee pendant un rafraichissement."""

    def __init__(self, message: str = "Rafraichissement annule") -> None:
        super().__init__(message)


class CancellationToken:
    """
    Drapeau d'annulation partage entre l'hote et l'orchestrateur.

    Example:
        token = CancellationToken()
        task = asyncio.create_task(orchestrator.refresh(series, cancellation=token))
        token.cancel()
    """

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        """Demande l'annulation."""
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        """True si l'annulation a ete demandee."""
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        """
        Leve RefreshCancelledError si l'annulation a ete demandee.

        Raises:
            RefreshCancelledError: Annulation demandee
        """
        if self._cancelled:
            raise RefreshCancelledError()

