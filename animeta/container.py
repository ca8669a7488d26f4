"""
Container d'injection de dependances via dependency-injector.

Assemble les sources (dans l'ordre de priorite canonique), le coordinateur,
les fusionneurs et l'orchestrateur de rafraichissement.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.rate_limit import RateLimiter
from .adapters.sources.anidb import AniDbSource
from .adapters.sources.anilist import AniListSource
from .adapters.sources.jikan import JikanSource
from .config import Settings
from .services.field_merger import FieldMerger
from .services.identifier_merger import IdentifierMerger
from .services.refresh import RefreshOrchestrator
from .services.source_coordinator import SourceQueryCoordinator


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        orchestrator = container.refresh_orchestrator()
        await orchestrator.refresh(series)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Cache disque - Singleton partage entre les sources
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Un limiteur par source : chaque source a son propre quota
    anidb_rate_limiter = providers.Singleton(
        RateLimiter, min_interval=config.provided.anidb_min_interval
    )
    anilist_rate_limiter = providers.Singleton(
        RateLimiter, min_interval=config.provided.anilist_min_interval
    )
    jikan_rate_limiter = providers.Singleton(
        RateLimiter, min_interval=config.provided.jikan_min_interval
    )

    # Sources - Singleton pour conserver le client HTTP (connection pooling)
    anidb_source = providers.Singleton(
        AniDbSource,
        cache=api_cache,
        rate_limiter=anidb_rate_limiter,
        client=config.provided.anidb_client,
        client_version=config.provided.anidb_client_version,
        title_preference=config.provided.title_preference,
        timeout=config.provided.http_timeout,
    )
    anilist_source = providers.Singleton(
        AniListSource,
        cache=api_cache,
        rate_limiter=anilist_rate_limiter,
        title_preference=config.provided.title_preference,
        timeout=config.provided.http_timeout,
        match_threshold=config.provided.match_score_threshold,
    )
    jikan_source = providers.Singleton(
        JikanSource,
        cache=api_cache,
        rate_limiter=jikan_rate_limiter,
        title_preference=config.provided.title_preference,
        timeout=config.provided.http_timeout,
        match_threshold=config.provided.match_score_threshold,
    )

    # Ordre d'enregistrement = priorite : primaire, secondaire, tertiaire
    source_coordinator = providers.Singleton(
        SourceQueryCoordinator,
        sources=providers.List(anidb_source, anilist_source, jikan_source),
    )

    # Fusionneurs (stateless - Singletons)
    identifier_merger = providers.Singleton(IdentifierMerger)
    field_merger = providers.Singleton(FieldMerger)

    refresh_orchestrator = providers.Singleton(
        RefreshOrchestrator,
        coordinator=source_coordinator,
        identifier_merger=identifier_merger,
        field_merger=field_merger,
    )
