"""
Point d'entree CLI d'AnimeMeta.

Joue le role d'hote minimal : construit une serie transitoire, lance un
cycle de rafraichissement et affiche la fiche reconciliee.
"""

import asyncio
from typing import Annotated, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import Settings
from .container import Container
from .core.entities.series import MetadataField, SeriesEntity
from .core.value_objects.series_info import TICKS_PER_MINUTE
from .logging_config import configure_logging

app = typer.Typer(
    name="animeta",
    help="Reconciliation des metadonnees d'anime multi-sources",
)
container = Container()
console = Console()


def get_config() -> Settings:
    """Recupere les parametres de l'application depuis le container DI."""
    return container.config()


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Logs DEBUG sur la console"),
    ] = False,
    trace_merge: Annotated[
        bool,
        typer.Option("--trace-merge", help="Affiche le detail de la fusion champ par champ"),
    ] = False,
) -> None:
    """AnimeMeta - fiche de serie unique a partir d'AniDB, AniList et MyAnimeList."""
    settings = get_config()
    configure_logging(
        log_level="DEBUG" if verbose or trace_merge else settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
        merge_trace=trace_merge,
    )


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Cache : {config.cache_dir}")
    typer.echo(f"Client AniDB : {config.anidb_client if config.anidb_enabled else 'non configure'}")
    typer.echo(f"Preference de titre : {config.title_preference}")
    typer.echo(f"Seuil de correspondance : {config.match_score_threshold}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"AnimeMeta v{__version__}")


def _parse_locks(values: list[str]) -> set[MetadataField]:
    locks = set()
    for value in values:
        try:
            locks.add(MetadataField(value))
        except ValueError:
            valid = ", ".join(f.value for f in MetadataField)
            raise typer.BadParameter(f"Champ inconnu: {value} (valeurs: {valid})")
    return locks


@app.command()
def refresh(
    title: Annotated[str, typer.Argument(help="Titre de la serie")],
    anidb_id: Annotated[Optional[str], typer.Option("--anidb-id", help="ID AniDB")] = None,
    anilist_id: Annotated[Optional[str], typer.Option("--anilist-id", help="ID AniList")] = None,
    mal_id: Annotated[Optional[str], typer.Option("--mal-id", help="ID MyAnimeList")] = None,
    lock: Annotated[
        Optional[list[str]],
        typer.Option("--lock", "-l", help="Champ a verrouiller (repetable, ex: Name)"),
    ] = None,
    dont_fetch_meta: Annotated[
        bool,
        typer.Option("--ids-only", help="Ne fusionne que les IDs externes"),
    ] = False,
) -> None:
    """Rafraichit une serie depuis toutes les sources et affiche le resultat."""
    provider_ids = {
        name: value
        for name, value in (("AniDB", anidb_id), ("AniList", anilist_id), ("MyAnimeList", mal_id))
        if value
    }
    series = SeriesEntity(
        name=title,
        provider_ids=provider_ids,
        locked_fields=_parse_locks(lock or []),
        dont_fetch_meta=dont_fetch_meta,
    )

    asyncio.run(_refresh_async(series))
    _print_series(series)


async def _refresh_async(series: SeriesEntity) -> None:
    orchestrator = container.refresh_orchestrator()
    try:
        await orchestrator.refresh(series, force=True)
    finally:
        for source in container.source_coordinator().sources:
            await source.close()
        container.api_cache().close()


def _print_series(series: SeriesEntity) -> None:
    table = Table(title=series.name or "(sans titre)", show_header=False)
    table.add_column("Champ", style="cyan")
    table.add_column("Valeur")

    runtime = f"{series.runtime_ticks // TICKS_PER_MINUTE} min" if series.runtime_ticks else None
    rating = f"{series.community_rating} ({series.vote_count} votes)" if series.vote_count else None
    rows = [
        ("Statut", series.status.value if series.status else None),
        ("Annee", series.production_year),
        ("Premiere", series.premiere_date),
        ("Fin", series.end_date),
        ("Diffusion", " ".join(filter(None, [", ".join(d.value for d in series.air_days), series.air_time]))),
        ("Duree", runtime),
        ("Classification", series.official_rating),
        ("Note", rating),
        ("Genres", ", ".join(series.genres)),
        ("Studios", ", ".join(series.studios)),
        ("Personnes", len(series.people)),
        ("IDs", ", ".join(f"{k}={v}" for k, v in sorted(series.provider_ids.items()))),
        ("Verrous", ", ".join(sorted(f.value for f in series.locked_fields))),
    ]
    for label, value in rows:
        table.add_row(label, "" if value in (None, "") else str(value))

    console.print(table)
    if series.overview:
        console.print(series.overview, style="dim")
    logger.debug("Fiche affichee", name=series.name)


def main() -> None:
    """Point d'entree de l'application."""
    app()


if __name__ == "__main__":
    main()
