"""
Configuration du logging via loguru.

Deux sorties :
- stderr, coloree, pour suivre un rafraichissement en direct
- fichier JSON avec rotation, qui conserve toujours les decisions de fusion
  (niveau DEBUG) pour expliquer a posteriori d'ou vient chaque valeur
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# Modules dont le DEBUG detaille chaque champ fusionne
MERGE_MODULES = (
    "animeta.services.field_merger",
    "animeta.services.identifier_merger",
)

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)


def _console_filter(merge_trace: bool):
    def _filter(record) -> bool:
        if merge_trace or record["level"].no > logger.level("DEBUG").no:
            return True
        return not record["name"].startswith(MERGE_MODULES)

    return _filter


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = Path("logs/animeta.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
    merge_trace: bool = False,
) -> None:
    """Configure les handlers loguru de l'application.

    Args :
        log_level : Niveau minimum affiche sur stderr
        log_file : Fichier JSON (None pour desactiver la sortie fichier)
        rotation_size : Taille avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conserves
        merge_trace : Affiche aussi sur stderr le detail des fusions champ par champ
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format=CONSOLE_FORMAT,
        filter=_console_filter(merge_trace),
        colorize=True,
    )

    if log_file is None:
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )
    logger.debug("Journal JSON active", log_file=str(log_file), merge_trace=merge_trace)
