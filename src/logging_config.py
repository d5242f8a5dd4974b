"""
Configuration du logging d'animport via loguru.

Deux sorties :
- stderr : messages courts et colores, au niveau demande par l'utilisateur
- fichier : tout le detail en JSON (bascules de candidats, reponses perimees),
  avec rotation, pour retracer une session d'import a posteriori
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)


def _add_console_handler(log_level: str) -> None:
    logger.add(sys.stderr, level=log_level.upper(), format=CONSOLE_FORMAT, colorize=True)


def _add_file_handler(log_file: Path, rotation_size: str, retention_count: int) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/animport.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Remplace les handlers loguru par la sortie console et le fichier JSON.

    Args :
        log_level : Niveau minimum affiche sur stderr (DEBUG, INFO, WARNING, ERROR)
        log_file : Fichier de log JSON (le dossier parent est cree)
        rotation_size : Taille declenchant la rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conserves
    """
    logger.remove()
    _add_console_handler(log_level)
    _add_file_handler(log_file, rotation_size, retention_count)
    logger.debug("Logging configure", log_file=str(log_file), level=log_level)
