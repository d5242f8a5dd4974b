"""
Point d'entree de la CLI animport.

Les sous-commandes d'import sont definies dans adapters/cli/commands ;
ce module assemble l'application Typer et regle la verbosite.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import import_folder, scan_folder, search_catalog
from .config import Settings
from .container import Container
from .logging_config import configure_logging

__version__ = "0.1.0"

app = typer.Typer(
    name="animport",
    help="Import de fichiers video dans une bibliotheque de series",
    no_args_is_help=True,
)
container = Container()

app.command(name="scan")(scan_folder)
app.command(name="search")(search_catalog)
# "import" est un mot reserve : le nom de la commande est donne explicitement
app.command(name="import")(import_folder)


def _setup_logging(settings: Settings, level: str) -> None:
    configure_logging(
        log_level=level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Afficher les traces de debug (bascules, reponses ignorees)"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="N'afficher que les erreurs"),
    ] = False,
) -> None:
    """animport - Rapprochement et import de fichiers video."""
    if quiet:
        _setup_logging(container.config(), "ERROR")
    elif verbose:
        _setup_logging(container.config(), "DEBUG")


@app.command()
def info() -> None:
    """Affiche la configuration effective (variables ANIMPORT_*)."""
    settings = container.config()
    typer.echo(f"Serveur : {settings.api_url}")
    typer.echo(f"Clé API : {'configurée' if settings.auth_enabled else 'non configurée'}")
    typer.echo(f"Profil de qualité : {settings.quality_profile or '(premier profil du serveur)'}")
    typer.echo(f"Dossier racine : {settings.root_folder or '(défaut du serveur)'}")
    typer.echo(f"Timeout : {settings.request_timeout:g}s, {settings.max_retries} tentative(s)")
    typer.echo(f"Cache : {settings.cache_dir}")
    typer.echo(f"Logs : {settings.log_file} ({settings.log_level})")


@app.command()
def version() -> None:
    """Affiche la version."""
    typer.echo(f"animport v{__version__}")


def main() -> None:
    """Point d'entree du script animport."""
    settings = container.config()
    _setup_logging(settings, settings.log_level)
    logger.info("Démarrage d'animport", version=__version__)
    app()


if __name__ == "__main__":
    main()
