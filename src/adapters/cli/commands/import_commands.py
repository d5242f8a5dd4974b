"""
Commandes CLI d'import (scan, search, import).
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer

from src.adapters.api.retry import ApiError, RateLimitError
from src.adapters.cli.helpers import console, suppress_loguru, with_container
from src.adapters.cli.review import (
    ReviewAction,
    display_outcome,
    display_review,
    display_search_results,
    display_skipped,
    review_loop,
)
from src.core.exceptions import (
    BulkImportFailure,
    CandidateAddFailure,
    EmptySelectionError,
    ScanFailure,
)
from src.services.import_workflow import ImportWorkflowConfig, ImportWorkflowService

PathArgument = Annotated[
    Path,
    typer.Argument(help="Dossier (ou fichier) a importer, tel que vu par le serveur"),
]
SeriesIdOption = Annotated[
    Optional[int],
    typer.Option("--series-id", "-s", help="Limiter l'import a une serie de la bibliotheque"),
]


def scan_folder(path: PathArgument, series_id: SeriesIdOption = None) -> None:
    """
    Scanne un dossier et affiche la pre-selection proposee.

    Affiche les candidats, les fichiers avec leur serie cible et les
    fichiers ignores. Rien n'est importe.
    """
    asyncio.run(_scan_folder_async(path, series_id))


@with_container()
async def _scan_folder_async(container, path: Path, series_id: Optional[int]) -> None:
    """Implementation async de la commande scan."""
    workflow = _create_workflow(container, series_id)
    await _run_scan(workflow, path)

    display_review(workflow.selection)
    display_skipped(workflow.scan_result)


def search_catalog(
    query: Annotated[str, typer.Argument(help="Titre a rechercher")],
) -> None:
    """Recherche une serie dans le catalogue."""
    asyncio.run(_search_catalog_async(query))


@with_container()
async def _search_catalog_async(container, query: str) -> None:
    """Implementation async de la commande search."""
    workflow = container.import_workflow_service()
    try:
        results = await workflow.search_catalog(query)
    except (ApiError, RateLimitError) as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)
    display_search_results(results)


def import_folder(
    path: PathArgument,
    series_id: SeriesIdOption = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Importer la pre-selection sans revue interactive"),
    ] = False,
) -> None:
    """
    Scanne un dossier, permet de revoir les correspondances puis importe.

    Les series manquantes sont ajoutees a la bibliotheque (surveillees, sans
    recherche automatique) avant l'import des fichiers.
    """
    asyncio.run(_import_folder_async(path, series_id, yes))


@with_container()
async def _import_folder_async(
    container, path: Path, series_id: Optional[int], yes: bool
) -> None:
    """Implementation async de la commande import."""
    workflow = _create_workflow(container, series_id)
    await _run_scan(workflow, path)
    display_skipped(workflow.scan_result)

    while True:
        if yes:
            display_review(workflow.selection)
        else:
            with suppress_loguru():
                action = await review_loop(workflow)
            if action == ReviewAction.QUIT:
                console.print("[yellow]Import annule[/yellow]")
                return

        try:
            submission = await workflow.commit()
        except EmptySelectionError as e:
            console.print(f"[yellow]{e}[/yellow]")
            if yes:
                raise typer.Exit(code=1)
            continue
        except CandidateAddFailure as e:
            console.print(f"[red]Erreur:[/red] {e}")
            if yes:
                raise typer.Exit(code=1)
            console.print("[dim]La selection est conservee, corrigez-la puis relancez l'import.[/dim]")
            continue
        break

    if submission is None:
        return

    console.print(f"Import de [bold]{submission.file_count}[/bold] fichier(s) soumis")
    try:
        with console.status("[cyan]Import en cours..."):
            outcome = await submission
    except BulkImportFailure as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)

    display_outcome(outcome)
    if outcome.has_failures:
        raise typer.Exit(code=1)


def _create_workflow(container, series_id: Optional[int]) -> ImportWorkflowService:
    """Cree un workflow, eventuellement limite a une serie."""
    return container.import_workflow_service(
        config=ImportWorkflowConfig(restrict_to_series_id=series_id)
    )


async def _run_scan(workflow: ImportWorkflowService, path: Path) -> None:
    """Lance le scan et sort en erreur s'il echoue."""
    try:
        with console.status(f"[cyan]Scan de {path}..."):
            result = await workflow.scan(str(path))
    except ScanFailure as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)
    if result is None:
        raise typer.Exit(code=1)

    console.print(
        f"[bold]{len(result.files)}[/bold] fichier(s) trouve(s), "
        f"{len(result.skipped)} ignore(s), {len(result.candidates)} candidat(s)"
    )
