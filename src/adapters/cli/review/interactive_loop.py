"""
Boucle interactive de revue de l'import.

Lit les commandes de l'utilisateur (bascule de candidat, correction d'un
fichier, recherche manuelle) et les applique au workflow jusqu'a l'import
ou l'abandon.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from rich.prompt import Prompt

from src.adapters.api.retry import ApiError, RateLimitError
from src.core.exceptions import ImportReconciliationError
from src.core.value_objects.scan import Candidate, ScannedFile
from src.services.selection import SelectionState

from .display import display_help, display_review, display_search_results, series_label

if TYPE_CHECKING:
    from src.services.import_workflow import ImportWorkflowService


class ReviewAction(str, Enum):
    """Issue de la boucle de revue."""

    IMPORT = "import"
    QUIT = "quit"


def parse_command(raw: str) -> tuple[str, list[str]]:
    """
    Decoupe une saisie en (commande, arguments).

    La recherche ("r TITRE") conserve son texte en un seul argument.

    Example:
        parse_command("a 3 2") -> ("a", ["3", "2"])
        parse_command("r Frieren Season 2") -> ("r", ["Frieren Season 2"])
    """
    raw = raw.strip()
    if not raw:
        return "", []
    verb, _, rest = raw.partition(" ")
    verb = verb.lower()
    rest = rest.strip()
    if verb == "r":
        return verb, [rest] if rest else []
    return verb, rest.split()


def _pick(items: list, number: str, label: str):
    """Element d'une liste par son numero d'affichage (1-based)."""
    if not number.isdigit() or not 1 <= int(number) <= len(items):
        raise ValueError(f"Numero de {label} invalide: {number}")
    return items[int(number) - 1]


def _default_target(selection: SelectionState, scanned: ScannedFile) -> Optional[int]:
    """
    Serie cible proposee pour selectionner un fichier.

    Ordre : serie associee par le scan, candidat suggere, unique candidat actif.
    """
    if scanned.matched_series is not None:
        return scanned.matched_series.id
    if scanned.suggested_candidate_id is not None:
        return scanned.suggested_candidate_id
    active = selection.active_candidate_ids
    if len(active) == 1:
        return next(iter(active))
    return None


async def _search_and_add(workflow: "ImportWorkflowService", query: str) -> None:
    """Recherche dans le catalogue et ajoute le resultat choisi comme candidat."""
    from . import console

    if not query:
        query = Prompt.ask("[bold]Recherche[/bold]")
    results: list[Candidate] = await workflow.search_catalog(query)
    display_search_results(results)
    if not results:
        return

    choice = Prompt.ask("[bold]Numero a ajouter[/bold] (vide pour annuler)", default="")
    if not choice.strip():
        return
    candidate = _pick(results, choice.strip(), "resultat")
    claimed = workflow.add_manual_candidate(candidate)
    console.print(
        f"[green]{candidate.display_title}[/green] ajoute, {claimed} fichier(s) associe(s)"
    )


async def review_loop(workflow: "ImportWorkflowService") -> ReviewAction:
    """
    Boucle interactive de revue.

    Args:
        workflow: Workflow en phase de revue

    Returns:
        ReviewAction.IMPORT pour lancer l'import, ReviewAction.QUIT pour abandonner
    """
    from . import console

    should_redisplay = True

    while True:
        selection = workflow.selection
        if should_redisplay:
            display_review(selection)
        should_redisplay = True

        console.print(
            "[dim]Options: [cyan]t N[/cyan]=candidat  [cyan]f N[/cyan]=fichier  "
            "[cyan]a N C[/cyan]=associer  [cyan]e N S E[/cyan]=episode  "
            "[cyan]r[/cyan]=recherche  [cyan]i[/cyan]=importer  "
            "[cyan]q[/cyan]=quitter  [cyan]?[/cyan]=aide[/dim]"
        )
        verb, args = parse_command(Prompt.ask("[bold]Choix[/bold]", default="i"))

        files = selection.scan_result.sorted_files()
        candidates = selection.candidates

        try:
            if verb == "i":
                return ReviewAction.IMPORT

            elif verb == "q":
                return ReviewAction.QUIT

            elif verb == "l":
                continue

            elif verb in ("?", "h"):
                display_help()
                should_redisplay = False

            elif verb == "t" and len(args) == 1:
                candidate = _pick(candidates, args[0], "candidat")
                active = workflow.toggle_candidate(candidate.id)
                state = "active" if active else "desactive"
                console.print(f"{candidate.display_title}: {state}")

            elif verb == "f" and len(args) == 1:
                scanned = _pick(files, args[0], "fichier")
                mapping = selection.mapping_for(scanned.source_path)
                if mapping is not None:
                    workflow.toggle_file(scanned.source_path, mapping.series_id)
                else:
                    target = _default_target(selection, scanned)
                    if target is None:
                        number = Prompt.ask("[bold]Candidat cible[/bold] (numero)")
                        target = _pick(candidates, number.strip(), "candidat").id
                    workflow.toggle_file(scanned.source_path, target)

            elif verb == "a" and len(args) == 2:
                scanned = _pick(files, args[0], "fichier")
                candidate = _pick(candidates, args[1], "candidat")
                if not workflow.update_file_series(scanned.source_path, candidate.id):
                    workflow.toggle_file(scanned.source_path, candidate.id)
                console.print(
                    f"{scanned.filename} -> "
                    f"{series_label(selection, candidate.id, scanned)}"
                )

            elif verb == "e" and len(args) == 3:
                scanned = _pick(files, args[0], "fichier")
                if not (args[1].isdigit() and args[2].isdigit()):
                    raise ValueError("Saison et episode doivent etre des entiers positifs")
                workflow.update_file_mapping(
                    scanned.source_path, int(args[1]), int(args[2])
                )

            elif verb == "r":
                await _search_and_add(workflow, args[0] if args else "")

            else:
                console.print("[red]Commande invalide[/red] (tapez ? pour l'aide)")
                should_redisplay = False

        except (ImportReconciliationError, ApiError, RateLimitError, ValueError) as e:
            console.print(f"[red]Erreur:[/red] {e}")
            should_redisplay = False
