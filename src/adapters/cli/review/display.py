"""
Affichage de la revue d'import avec Rich.

Fournit les tableaux des candidats, des fichiers scannes (avec leur cible
courante), des fichiers ignores, des resultats de recherche et du bilan.
Les numeros affiches (1-based) sont ceux attendus par la boucle interactive.
"""

from typing import Optional

from rich.table import Table

from src.core.value_objects.import_outcome import ImportOutcome
from src.core.value_objects.scan import Candidate, ScannedFile, ScanResult
from src.services.season_heuristic import infer_candidate_season
from src.services.selection import SelectionState


def format_episode(episode: float) -> str:
    """Numero d'episode sans decimales inutiles (12 -> "12", 12.5 -> "12.5")."""
    return f"{episode:g}"


def format_season_episode(season: Optional[int], episode: float) -> str:
    """Format SxxEyy, saison inconnue affichee S??."""
    season_str = f"S{season:02d}" if season is not None else "S??"
    return f"{season_str}E{format_episode(episode).zfill(2)}"


def series_label(
    selection: SelectionState, series_id: int, scanned: Optional[ScannedFile] = None
) -> str:
    """Titre d'une serie cible : candidat connu, serie associee, sinon l'ID."""
    candidate = selection.get_candidate(series_id)
    if candidate is not None:
        return candidate.display_title
    if (
        scanned is not None
        and scanned.matched_series is not None
        and scanned.matched_series.id == series_id
    ):
        return scanned.matched_series.title or str(series_id)
    return str(series_id)


def display_candidates(selection: SelectionState) -> None:
    """Affiche les candidats avec leur etat (actif, bibliotheque, saison deduite)."""
    from . import console

    candidates = selection.candidates
    if not candidates:
        console.print("[yellow]Aucun candidat propose[/yellow]")
        return

    table = Table(title="Candidats", show_lines=False)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Actif", justify="center")
    table.add_column("Titre", style="bold")
    table.add_column("Format")
    table.add_column("Episodes", justify="right")
    table.add_column("Saison", justify="right")
    table.add_column("Bibliotheque")

    for idx, candidate in enumerate(candidates, 1):
        active = "[green]x[/green]" if selection.is_active(candidate.id) else " "
        origin = " [dim](manuel)[/dim]" if selection.is_manual(candidate.id) else ""
        library = "oui" if candidate.already_in_library else "[magenta]nouveau[/magenta]"
        table.add_row(
            str(idx),
            active,
            f"{candidate.display_title}{origin}",
            candidate.format or "",
            str(candidate.episode_count) if candidate.episode_count else "?",
            str(infer_candidate_season(candidate)),
            library,
        )

    console.print(table)


def display_files(selection: SelectionState) -> None:
    """Affiche les fichiers scannes et leur correspondance courante."""
    from . import console

    files = selection.scan_result.sorted_files()
    if not files:
        console.print("[yellow]Aucun fichier video trouve[/yellow]")
        return

    table = Table(title=f"Fichiers ({selection.selected_count}/{len(files)} selectionnes)")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Fichier")
    table.add_column("Detecte")
    table.add_column("Cible", style="bold")
    table.add_column("Episode cible")
    table.add_column("Release", style="dim")

    for idx, scanned in enumerate(files, 1):
        mapping = selection.mapping_for(scanned.source_path)
        if mapping is None:
            target = "[dim]-[/dim]"
            target_episode = ""
        else:
            target = series_label(selection, mapping.series_id, scanned)
            target_episode = format_season_episode(mapping.season, mapping.episode_number)
        release = " ".join(part for part in (scanned.group, scanned.resolution) if part)
        table.add_row(
            str(idx),
            scanned.filename or scanned.source_path,
            format_season_episode(scanned.season, scanned.episode_number),
            target,
            target_episode,
            release,
        )

    console.print(table)


def display_skipped(scan_result: ScanResult) -> None:
    """Affiche les fichiers ignores par le scan, avec leur raison."""
    from . import console

    if not scan_result.skipped:
        return

    table = Table(title="Fichiers ignores")
    table.add_column("Chemin", style="dim")
    table.add_column("Raison", style="yellow")
    for skipped in scan_result.skipped:
        table.add_row(skipped.path, skipped.reason)
    console.print(table)


def display_review(selection: SelectionState) -> None:
    """Affiche l'etat complet de la revue."""
    display_candidates(selection)
    display_files(selection)


def display_search_results(results: list[Candidate]) -> None:
    """Affiche les resultats d'une recherche dans le catalogue."""
    from . import console

    if not results:
        console.print("[yellow]Aucun resultat[/yellow]")
        return

    table = Table(title="Resultats de recherche")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Titre", style="bold")
    table.add_column("Format")
    table.add_column("Episodes", justify="right")
    table.add_column("Statut")
    table.add_column("Bibliotheque")

    for idx, candidate in enumerate(results, 1):
        table.add_row(
            str(idx),
            str(candidate.id),
            candidate.display_title,
            candidate.format or "",
            str(candidate.episode_count) if candidate.episode_count else "?",
            candidate.status or "",
            "oui" if candidate.already_in_library else "",
        )
    console.print(table)


def display_outcome(outcome: ImportOutcome) -> None:
    """Affiche le bilan d'import : compteurs puis chaque echec avec son erreur."""
    from . import console

    console.print(f"\n[bold green]{outcome.imported_count}[/bold green] fichier(s) importe(s)")
    for imported in outcome.imported_files:
        console.print(f"  [green]✓[/green] {imported.source_path} -> {imported.destination_path}")

    if outcome.has_failures:
        console.print(f"[bold red]{outcome.failed_count}[/bold red] fichier(s) en echec")
        for failed in outcome.failed_files:
            console.print(f"  [red]✗[/red] {failed.source_path}: {failed.error}")


def display_help() -> None:
    """Affiche l'aide des commandes disponibles."""
    from . import console

    help_text = """
[bold]Commandes disponibles:[/bold]
  [cyan]t N[/cyan]        Activer/desactiver le candidat N
  [cyan]f N[/cyan]        Selectionner/deselectionner le fichier N
  [cyan]a N C[/cyan]      Associer le fichier N au candidat C
  [cyan]e N S E[/cyan]    Corriger saison S et episode E du fichier N
  [cyan]r TITRE[/cyan]    Rechercher une serie et l'ajouter comme candidat
  [cyan]l[/cyan]          Reafficher candidats et fichiers
  [cyan]i[/cyan]          Lancer l'import
  [cyan]?[/cyan]          Afficher cette aide
  [cyan]q[/cyan]          Quitter sans importer
"""
    console.print(help_text)
