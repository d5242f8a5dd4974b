"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : le client du
serveur (qui implemente les quatre ports du moteur), le coordinateur du
commit et le service de workflow.
"""

from dependency_injector import containers, providers

from .adapters.api.bakarr_client import BakarrClient
from .adapters.api.cache import APICache
from .config import Settings
from .services.commit import ImportCommitCoordinator
from .services.import_workflow import ImportWorkflowService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        workflow = container.import_workflow_service()
        await workflow.scan("/downloads/show")

    Pour limiter le scan a une serie :
        container.import_workflow_service(
            config=ImportWorkflowConfig(restrict_to_series_id=42)
        )
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Cache API - Singleton partage par les recherches
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Client du serveur - Singleton, implemente Scanner, Catalogue,
    # Bibliotheque et Import groupe
    bakarr_client = providers.Singleton(
        BakarrClient,
        base_url=config.provided.api_url,
        api_key=config.provided.api_key,
        cache=api_cache,
        timeout=config.provided.request_timeout,
        max_retries=config.provided.max_retries,
    )

    # Coordinateur du commit - Factory (sans etat)
    commit_coordinator = providers.Factory(
        ImportCommitCoordinator,
        library=bakarr_client,
        importer=bakarr_client,
        profile_name=config.provided.quality_profile,
        root_folder=config.provided.root_folder,
    )

    # Workflow - Factory : une instance par session d'import
    import_workflow_service = providers.Factory(
        ImportWorkflowService,
        scanner=bakarr_client,
        catalog=bakarr_client,
        library=bakarr_client,
        coordinator=commit_coordinator,
    )
