"""
Outils communs aux commandes CLI.

- suppress_loguru : coupe les logs de src pendant la revue interactive
- with_container : fournit un Container aux coroutines de commande
- console : console Rich partagee (definie dans review)
"""

from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger

from src.adapters.cli.review import console  # noqa: F401
from src.container import Container


@contextmanager
def suppress_loguru():
    """Desactive les logs du package src le temps du bloc (les prompts Rich restent lisibles)."""
    loguru_logger.disable("src")
    try:
        yield
    finally:
        loguru_logger.enable("src")


def with_container():
    """
    Decorateur de coroutine : cree un Container et le passe en premier argument.

    Le client HTTP et le cache de recherche sont fermes en sortie,
    y compris sur typer.Exit.

    Usage:
        @with_container()
        async def _scan_async(container, path):
            workflow = container.import_workflow_service()
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.bakarr_client().close()
                container.api_cache().close()

        return wrapper

    return decorator
