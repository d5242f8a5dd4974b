"""
Package du workflow d'import : scan -> revue -> commit.

Reexporte les symboles principaux (from src.services.import_workflow import ...).
"""

from .dataclasses import ImportWorkflowConfig, ImportWorkflowState, WorkflowPhase
from .workflow_service import ImportWorkflowService

__all__ = [
    "ImportWorkflowConfig",
    "ImportWorkflowService",
    "ImportWorkflowState",
    "WorkflowPhase",
]
