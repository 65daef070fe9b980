"""
Artifact materialization: unpacking, dex2jar re-expansion and disassembly.
"""

from .artifact_materializer import (
    ArtifactMaterializer,
    CommandRunner,
    MaterializationError,
    MaterializationResult,
    MaterializationStep,
    StepResult
)

__all__ = [
    'ArtifactMaterializer',
    'CommandRunner',
    'MaterializationError',
    'MaterializationResult',
    'MaterializationStep',
    'StepResult'
]
