"""Operation-set synthesis: the artifact groups every renderer consumes."""

from .models import (
    ArtifactGroup,
    ArtifactKind,
    EntityArtifacts,
    MetricSpec,
    PipelineStep,
    RelationResolver,
    StepKind,
    StorageStatement,
    SynthesisResult,
    WireArgument,
    WireOperation,
)
from .synthesizer import synthesize, synthesize_entity

__all__ = [
    "ArtifactGroup",
    "ArtifactKind",
    "EntityArtifacts",
    "MetricSpec",
    "PipelineStep",
    "RelationResolver",
    "StepKind",
    "StorageStatement",
    "SynthesisResult",
    "WireArgument",
    "WireOperation",
    "synthesize",
    "synthesize_entity",
]
