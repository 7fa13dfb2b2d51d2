"""
stenciltree Core Module.

    - types: ComponentRecord, Manifest, Node and the failure taxonomy
    - result: Ok/Err outcomes
    - paths: Existence checks and upward file search
    - resolver: ManifestPathResolver
"""

from .resolver import ManifestPathResolver
from .result import Err, Ok, Result
from .types import ComponentRecord, Failure, FailureReason, Manifest, Node

__all__ = [
    "ComponentRecord",
    "Err",
    "Failure",
    "FailureReason",
    "Manifest",
    "ManifestPathResolver",
    "Node",
    "Ok",
    "Result",
]
