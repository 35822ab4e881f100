from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ModelConfig:
    """A versioned model configuration document.

    Fields:
        model_id: Caller-supplied unique ID; also the document ID in the store.
        created_by: Author of the configuration.
        version: Version string of the producer that built the model.
        description: Free text.
        create_time: Creation time in epoch milliseconds.
        tags: Labels for grouping/filtering.
        metadata: Arbitrary metadata.
        definition: Opaque model definition (persisted, never interpreted here).
    """
    model_id: str
    created_by: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    create_time: Optional[int] = None
    tags: Tuple[str, ...] = ()
    metadata: Dict[str, object] = field(default_factory=dict)
    definition: Optional[Dict[str, object]] = None


@dataclass(frozen=True)
class SearchHit:
    """Document returned by an ID-scoped search.

    Fields:
        index: Concrete index holding the document.
        doc_id: Document ID.
        source: Raw stored payload.
    """
    index: str
    doc_id: str
    source: bytes
