from .store import InMemoryDocumentStore

__all__ = ["InMemoryDocumentStore"]
