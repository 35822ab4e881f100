from .client import ElasticsearchDocumentStore

__all__ = ["ElasticsearchDocumentStore"]
