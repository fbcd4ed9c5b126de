"""WordPress clients and the document-to-post syncers."""

from .config import WordPressConfig
from .rest import WordPressRestClient
from .syncer import (
    BaseSyncer,
    SyncOptions,
    SyncResult,
    WordPressHttpSyncer,
    WordPressSyncer,
)
from .xmlrpc_client import WordPressXmlRpcClient

__all__ = [
    "BaseSyncer",
    "SyncOptions",
    "SyncResult",
    "WordPressConfig",
    "WordPressHttpSyncer",
    "WordPressRestClient",
    "WordPressSyncer",
    "WordPressXmlRpcClient",
]
