"""Filecoin storage boundary.

Everything the rest of the app needs from storage is re-exported here.
"""

from app.services.storage.error_translation import translate_storage_error
from app.services.storage.filecoin_storage import (
    FilecoinStorage,
    exists_in_filecoin,
    get_stored_file_info,
    retrieve_from_filecoin,
    upload_to_filecoin,
)
from app.services.storage.synapse_client import SynapseClientProvider, default_client_provider
from app.services.storage.types import (
    StoredFileInfo,
    UploadProgressInfo,
    UploadResult,
    UploadStage,
)

__all__ = [
    "FilecoinStorage",
    "StoredFileInfo",
    "SynapseClientProvider",
    "UploadProgressInfo",
    "UploadResult",
    "UploadStage",
    "default_client_provider",
    "exists_in_filecoin",
    "get_stored_file_info",
    "retrieve_from_filecoin",
    "translate_storage_error",
    "upload_to_filecoin",
]
