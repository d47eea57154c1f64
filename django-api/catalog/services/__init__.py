from catalog.services.deletion_guard import DeletionGuard
from catalog.services.lifecycle_service import LifecycleService, PackNotPublishableError
from catalog.services.orchestrator import ProgressTracker, UploadedAssets, UploadOrchestrator
from catalog.services.pack_writer import PackAggregateWriter
from catalog.services.publishing_service import PackPublishingService
from catalog.services.uploader import AssetUploader

__all__ = [
    "AssetUploader",
    "DeletionGuard",
    "LifecycleService",
    "PackAggregateWriter",
    "PackNotPublishableError",
    "PackPublishingService",
    "ProgressTracker",
    "UploadedAssets",
    "UploadOrchestrator",
]
