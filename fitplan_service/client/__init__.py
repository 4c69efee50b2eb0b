from .api_client import FitPlanApiClient
from .image_intake import SelectedImage, encode_image, load_image
from .orchestrator import GENERATION_STAGES, LogNotifier, PlanOrchestrator, PlanStep
from .snapshot_store import FileSnapshotStore, SnapshotStore

__all__ = [
    "FitPlanApiClient",
    "SelectedImage",
    "encode_image",
    "load_image",
    "GENERATION_STAGES",
    "LogNotifier",
    "PlanOrchestrator",
    "PlanStep",
    "FileSnapshotStore",
    "SnapshotStore",
]
