"""Order batching helpers."""

from .service import DEFAULT_BATCH_THRESHOLD, fleet_label, optimize

__all__ = ["optimize", "fleet_label", "DEFAULT_BATCH_THRESHOLD"]
