"""Migration module -- feedback sink, service interface and upgrade driver."""

from content_search.migration.feedback import Feedback, MigrationService, StreamFeedback
from content_search.migration.upgrade import UpgradeOptions, run_upgrade

__all__ = ["Feedback", "MigrationService", "StreamFeedback", "UpgradeOptions", "run_upgrade"]
