"""Business logic services."""

from f1countdown.services.data_service import BackgroundRefreshResult, DataService
from f1countdown.services.entitlements import (
    EntitlementService,
    ProductID,
    ProFeature,
    PurchaseResult,
    StaticEntitlements,
    require_feature,
)
from f1countdown.services.live_activity_service import (
    ActivitySink,
    InMemoryActivitySink,
    LiveActivityService,
    LiveActivityState,
)
from f1countdown.services.notification_service import (
    InMemoryNotificationSink,
    NotificationIdentifier,
    NotificationService,
    NotificationSink,
)
from f1countdown.services.preferences_service import PreferencesService
from f1countdown.services.race_detail_service import RaceDetailService
from f1countdown.services.race_list_service import (
    RaceFilterMode,
    RaceListService,
    RaceListState,
)
from f1countdown.services.timeline_service import TimelineService

__all__ = [
    "DataService",
    "BackgroundRefreshResult",
    "TimelineService",
    "PreferencesService",
    "NotificationService",
    "NotificationIdentifier",
    "NotificationSink",
    "InMemoryNotificationSink",
    "LiveActivityService",
    "LiveActivityState",
    "ActivitySink",
    "InMemoryActivitySink",
    "EntitlementService",
    "StaticEntitlements",
    "ProductID",
    "ProFeature",
    "PurchaseResult",
    "require_feature",
    "RaceListService",
    "RaceListState",
    "RaceFilterMode",
    "RaceDetailService",
]
