"""Pro tier entitlements."""

from enum import Enum
from typing import Protocol

from f1countdown.exceptions import ProFeatureLockedError


class ProductID(str, Enum):
    PRO = "com.f1countdown.pro"

    @property
    def display_name(self) -> str:
        return "F1 Countdown Pro"

    @property
    def description(self) -> str:
        return "Unlock all premium features with a one-time purchase"


class ProFeature(str, Enum):
    """Features unlocked by the Pro purchase."""

    LOCK_SCREEN_WIDGET = "lock_screen_widget"
    LIVE_ACTIVITIES = "live_activities"
    WALLPAPERS = "wallpapers"
    NO_ADS = "no_ads"

    @property
    def display_name(self) -> str:
        return {
            ProFeature.LOCK_SCREEN_WIDGET: "Lock Screen Widget",
            ProFeature.LIVE_ACTIVITIES: "Dynamic Island Live Score",
            ProFeature.WALLPAPERS: "All Track Wallpapers",
            ProFeature.NO_ADS: "Ad-Free Experience",
        }[self]


class PurchaseResult(str, Enum):
    SUCCESS = "success"
    PENDING = "pending"
    CANCELLED = "cancelled"
    FAILED = "failed"


class EntitlementService(Protocol):
    """Read-only view of the user's purchase state."""

    @property
    def is_pro_user(self) -> bool: ...


class StaticEntitlements:
    """Entitlements fixed at construction, e.g. from configuration."""

    def __init__(self, is_pro_user: bool = False):
        self._is_pro_user = is_pro_user

    @property
    def is_pro_user(self) -> bool:
        return self._is_pro_user


def has_feature(entitlements: EntitlementService, feature: ProFeature) -> bool:
    # Every feature is part of the single Pro purchase
    return entitlements.is_pro_user


def require_feature(entitlements: EntitlementService, feature: ProFeature) -> None:
    if not has_feature(entitlements, feature):
        raise ProFeatureLockedError(feature.display_name)
