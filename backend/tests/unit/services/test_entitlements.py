"""Tests for Pro entitlements."""

import pytest

from f1countdown.exceptions import ProFeatureLockedError
from f1countdown.services import ProFeature, StaticEntitlements
from f1countdown.services.entitlements import has_feature, require_feature


class TestEntitlements:
    def test_free_user(self):
        entitlements = StaticEntitlements()

        assert not has_feature(entitlements, ProFeature.LOCK_SCREEN_WIDGET)
        with pytest.raises(ProFeatureLockedError) as exc_info:
            require_feature(entitlements, ProFeature.LIVE_ACTIVITIES)
        assert exc_info.value.feature == "Dynamic Island Live Score"

    @pytest.mark.parametrize("feature", list(ProFeature))
    def test_pro_user_has_everything(self, feature):
        entitlements = StaticEntitlements(is_pro_user=True)

        assert has_feature(entitlements, feature)
        require_feature(entitlements, feature)
