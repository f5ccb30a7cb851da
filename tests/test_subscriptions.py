"""
Tests for subscription status helpers.
"""

from datetime import datetime, timedelta, timezone

from vibepoint.subscriptions import FreeTierProvider, free_tier_status, is_subscription_active

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


class TestSubscriptions:
    def test_free_tier_defaults(self):
        status = free_tier_status()
        assert status.is_pro is False
        assert status.tier == "free"
        assert status.limits.recipes_per_week == 3
        assert status.limits.ai_requests_per_hour == 5

    def test_active_without_end_date(self):
        assert is_subscription_active("active", None, NOW) is True

    def test_active_until_end_date(self):
        assert is_subscription_active("active", NOW + timedelta(days=1), NOW) is True
        assert is_subscription_active("active", NOW - timedelta(seconds=1), NOW) is False

    def test_other_statuses_are_inactive(self):
        for status in ("cancelled", "expired", "trial", "free"):
            assert is_subscription_active(status, None, NOW) is False

    async def test_free_tier_provider(self):
        status = await FreeTierProvider().status_for(None)
        assert status == free_tier_status()
