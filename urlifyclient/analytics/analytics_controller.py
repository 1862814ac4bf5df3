import logging

from urlifyclient.analytics.aggregator import bucket_clicks, summarize
from urlifyclient.constants import Defaults
from urlifyclient.exceptions import GatewayError
from urlifyclient.gateway.api_gateway import ApiGateway
from urlifyclient.models import AnalyticsRecord, AnalyticsSummary, ClickBucket


logger = logging.getLogger(__name__)


class AnalyticsController:
    """Fetch analytics for the analytics view

    An empty analytics list is a normal state for a new user, so fetch failures
    are only logged. They never turn into a user-visible notification.
    """

    def __init__(self, gateway: ApiGateway, days: int = Defaults.ANALYTICS_DAYS):
        self.gateway = gateway
        self.days = days
        self.records: list[AnalyticsRecord] = []
        self.loading = False

    @property
    def summary(self) -> AnalyticsSummary:
        return summarize(self.records)

    def series(self, record: AnalyticsRecord) -> list[ClickBucket]:
        """Daily click series for one record; empty means 'no data' rather than an empty chart"""
        return bucket_clicks(record.recent_clicks, days=self.days)

    async def load(self) -> list[AnalyticsRecord]:
        self.loading = True
        try:
            self.records = await self.gateway.fetch_all_analytics()
        except GatewayError:
            logger.exception('Analytics fetch failed.')
            self.records = []
        finally:
            self.loading = False
        return self.records

    async def load_one(self, short_code: str) -> AnalyticsRecord | None:
        try:
            return await self.gateway.fetch_analytics(short_code)
        except GatewayError:
            logger.exception('Analytics fetch failed.', extra={'shortcode': short_code})
            return None
