from urlifyclient.analytics.aggregator import bucket_clicks, summarize
from urlifyclient.analytics.analytics_controller import AnalyticsController


__all__ = ['bucket_clicks', 'summarize', 'AnalyticsController']
