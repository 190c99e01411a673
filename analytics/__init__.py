from .policy import AnalyticsPolicy, default_analytics_policy
from .reporting import DeliveryPerformance, RestaurantAnalytics, compute_restaurant_analytics

__all__ = [
    "AnalyticsPolicy",
    "default_analytics_policy",
    "DeliveryPerformance",
    "RestaurantAnalytics",
    "compute_restaurant_analytics",
]
