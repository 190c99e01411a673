from django.urls import path

from . import views


def build_urlpatterns(dispatcher):
    """
    URL patterns with one Dispatcher injected into every view.
    """
    def route(pattern, view_class, name):
        return path(pattern, view_class.as_view(dispatcher=dispatcher), name=name)

    return [
        route("users/", views.UsersView, "users"),
        route("restaurants/", views.RestaurantsView, "restaurants"),
        route("restaurants/<str:restaurant_id>/analytics/", views.RestaurantAnalyticsView, "restaurant-analytics"),
        route("menu-items/", views.MenuItemsView, "menu-items"),
        route("orders/", views.OrdersView, "orders"),
        route("orders/<str:order_id>/", views.OrderDetailView, "order-detail"),
        route("deliveries/", views.DeliveriesView, "deliveries"),
        route("deliveries/<str:delivery_id>/accept/", views.DeliveryAcceptView, "delivery-accept"),
        route("deliveries/<str:delivery_id>/delivered/", views.DeliveryDeliveredView, "delivery-delivered"),
        route("batch-orders/", views.BatchOrdersView, "batch-orders"),
        route("batch-orders/<str:batch_id>/", views.BatchOrderDetailView, "batch-order-detail"),
        route(
            "batch-orders/delivery-person/<str:courier_id>/",
            views.CourierBatchOrdersView,
            "courier-batch-orders",
        ),
        route("pricing-rules/", views.PricingRulesView, "pricing-rules"),
        route("pricing-rules/quote/", views.PriceQuoteView, "pricing-quote"),
        route("pricing-rules/restaurant/<str:restaurant_id>/", views.RestaurantPricingRulesView, "restaurant-pricing-rules"),
        route("pricing-rules/<str:rule_id>/", views.PricingRuleDetailView, "pricing-rule-detail"),
        route("loyalty/earn-points/", views.EarnPointsView, "loyalty-earn-points"),
        route("loyalty-programs/", views.LoyaltyProgramsView, "loyalty-programs"),
        route("loyalty-programs/<str:user_id>/", views.LoyaltyProgramDetailView, "loyalty-program-detail"),
    ]
