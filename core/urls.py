"""URL configuration for dashboard views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("", views.dashboard, name="dashboard"),
    path("market/overview/", views.market_overview_fragment, name="market_overview"),
    path("api/market-data/", views.market_data_api, name="market_data_api"),
    path("select-symbol/", views.select_symbol_view, name="select_symbol"),
    path("order-book/precision/", views.select_precision_view, name="select_precision"),
    path("widgets/<slug:key>/minimize/", views.toggle_widget_minimized, name="widget_minimize"),
    path("widgets/<slug:key>/maximize/", views.toggle_widget_maximized, name="widget_maximize"),
]
