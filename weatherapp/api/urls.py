"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from weatherapp.api.views import MenuView, RefreshView, ScreenView

urlpatterns = [
    path("screen", ScreenView.as_view(), name="screen"),
    path("screen/refresh", RefreshView.as_view(), name="screen-refresh"),
    path("menu", MenuView.as_view(), name="menu"),
]
