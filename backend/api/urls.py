"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import TripWeatherView

urlpatterns = [
    path("weather/trip", TripWeatherView.as_view(), name="trip-weather"),
]
