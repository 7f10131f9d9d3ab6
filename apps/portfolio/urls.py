"""URL routing for the portfolio views."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import PortfolioTimelineView

urlpatterns = [
    path("timeline/", PortfolioTimelineView.as_view(), name="portfolio-timeline"),
]
