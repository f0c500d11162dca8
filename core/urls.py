"""URL configuration for the chart API."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("api/charts/profile/", views.profile_api, name="chart_profile"),
    path("api/charts/recommend/", views.recommend_api, name="chart_recommend"),
    path("api/charts/option/", views.option_api, name="chart_option"),
    path("api/charts/render/", views.render_api, name="chart_render"),
]
