"""URL configuration for the rental portfolio project.

The `urlpatterns` list routes URLs to views. It includes both Django admin
and application‑level routers provided by Django Rest Framework and each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore

from config.views import healthz

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    path('healthz/', healthz, name='healthz'),
    # Application URLs
    path('api/v1/properties/', include('apps.properties.urls')),
    path('api/v1/portfolio/', include('apps.portfolio.urls')),
]
