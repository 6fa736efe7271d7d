"""
URL configuration for the Shopee AI listing service.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.1/topics/http/urls/
"""

from django.conf import settings
from django.conf.urls.static import static
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from apps.listings.views import IndexView
from core.health import health_check

urlpatterns = [
    # Landing
    path("", IndexView.as_view(), name="index"),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger"),
    # API
    path("api/", include("apps.listings.urls", namespace="listings")),
    # Health check
    path("health/", health_check, name="health"),
]

# Uploaded photos; behind a reverse proxy or object store in production
urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# Debug toolbar (development only)
if settings.DEBUG and "debug_toolbar" in settings.INSTALLED_APPS:
    import debug_toolbar
    from django.urls import URLResolver

    debug_patterns: list[URLResolver] = [
        path("__debug__/", include(debug_toolbar.urls)),
    ]
    urlpatterns = [*debug_patterns, *urlpatterns]
