"""
OpenAPI/Swagger Configuration Module.

Uses drf-spectacular for schema generation.
"""


def get_api_docs_urlpatterns():
    """
    Returns URL patterns for API documentation endpoints.

    Usage in urls.py:
        from common.openapi import get_api_docs_urlpatterns
        urlpatterns += get_api_docs_urlpatterns()
    """
    from django.urls import path
    from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

    return [
        path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
        path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    ]
