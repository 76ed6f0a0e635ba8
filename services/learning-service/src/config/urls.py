# services/learning-service/src/config/urls.py
"""
Learning Service URL Configuration
"""

from django.contrib import admin
from django.urls import path, include

from common.health import get_health_urlpatterns
from common.openapi import get_api_docs_urlpatterns

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/learning/', include('apps.core.api.urls', namespace='learning')),
]

urlpatterns += get_health_urlpatterns()
urlpatterns += get_api_docs_urlpatterns()
