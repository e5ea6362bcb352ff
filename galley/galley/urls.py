"""Конфигурация URL маршрутов проекта Galley.

Этот модуль определяет основные URL маршруты проекта:
- API endpoints (django-ninja, /api/v1/)
"""

from django.urls import path

from api.v1.router import api

urlpatterns = [
    path("api/v1/", api.urls),
]
