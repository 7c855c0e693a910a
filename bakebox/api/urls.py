"""
Bakebox API URLs.

Include this in your project's urlpatterns:

    path('api/bakebox/', include('bakebox.api.urls')),
"""

from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import (
    BackupView,
    CategoryViewSet,
    KnowledgeViewSet,
    MoldPresetView,
    RecipeViewSet,
    ResourceViewSet,
)

router = DefaultRouter()
router.register("recipes", RecipeViewSet)
router.register("categories", CategoryViewSet)
router.register("knowledge", KnowledgeViewSet)
router.register("resources", ResourceViewSet)

urlpatterns = [
    path("backup/", BackupView.as_view(), name="bakebox-backup"),
    path("molds/", MoldPresetView.as_view(), name="bakebox-molds"),
] + router.urls
