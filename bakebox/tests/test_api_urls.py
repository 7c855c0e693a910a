"""
URL configuration for Bakebox tests.

Used as ROOT_URLCONF in test settings via @pytest.mark.urls.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/bakebox/", include("bakebox.api.urls")),
    path("bakebox/", include("bakebox.urls")),
]
