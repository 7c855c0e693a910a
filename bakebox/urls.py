"""
Bakebox URL Configuration.
"""

from django.urls import path

from bakebox.views import recipe_print_view

app_name = "bakebox"

urlpatterns = [
    path("recipes/<uuid:uuid>/print/", recipe_print_view, name="recipe_print"),
]
