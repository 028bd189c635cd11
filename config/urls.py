from django.urls import include, path

from src.api.urls import api

urlpatterns = [
    path("api/", api.urls),
    path(".well-known/", include("src.amp_cache.urls")),
]
