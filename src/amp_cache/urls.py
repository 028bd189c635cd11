from django.urls import path
from . import views

app_name = "amp_cache"

urlpatterns = [
    path("amphtml/apikey.pub", views.amp_public_key, name="apikey"),
]
