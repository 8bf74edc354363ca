from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

schema_view = get_schema_view(
    openapi.Info(
        title="CyCrack API",
        default_version="v1",
        description="Cipher catalog, seeded challenges and round scoring for the CyCrack game.",
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)

urlpatterns = [
    path("api/", include("cycrack.urls")),
    path("swagger.json", schema_view.without_ui(cache_timeout=0), name="schema-json"),
]
