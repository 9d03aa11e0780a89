from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView
from rest_framework.routers import DefaultRouter
from api.views import metrics
from pages.views import PageDetailsViewSet

router = DefaultRouter()
router.register("pages", PageDetailsViewSet, basename="pages")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("api.urls")),
    path("api/", include(router.urls)),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("metrics/", metrics, name="metrics"),
    path("", include("web.urls")),
]
