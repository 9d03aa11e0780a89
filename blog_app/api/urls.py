from django.urls import path
from .views import PageDetailsView, PageViewView, PageLikeView

urlpatterns = [
    path("page/<slug:slug>/", PageDetailsView.as_view(), name="page-details"),
    path("page/<slug:slug>/view/", PageViewView.as_view(), name="page-view"),
    path("page/<slug:slug>/like/", PageLikeView.as_view(), name="page-like"),
]
