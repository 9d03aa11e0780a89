from django.urls import path
from .views import index, blog_post, set_theme


urlpatterns = [
    path("", index, name="home"),
    path("blog/<slug:slug>/", blog_post, name="blog_post"),
    path("set-theme/", set_theme, name="set_theme"),
]
