import logging
from django.http import HttpResponse
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiResponse, OpenApiExample
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pages.models import PageDetails
from web.content import is_tracked_page
from .serializers import PageCountersSerializer, LikeRequestSerializer
from .metrics import record_page_like, record_page_view


logger = logging.getLogger(__name__)


def _unknown_page(slug):
    return Response({"detail": "Unknown page.", "slug": slug}, status=status.HTTP_404_NOT_FOUND)


class PageDetailsView(APIView):
    """Current view and like counters for a page."""

    @extend_schema(
        summary="Get page counters",
        description=(
            "Returns the view and like counters for a post or tracked page. "
            "Pages that were never viewed report zeros."
        ),
        responses={
            200: PageCountersSerializer,
            404: OpenApiResponse(description="Slug is not a post or tracked page"),
        },
        tags=["Counters"],
    )
    def get(self, request, slug):
        if not is_tracked_page(slug):
            return _unknown_page(slug)
        page = PageDetails.objects.filter(slug=slug).first() or PageDetails(slug=slug)
        return Response(PageCountersSerializer(page).data)


class PageViewView(APIView):
    """Record one view of a page."""

    @extend_schema(
        summary="Record a page view",
        description="Increments the view counter of a post or tracked page, creating it on first view.",
        request=None,
        responses={
            200: PageCountersSerializer,
            404: OpenApiResponse(description="Slug is not a post or tracked page"),
        },
        tags=["Counters"],
    )
    def post(self, request, slug):
        if not is_tracked_page(slug):
            return _unknown_page(slug)
        page = PageDetails.objects.increment(slug, "view_count")
        try:
            record_page_view(slug)
        except Exception:
            logger.exception("Failed to record Prometheus metrics for view of %s", slug)
        return Response(PageCountersSerializer(page).data, status=status.HTTP_200_OK)


class PageLikeView(APIView):
    """Add likes to a page."""

    @extend_schema(
        summary="Like a page",
        description=(
            "Adds `increment` likes (default 1) to a post or tracked page. "
            "Accepts JSON or form-data payloads."
        ),
        request=LikeRequestSerializer,
        responses={
            200: PageCountersSerializer,
            400: OpenApiResponse(description="Validation error"),
            404: OpenApiResponse(description="Slug is not a post or tracked page"),
        },
        tags=["Counters"],
        examples=[
            OpenApiExample(
                "Single like",
                value={"increment": 1},
                request_only=True,
            )
        ],
    )
    def post(self, request, slug):
        input_serializer = LikeRequestSerializer(data=request.data)
        if not input_serializer.is_valid():
            return Response(input_serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        if not is_tracked_page(slug):
            return _unknown_page(slug)

        increment = input_serializer.validated_data["increment"]
        page = PageDetails.objects.increment(slug, "likes", increment)
        try:
            record_page_like(slug, increment)
        except Exception:
            logger.exception("Failed to record Prometheus metrics for like of %s", slug)
        return Response(PageCountersSerializer(page).data, status=status.HTTP_200_OK)


def metrics(request):
    """Prometheus exposition of the counters in ``api.metrics``."""
    return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
