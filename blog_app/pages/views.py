from rest_framework import viewsets
from .models import PageDetails
from .serializers import PageDetailsSerializer

class PageDetailsViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = PageDetails.objects.all()
    serializer_class = PageDetailsSerializer
    lookup_field = "slug"
