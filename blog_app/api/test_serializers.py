from django.test import SimpleTestCase, override_settings
from pages.models import PageDetails
from .serializers import LikeRequestSerializer, PageCountersSerializer


class LikeRequestSerializerTests(SimpleTestCase):
    def test_defaults_to_one(self):
        s = LikeRequestSerializer(data={})
        self.assertTrue(s.is_valid(), s.errors)
        self.assertEqual(s.validated_data["increment"], 1)

    def test_zero_rejected(self):
        s = LikeRequestSerializer(data={"increment": 0})
        self.assertFalse(s.is_valid())
        self.assertIn("Ensure this value is greater than or equal to 1", str(s.errors))

    @override_settings(MAX_LIKES_PER_REQUEST=3)
    def test_limit_from_settings(self):
        s = LikeRequestSerializer(data={"increment": 4})
        self.assertFalse(s.is_valid())
        self.assertIn("At most 3 likes", str(s.errors))
        self.assertTrue(LikeRequestSerializer(data={"increment": 3}).is_valid())


class PageCountersSerializerTests(SimpleTestCase):
    def test_unsaved_page_serializes_zeros(self):
        data = PageCountersSerializer(PageDetails(slug="fresh")).data
        self.assertEqual(data, {"slug": "fresh", "view_count": 0, "likes": 0})
