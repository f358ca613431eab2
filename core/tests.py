import os
from unittest import mock

from django.test import TestCase
from django.urls import reverse

from core.errors import NotFoundError, ReferentialError, ValidationError


class HealthTests(TestCase):
    def test_health_reports_database(self):
        res = self.client.get(reverse("health-check"))
        self.assertEqual(200, res.status_code)
        self.assertEqual({"status": "ok", "database": True}, res.json())


class ErrorTests(TestCase):
    def test_as_dict_uses_field(self):
        err = ValidationError("Fiscal year is required.", field="fiscal_year")
        self.assertEqual({"fiscal_year": ["Fiscal year is required."]}, err.as_dict())

    def test_as_dict_without_field(self):
        err = NotFoundError("gone")
        self.assertEqual({"detail": "gone"}, err.as_dict())

    def test_taxonomy(self):
        self.assertFalse(issubclass(ReferentialError, ValidationError))
        self.assertEqual("x", str(ReferentialError("x", field="subject_org")))


class EnvBoolTests(TestCase):
    def test_truthy_and_falsy_values(self):
        from config.settings.base import env_bool

        for raw, expected in (("true", True), ("TRUE", True), (" 1 ", True), ("on", True), ("false", False), ("0", False), ("", False)):
            with self.subTest(raw=raw), mock.patch.dict(os.environ, {"LEGAL_DOCUMENTS_FLAG": raw}):
                self.assertIs(expected, env_bool("LEGAL_DOCUMENTS_FLAG"))

    def test_default_when_unset(self):
        from config.settings.base import env_bool

        with mock.patch.dict(os.environ, clear=False):
            os.environ.pop("LEGAL_DOCUMENTS_FLAG", None)
            self.assertTrue(env_bool("LEGAL_DOCUMENTS_FLAG", "true"))
            self.assertFalse(env_bool("LEGAL_DOCUMENTS_FLAG"))
