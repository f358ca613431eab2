from django.contrib.auth import get_user_model
from django.db.models import ProtectedError
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from core.errors import NotFoundError
from legal_documents.logic import store
from orgs import directory
from orgs.models import Org

User = get_user_model()


class BaseSetup(TestCase):
    def setUp(self):
        self.host = Org.objects.create(name="Open Source Host")
        self.other = Org.objects.create(name="Some Collective")


class SoftDeleteTests(BaseSetup):
    def test_soft_delete_hides_from_default_manager(self):
        self.host.soft_delete()
        self.assertIsNotNone(self.host.deleted_at)
        self.assertFalse(Org.objects.filter(pk=self.host.pk).exists())
        self.assertTrue(Org.all_objects.filter(pk=self.host.pk).exists())

    def test_delete_is_a_soft_delete(self):
        self.host.delete()
        self.host.refresh_from_db()
        self.assertTrue(self.host.is_deleted)

    def test_restore(self):
        self.host.soft_delete()
        self.host.restore()
        self.assertIsNone(self.host.deleted_at)
        self.assertTrue(Org.objects.filter(pk=self.host.pk).exists())

    def test_soft_delete_twice_keeps_first_timestamp(self):
        self.host.soft_delete()
        first = self.host.deleted_at
        self.host.soft_delete()
        self.host.refresh_from_db()
        self.assertEqual(first, self.host.deleted_at)

    def test_queryset_soft_delete(self):
        count = Org.objects.filter(pk__in=[self.host.pk, self.other.pk]).soft_delete()
        self.assertEqual(2, count)
        self.assertEqual(0, Org.objects.count())
        self.assertEqual(2, Org.all_objects.deleted().count())

    def test_hard_delete_refused_while_referenced(self):
        store.create(2019, self.host.pk, self.other.pk)
        with self.assertRaises(ProtectedError):
            self.host.hard_delete()
        self.assertTrue(Org.all_objects.filter(pk=self.host.pk).exists())

    def test_hard_delete_unreferenced(self):
        self.other.hard_delete()
        self.assertFalse(Org.all_objects.filter(pk=self.other.pk).exists())


class DirectoryTests(BaseSetup):
    def test_exists_for_active_and_soft_deleted(self):
        self.assertTrue(directory.exists(self.host.pk))
        self.host.soft_delete()
        self.assertTrue(directory.exists(self.host.pk))

    def test_exists_false_for_unknown_or_bad_ids(self):
        self.assertFalse(directory.exists(None))
        self.assertFalse(directory.exists(987654))
        self.assertFalse(directory.exists("not-an-id"))

    def test_get_returns_soft_deleted_org(self):
        self.host.soft_delete()
        org = directory.get(self.host.pk)
        self.assertEqual(self.host.pk, org.pk)
        self.assertTrue(org.is_deleted)

    def test_get_unknown_raises(self):
        with self.assertRaises(NotFoundError):
            directory.get(987654)


class OrgApiTests(BaseSetup):
    def setUp(self):
        super().setUp()
        self.staff = User.objects.create_user(username="staff", password="x", is_staff=True)
        self.client = APIClient()
        self.client.force_authenticate(self.staff)

    def test_list_excludes_soft_deleted_unless_asked(self):
        self.other.soft_delete()
        res = self.client.get(reverse("org-list"))
        self.assertEqual(200, res.status_code)
        ids = [o["id"] for o in res.data["results"]]
        self.assertEqual([self.host.pk], ids)

        res = self.client.get(reverse("org-list"), {"include_deleted": "true"})
        ids = {o["id"] for o in res.data["results"]}
        self.assertEqual({self.host.pk, self.other.pk}, ids)

    def test_delete_soft_deletes_and_keeps_records(self):
        doc = store.create(2020, self.host.pk, self.other.pk)
        res = self.client.delete(reverse("org-detail", args=[self.host.pk]))
        self.assertEqual(204, res.status_code)
        self.assertTrue(Org.all_objects.get(pk=self.host.pk).is_deleted)

        store.reload(doc)
        self.assertIsNone(doc.deleted_at)

        # still reachable by id
        res = self.client.get(reverse("org-detail", args=[self.host.pk]))
        self.assertEqual(200, res.status_code)
        self.assertTrue(res.data["is_deleted"])

    def test_restore(self):
        self.host.soft_delete()
        res = self.client.post(reverse("org-restore", args=[self.host.pk]))
        self.assertEqual(200, res.status_code)
        self.assertFalse(res.data["is_deleted"])

    def test_hosted_and_subject_documents(self):
        doc = store.create(2021, self.host.pk, self.other.pk)
        store.create(2022, self.other.pk, self.host.pk)

        res = self.client.get(reverse("org-hosted-legal-documents", args=[self.host.pk]))
        self.assertEqual(200, res.status_code)
        self.assertEqual([doc.pk], [d["id"] for d in res.data])

        res = self.client.get(reverse("org-legal-documents", args=[self.other.pk]), {"fiscal_year": "2021"})
        self.assertEqual([doc.pk], [d["id"] for d in res.data])

    def test_document_listing_rejects_bad_year(self):
        for bad in ("soon", "²"):
            with self.subTest(bad=bad):
                res = self.client.get(reverse("org-legal-documents", args=[self.other.pk]), {"fiscal_year": bad})
                self.assertEqual(400, res.status_code)
                self.assertIn("fiscal_year", res.data)

        res = self.client.get(reverse("org-hosted-legal-documents", args=[self.host.pk]), {"fiscal_year": "²"})
        self.assertEqual(400, res.status_code)

    def test_document_listing_filters_by_status(self):
        requested = store.create(2021, self.host.pk, self.other.pk)
        store.create(2021, self.host.pk, self.other.pk)
        store.update(requested, {"request_status": "REQUESTED"})

        url = reverse("org-hosted-legal-documents", args=[self.host.pk])
        res = self.client.get(url, {"request_status": "REQUESTED"})
        self.assertEqual(200, res.status_code)
        self.assertEqual([requested.pk], [d["id"] for d in res.data])

        res = self.client.get(url, {"request_status": "SCUTTLEBUTT"})
        self.assertEqual(400, res.status_code)
        self.assertIn("request_status", res.data)

    def test_non_staff_cannot_create(self):
        member = User.objects.create_user(username="member", password="x")
        client = APIClient()
        client.force_authenticate(member)
        res = client.post(reverse("org-list"), {"name": "Nope"}, format="json")
        self.assertEqual(403, res.status_code)
        self.assertFalse(Org.all_objects.filter(name="Nope").exists())

    def test_staff_can_create(self):
        res = self.client.post(reverse("org-list"), {"name": "New Host"}, format="json")
        self.assertEqual(201, res.status_code)
        self.assertTrue(Org.objects.filter(name="New Host").exists())
