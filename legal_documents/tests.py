from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from core.errors import NotFoundError, ReferentialError, ValidationError
from orgs.models import Org
from legal_documents.logic import queries, store, workflow
from legal_documents.logic.validation import validate_fiscal_year
from legal_documents.models import LegalDocument

User = get_user_model()

RequestStatus = LegalDocument.RequestStatus
DocumentType = LegalDocument.DocumentType


class BaseSetup(TestCase):
    def setUp(self):
        self.host = Org.objects.create(name="myhost", description="Fiscal host")
        self.collective = Org.objects.create(name="xdamman")

    def make_doc(self, year=2019, **kwargs):
        return store.create(year, self.host.pk, self.collective.pk, **kwargs)


class CreateTests(BaseSetup):
    def test_created_with_expected_defaults(self):
        doc = self.make_doc()
        self.assertEqual(RequestStatus.NOT_REQUESTED, doc.request_status)
        self.assertEqual(DocumentType.US_TAX_FORM, doc.document_type)
        self.assertIsNone(doc.deleted_at)
        self.assertIsNone(doc.document_link)
        self.assertEqual(self.host.pk, doc.requesting_org_id)
        self.assertEqual(self.collective.pk, doc.subject_org_id)

    def test_first_supported_year_is_accepted(self):
        doc = self.make_doc(year=2015)
        self.assertEqual(2015, doc.fiscal_year)

    def test_year_before_2015_is_rejected(self):
        for year in (2014, 1999, 0, -1):
            with self.subTest(year=year), self.assertRaises(ValidationError) as ctx:
                self.make_doc(year=year)
            self.assertEqual("fiscal_year", ctx.exception.field)
        self.assertEqual(0, LegalDocument.all_objects.count())

    def test_missing_year_is_rejected(self):
        with self.assertRaises(ValidationError):
            store.create(None, self.host.pk, self.collective.pk)
        self.assertEqual(0, LegalDocument.all_objects.count())

    def test_missing_host_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            store.create(2019, None, self.collective.pk)
        self.assertEqual("requesting_org", ctx.exception.field)

    def test_missing_subject_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            store.create(2019, self.host.pk, None)
        self.assertEqual("subject_org", ctx.exception.field)

    def test_unknown_org_is_a_referential_error(self):
        with self.assertRaises(ReferentialError) as ctx:
            store.create(2019, self.host.pk, 987654)
        self.assertEqual("subject_org", ctx.exception.field)
        self.assertEqual(0, LegalDocument.all_objects.count())

    def test_soft_deleted_orgs_are_valid_referents(self):
        self.host.soft_delete()
        self.collective.soft_delete()
        doc = self.make_doc()
        self.assertIsNotNone(doc.pk)

    def test_unknown_document_type_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            self.make_doc(document_type="EU_VAT_FORM")
        self.assertEqual("document_type", ctx.exception.field)

    def test_no_dedup_on_org_pair_and_year(self):
        self.make_doc()
        self.make_doc()
        self.assertEqual(2, LegalDocument.objects.count())

    def test_create_logs(self):
        with self.assertLogs("legal_documents.logic.store", level="INFO") as logs:
            doc = self.make_doc()
        self.assertIn(f"doc={doc.pk}", logs.output[0])

    def test_year_as_numeric_string(self):
        self.assertEqual(2020, validate_fiscal_year("2020"))
        self.assertEqual(2021, validate_fiscal_year(" 2021 "))
        for bad in ("twenty", 2019.5, True, "", "²", "2019²", "-2019"):
            with self.subTest(bad=bad), self.assertRaises(ValidationError):
                validate_fiscal_year(bad)

    def test_unicode_digit_year_is_a_validation_error(self):
        with self.assertRaises(ValidationError) as ctx:
            store.create("²", self.host.pk, self.collective.pk)
        self.assertEqual("fiscal_year", ctx.exception.field)
        doc = self.make_doc()
        with self.assertRaises(ValidationError):
            store.update(doc, {"fiscal_year": "²"})
        store.reload(doc)
        self.assertEqual(2019, doc.fiscal_year)
        self.assertEqual(1, LegalDocument.all_objects.count())


class UpdateTests(BaseSetup):
    def test_document_link_round_trip(self):
        doc = self.make_doc()
        store.update(doc, {"document_link": "a string"})
        store.reload(doc)
        self.assertEqual("a string", doc.document_link)

    def test_can_set_valid_status(self):
        doc = self.make_doc()
        store.update(doc, {"request_status": RequestStatus.RECEIVED})
        store.reload(doc)
        self.assertEqual(RequestStatus.RECEIVED, doc.request_status)

    def test_any_known_status_can_be_set_in_any_order(self):
        doc = self.make_doc()
        for value in (RequestStatus.RECEIVED, RequestStatus.NOT_REQUESTED, RequestStatus.REQUESTED):
            store.update(doc, {"request_status": value})
            self.assertEqual(value, LegalDocument.objects.get(pk=doc.pk).request_status)

    def test_invalid_status_is_rejected_and_not_persisted(self):
        doc = self.make_doc()
        for bad in ("SCUTTLEBUTT", "received", "", None, 3):
            with self.subTest(bad=bad):
                with self.assertRaises(ValidationError):
                    store.update(doc, {"request_status": bad})
                # the caller's copy holds the rejected value until reload
                self.assertEqual(bad, doc.request_status)
                store.reload(doc)
                self.assertEqual(RequestStatus.NOT_REQUESTED, doc.request_status)

    def test_rejected_update_writes_nothing(self):
        doc = self.make_doc()
        with self.assertRaises(ValidationError):
            store.update(doc, {"document_link": "https://files/w9.pdf", "request_status": "SCUTTLEBUTT"})
        store.reload(doc)
        self.assertIsNone(doc.document_link)

    def test_rejected_update_logs_warning(self):
        doc = self.make_doc()
        with self.assertLogs("legal_documents.logic.store", level="WARNING") as logs:
            with self.assertRaises(ValidationError):
                store.update(doc, {"request_status": "SCUTTLEBUTT"})
        self.assertIn("rejected", logs.output[0])

    def test_year_update_is_revalidated(self):
        doc = self.make_doc()
        with self.assertRaises(ValidationError):
            store.update(doc, {"fiscal_year": 2010})
        store.reload(doc)
        self.assertEqual(2019, doc.fiscal_year)

        store.update(doc, {"fiscal_year": 2020})
        self.assertEqual(2020, doc.fiscal_year)

    def test_org_references_are_immutable(self):
        other = Org.objects.create(name="other")
        doc = self.make_doc()
        for field in ("requesting_org_id", "subject_org", "id", "deleted_at", "created_at"):
            with self.subTest(field=field), self.assertRaises(ValidationError):
                store.update(doc, {field: other.pk})
        store.reload(doc)
        self.assertEqual(self.host.pk, doc.requesting_org_id)
        self.assertEqual(self.collective.pk, doc.subject_org_id)

    def test_empty_update_is_a_no_op(self):
        doc = self.make_doc()
        self.assertIs(doc, store.update(doc, {}))

    def test_update_missing_record(self):
        doc = self.make_doc()
        LegalDocument.all_objects.filter(pk=doc.pk).delete()
        with self.assertRaises(NotFoundError):
            store.update(doc, {"document_link": "x"})

    def test_save_path_is_validated(self):
        doc = self.make_doc()
        doc.request_status = "SCUTTLEBUTT"
        with self.assertRaises(ValidationError):
            doc.save()
        store.reload(doc)
        self.assertEqual(RequestStatus.NOT_REQUESTED, doc.request_status)

    def test_bulk_update_path_is_validated(self):
        doc = self.make_doc()
        with self.assertRaises(ValidationError):
            LegalDocument.objects.filter(pk=doc.pk).update(request_status="SCUTTLEBUTT")
        with self.assertRaises(ValidationError):
            LegalDocument.objects.filter(pk=doc.pk).update(fiscal_year=2000)
        store.reload(doc)
        self.assertEqual(RequestStatus.NOT_REQUESTED, doc.request_status)
        self.assertEqual(2019, doc.fiscal_year)

    def test_bulk_create_path_is_validated(self):
        bad = LegalDocument(fiscal_year=2014, requesting_org=self.host, subject_org=self.collective)
        with self.assertRaises(ValidationError):
            LegalDocument.objects.bulk_create([bad])
        self.assertEqual(0, LegalDocument.all_objects.count())

    def test_direct_save_resolves_references(self):
        doc = LegalDocument(fiscal_year=2019, requesting_org_id=self.host.pk, subject_org_id=987654)
        with self.assertRaises(ReferentialError):
            doc.save()


class WorkflowTests(BaseSetup):
    def test_closed_set(self):
        self.assertEqual({"NOT_REQUESTED", "REQUESTED", "RECEIVED"}, set(workflow.allowed_statuses()))
        self.assertEqual(RequestStatus.NOT_REQUESTED, workflow.INITIAL_STATUS)

    @override_settings(LEGAL_DOCUMENTS={"EXTRA_REQUEST_STATUSES": ["ERROR"]})
    def test_statuses_extend_through_settings(self):
        doc = self.make_doc()
        store.update(doc, {"request_status": "ERROR"})
        store.reload(doc)
        self.assertEqual("ERROR", doc.request_status)
        with self.assertRaises(ValidationError):
            store.update(doc, {"request_status": "SCUTTLEBUTT"})

    @override_settings(LEGAL_DOCUMENTS={"EXTRA_DOCUMENT_TYPES": ["W8_BEN"]})
    def test_document_types_extend_through_settings(self):
        doc = self.make_doc(document_type="W8_BEN")
        self.assertEqual("W8_BEN", doc.document_type)

    @override_settings(LEGAL_DOCUMENTS={"STATUS_TRANSITIONS": {
        "NOT_REQUESTED": ["REQUESTED"],
        "REQUESTED": ["RECEIVED"],
    }})
    def test_strict_policy(self):
        doc = self.make_doc()
        with self.assertRaises(ValidationError):
            store.update(doc, {"request_status": RequestStatus.RECEIVED})
        store.reload(doc)
        self.assertEqual(RequestStatus.NOT_REQUESTED, doc.request_status)

        store.update(doc, {"request_status": RequestStatus.REQUESTED})
        store.update(doc, {"request_status": RequestStatus.RECEIVED})
        # same value is always fine; leaving the terminal state is not
        store.update(doc, {"request_status": RequestStatus.RECEIVED})
        with self.assertRaises(ValidationError):
            store.update(doc, {"request_status": RequestStatus.REQUESTED})

    def test_transition_without_policy_only_checks_membership(self):
        self.assertEqual("RECEIVED", workflow.validate_transition("NOT_REQUESTED", "RECEIVED"))
        with self.assertRaises(ValidationError):
            workflow.validate_transition("NOT_REQUESTED", "SCUTTLEBUTT")


class SoftDeleteTests(BaseSetup):
    def test_survives_host_soft_delete(self):
        doc = self.make_doc()
        self.host.soft_delete()
        store.reload(doc)
        self.assertIsNone(doc.deleted_at)
        self.assertEqual(self.host.pk, queries.get_requesting_org(doc).pk)

    def test_survives_subject_soft_delete(self):
        doc = self.make_doc()
        self.collective.delete()
        store.reload(doc)
        self.assertIsNone(doc.deleted_at)
        # still mutable
        store.update(doc, {"request_status": RequestStatus.REQUESTED})
        self.assertEqual(RequestStatus.REQUESTED, doc.request_status)

    def test_can_be_deleted_without_deleting_orgs(self):
        doc = self.make_doc()
        host_before = Org.objects.values().get(pk=self.host.pk)
        collective_before = Org.objects.values().get(pk=self.collective.pk)

        store.soft_delete(doc)

        self.assertIsNotNone(doc.deleted_at)
        self.assertEqual(host_before, Org.objects.values().get(pk=self.host.pk))
        self.assertEqual(collective_before, Org.objects.values().get(pk=self.collective.pk))

    def test_deleted_record_hidden_but_reachable_by_id(self):
        doc = self.make_doc()
        store.soft_delete(doc)
        self.assertFalse(LegalDocument.objects.filter(pk=doc.pk).exists())
        self.assertEqual([], list(queries.find_by_requesting_org(self.host.pk)))
        self.assertEqual(doc.pk, store.get(doc.pk).pk)

    def test_model_delete_is_soft(self):
        doc = self.make_doc()
        doc.delete()
        self.assertTrue(LegalDocument.all_objects.get(pk=doc.pk).is_deleted)

    def test_soft_delete_is_idempotent(self):
        doc = self.make_doc()
        store.soft_delete(doc)
        first = doc.deleted_at
        store.soft_delete(doc)
        self.assertEqual(first, doc.deleted_at)

    def test_restore(self):
        doc = self.make_doc()
        store.soft_delete(doc)
        store.restore(doc)
        self.assertIsNone(doc.deleted_at)
        self.assertTrue(LegalDocument.objects.filter(pk=doc.pk).exists())

    def test_get_and_reload_missing(self):
        with self.assertRaises(NotFoundError):
            store.get(987654)
        doc = self.make_doc()
        LegalDocument.all_objects.filter(pk=doc.pk).delete()
        with self.assertRaises(NotFoundError):
            store.reload(doc)


class QueryTests(BaseSetup):
    def test_found_via_host(self):
        doc = self.make_doc()
        found = list(queries.find_by_requesting_org(self.host.pk))
        self.assertEqual(doc.pk, found[0].pk)

    def test_found_via_subject(self):
        doc = self.make_doc()
        found = list(queries.find_by_subject_org(self.collective.pk))
        self.assertEqual(doc.pk, found[0].pk)

    def test_reverse_accessors(self):
        doc = self.make_doc()
        self.assertEqual([doc.pk], [d.pk for d in self.host.hosted_legal_documents.all()])
        self.assertEqual([doc.pk], [d.pk for d in self.collective.legal_documents.all()])

    def test_creation_order_and_filters(self):
        first = self.make_doc(year=2019)
        second = self.make_doc(year=2020)
        third = self.make_doc(year=2020)
        store.update(third, {"request_status": RequestStatus.RECEIVED})

        self.assertEqual(
            [first.pk, second.pk, third.pk],
            [d.pk for d in queries.find_by_requesting_org(self.host.pk)],
        )
        self.assertEqual(
            [second.pk, third.pk],
            [d.pk for d in queries.find_by_subject_org(self.collective.pk, fiscal_year=2020)],
        )
        self.assertEqual(
            [third.pk],
            [d.pk for d in queries.find_by_requesting_org(self.host.pk, request_status=RequestStatus.RECEIVED)],
        )
        self.assertEqual([], list(queries.find_by_requesting_org(self.collective.pk)))

    def test_associated_orgs(self):
        doc = self.make_doc()
        self.assertEqual(self.collective.pk, queries.get_subject_org(doc).pk)
        self.assertEqual(self.host.pk, queries.get_requesting_org(doc).pk)

    def test_associated_orgs_after_soft_delete(self):
        doc = self.make_doc()
        self.host.soft_delete()
        self.collective.soft_delete()
        store.reload(doc)
        self.assertTrue(queries.get_requesting_org(doc).is_deleted)
        self.assertTrue(queries.get_subject_org(doc).is_deleted)
        # the ORM relation resolves through the unfiltered manager as well
        self.assertEqual(self.host.pk, doc.requesting_org.pk)

    def test_find_for_year(self):
        self.assertIsNone(queries.find_for_year(DocumentType.US_TAX_FORM, 2019, self.collective.pk))
        self.make_doc()
        latest = self.make_doc()
        found = queries.find_for_year(DocumentType.US_TAX_FORM, 2019, self.collective.pk)
        self.assertEqual(latest.pk, found.pk)
        self.assertIsNone(queries.find_for_year(DocumentType.US_TAX_FORM, 2020, self.collective.pk))


class ScenarioTests(BaseSetup):
    def test_full_lifecycle(self):
        doc = self.make_doc(year=2019)
        self.assertEqual(RequestStatus.NOT_REQUESTED, doc.request_status)
        self.assertEqual(DocumentType.US_TAX_FORM, doc.document_type)
        self.assertIsNone(doc.deleted_at)
        snapshot = LegalDocument.objects.values().get(pk=doc.pk)

        self.host.soft_delete()
        store.reload(doc)
        self.assertEqual(snapshot, LegalDocument.objects.values().get(pk=doc.pk))

        store.update(doc, {"request_status": RequestStatus.RECEIVED})
        store.reload(doc)
        self.assertEqual(RequestStatus.RECEIVED, doc.request_status)

        host_before = Org.all_objects.values().get(pk=self.host.pk)
        collective_before = Org.all_objects.values().get(pk=self.collective.pk)
        store.soft_delete(doc)
        self.assertEqual(host_before, Org.all_objects.values().get(pk=self.host.pk))
        self.assertEqual(collective_before, Org.all_objects.values().get(pk=self.collective.pk))


class LegalDocumentApiTests(BaseSetup):
    def setUp(self):
        super().setUp()
        self.staff = User.objects.create_user(username="staff", password="x", is_staff=True)
        self.client = APIClient()
        self.client.force_authenticate(self.staff)
        self.list_url = reverse("legal-document-list")

    def payload(self, **overrides):
        data = {"fiscal_year": 2019, "requesting_org": self.host.pk, "subject_org": self.collective.pk}
        data.update(overrides)
        return data

    def test_create(self):
        res = self.client.post(self.list_url, self.payload(), format="json")
        self.assertEqual(201, res.status_code)
        self.assertEqual("NOT_REQUESTED", res.data["request_status"])
        self.assertEqual("US_TAX_FORM", res.data["document_type"])
        self.assertIsNone(res.data["deleted_at"])

    def test_create_ignores_client_status(self):
        res = self.client.post(self.list_url, self.payload(request_status="RECEIVED"), format="json")
        self.assertEqual(201, res.status_code)
        self.assertEqual("NOT_REQUESTED", res.data["request_status"])

    def test_create_rejects_old_year(self):
        res = self.client.post(self.list_url, self.payload(fiscal_year=2014), format="json")
        self.assertEqual(400, res.status_code)
        self.assertIn("fiscal_year", res.data)
        self.assertEqual(0, LegalDocument.all_objects.count())

    def test_create_requires_both_orgs(self):
        res = self.client.post(self.list_url, self.payload(requesting_org=None), format="json")
        self.assertEqual(400, res.status_code)
        self.assertIn("requesting_org", res.data)

        data = self.payload()
        del data["subject_org"]
        res = self.client.post(self.list_url, data, format="json")
        self.assertEqual(400, res.status_code)
        self.assertIn("subject_org", res.data)

    def test_create_with_unknown_org(self):
        res = self.client.post(self.list_url, self.payload(subject_org=987654), format="json")
        self.assertEqual(400, res.status_code)
        self.assertIn("subject_org", res.data)

    def test_patch_status_and_link(self):
        doc = self.make_doc()
        url = reverse("legal-document-detail", args=[doc.pk])
        res = self.client.patch(url, {"request_status": "RECEIVED", "document_link": "https://files/w9.pdf"}, format="json")
        self.assertEqual(200, res.status_code)
        self.assertEqual("RECEIVED", res.data["request_status"])
        store.reload(doc)
        self.assertEqual("https://files/w9.pdf", doc.document_link)

    def test_patch_invalid_status(self):
        doc = self.make_doc()
        url = reverse("legal-document-detail", args=[doc.pk])
        res = self.client.patch(url, {"request_status": "SCUTTLEBUTT"}, format="json")
        self.assertEqual(400, res.status_code)
        self.assertIn("request_status", res.data)
        store.reload(doc)
        self.assertEqual("NOT_REQUESTED", doc.request_status)

    def test_patch_immutable_field(self):
        doc = self.make_doc()
        url = reverse("legal-document-detail", args=[doc.pk])
        res = self.client.patch(url, {"requesting_org": self.collective.pk}, format="json")
        self.assertEqual(400, res.status_code)
        store.reload(doc)
        self.assertEqual(self.host.pk, doc.requesting_org_id)

    def test_put_not_allowed(self):
        doc = self.make_doc()
        res = self.client.put(reverse("legal-document-detail", args=[doc.pk]), self.payload(), format="json")
        self.assertEqual(405, res.status_code)

    def test_delete_is_soft(self):
        doc = self.make_doc()
        url = reverse("legal-document-detail", args=[doc.pk])
        res = self.client.delete(url)
        self.assertEqual(204, res.status_code)

        res = self.client.get(self.list_url)
        self.assertEqual([], res.data["results"])

        res = self.client.get(url)
        self.assertEqual(200, res.status_code)
        self.assertIsNotNone(res.data["deleted_at"])

        res = self.client.get(self.list_url, {"include_deleted": "true"})
        self.assertEqual([doc.pk], [d["id"] for d in res.data["results"]])

        self.assertTrue(Org.objects.filter(pk=self.host.pk).exists())
        self.assertTrue(Org.objects.filter(pk=self.collective.pk).exists())

    def test_restore(self):
        doc = self.make_doc()
        store.soft_delete(doc)
        res = self.client.post(reverse("legal-document-restore", args=[doc.pk]))
        self.assertEqual(200, res.status_code)
        self.assertIsNone(res.data["deleted_at"])

    def test_filters(self):
        older = self.make_doc(year=2019)
        newer = self.make_doc(year=2020)
        store.update(newer, {"request_status": "REQUESTED"})

        res = self.client.get(self.list_url, {"fiscal_year": 2019})
        self.assertEqual([older.pk], [d["id"] for d in res.data["results"]])

        res = self.client.get(self.list_url, {"request_status": "REQUESTED"})
        self.assertEqual([newer.pk], [d["id"] for d in res.data["results"]])

        res = self.client.get(self.list_url, {"requesting_org": self.collective.pk})
        self.assertEqual([], res.data["results"])

    def test_missing_record_is_404(self):
        res = self.client.get(reverse("legal-document-detail", args=[987654]))
        self.assertEqual(404, res.status_code)

    def test_non_staff_can_read_but_not_write(self):
        doc = self.make_doc()
        member = User.objects.create_user(username="member", password="x")
        client = APIClient()
        client.force_authenticate(member)

        self.assertEqual(200, client.get(reverse("legal-document-detail", args=[doc.pk])).status_code)
        res = client.patch(reverse("legal-document-detail", args=[doc.pk]), {"request_status": "RECEIVED"}, format="json")
        self.assertEqual(403, res.status_code)
        store.reload(doc)
        self.assertEqual("NOT_REQUESTED", doc.request_status)


class AdminTests(BaseSetup):
    def setUp(self):
        super().setUp()
        self.admin_user = User.objects.create_superuser(username="admin", password="x", email="a@example.com")
        self.client.force_login(self.admin_user)
        self.add_url = reverse("admin:legal_documents_legaldocument_add")

    def change_url(self, doc):
        return reverse("admin:legal_documents_legaldocument_change", args=[doc.pk])

    def add_payload(self, **overrides):
        data = {
            "fiscal_year": 2019,
            "document_type": "US_TAX_FORM",
            "request_status": "NOT_REQUESTED",
            "document_link": "",
            "requesting_org": self.host.pk,
            "subject_org": self.collective.pk,
        }
        data.update(overrides)
        return data

    def change_payload(self, doc, **overrides):
        data = {
            "fiscal_year": doc.fiscal_year,
            "document_type": doc.document_type,
            "request_status": doc.request_status,
            "document_link": doc.document_link or "",
        }
        data.update(overrides)
        return data

    def test_add_creates_through_store(self):
        res = self.client.post(self.add_url, self.add_payload())
        self.assertEqual(302, res.status_code)
        doc = LegalDocument.objects.get()
        self.assertEqual(RequestStatus.NOT_REQUESTED, doc.request_status)
        self.assertEqual(self.host.pk, doc.requesting_org_id)
        self.assertEqual(self.collective.pk, doc.subject_org_id)

    def test_add_applies_chosen_status(self):
        res = self.client.post(self.add_url, self.add_payload(request_status="RECEIVED", document_link="https://files/w9.pdf"))
        self.assertEqual(302, res.status_code)
        doc = LegalDocument.objects.get()
        self.assertEqual(RequestStatus.RECEIVED, doc.request_status)
        self.assertEqual("https://files/w9.pdf", doc.document_link)

    def test_add_accepts_soft_deleted_host(self):
        self.host.soft_delete()
        res = self.client.post(self.add_url, self.add_payload())
        self.assertEqual(302, res.status_code)
        self.assertEqual(1, LegalDocument.objects.count())

    def test_add_rejects_old_year(self):
        res = self.client.post(self.add_url, self.add_payload(fiscal_year=2014))
        self.assertEqual(200, res.status_code)
        self.assertIn("fiscal_year", res.context["adminform"].form.errors)
        self.assertEqual(0, LegalDocument.all_objects.count())

    def test_change_updates_status_and_link(self):
        doc = self.make_doc()
        res = self.client.post(
            self.change_url(doc),
            self.change_payload(doc, request_status="RECEIVED", document_link="https://files/w9.pdf"),
        )
        self.assertEqual(302, res.status_code)
        store.reload(doc)
        self.assertEqual(RequestStatus.RECEIVED, doc.request_status)
        self.assertEqual("https://files/w9.pdf", doc.document_link)
        self.assertEqual(self.host.pk, doc.requesting_org_id)

    def test_change_rejects_old_year(self):
        doc = self.make_doc()
        res = self.client.post(self.change_url(doc), self.change_payload(doc, fiscal_year=2010))
        self.assertEqual(200, res.status_code)
        self.assertIn("fiscal_year", res.context["adminform"].form.errors)
        store.reload(doc)
        self.assertEqual(2019, doc.fiscal_year)

    @override_settings(LEGAL_DOCUMENTS={"STATUS_TRANSITIONS": {"NOT_REQUESTED": ["REQUESTED"]}})
    def test_change_respects_strict_policy(self):
        doc = self.make_doc()
        res = self.client.post(self.change_url(doc), self.change_payload(doc, request_status="RECEIVED"))
        self.assertEqual(200, res.status_code)
        self.assertIn("request_status", res.context["adminform"].form.errors)
        store.reload(doc)
        self.assertEqual(RequestStatus.NOT_REQUESTED, doc.request_status)

    def test_delete_is_soft(self):
        doc = self.make_doc()
        url = reverse("admin:legal_documents_legaldocument_delete", args=[doc.pk])
        res = self.client.post(url, {"post": "yes"})
        self.assertEqual(302, res.status_code)
        store.reload(doc)
        self.assertIsNotNone(doc.deleted_at)
        self.assertTrue(Org.objects.filter(pk=self.host.pk).exists())
