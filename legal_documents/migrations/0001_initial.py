import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("orgs", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="LegalDocument",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("fiscal_year", models.PositiveIntegerField()),
                (
                    "document_type",
                    models.CharField(
                        choices=[("US_TAX_FORM", "US tax form")],
                        default="US_TAX_FORM",
                        max_length=32,
                    ),
                ),
                (
                    "request_status",
                    models.CharField(
                        choices=[
                            ("NOT_REQUESTED", "Not requested"),
                            ("REQUESTED", "Requested"),
                            ("RECEIVED", "Received"),
                        ],
                        default="NOT_REQUESTED",
                        max_length=32,
                    ),
                ),
                ("document_link", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                (
                    "requesting_org",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="hosted_legal_documents",
                        to="orgs.org",
                    ),
                ),
                (
                    "subject_org",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="legal_documents",
                        to="orgs.org",
                    ),
                ),
            ],
            options={
                "ordering": ("created_at", "id"),
                "base_manager_name": "all_objects",
                "indexes": [
                    models.Index(fields=["requesting_org", "fiscal_year"], name="legaldoc_host_year_idx"),
                    models.Index(fields=["subject_org", "fiscal_year"], name="legaldoc_subject_year_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(fiscal_year__gte=2015),
                        name="legaldoc_fiscal_year_min",
                    ),
                ],
            },
        ),
    ]
