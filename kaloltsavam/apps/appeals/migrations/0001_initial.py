from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Appeal",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("participant_id", models.CharField(db_index=True, max_length=64)),
                ("event_id", models.CharField(max_length=64, verbose_name="Event ID")),
                ("category", models.CharField(max_length=120)),
                ("name", models.CharField(max_length=160, verbose_name="Full name")),
                ("email", models.EmailField(max_length=254)),
                ("phone", models.CharField(blank=True, max_length=32)),
                ("reason", models.TextField(verbose_name="Reason for appeal")),
                (
                    "status",
                    models.CharField(
                        choices=[("new", "New"), ("in_review", "In Review"), ("accepted", "Accepted"), ("rejected", "Rejected")],
                        default="new",
                        max_length=16,
                    ),
                ),
                ("submitted_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ("-submitted_at", "-id"),
            },
        ),
    ]
