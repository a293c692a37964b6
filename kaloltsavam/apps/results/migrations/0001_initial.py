from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Result",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("participant_id", models.CharField(db_index=True, max_length=64)),
                ("participant_name", models.CharField(max_length=160)),
                ("event", models.CharField(db_index=True, max_length=160)),
                ("category", models.CharField(blank=True, default="", max_length=120)),
                ("time", models.CharField(blank=True, default="", max_length=64)),
                ("rank", models.IntegerField(blank=True, null=True)),
                ("points", models.IntegerField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("published", "Published"), ("under_appeal", "Under appeal"), ("revised", "Revised")],
                        default="published",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ("event", models.OrderBy(models.F("rank"), nulls_last=True), "id"),
            },
        ),
    ]
