import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("category", models.CharField(max_length=100)),
                ("description", models.TextField()),
                (
                    "city",
                    models.CharField(
                        choices=[("chicago", "Chicago"), ("minneapolis", "Minneapolis")],
                        max_length=32,
                    ),
                ),
                ("ideal_group_size", models.CharField(max_length=100)),
                ("duration_hours", models.DecimalField(decimal_places=2, max_digits=5)),
                ("cost_per_person", models.DecimalField(decimal_places=2, max_digits=8)),
                ("meeting_point", models.CharField(max_length=255)),
                ("transit_tips", models.TextField(blank=True, default="")),
                ("booking_link", models.URLField(blank=True, max_length=500, null=True)),
                ("best_months", models.CharField(max_length=100)),
                ("accessibility_notes", models.TextField(blank=True, default="")),
                ("image_url", models.URLField(max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [models.Index(fields=["city", "name"], name="catalog_eve_city_8c1a52_idx")],
            },
        ),
        migrations.CreateModel(
            name="Favorite",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.CharField(max_length=150)),
                ("event_id", models.CharField(max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [models.Index(fields=["user_id", "created_at"], name="catalog_fav_user_id_3f9d0e_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("user_id", "event_id"), name="unique_favorite_per_user")
                ],
            },
        ),
    ]
