from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("promotions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Announcement",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=150)),
                ("description", models.TextField(blank=True)),
                ("link", models.URLField(blank=True)),
                ("button_text", models.CharField(blank=True, max_length=50)),
                ("position", models.CharField(choices=[("HOME", "Home page"), ("ROOMS", "Accommodation"), ("RESTAURANT", "Restaurant"), ("EVENTS", "Events"), ("ALL_PAGES", "All pages")], default="HOME", max_length=20)),
                ("starts_at", models.DateTimeField()),
                ("ends_at", models.DateTimeField()),
                ("order", models.IntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("is_pinned", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("promotion", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="announcements", to="promotions.promotion")),
            ],
            options={
                "ordering": ["-is_pinned", "order", "-starts_at"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("starts_at__lte", models.F("ends_at"))), name="announcement_window_ordered"),
                ],
            },
        ),
    ]
