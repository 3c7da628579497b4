from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                ("slug", models.SlugField(blank=True, max_length=160, unique=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("room_type", models.CharField(blank=True, max_length=32)),
                ("price", models.PositiveIntegerField(help_text="Nightly price in whole currency units")),
                ("capacity", models.PositiveSmallIntegerField(default=2)),
            ],
            options={
                "ordering": ["name"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                ("slug", models.SlugField(blank=True, max_length=160, unique=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("service_type", models.CharField(choices=[("RESTAURANT", "Restaurant"), ("POOL", "Pool"), ("ACTIVITY", "Activity"), ("WELLNESS", "Wellness"), ("OTHER", "Other")], default="OTHER", max_length=20)),
                ("price", models.PositiveIntegerField(blank=True, help_text="Price in whole currency units, empty when included", null=True)),
            ],
            options={
                "ordering": ["name"],
                "abstract": False,
            },
        ),
    ]
