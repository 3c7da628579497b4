from django.db import migrations, models
import django.core.validators
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Promotion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                ("description", models.TextField(blank=True)),
                ("discount_type", models.CharField(choices=[("PERCENTAGE", "Percentage"), ("FIXED_AMOUNT", "Fixed amount")], default="PERCENTAGE", max_length=20)),
                ("value", models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ("scope", models.CharField(choices=[("ALL", "All services"), ("ROOM", "Rooms"), ("SERVICE", "Services"), ("RESTAURANT", "Restaurant"), ("POOL", "Pool"), ("ACTIVITY", "Activities"), ("WELLNESS", "Wellness"), ("EVENT", "Events")], default="ALL", max_length=20)),
                ("code", models.CharField(blank=True, max_length=50, null=True, unique=True)),
                ("starts_at", models.DateTimeField()),
                ("ends_at", models.DateTimeField()),
                ("minimum_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("max_redemptions", models.PositiveIntegerField(blank=True, null=True)),
                ("max_redemptions_per_customer", models.PositiveIntegerField(default=1)),
                ("redemption_count", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("terms", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("target_room", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="promotions", to="catalog.room")),
                ("target_service", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="promotions", to="catalog.service")),
            ],
            options={
                "ordering": ["-is_active", "-starts_at"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("starts_at__lte", models.F("ends_at"))), name="promotion_window_ordered"),
                    models.CheckConstraint(condition=models.Q(("max_redemptions__isnull", True), ("redemption_count__lte", models.F("max_redemptions")), _connector="OR"), name="promotion_redemptions_within_cap"),
                ],
            },
        ),
    ]
