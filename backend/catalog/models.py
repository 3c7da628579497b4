# catalog/models.py
from django.db import models
from config.constants import SERVICE_TYPE_CHOICES, as_choices
from utils.slugs import generate_unique_slug


class SluggedModel(models.Model):
    """Abstract base filling in a unique slug from `name` on first save."""
    name = models.CharField(max_length=120)
    slug = models.SlugField(max_length=160, unique=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_unique_slug(type(self), self.name, instance_pk=self.pk)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class Room(SluggedModel):
    """A bookable room, villa or suite."""
    room_type = models.CharField(max_length=32, blank=True)  # Suite, Villa, Bungalow, Chambre...
    price = models.PositiveIntegerField(help_text="Nightly price in whole currency units")
    capacity = models.PositiveSmallIntegerField(default=2)

    class Meta:
        ordering = ["name"]


class Service(SluggedModel):
    """A hotel service: restaurant, pool, activity, wellness..."""
    service_type = models.CharField(max_length=20, choices=as_choices(SERVICE_TYPE_CHOICES), default="OTHER")
    price = models.PositiveIntegerField(blank=True, null=True, help_text="Price in whole currency units, empty when included")

    class Meta:
        ordering = ["name"]
