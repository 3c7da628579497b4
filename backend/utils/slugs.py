import time
from django.utils.text import slugify


def generate_unique_slug(model, name, instance_pk=None):
    """
    Build a slug for `name` that is unique within `model`.

    On collision with another row the current unix timestamp is appended,
    e.g. "suite-royale" becomes "suite-royale-1718000000".
    """
    base_slug = slugify(name) or "item"
    queryset = model.objects.filter(slug=base_slug)
    if instance_pk is not None:
        queryset = queryset.exclude(pk=instance_pk)

    if not queryset.exists():
        return base_slug

    return f"{base_slug}-{int(time.time())}"
