# config/constants.py

ROLE_CHOICES = [
    {"key": "admin", "label": "Administrator"},
    {"key": "staff", "label": "Staff"},
]
DEFAULT_ROLE = "staff"
DASHBOARD_ROLES = ("admin", "staff")

DISCOUNT_TYPE_CHOICES = [
    {"key": "PERCENTAGE", "label": "Percentage"},
    {"key": "FIXED_AMOUNT", "label": "Fixed amount"},
]

PROMOTION_SCOPE_CHOICES = [
    {"key": "ALL", "label": "All services"},
    {"key": "ROOM", "label": "Rooms"},
    {"key": "SERVICE", "label": "Services"},
    {"key": "RESTAURANT", "label": "Restaurant"},
    {"key": "POOL", "label": "Pool"},
    {"key": "ACTIVITY", "label": "Activities"},
    {"key": "WELLNESS", "label": "Wellness"},
    {"key": "EVENT", "label": "Events"},
]

# Scopes whose promotions may point at a single Service row
SERVICE_SCOPES = ("SERVICE", "RESTAURANT", "ACTIVITY", "WELLNESS")

SERVICE_TYPE_CHOICES = [
    {"key": "RESTAURANT", "label": "Restaurant"},
    {"key": "POOL", "label": "Pool"},
    {"key": "ACTIVITY", "label": "Activity"},
    {"key": "WELLNESS", "label": "Wellness"},
    {"key": "OTHER", "label": "Other"},
]

ANNOUNCEMENT_POSITION_CHOICES = [
    {"key": "HOME", "label": "Home page"},
    {"key": "ROOMS", "label": "Accommodation"},
    {"key": "RESTAURANT", "label": "Restaurant"},
    {"key": "EVENTS", "label": "Events"},
    {"key": "ALL_PAGES", "label": "All pages"},
]

ACTIVITY_ACTION_CHOICES = [
    {"key": "CREATE", "label": "Create"},
    {"key": "UPDATE", "label": "Update"},
    {"key": "DELETE", "label": "Delete"},
    {"key": "TOGGLE", "label": "Toggle"},
    {"key": "REDEEM", "label": "Redeem"},
]


def as_choices(items):
    """Turn a list of {"key", "label"} dicts into Django field choices."""
    return [(item["key"], item["label"]) for item in items]
