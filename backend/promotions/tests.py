from datetime import timedelta
from decimal import Decimal
from concurrent.futures import ThreadPoolExecutor
from unittest import mock
import threading
import unittest

from django.db import connection
from django.db.models import ProtectedError
from django.test import TestCase, TransactionTestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from activity.models import ActivityLog
from announcements.models import Announcement
from catalog.models import Room, Service
from users.models import User
from utils.discounts import compute_discounted_price, compute_discount_amount, format_promotion_label
from utils.promotions import (
    PromotionError,
    get_active_promotions,
    get_promotion_for_item,
    is_currently_eligible,
    redeem_promotion,
    verify_code,
)
from .models import Promotion, normalize_code
from .serializers import PromotionSerializer


def make_promotion(**overrides):
    now = timezone.now()
    fields = {
        "name": "Summer offer",
        "discount_type": "PERCENTAGE",
        "value": Decimal("20"),
        "starts_at": now - timedelta(days=1),
        "ends_at": now + timedelta(days=1),
    }
    fields.update(overrides)
    return Promotion.objects.create(**fields)


class DiscountCalculatorTests(TestCase):
    """compute_discounted_price is pure: unsaved promotions are enough."""

    def test_percentage_rounds_to_whole_unit(self):
        promotion = Promotion(discount_type="PERCENTAGE", value=Decimal("33"))
        self.assertEqual(compute_discounted_price(100, promotion), 67)
        self.assertEqual(compute_discounted_price(10, promotion), 7)

    def test_percentage_rounds_halves_up(self):
        promotion = Promotion(discount_type="PERCENTAGE", value=Decimal("50"))
        self.assertEqual(compute_discounted_price(25, promotion), 13)

    def test_fixed_amount_subtracts(self):
        promotion = Promotion(discount_type="FIXED_AMOUNT", value=Decimal("1000"))
        self.assertEqual(compute_discounted_price(5000, promotion), 4000)

    def test_fixed_amount_equal_to_price_is_not_applicable(self):
        promotion = Promotion(discount_type="FIXED_AMOUNT", value=Decimal("5000"))
        self.assertIsNone(compute_discounted_price(5000, promotion))

    def test_fixed_amount_above_price_is_not_applicable(self):
        promotion = Promotion(discount_type="FIXED_AMOUNT", value=Decimal("6000"))
        self.assertIsNone(compute_discounted_price(5000, promotion))

    def test_unknown_type_fails_closed(self):
        promotion = Promotion(discount_type="BUY_ONE_GET_ONE", value=Decimal("10"))
        self.assertIsNone(compute_discounted_price(5000, promotion))

    def test_minimum_amount_floor(self):
        promotion = Promotion(discount_type="PERCENTAGE", value=Decimal("10"), minimum_amount=Decimal("20000"))
        self.assertIsNone(compute_discounted_price(19999, promotion))
        self.assertEqual(compute_discounted_price(20000, promotion), 18000)

    def test_discount_amount(self):
        promotion = Promotion(discount_type="PERCENTAGE", value=Decimal("25"))
        self.assertEqual(compute_discount_amount(40000, promotion), 10000)

        fixed = Promotion(discount_type="FIXED_AMOUNT", value=Decimal("6000"))
        self.assertIsNone(compute_discount_amount(5000, fixed))


class PromotionLabelTests(TestCase):
    def test_percentage_label(self):
        self.assertEqual(format_promotion_label(Promotion(discount_type="PERCENTAGE", value=Decimal("20.00"))), "-20%")
        self.assertEqual(format_promotion_label(Promotion(discount_type="PERCENTAGE", value=Decimal("12.50"))), "-12.5%")

    def test_fixed_amount_label_uses_french_grouping(self):
        promotion = Promotion(discount_type="FIXED_AMOUNT", value=Decimal("5000.00"))
        self.assertEqual(format_promotion_label(promotion), "-5\u202f000 FCFA")

        promotion = Promotion(discount_type="FIXED_AMOUNT", value=Decimal("1500.50"))
        self.assertEqual(format_promotion_label(promotion), "-1\u202f500,5 FCFA")

    def test_unknown_type_falls_back_to_name(self):
        promotion = Promotion(name="Happy hour", discount_type="OTHER", value=Decimal("1"))
        self.assertEqual(format_promotion_label(promotion), "Happy hour")


class EligibilityTests(TestCase):
    def setUp(self):
        self.t0 = timezone.now().replace(microsecond=0)
        self.t1 = self.t0 + timedelta(days=7)
        self.promotion = make_promotion(starts_at=self.t0, ends_at=self.t1)

    def test_window_is_inclusive_on_both_ends(self):
        self.assertTrue(is_currently_eligible(self.promotion, now=self.t0))
        self.assertTrue(is_currently_eligible(self.promotion, now=self.t1))
        self.assertFalse(is_currently_eligible(self.promotion, now=self.t0 - timedelta(seconds=1)))
        self.assertFalse(is_currently_eligible(self.promotion, now=self.t1 + timedelta(seconds=1)))

    def test_active_listing_respects_window_bounds(self):
        self.assertEqual(get_active_promotions(now=self.t0), [self.promotion])
        self.assertEqual(get_active_promotions(now=self.t1), [self.promotion])
        self.assertEqual(get_active_promotions(now=self.t0 - timedelta(seconds=1)), [])
        self.assertEqual(get_active_promotions(now=self.t1 + timedelta(seconds=1)), [])

    def test_inactive_promotion_is_not_listed(self):
        self.promotion.is_active = False
        self.promotion.save()
        self.assertEqual(get_active_promotions(now=self.t0), [])

    def test_exhausted_promotion_is_not_listed(self):
        self.promotion.max_redemptions = 2
        self.promotion.redemption_count = 2
        self.promotion.save()
        self.assertEqual(get_active_promotions(now=self.t0), [])
        self.assertFalse(is_currently_eligible(self.promotion, now=self.t0))

    def test_listing_orders_by_raw_value_across_types(self):
        fixed = make_promotion(name="Flat", discount_type="FIXED_AMOUNT", value=Decimal("5000"), starts_at=self.t0, ends_at=self.t1)
        half = make_promotion(name="Half", value=Decimal("50"), starts_at=self.t0, ends_at=self.t1)

        self.assertEqual(get_active_promotions(now=self.t0), [fixed, half, self.promotion])

    def test_scope_filter_is_exact(self):
        room = Room.objects.create(name="Suite Royale", price=150000)
        room_promo = make_promotion(name="Suite deal", scope="ROOM", target_room=room, starts_at=self.t0, ends_at=self.t1)

        self.assertEqual(get_active_promotions(scope="ROOM", now=self.t0), [room_promo])
        self.assertEqual(get_active_promotions(scope="SERVICE", now=self.t0), [])


class VerifyCodeTests(TestCase):
    def setUp(self):
        self.now = timezone.now()
        self.promotion = make_promotion(code="summer20")

    def test_code_is_stored_uppercase(self):
        self.promotion.refresh_from_db()
        self.assertEqual(self.promotion.code, "SUMMER20")

    def test_lookup_is_case_insensitive(self):
        for entered in ("summer20", "Summer20", "SUMMER20", "  summer20 "):
            promotion, error = verify_code(entered, now=self.now)
            self.assertIsNone(error)
            self.assertEqual(promotion, self.promotion)

    def test_unknown_code(self):
        promotion, error = verify_code("WINTER", now=self.now)
        self.assertIsNone(promotion)
        self.assertEqual(error, PromotionError.CODE_NOT_FOUND)

    def test_blank_code(self):
        _, error = verify_code("   ", now=self.now)
        self.assertEqual(error, PromotionError.CODE_NOT_FOUND)

    def test_inactive_code(self):
        self.promotion.is_active = False
        self.promotion.save()
        _, error = verify_code("SUMMER20", now=self.now)
        self.assertEqual(error, PromotionError.CODE_EXPIRED_OR_INACTIVE)

    def test_expired_code(self):
        _, error = verify_code("SUMMER20", now=self.now + timedelta(days=2))
        self.assertEqual(error, PromotionError.CODE_EXPIRED_OR_INACTIVE)

    def test_exhausted_code(self):
        self.promotion.max_redemptions = 1
        self.promotion.redemption_count = 1
        self.promotion.save()
        _, error = verify_code("SUMMER20", now=self.now)
        self.assertEqual(error, PromotionError.CODE_EXHAUSTED)

    def test_expiry_reported_before_exhaustion(self):
        self.promotion.max_redemptions = 1
        self.promotion.redemption_count = 1
        self.promotion.save()
        _, error = verify_code("SUMMER20", now=self.now + timedelta(days=2))
        self.assertEqual(error, PromotionError.CODE_EXPIRED_OR_INACTIVE)

    def test_scope_mismatch(self):
        room = Room.objects.create(name="Villa", price=90000)
        make_promotion(name="Villa week", code="VILLA10", scope="ROOM", target_room=room)

        self.assertEqual([p.code for p in get_active_promotions(scope="ROOM")], ["VILLA10"])

        promotion, error = verify_code("villa10", scope="SERVICE", now=self.now)
        self.assertIsNone(promotion)
        self.assertEqual(error, PromotionError.CODE_EXPIRED_OR_INACTIVE)

        promotion, error = verify_code("villa10", scope="ROOM", now=self.now)
        self.assertIsNone(error)

    def test_all_scope_code_matches_any_requested_scope(self):
        promotion, error = verify_code("summer20", scope="EVENT", now=self.now)
        self.assertIsNone(error)
        self.assertEqual(promotion, self.promotion)


class PromotionForItemTests(TestCase):
    def test_specific_target_wins_over_general(self):
        room = Room.objects.create(name="Bungalow", price=60000)
        other = Room.objects.create(name="Chambre Confort", price=40000)
        general = make_promotion(name="All rooms", scope="ROOM", value=Decimal("30"))
        specific = make_promotion(name="Bungalow", scope="ROOM", target_room=room, value=Decimal("10"))
        promotions = get_active_promotions(scope="ROOM")

        self.assertEqual(get_promotion_for_item(promotions, room_id=room.id), specific)
        self.assertEqual(get_promotion_for_item(promotions, room_id=other.id), general)

    def test_no_general_promotion(self):
        service = Service.objects.create(name="Spa", service_type="WELLNESS", price=25000)
        spa = Service.objects.create(name="Massage", service_type="WELLNESS", price=30000)
        make_promotion(scope="WELLNESS", target_service=service)
        promotions = get_active_promotions(scope="WELLNESS")

        self.assertIsNone(get_promotion_for_item(promotions, service_id=spa.id))


class RedemptionTests(TestCase):
    def test_increments_and_returns_new_count(self):
        promotion = make_promotion()
        self.assertEqual(redeem_promotion(promotion.pk), (1, None))
        self.assertEqual(redeem_promotion(promotion.pk), (2, None))

    def test_cap_allows_exactly_one_redemption_per_slot(self):
        promotion = make_promotion(max_redemptions=1)

        first = redeem_promotion(promotion.pk)
        second = redeem_promotion(promotion.pk)

        self.assertEqual(first, (1, None))
        self.assertEqual(second, (None, PromotionError.USAGE_LIMIT_REACHED))
        promotion.refresh_from_db()
        self.assertEqual(promotion.redemption_count, 1)

    def test_cap_is_checked_against_stored_count_not_caller_copy(self):
        promotion = make_promotion(max_redemptions=1)
        stale = Promotion.objects.get(pk=promotion.pk)
        self.assertTrue(is_currently_eligible(stale))

        # Another booking takes the last slot after our eligibility check
        Promotion.objects.filter(pk=promotion.pk).update(redemption_count=1)

        self.assertEqual(redeem_promotion(stale.pk), (None, PromotionError.USAGE_LIMIT_REACHED))
        stale.refresh_from_db()
        self.assertEqual(stale.redemption_count, 1)

    def test_unknown_promotion(self):
        self.assertEqual(redeem_promotion(999999), (None, PromotionError.PROMOTION_NOT_FOUND))


@unittest.skipUnless(connection.vendor == "postgresql", "needs row-level locking, SQLite serializes writers")
class ConcurrentRedemptionTests(TransactionTestCase):
    def redeem_in_thread(self, promotion_id, barrier):
        try:
            barrier.wait()
            return redeem_promotion(promotion_id)
        finally:
            connection.close()

    def test_two_bookings_racing_for_last_slot(self):
        promotion = make_promotion(max_redemptions=1)
        barrier = threading.Barrier(2)

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda _: self.redeem_in_thread(promotion.pk, barrier), range(2)))

        self.assertCountEqual(results, [(1, None), (None, PromotionError.USAGE_LIMIT_REACHED)])
        promotion.refresh_from_db()
        self.assertEqual(promotion.redemption_count, 1)

    def test_uncapped_promotion_counts_every_booking(self):
        promotion = make_promotion()
        barrier = threading.Barrier(8)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: self.redeem_in_thread(promotion.pk, barrier), range(8)))

        self.assertEqual(sorted(count for count, _ in results), list(range(1, 9)))
        promotion.refresh_from_db()
        self.assertEqual(promotion.redemption_count, 8)


class DeleteGuardTests(TestCase):
    def test_storage_refuses_delete_while_bound(self):
        promotion = make_promotion()
        now = timezone.now()
        Announcement.objects.create(title="Summer", starts_at=now, ends_at=now + timedelta(days=1), promotion=promotion)

        with self.assertRaises(ProtectedError):
            promotion.delete()


class PromotionAdminAPITests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@akwalodge.com',
            name='Admin',
            password='testpassword123',
            role='admin',
        )
        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)
        self.now = timezone.now()
        self.payload = {
            "name": "Summer offer",
            "discount_type": "PERCENTAGE",
            "value": "20",
            "scope": "ALL",
            "code": "summer20",
            "starts_at": (self.now - timedelta(days=1)).isoformat(),
            "ends_at": (self.now + timedelta(days=30)).isoformat(),
        }

    def test_requires_authentication(self):
        client = APIClient()
        response = client.get(reverse('promotion-list'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_applies_defaults_and_normalizes_code(self):
        payload = {k: v for k, v in self.payload.items() if k not in ("discount_type", "scope")}
        response = self.client.post(reverse('promotion-list'), payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['code'], 'SUMMER20')
        self.assertEqual(response.data['discount_type'], 'PERCENTAGE')
        self.assertEqual(response.data['scope'], 'ALL')
        self.assertTrue(response.data['is_active'])
        self.assertEqual(response.data['max_redemptions_per_customer'], 1)
        self.assertEqual(response.data['redemption_count'], 0)
        self.assertEqual(response.data['label'], '-20%')
        self.assertEqual(response.data['status'], 'ongoing')

    def test_create_logs_activity(self):
        response = self.client.post(reverse('promotion-list'), self.payload, format='json')

        log = ActivityLog.objects.get(entity_type="Promotion", action="CREATE")
        self.assertEqual(log.entity_id, str(response.data['id']))
        self.assertEqual(log.user, self.admin)
        self.assertEqual(log.user_email, 'admin@akwalodge.com')

    def test_duplicate_code_is_case_insensitive(self):
        make_promotion(code="SUMMER20")
        payload = dict(self.payload, code="Summer20")
        response = self.client.post(reverse('promotion-list'), payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('code', response.data)
        self.assertEqual(response.data['code'][0].code, 'duplicate_code')

    def test_duplicate_code_written_concurrently_is_reported_as_duplicate(self):
        # The other write lands between validation and insert
        make_promotion(code="SUMMER20")
        with mock.patch.object(PromotionSerializer, "validate_code", lambda self, value: normalize_code(value)):
            response = self.client.post(reverse('promotion-list'), self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'][0].code, 'duplicate_code')
        self.assertEqual(Promotion.objects.filter(code="SUMMER20").count(), 1)

    def test_update_keeping_own_code_is_allowed(self):
        promotion = make_promotion(code="SUMMER20")
        response = self.client.patch(
            reverse('promotion-detail', args=[promotion.pk]),
            {"code": "summer20", "name": "Summer offer (extended)"},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Summer offer (extended)')

    def test_blank_code_is_stored_as_null(self):
        response = self.client.post(reverse('promotion-list'), dict(self.payload, code=""), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(Promotion.objects.get(pk=response.data['id']).code)

    def test_rejects_non_positive_value(self):
        response = self.client.post(reverse('promotion-list'), dict(self.payload, value="0"), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('value', response.data)

    def test_rejects_window_ending_before_start(self):
        payload = dict(
            self.payload,
            starts_at=(self.now + timedelta(days=2)).isoformat(),
            ends_at=(self.now + timedelta(days=1)).isoformat(),
        )
        response = self.client.post(reverse('promotion-list'), payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('ends_at', response.data)

    def test_rejects_target_room_with_all_scope(self):
        room = Room.objects.create(name="Suite", price=120000)
        response = self.client.post(reverse('promotion-list'), dict(self.payload, target_room_id=room.id), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('target_room_id', response.data)

    def test_accepts_target_room_with_room_scope(self):
        room = Room.objects.create(name="Suite", price=120000)
        response = self.client.post(
            reverse('promotion-list'),
            dict(self.payload, scope="ROOM", target_room_id=room.id),
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['target_room_id'], room.id)

    def test_cannot_lower_cap_below_redemptions(self):
        promotion = make_promotion(max_redemptions=5, redemption_count=3)
        response = self.client.patch(
            reverse('promotion-detail', args=[promotion.pk]),
            {"max_redemptions": 2},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_redemption_count_is_read_only(self):
        promotion = make_promotion()
        self.client.patch(reverse('promotion-detail', args=[promotion.pk]), {"redemption_count": 40}, format='json')
        promotion.refresh_from_db()
        self.assertEqual(promotion.redemption_count, 0)

    def test_list_filters(self):
        make_promotion(name="Room deal", scope="ROOM")
        make_promotion(name="Old", ends_at=self.now - timedelta(hours=1), starts_at=self.now - timedelta(days=3))
        make_promotion(name="Off", is_active=False)

        response = self.client.get(reverse('promotion-list'), {"scope": "ROOM"})
        self.assertEqual([p['name'] for p in response.data], ["Room deal"])

        response = self.client.get(reverse('promotion-list'), {"is_active": "false"})
        self.assertEqual([p['name'] for p in response.data], ["Off"])

        response = self.client.get(reverse('promotion-list'), {"active_only": "true"})
        self.assertEqual([p['name'] for p in response.data], ["Room deal"])

    def test_delete_blocked_by_announcements_until_unbound(self):
        promotion = make_promotion()
        announcement = Announcement.objects.create(
            title="Summer", starts_at=self.now, ends_at=self.now + timedelta(days=1), promotion=promotion
        )
        url = reverse('promotion-detail', args=[promotion.pk])

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['code'], 'dependent_announcements_exist')
        self.assertEqual(response.data['announcement_count'], 1)
        self.assertTrue(Promotion.objects.filter(pk=promotion.pk).exists())

        announcement.delete()

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Promotion.objects.filter(pk=promotion.pk).exists())
        self.assertTrue(ActivityLog.objects.filter(entity_type="Promotion", action="DELETE").exists())

    def test_toggle(self):
        promotion = make_promotion()
        response = self.client.post(reverse('promotion-toggle', args=[promotion.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['is_active'])
        self.assertTrue(ActivityLog.objects.filter(action="TOGGLE", entity_id=str(promotion.pk)).exists())

    def test_redeem_endpoint(self):
        promotion = make_promotion(max_redemptions=1)
        url = reverse('promotion-redeem', args=[promotion.pk])

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['redemption_count'], 1)

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['code'], 'usage_limit_reached')

    def test_redeem_unknown_promotion(self):
        response = self.client.post(reverse('promotion-redeem', args=[424242]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_stats(self):
        make_promotion(code="A1")
        make_promotion(scope="ROOM")
        make_promotion(starts_at=self.now - timedelta(days=5), ends_at=self.now - timedelta(days=1))

        response = self.client.get(reverse('promotion-stats'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['active'], 2)
        self.assertEqual(response.data['expired'], 1)
        self.assertEqual(response.data['with_code'], 1)
        self.assertEqual(response.data['by_scope'], {"ALL": 2, "ROOM": 1})

    def test_targets(self):
        Room.objects.create(name="Villa", price=90000)
        Room.objects.create(name="Closed room", price=10000, is_active=False)
        Service.objects.create(name="Restaurant Le Wouri", service_type="RESTAURANT")

        response = self.client.get(reverse('promotion-targets'))

        self.assertEqual([r['name'] for r in response.data['rooms']], ["Villa"])
        self.assertEqual(response.data['services'][0]['service_type'], "RESTAURANT")

    def test_non_dashboard_role_is_forbidden(self):
        guest = User.objects.create_user(email='guest@example.com', name='Guest', password='testpassword123', role='guest')
        client = APIClient()
        client.force_authenticate(user=guest)
        response = client.get(reverse('promotion-list'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class PromotionPublicAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.now = timezone.now()

    def test_active_listing(self):
        make_promotion(name="Big", value=Decimal("40"))
        make_promotion(name="Small", value=Decimal("5"))
        make_promotion(name="Off", is_active=False)

        response = self.client.get(reverse('promotion-active'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['name'] for p in response.data], ["Big", "Small"])
        self.assertEqual(response.data[0]['label'], "-40%")

    def test_active_listing_unknown_scope(self):
        response = self.client.get(reverse('promotion-active'), {"scope": "CASINO"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_verify_code(self):
        make_promotion(code="SUMMER20")

        response = self.client.post(reverse('promotion-verify'), {"code": "Summer20"}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['code'], "SUMMER20")

    def test_verify_unknown_code(self):
        response = self.client.post(reverse('promotion-verify'), {"code": "NOPE"}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 'code_not_found')

    def test_verify_exhausted_code(self):
        make_promotion(code="LAST", max_redemptions=3, redemption_count=3)
        response = self.client.post(reverse('promotion-verify'), {"code": "last"}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'code_exhausted')

    def test_verify_scope_mismatch(self):
        make_promotion(code="ROOMS15", scope="ROOM")
        response = self.client.post(reverse('promotion-verify'), {"code": "rooms15", "scope": "SERVICE"}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'code_expired_or_inactive')

    def test_quote(self):
        promotion = make_promotion(discount_type="FIXED_AMOUNT", value=Decimal("1000"))

        response = self.client.post(reverse('promotion-quote', args=[promotion.pk]), {"base_price": 5000}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['applicable'])
        self.assertEqual(response.data['discounted_price'], 4000)
        self.assertEqual(response.data['discount_amount'], 1000)

    def test_quote_not_applicable(self):
        promotion = make_promotion(discount_type="FIXED_AMOUNT", value=Decimal("6000"))

        response = self.client.post(reverse('promotion-quote', args=[promotion.pk]), {"base_price": 5000}, format='json')

        self.assertFalse(response.data['applicable'])
        self.assertIsNone(response.data['discounted_price'])

    def test_quote_requires_running_promotion(self):
        promotion = make_promotion(is_active=False)
        response = self.client.post(reverse('promotion-quote', args=[promotion.pk]), {"base_price": 5000}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_public_cannot_redeem(self):
        promotion = make_promotion()
        response = self.client.post(reverse('promotion-redeem', args=[promotion.pk]))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
