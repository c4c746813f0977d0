"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.memberships.models import CustomerMembership, MembershipTier
from apps.warehouses.models import PricingSchedule, Warehouse

User = get_user_model()


class BookingAPITests(APITestCase):
    """Covers quoting, admission, capacity conflicts and cancellation."""

    def setUp(self) -> None:
        self.customer = User.objects.create_user(
            username="customer",
            email="customer@example.com",
            password="CustomerPass123",
        )
        self.other_customer = User.objects.create_user(
            username="other",
            email="other@example.com",
            password="OtherPass123",
        )
        self.warehouse = Warehouse.objects.create(
            name="Harbor Point Storage",
            city="Oakland",
            total_pallet_slots=100,
            total_area_sqft=Decimal("5000"),
        )
        PricingSchedule.objects.create(
            warehouse=self.warehouse,
            resource_type="pallet",
            base_price=Decimal("10.00"),
            billing_unit="per_unit_per_month",
            volume_discounts={"50": 10, "100": 15},
        )
        PricingSchedule.objects.create(
            warehouse=self.warehouse,
            resource_type="area",
            base_price=Decimal("0.85"),
            billing_unit="per_unit_per_month",
            min_quantity=Decimal("100"),
        )
        self.client.force_authenticate(self.customer)
        self.list_url = reverse("booking-list")
        self.quote_url = reverse("booking-quote")
        self.start = date.today() + timedelta(days=10)

    def _payload(self, quantity, start: date, end: date, resource_type: str = "pallet") -> dict[str, str]:
        return {
            "warehouse": str(self.warehouse.id),
            "resource_type": resource_type,
            "quantity": str(quantity),
            "start_date": str(start),
            "end_date": str(end),
        }

    def test_quote_applies_volume_and_membership_discounts(self) -> None:
        tier = MembershipTier.objects.create(name="silver", discount_percent=Decimal("5"))
        CustomerMembership.objects.create(user=self.customer, tier=tier)

        response = self.client.post(
            self.quote_url,
            self._payload(75, self.start, self.start + timedelta(days=30)),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["base_amount"], "750.00")
        self.assertEqual(response.data["volume_discount_amount"], "75.00")
        self.assertEqual(response.data["amount_after_volume"], "675.00")
        self.assertEqual(response.data["membership_discount_amount"], "33.75")
        self.assertEqual(response.data["total"], "641.25")
        self.assertEqual(len(response.data["line_items"]), 3)
        self.assertFalse(Booking.objects.exists())

    def test_customer_can_create_booking(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(20, self.start, self.start + timedelta(days=30)),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = Booking.objects.get()
        self.assertEqual(response.data["id"], booking.id)
        self.assertEqual(booking.customer, self.customer)
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)
        self.assertEqual(response.data["total_amount"], "200.00")

    def test_over_capacity_request_is_rejected_with_conflict(self) -> None:
        first = self.client.post(
            self.list_url,
            self._payload(60, self.start, self.start + timedelta(days=30)),
            format="json",
        )
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        response = self.client.post(
            self.list_url,
            self._payload(41, self.start + timedelta(days=14), self.start + timedelta(days=19)),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "insufficient_capacity")
        self.assertEqual(response.data["available"], "40.00")
        self.assertEqual(Booking.objects.count(), 1)

    def test_back_to_back_bookings_are_allowed(self) -> None:
        middle = self.start + timedelta(days=5)
        first = self.client.post(self.list_url, self._payload(100, self.start, middle), format="json")
        second = self.client.post(
            self.list_url, self._payload(100, middle, middle + timedelta(days=5)), format="json"
        )

        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        self.assertEqual(second.status_code, status.HTTP_201_CREATED, second.data)

    def test_invalid_dates_and_fractional_pallets(self) -> None:
        same_day = self.client.post(self.list_url, self._payload(1, self.start, self.start), format="json")
        fractional = self.client.post(
            self.list_url, self._payload("1.5", self.start, self.start + timedelta(days=1)), format="json"
        )

        self.assertEqual(same_day.status_code, status.HTTP_400_BAD_REQUEST, same_day.data)
        self.assertEqual(fractional.status_code, status.HTTP_400_BAD_REQUEST, fractional.data)

    def test_area_below_minimum_is_bad_request(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(50, self.start, self.start + timedelta(days=30), resource_type="area"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "quantity_out_of_range")

    def test_unpriced_resource_is_not_found(self) -> None:
        PricingSchedule.objects.filter(warehouse=self.warehouse, resource_type="area").update(is_active=False)

        response = self.client.post(
            self.quote_url,
            self._payload(200, self.start, self.start + timedelta(days=30), resource_type="area"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["code"], "unsupported_resource")

    def test_customer_can_cancel_booking(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(100, self.start, self.start + timedelta(days=30)),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking_id = response.data["id"]

        cancel_url = reverse("booking-cancel", args=[booking_id])
        cancel_response = self.client.post(cancel_url, {"reason": "Plans changed"}, format="json")

        self.assertEqual(cancel_response.status_code, status.HTTP_200_OK, cancel_response.data)
        booking = Booking.objects.get(id=booking_id)
        self.assertEqual(booking.status, Booking.Status.CANCELLED)
        self.assertEqual(booking.cancellation_source, Booking.CancellationSource.CUSTOMER)

        again = self.client.post(cancel_url, {}, format="json")
        self.assertEqual(again.status_code, status.HTTP_409_CONFLICT, again.data)

        rebook = self.client.post(
            self.list_url,
            self._payload(100, self.start, self.start + timedelta(days=30)),
            format="json",
        )
        self.assertEqual(rebook.status_code, status.HTTP_201_CREATED, rebook.data)

    def test_customers_only_see_their_own_bookings(self) -> None:
        self.client.post(
            self.list_url,
            self._payload(10, self.start, self.start + timedelta(days=3)),
            format="json",
        )
        booking = Booking.objects.get()

        self.client.force_authenticate(self.other_customer)
        listing = self.client.get(self.list_url)
        detail = self.client.get(reverse("booking-detail", args=[booking.id]))
        cancel = self.client.post(reverse("booking-cancel", args=[booking.id]), {}, format="json")

        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(listing.data["count"], 0)
        self.assertEqual(detail.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(cancel.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_filters_by_status(self) -> None:
        self.client.post(
            self.list_url,
            self._payload(10, self.start, self.start + timedelta(days=3)),
            format="json",
        )

        confirmed = self.client.get(self.list_url, {"status": Booking.Status.CONFIRMED})
        cancelled = self.client.get(self.list_url, {"status": Booking.Status.CANCELLED})

        self.assertEqual(confirmed.data["count"], 1)
        self.assertEqual(cancelled.data["count"], 0)

    def test_anonymous_requests_are_rejected(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(
            self.quote_url,
            self._payload(10, self.start, self.start + timedelta(days=3)),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
