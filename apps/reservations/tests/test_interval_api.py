"""Integration tests for the property calendar endpoints."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.cleaning.models import CleaningTask
from apps.properties.models import Property
from apps.reservations.models import Reservation

User = get_user_model()


class IntervalAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(username="owner", password="OwnerPass123")
        self.other = User.objects.create_user(username="stranger", password="StrangerPass123")
        self.property = Property.objects.create(
            owner=self.owner,
            name="Beach house",
            property_type=Property.PropertyType.STR,
            cleaning_fee=Decimal("45.00"),
        )
        self.client.force_authenticate(self.owner)
        self.list_url = reverse("property-interval-list", kwargs={"property_id": self.property.id})

    def _detail_url(self, interval_id) -> str:
        return reverse(
            "property-interval-detail",
            kwargs={"property_id": self.property.id, "interval_id": interval_id},
        )

    def _create(self, check_in: str, check_out: str, **extra):
        payload = {"check_in": check_in, "check_out": check_out, "guest_name": "Dana", **extra}
        return self.client.post(self.list_url, payload, format="json")

    def test_owner_can_add_a_stay(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            response = self._create("2026-05-01", "2026-05-04", total_price="360.00", security_deposit="100")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["nights"], 3)
        self.assertEqual(response.data["kind"], "guest")
        self.assertEqual(response.data["deposit_status"], "collected")
        self.assertTrue(Reservation.objects.filter(uid=response.data["id"]).exists())
        self.assertEqual(CleaningTask.objects.get().cost, Decimal("45.00"))

    def test_overlap_returns_conflict_with_ids(self) -> None:
        first = self._create("2026-05-01", "2026-05-04")

        response = self._create("2026-05-03", "2026-05-05", guest_name="Eve")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "conflict")
        self.assertEqual(response.data["conflicting_ids"], [first.data["id"]])
        self.assertEqual(Reservation.objects.count(), 1)

    def test_checkout_day_can_be_next_check_in(self) -> None:
        self._create("2026-05-01", "2026-05-04")

        response = self._create("2026-05-04", "2026-05-06", guest_name="Eve")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_invalid_stays_are_rejected(self) -> None:
        zero_length = self._create("2026-05-01", "2026-05-01")
        nameless = self._create("2026-05-01", "2026-05-02", guest_name="  ")
        unparsable = self._create("2026-05-01", "not-a-date")

        self.assertEqual(zero_length.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(zero_length.data["field"], "check_out")
        self.assertEqual(nameless.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(nameless.data["field"], "guest_name")
        self.assertEqual(unparsable.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Reservation.objects.exists())

    def test_maintenance_block_needs_no_guest(self) -> None:
        response = self._create("2026-05-10", "2026-05-12", kind="maintenance", guest_name="", maintenance_expense="80")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["guest_name"], "Maintenance")
        self.assertEqual(response.data["maintenance_expense"], "80.00")

    def test_list_is_sorted_by_check_in(self) -> None:
        self._create("2026-05-10", "2026-05-12", guest_name="Later")
        self._create("2026-05-01", "2026-05-03", guest_name="Earlier")

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["guest_name"] for item in response.data], ["Earlier", "Later"])

    def test_patch_and_delete(self) -> None:
        created = self._create("2026-05-01", "2026-05-04")
        url = self._detail_url(created.data["id"])

        patched = self.client.patch(url, {"check_out": "2026-05-06", "notes": "Late arrival"}, format="json")
        self.assertEqual(patched.status_code, status.HTTP_200_OK, patched.data)
        self.assertEqual(patched.data["nights"], 5)
        self.assertEqual(patched.data["notes"], "Late arrival")

        deleted = self.client.delete(url)
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_unknown_interval_is_not_found(self) -> None:
        response = self.client.delete(self._detail_url(uuid4()))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "not_found")

    def test_calendar_month_grid(self) -> None:
        self._create("2026-05-01", "2026-05-04", total_price="300")
        url = reverse("property-calendar", kwargs={"property_id": self.property.id})

        response = self.client.get(url, {"month": "2026-05"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["previous"], "2026-04")
        self.assertEqual(response.data["next"], "2026-06")
        self.assertEqual(response.data["version"], 1)
        self.assertEqual(response.data["occupancy"]["guest_nights"], 3)
        self.assertEqual(len(response.data["days"]), 31)
        self.assertEqual(response.data["days"][1]["status"], "fullyBooked")
        self.assertEqual(response.data["days"][0]["status"], "checkIn")

    def test_calendar_rejects_bad_month(self) -> None:
        url = reverse("property-calendar", kwargs={"property_id": self.property.id})

        self.assertEqual(self.client.get(url, {"month": "2026-13"}).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.client.get(url, {"month": "May"}).status_code, status.HTTP_400_BAD_REQUEST)

    def test_calendar_rejects_months_outside_the_date_range(self) -> None:
        url = reverse("property-calendar", kwargs={"property_id": self.property.id})

        for month in ("9999-12", "0000-01", "0001-01"):
            response = self.client.get(url, {"month": month})
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, month)
            self.assertIn("month", response.data)

    def test_other_users_cannot_touch_the_calendar(self) -> None:
        self.client.force_authenticate(self.other)

        response = self._create("2026-05-01", "2026-05-04")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Reservation.objects.exists())

    def test_anonymous_requests_are_rejected(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(self.list_url)

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
