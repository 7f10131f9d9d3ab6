"""Integration tests for the cleaning task endpoints."""

from __future__ import annotations

from datetime import date
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


class CleaningAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(username="cleaning-owner", password="OwnerPass123")
        self.property = Property.objects.create(
            owner=self.owner,
            name="Cottage",
            cleaning_fee=Decimal("30.00"),
        )
        self.client.force_authenticate(self.owner)
        self.list_url = reverse("property-cleaning-list", kwargs={"property_id": self.property.id})

    def _book(self) -> dict:
        url = reverse("property-interval-list", kwargs={"property_id": self.property.id})
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                url,
                {"check_in": "2026-06-01", "check_out": "2026-06-04", "guest_name": "Dana"},
                format="json",
            )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data

    def _detail_url(self, task_id) -> str:
        return reverse(
            "property-cleaning-detail",
            kwargs={"property_id": self.property.id, "task_id": task_id},
        )

    def test_booking_produces_listed_task(self) -> None:
        booking = self._book()

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        task = response.data[0]
        self.assertEqual(task["booking_id"], booking["id"])
        self.assertEqual(task["checkout_date"], "2026-06-04")
        self.assertEqual(task["cost"], "30.00")
        self.assertEqual(task["status"], "pending")

    def test_status_update(self) -> None:
        self._book()
        task = CleaningTask.objects.get()

        response = self.client.patch(self._detail_url(task.uid), {"status": "completed"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "completed")

    def test_invalid_status_is_rejected(self) -> None:
        self._book()
        task = CleaningTask.objects.get()

        response = self.client.patch(self._detail_url(task.uid), {"status": "lost"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_deleting_the_booking_keeps_the_task(self) -> None:
        booking = self._book()
        url = reverse(
            "property-interval-detail",
            kwargs={"property_id": self.property.id, "interval_id": booking["id"]},
        )

        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)

        self.assertFalse(Reservation.objects.exists())
        self.assertEqual(CleaningTask.objects.count(), 1)

    def test_deleting_the_task_keeps_the_booking(self) -> None:
        self._book()
        task = CleaningTask.objects.get()

        response = self.client.delete(self._detail_url(task.uid))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(Reservation.objects.count(), 1)
        self.assertEqual(self.client.delete(self._detail_url(task.uid)).status_code, status.HTTP_404_NOT_FOUND)

    def test_unknown_task(self) -> None:
        response = self.client.patch(self._detail_url(uuid4()), {"status": "completed"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_manual_rows_are_listed_in_checkout_order(self) -> None:
        CleaningTask.objects.create(property=self.property, checkout_date=date(2026, 7, 2))
        CleaningTask.objects.create(property=self.property, checkout_date=date(2026, 7, 1))

        response = self.client.get(self.list_url)

        self.assertEqual([t["checkout_date"] for t in response.data], ["2026-07-01", "2026-07-02"])
