"""Tests for properties, leases and installments."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.properties.models import Installment, Lease, Property

User = get_user_model()


class PropertyAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(username="owner", password="StrongPass123")
        self.other = User.objects.create_user(username="other", password="StrongPass123")
        self.property = Property.objects.create(
            owner=self.owner,
            name="Office",
            property_type=Property.PropertyType.COMMERCIAL,
        )
        Property.objects.create(owner=self.other, name="Someone else's")
        self.client.force_authenticate(self.owner)

    def test_list_only_own_properties(self) -> None:
        response = self.client.get(reverse("property-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["name"] for item in response.data], ["Office"])

    def test_create_sets_owner_and_ignores_version(self) -> None:
        response = self.client.post(
            reverse("property-list"),
            {"name": "Beach house", "property_type": "str", "cleaning_fee": "45.00", "calendar_version": 9},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        created = Property.objects.get(pk=response.data["id"])
        self.assertEqual(created.owner, self.owner)
        self.assertEqual(created.calendar_version, 0)

    def test_unknown_property_type_is_rejected(self) -> None:
        response = self.client.post(reverse("property-list"), {"name": "Barn", "property_type": "farm"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_staff_see_every_property(self) -> None:
        admin = User.objects.create_user(username="admin", password="AdminPass123", is_staff=True)
        self.client.force_authenticate(admin)

        response = self.client.get(reverse("property-list"))

        self.assertEqual(len(response.data), 2)

    def test_other_users_property_is_hidden(self) -> None:
        self.client.force_authenticate(self.other)

        response = self.client.get(reverse("property-detail", kwargs={"pk": self.property.pk}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_lease_lifecycle(self) -> None:
        url = reverse("property-lease-list", kwargs={"property_id": self.property.id})

        created = self.client.post(
            url,
            {"tenant_name": "Acme", "start_date": "2026-01-01", "monthly_rent": "2500.00"},
            format="json",
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED, created.data)
        self.assertIsNone(created.data["end_date"])

        detail = reverse(
            "property-lease-detail",
            kwargs={"property_id": self.property.id, "pk": created.data["id"]},
        )
        ended = self.client.patch(detail, {"end_date": "2026-12-31"}, format="json")
        self.assertEqual(ended.status_code, status.HTTP_200_OK, ended.data)

        details = self.client.get(reverse("property-detail", kwargs={"pk": self.property.pk}))
        self.assertEqual(details.data["leases"][0]["end_date"], "2026-12-31")

    def test_lease_cannot_end_before_it_starts(self) -> None:
        url = reverse("property-lease-list", kwargs={"property_id": self.property.id})

        response = self.client.post(
            url,
            {"tenant_name": "Acme", "start_date": "2026-03-01", "end_date": "2026-02-01"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Lease.objects.exists())

    def test_installments_are_scoped_to_the_property(self) -> None:
        url = reverse("property-installment-list", kwargs={"property_id": self.property.id})
        self.client.post(url, {"amount": "1000.00", "due_date": "2026-02-01"}, format="json")

        self.client.force_authenticate(self.other)
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Installment.objects.get().status, Installment.Status.PENDING)

    def test_installment_detail_routes(self) -> None:
        installment = Installment.objects.create(
            property=self.property,
            amount=Decimal("1000.00"),
            due_date=date(2026, 2, 1),
        )
        url = reverse(
            "property-installment-detail",
            kwargs={"property_id": self.property.id, "pk": installment.pk},
        )

        fetched = self.client.get(url)
        self.assertEqual(fetched.status_code, status.HTTP_200_OK, fetched.data)
        self.assertEqual(fetched.data["amount"], "1000.00")

        paid = self.client.patch(url, {"status": "paid", "paid_at": "2026-02-01"}, format="json")
        self.assertEqual(paid.status_code, status.HTTP_200_OK, paid.data)
        installment.refresh_from_db()
        self.assertEqual(installment.status, Installment.Status.PAID)

        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Installment.objects.exists())

    def test_lease_detail_is_forbidden_to_other_users(self) -> None:
        lease = Lease.objects.create(property=self.property, tenant_name="Acme", start_date=date(2026, 1, 1))
        url = reverse("property-lease-detail", kwargs={"property_id": self.property.id, "pk": lease.pk})

        self.client.force_authenticate(self.other)

        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Lease.objects.exists())

    def test_missing_property_is_not_found(self) -> None:
        url = reverse("property-lease-list", kwargs={"property_id": 9999})

        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)
