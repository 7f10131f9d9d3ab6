from decimal import Decimal

import pytest

from apps.properties.models import Property


@pytest.fixture
def owner(django_user_model):
    return django_user_model.objects.create_user(username="owner", password="OwnerPass123")


@pytest.fixture
def beach_house(owner):
    return Property.objects.create(
        owner=owner,
        name="Beach house",
        property_type=Property.PropertyType.STR,
        cleaning_fee=Decimal("45.00"),
    )
