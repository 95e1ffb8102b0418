from __future__ import annotations

from decimal import Decimal
from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from modules.core.management.commands.seed_catalog import STARTER_CATALOG
from modules.products.models import Product

pytestmark = pytest.mark.unit

User = get_user_model()


def _seed() -> str:
    out = StringIO()
    call_command("seed_catalog", stdout=out)
    return out.getvalue()


class TestSeedCatalog:
    def test_creates_admin_and_products(self):
        output = _seed()

        admin = User.objects.get(username="admin")
        assert admin.is_staff and admin.is_superuser
        assert Product.objects.count() == len(STARTER_CATALOG)
        assert f"products={len(STARTER_CATALOG)}" in output

    def test_is_idempotent(self):
        _seed()
        output = _seed()

        assert User.objects.filter(username="admin").count() == 1
        assert Product.objects.count() == len(STARTER_CATALOG)
        assert "users=0, products=0" in output

    def test_skips_names_already_present_in_any_case(self):
        Product.objects.create(name="LAPTOP", price=Decimal("1.00"))

        _seed()

        assert Product.objects.count() == len(STARTER_CATALOG)
        assert Product.objects.get(name__iexact="laptop").price == Decimal("1.00")
