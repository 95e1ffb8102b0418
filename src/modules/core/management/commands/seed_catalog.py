from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from config.bootstrap import build_catalog_service
from modules.products.dtos import UpsertProductDTO
from modules.products.exceptions import ProductAlreadyExists

STARTER_CATALOG = [
    ("Laptop", Decimal("1200.00")),
    ("Monitor", Decimal("349.90")),
    ("Keyboard", Decimal("79.99")),
    ("Mouse", Decimal("29.50")),
    ("Headset", Decimal("149.00")),
]


class Command(BaseCommand):
    help = "Seed an admin account and a starter product catalog."

    def add_arguments(self, parser):
        parser.add_argument("--admin-username", default="admin")
        parser.add_argument("--admin-password", default="admin123")

    def handle(self, *args, **options):
        self.stdout.write("Seeding catalog...")

        users_created = self._seed_admin(
            options["admin_username"], options["admin_password"]
        )
        products_created = self._seed_products()

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: users={users_created}, products={products_created}"
            )
        )

    def _seed_admin(self, username: str, password: str) -> int:
        User = get_user_model()
        if User.objects.filter(username=username).exists():
            return 0
        User.objects.create_superuser(username, password=password)
        return 1

    def _seed_products(self) -> int:
        service = build_catalog_service()
        created = 0
        for name, price in STARTER_CATALOG:
            try:
                service.upsert_product(UpsertProductDTO(name=name, price=price))
            except ProductAlreadyExists:
                self.stdout.write(f"  skipped existing product {name!r}")
                continue
            created += 1
        return created
