from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.orders.dtos import OrderLineRequestDTO, PlaceOrderDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.dtos import CreateProductDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.users.models import Role


class Command(BaseCommand):
    help = "Seed database with development users, products and orders."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=10,
            help="Number of orders to place for the demo client.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        admin, client = self._seed_users()
        products = self._seed_products()
        orders_created = self._seed_orders(admin, client, products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self):
        User = get_user_model()
        admin = User.objects.filter(email="admin@inventory.com").first()
        if admin is None:
            admin = User.objects.create_superuser(
                "admin@inventory.com", password="admin123", name="Administrator"
            )
        client = User.objects.filter(email="cliente@inventory.com").first()
        if client is None:
            client = User.objects.create_user(
                "cliente@inventory.com",
                password="cliente123",
                name="Demo Client",
                role=Role.CLIENT,
            )
        self.stdout.write(self.style.SUCCESS("Creating users... Done!"))
        return admin, client

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        service = ProductService(repository=ProductDjangoRepository())
        catalog = [
            ("Monitor 27\"", "Electronics", Decimal("1299.90")),
            ("Mechanical Keyboard", "Electronics", Decimal("399.90")),
            ("Gaming Mouse", "Electronics", Decimal("249.90")),
            ("Notebook 14\"", "Electronics", Decimal("3999.00")),
            ("Headset", "Electronics", Decimal("299.90")),
            ("Office Desk", "Furniture", Decimal("899.00")),
            ("Ergonomic Chair", "Furniture", Decimal("1499.00")),
            ("Bookcase", "Furniture", Decimal("699.00")),
            ("A4 Paper", "Office", Decimal("29.90")),
            ("Blue Pen", "Office", Decimal("4.90")),
            ("Notebook Stand", "Office", Decimal("149.90")),
            ("Calculator", "Office", Decimal("89.90")),
        ]
        products: list[Product] = []
        for name, category, price in catalog:
            product = Product.objects.filter(name=name).first()
            if product is None:
                product = service.create_product(
                    CreateProductDTO(
                        name=name,
                        description=category,
                        price=price,
                        stock=random.randint(20, 200),
                    )
                )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(self, admin, client, products: list[Product], count: int) -> int:
        self.stdout.write("Creating orders...")
        if client.orders.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        for _ in range(count):
            picked = random.sample(products, k=random.randint(1, 3))
            invoice = service.create_order(
                client.id,
                PlaceOrderDTO(
                    items=[
                        OrderLineRequestDTO(
                            product_id=product.id, quantity=random.randint(1, 3)
                        )
                        for product in picked
                    ]
                ),
            )
            outcome = random.random()
            if outcome < 0.3:
                service.complete_order(str(invoice.id), admin.id, admin.role)
            elif outcome < 0.5:
                service.cancel_order(str(invoice.id), client.id, client.role)

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return count
