from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.core.normalization import PROFILES, normalize_profile
from modules.customers.models import Customer
from modules.customers.repositories import CustomerDjangoRepository
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, OrderItemDTO
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories import ProductDjangoRepository
from modules.routes.models import Route
from modules.routes.repositories import RouteDjangoRepository


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        self._route_repo = RouteDjangoRepository()
        self._customer_repo = CustomerDjangoRepository()
        self._product_repo = ProductDjangoRepository()
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        routes = self._seed_routes()
        customers = self._seed_customers(routes)
        products = self._seed_products()
        orders_created = self._seed_orders(customers, products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"routes={len(routes)}, "
                f"customers={len(customers)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        for profile in PROFILES:
            Group.objects.get_or_create(name=profile)

        created = 0
        seed_users = [
            ("admin", "admin123", " Admin "),
            ("backoffice", "backoffice123", "BACKOFFICE"),
            ("vendedor", "vendedor123", "vendedor"),
            ("motorista", "motorista123", "Motorista"),
        ]
        for username, password, raw_profile in seed_users:
            if User.objects.filter(username=username).exists():
                continue
            profile = normalize_profile(raw_profile)
            if username == "admin":
                user = User.objects.create_superuser(username, password=password)
            else:
                user = User.objects.create_user(username, password=password)
            if profile:
                user.groups.add(Group.objects.get(name=profile))
            created += 1
        return created

    def _seed_routes(self) -> list[Route]:
        self.stdout.write("Creating routes...")
        routes = []
        for name in ("Centro", "Zona Norte", "Zona Sul", "Interior"):
            existing = self._route_repo.list({"name": name})
            routes.append(existing[0] if existing else self._route_repo.save(Route(name=name)))
        self.stdout.write(self.style.SUCCESS("Creating routes... Done!"))
        return routes

    def _seed_customers(self, routes: list[Route]) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers: list[Customer] = []
        seed_customers = [
            ("C001", "Mercado Bom Preço"),
            ("C002", "Padaria Central"),
            ("C003", "Restaurante Sabor Caseiro"),
            ("C004", "Lanchonete da Praça"),
            ("C005", "Supermercado Família"),
            ("C006", "Hotel Avenida"),
            ("C007", "Bar do Zé"),
            ("C008", "Empório Natural"),
        ]
        for index, (code, name) in enumerate(seed_customers):
            customer = self._customer_repo.get_by_code(code) or self._customer_repo.save(
                Customer(code=code, name=name, route=routes[index % len(routes)])
            )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        catalog = [
            ("P001", "Pão Francês", "KG", Decimal("14.90")),
            ("P002", "Pão de Forma", "UN", Decimal("8.50")),
            ("P003", "Bolo de Chocolate", "UN", Decimal("32.00")),
            ("P004", "Biscoito Amanteigado", "PCT", Decimal("6.75")),
            ("P005", "Torrada", "PCT", Decimal("5.20")),
            ("P006", "Pão de Queijo", "KG", Decimal("29.90")),
            ("P007", "Croissant", "UN", Decimal("4.50")),
            ("P008", "Sonho", "UN", Decimal("3.80")),
        ]
        for code, name, packaging, price in catalog:
            existing = self._product_repo.list({"code": code})
            product = existing[0] if existing else self._product_repo.save(
                Product(code=code, name=name, packaging=packaging, base_price=price)
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(self, customers: list[Customer], products: list[Product]) -> int:
        self.stdout.write("Creating orders...")
        if not customers or not products:
            self.stdout.write(self.style.WARNING("Skipping orders (no customers/products)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=self._customer_repo,
            product_repository=self._product_repo,
            route_repository=self._route_repo,
        )
        statuses = list(OrderStatus)
        weights = [0.35, 0.30, 0.25, 0.10]
        today = timezone.localdate()

        orders_created = 0
        for i in range(30):
            order_key = f"SEED-{i + 1:03d}"
            if service.list_orders({"order_key": order_key}).exists():
                continue
            customer = random.choice(customers)
            items = [
                OrderItemDTO(
                    product_id=product.id,
                    quantity=Decimal(random.randint(1, 20)),
                    unit_price=product.base_price,
                    packaging=product.packaging,
                )
                for product in random.sample(products, k=random.randint(1, 4))
            ]
            service.create_order(
                CreateOrderDTO(
                    customer_id=customer.id,
                    route_id=customer.route_id,
                    order_date=today - timedelta(days=random.randint(0, 10)),
                    status=random.choices(statuses, weights=weights, k=1)[0],
                    order_key=order_key,
                    items=items,
                )
            )
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
