from __future__ import annotations

from foh.application.use_cases.seed_database import MenuItemFixture, SeedFixtures, UserFixture
from foh.domain.user.entities import Role

PLACEHOLDER_IMAGE = "https://placehold.co/400x300.png"

STARTER_FIXTURES = SeedFixtures(
    password="123456",
    users=[
        UserFixture(name="Admin User", email="admin@vinnoswad.com", role=Role.ADMIN),
        UserFixture(name="Manager User", email="manager@vinnoswad.com", role=Role.MANAGER),
        UserFixture(name="Kitchen User", email="kitchen@vinnoswad.com", role=Role.KITCHEN),
        UserFixture(name="Arjun Kumar", email="arjun@vinnoswad.com", role=Role.WAITER),
        UserFixture(name="Priya Sharma", email="priya@vinnoswad.com", role=Role.WAITER),
        UserFixture(name="Rohan Mehta", email="rohan@vinnoswad.com", role=Role.WAITER),
    ],
    menu_items=[
        MenuItemFixture("Margherita Pizza", 1250, "Main Course", True, PLACEHOLDER_IMAGE),
        MenuItemFixture("Caesar Salad", 800, "Starters", True, PLACEHOLDER_IMAGE),
        MenuItemFixture("Spaghetti Carbonara", 1500, "Main Course", True, PLACEHOLDER_IMAGE),
        MenuItemFixture("Tiramisu", 650, "Desserts", True, PLACEHOLDER_IMAGE),
        MenuItemFixture("Bruschetta", 700, "Starters", True, PLACEHOLDER_IMAGE),
        MenuItemFixture("Grilled Salmon", 1800, "Main Course", False, PLACEHOLDER_IMAGE),
        MenuItemFixture("Coke", 250, "Drinks", True, PLACEHOLDER_IMAGE),
        MenuItemFixture("Water", 100, "Drinks", True, PLACEHOLDER_IMAGE),
    ],
    table_count=8,
)
