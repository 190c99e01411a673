import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings")
django.setup()

from django.apps import apps  # noqa: E402
from django.db import connection  # noqa: E402

from dispatch import Dispatcher  # noqa: E402
from orders.models import UserRole  # noqa: E402
from storage import InMemoryStore  # noqa: E402


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def dispatcher(store):
    return Dispatcher(store)


@pytest.fixture
def owner(dispatcher):
    return dispatcher.create_user("olga", "olga@example.com", "+263771000001", UserRole.RESTAURANT_OWNER)


@pytest.fixture
def customer(dispatcher):
    return dispatcher.create_user("chipo", "chipo@example.com", "+263771000002", UserRole.CUSTOMER)


@pytest.fixture
def courier(dispatcher):
    return dispatcher.create_user("dan", "dan@example.com", "+263771000003", UserRole.DELIVERY_PERSON)


@pytest.fixture
def restaurant(dispatcher, owner):
    return dispatcher.create_restaurant(owner.id, "Sadza Spot", "Local food", "Samora Machel Ave")


@pytest.fixture
def menu_item(dispatcher, restaurant):
    return dispatcher.create_menu_item(restaurant.id, "Sadza & beef", "Plate", "12.50", 0.6)


@pytest.fixture
def order(dispatcher, customer, restaurant, menu_item):
    return dispatcher.create_order(customer.id, restaurant.id, [menu_item.id, menu_item.id])


@pytest.fixture(scope="session")
def test_database():
    """
    Migrated throwaway database (in-memory for SQLite) for tests of the ORM store.
    """
    original_name = connection.settings_dict["NAME"]
    connection.creation.create_test_db(verbosity=0, autoclobber=True, serialize=False)
    yield
    connection.creation.destroy_test_db(original_name, verbosity=0)


@pytest.fixture
def db_store(test_database):
    from backend.records.store import DatabaseStore

    yield DatabaseStore()
    for model in apps.get_app_config("records").get_models():
        model.objects.all().delete()
