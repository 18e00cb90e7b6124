import pytest

from database.db_manager import DatabaseManager
from database.budget_dao import BudgetDAO
from database.category_dao import CategoryDAO
from database.tag_dao import TagDAO
from database.transaction_dao import TransactionDAO
from models.category import Category


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:")
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def budget_dao(db):
    return BudgetDAO(db)


@pytest.fixture
def tx_dao(db):
    return TransactionDAO(db)


@pytest.fixture
def tag_dao(db):
    return TagDAO(db)


@pytest.fixture
def food():
    return Category(name="Food", color_hex="#FF9500")


@pytest.fixture
def rent():
    return Category(name="Rent", color_hex="#FF3B30")


@pytest.fixture
def salary():
    return Category(name="Salary", color_hex="#0A84FF")

