from datetime import datetime
from decimal import Decimal

from models.transaction import Transaction, TransactionType

NOW = datetime(2025, 3, 15, 14, 30)


def make_tx(amount, category=None, type_=TransactionType.EXPENSE, date=NOW, note=""):
    return Transaction(
        amount=Decimal(str(amount)),
        date=date,
        note=note,
        type=type_,
        category=category,
    )
