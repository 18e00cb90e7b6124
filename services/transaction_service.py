from datetime import datetime
from decimal import Decimal
from models.category import Category
from models.transaction import Transaction, TransactionType
from database.tag_dao import TagDAO
from database.transaction_dao import TransactionDAO
from utils.currency import parse_amount
from utils.date_helpers import parse_date, to_local_naive


class TransactionService:
    def __init__(self, tx_dao: TransactionDAO, tag_dao: TagDAO):
        self._dao = tx_dao
        self._tag_dao = tag_dao

    def get_all(self) -> list[Transaction]:
        return self._dao.get_all()

    def get_by_id(self, tx_id: str) -> Transaction | None:
        return self._dao.get_by_id(tx_id)

    def create(
        self,
        amount: Decimal | str,
        type_: TransactionType | str = TransactionType.EXPENSE,
        date: datetime | str | None = None,
        category: Category | None = None,
        note: str = "",
        tags: list[str] | None = None,
        is_recurring: bool = False,
        recurrence_rule: str | None = None,
    ) -> Transaction:
        tx = Transaction(
            amount=self._amount(amount),
            date=self._date(date),
            note=note,
            type=self._type(type_),
            category=category,
            tags=[self._tag_dao.get_or_create(t.strip()) for t in tags or [] if t.strip()],
            is_recurring=is_recurring,
            recurrence_rule=recurrence_rule,
        )
        return self._dao.create(tx)

    def update(
        self,
        tx_id: str,
        amount: Decimal | str,
        type_: TransactionType | str,
        date: datetime | str,
        category: Category | None,
        note: str = "",
    ) -> Transaction:
        tx = self._dao.get_by_id(tx_id)
        if tx is None:
            raise ValueError("Transaction not found.")
        tx.amount = self._amount(amount)
        tx.type = self._type(type_)
        tx.date = self._date(date)
        tx.category = category
        tx.note = note
        return self._dao.update(tx)

    def delete(self, tx_id: str):
        self._dao.delete(tx_id)

    def _amount(self, amount: Decimal | str) -> Decimal:
        if isinstance(amount, Decimal):
            if not amount.is_finite():
                raise ValueError(f"Invalid amount: {amount}")
            return amount
        return parse_amount(str(amount))

    def _type(self, type_: TransactionType | str) -> TransactionType:
        try:
            return TransactionType(type_)
        except ValueError:
            raise ValueError(f"Invalid type: {type_}") from None

    def _date(self, value: datetime | str | None) -> datetime:
        if value is None:
            return datetime.now()
        if isinstance(value, datetime):
            return to_local_naive(value)
        parsed = parse_date(value)
        if parsed is None:
            raise ValueError("Invalid date format. Use YYYY-MM-DD.")
        return parsed
