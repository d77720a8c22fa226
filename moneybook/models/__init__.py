from .user import User
from .record import Record, RECORD_TYPES
from .budget import Budget
from .debt import Debt, DEBT_TYPES, DEBT_STATUSES

__all__ = ["User", "Record", "Budget", "Debt", "RECORD_TYPES", "DEBT_TYPES", "DEBT_STATUSES"]
