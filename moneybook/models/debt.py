from datetime import date, datetime
from ..extensions import db

DEBT_TYPES = ("borrow", "lend")
DEBT_STATUSES = ("unpaid", "paid")


class Debt(db.Model):
    """Informal borrow/lend entry, kept apart from income and expense totals."""

    __tablename__ = "debts"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    type = db.Column(db.String(10), nullable=False)  # borrow/lend
    amount = db.Column(db.Float, nullable=False)
    person = db.Column(db.String(120), nullable=False)
    description = db.Column(db.String(255), nullable=False)
    date = db.Column(db.Date, default=date.today, nullable=False)
    note = db.Column(db.Text)
    status = db.Column(db.String(10), default="unpaid", nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def apply(self, fields: dict):
        for key, value in fields.items():
            setattr(self, key, value)

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "amount": self.amount,
            "person": self.person,
            "description": self.description,
            "date": self.date.isoformat(),
            "note": self.note,
            "status": self.status,
            "userId": self.user_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
