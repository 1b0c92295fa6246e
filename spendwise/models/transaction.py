from datetime import datetime
from ..extensions import db

TRANSACTION_TYPES = ("income", "expense")


class Transaction(db.Model):
    __tablename__ = "transactions"
    id = db.Column(db.Integer, primary_key=True)
    amount = db.Column(db.Float, nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    description = db.Column(db.String(255), nullable=False)
    # No foreign key: a deleted category leaves a dangling id behind
    category_id = db.Column(db.Integer, nullable=True)
    type = db.Column(db.String(10), nullable=False)  # income/expense
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "amount": self.amount,
            "date": self.date.isoformat(),
            "description": self.description,
            "category": self.category_id,
            "type": self.type,
        }
