from datetime import datetime
from ..extensions import db


class GlobalBudget(db.Model):
    __tablename__ = "global_budgets"
    id = db.Column(db.Integer, primary_key=True)
    amount = db.Column(db.Float, nullable=False)
    month = db.Column(db.Integer, nullable=False)
    year = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint("month", "year", name="uq_global_budget_month"),
    )

    def to_dict(self):
        return {"id": self.id, "amount": self.amount, "month": self.month, "year": self.year}
