"""User model definition."""

from datetime import datetime

from accounts.records import Role, UserRecord

from . import db


class User(db.Model):
    """Stored user account with its ban ledger."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    role = db.Column(
        db.Integer,
        nullable=False,
        default=int(Role.USER),
        server_default=db.text("0"),
    )
    banned = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.text("false"),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    ban_history = db.relationship(
        "BanHistory",
        back_populates="user",
        order_by="BanHistory.id",
        cascade="all, delete-orphan",
    )

    def to_record(self) -> UserRecord:
        """Return a detached working copy of this user."""

        return UserRecord(
            email=self.email,
            role=Role(self.role),
            banned=bool(self.banned),
            ban_history=[row.to_entry() for row in self.ban_history],
        )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
