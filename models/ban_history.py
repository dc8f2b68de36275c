"""Ban history model."""

from datetime import timezone

from accounts.records import BanHistoryEntry

from . import db


class BanHistory(db.Model):
    """One ban or unban event. Rows are inserted, never updated."""

    __tablename__ = "ban_history"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    executor = db.Column(db.String(255), nullable=False)
    is_ban = db.Column(db.Boolean, nullable=False)
    reason = db.Column(db.Text, nullable=False, default="")
    created_at = db.Column(db.DateTime(timezone=True), nullable=False)

    user = db.relationship("User", back_populates="ban_history")

    @classmethod
    def from_entry(cls, entry: BanHistoryEntry) -> "BanHistory":
        return cls(
            executor=entry.executor,
            is_ban=entry.is_ban,
            reason=entry.reason,
            created_at=entry.timestamp.astimezone(timezone.utc),
        )

    def to_entry(self) -> BanHistoryEntry:
        created_at = self.created_at
        # SQLite returns naive datetimes; stored values are UTC.
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return BanHistoryEntry(
            executor=self.executor,
            is_ban=self.is_ban,
            timestamp=created_at,
            reason=self.reason or "",
        )
