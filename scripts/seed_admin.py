"""Seed a super-admin account and print an access token for it."""

import os

from flask_jwt_extended import create_access_token

from accounts.records import Role, UserRecord
from app import create_app
from models import db
from models.user import User

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "root@accounts.dev")


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        admin = db.session.execute(
            db.select(User).filter_by(email=ADMIN_EMAIL)
        ).scalar_one_or_none()
        if admin is None:
            repository = app.extensions["admin_service"].repository
            repository.add(UserRecord(email=ADMIN_EMAIL, role=Role.SUPER_ADMIN))
            action = "created"
        else:
            admin.role = int(Role.SUPER_ADMIN)
            db.session.commit()
            action = "updated"
        token = create_access_token(identity=ADMIN_EMAIL, expires_delta=False)
        print(f"Super admin {action}: {ADMIN_EMAIL}")
        print(f"Access token: {token}")


if __name__ == "__main__":
    main()
