"""
Project: Restaurant Management API
Description:
Creates the bootstrap admin account and a starter menu.

    SECRET_KEY=... ADMIN_PASSWORD=... python seed.py
"""

import logging

from auth import hash_password
from models import db, User, MenuItem

logger = logging.getLogger(__name__)

STARTER_MENU = [
    {"name": "Margherita Pizza", "price": 11.99, "category": "Main course",
     "description": "Tomato, mozzarella, basil"},
    {"name": "Caesar Salad", "price": 9.50, "category": "Salads"},
    {"name": "Tomato Soup", "price": 6.25, "category": "Soups"},
    {"name": "Tiramisu", "price": 7.00, "category": "Desserts"},
    {"name": "Lemonade", "price": 3.50, "category": "Drinks"},
]


def seed(app):
    with app.app_context():
        cfg = app.config
        if not cfg.get("ADMIN_PASSWORD"):
            raise RuntimeError("ADMIN_PASSWORD must be set to create the admin account")
        admin = db.session.scalars(db.select(User).where(User.email == cfg["ADMIN_EMAIL"])).first()
        if admin is None:
            db.session.add(User(
                name=cfg["ADMIN_NAME"],
                email=cfg["ADMIN_EMAIL"],
                password_hash=hash_password(cfg["ADMIN_PASSWORD"]),
                role="admin",
            ))
            logger.info("Created admin %s", cfg["ADMIN_EMAIL"])

        if db.session.scalar(db.select(db.func.count(MenuItem.id))) == 0:
            db.session.add_all([MenuItem(**item) for item in STARTER_MENU])
            logger.info("Added %d starter menu items", len(STARTER_MENU))

        db.session.commit()


if __name__ == "__main__":
    from app import create_app

    app = create_app()
    seed(app)
    print(f"Seeded. Admin email={app.config['ADMIN_EMAIL']}")
