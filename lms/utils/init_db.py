from flask import current_app
from lms import db
from lms.models import User
import logging

logger = logging.getLogger(__name__)


def seed_admin(email, password):
    """Create the bootstrap admin account unless a user with ``email`` exists."""
    email = email.strip().lower()
    if User.query.filter_by(email=email).first():
        return None

    admin = User(email=email, role='admin', first_name='System', last_name='Administrator')
    admin.set_password(password)
    db.session.add(admin)
    db.session.commit()
    logger.info(f"Created default admin account {email}")
    return admin


def initialize_database():
    email = current_app.config.get('ADMIN_EMAIL')
    password = current_app.config.get('ADMIN_PASSWORD')

    if email and password:
        seed_admin(email, password)
    elif email or password:
        logger.warning("ADMIN_EMAIL and ADMIN_PASSWORD must both be set to seed an admin account")

    logger.info("Database initialization completed successfully")
