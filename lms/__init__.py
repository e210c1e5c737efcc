from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from config import Config
import logging

db = SQLAlchemy()
login_manager = LoginManager()

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    from lms.schemas import format_validation_error

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({'message': e.description}), e.code

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify({'message': format_validation_error(e)}), 400

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e):
        db.session.rollback()
        logger.warning(f'Integrity error: {e.orig}')
        return jsonify({'message': 'The request conflicts with an existing record'}), 400

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        logger.exception('Unhandled error')
        return jsonify({'message': 'Internal server error'}), 500


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    login_manager.init_app(app)

    from lms.models import user

    @login_manager.user_loader
    def load_user(user_id):
        try:
            loaded_user = db.session.get(user.User, int(user_id))
        except (TypeError, ValueError):
            return None
        if loaded_user and loaded_user.is_active:
            return loaded_user
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'message': 'Unauthorized'}), 401

    from lms.routes import (auth, users, sessions, courses, enrollments, assessments,
                            news_events, quizzes, dashboard, reports)

    app.register_blueprint(auth.bp)
    app.register_blueprint(users.bp)
    app.register_blueprint(sessions.bp)
    app.register_blueprint(courses.bp)
    app.register_blueprint(enrollments.bp)
    app.register_blueprint(assessments.bp)
    app.register_blueprint(news_events.bp)
    app.register_blueprint(quizzes.bp)
    app.register_blueprint(dashboard.bp)
    app.register_blueprint(reports.bp)

    register_error_handlers(app)

    with app.app_context():
        db.create_all()
        from lms.utils import init_db
        init_db.initialize_database()

    return app
