from flask import Blueprint, jsonify, current_app, abort
from flask_login import login_user, logout_user, current_user, login_required
from lms import db
from lms.models import User
from lms.schemas import SignUp, SignIn, parse_body
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@bp.route('/signup', methods=['POST'])
def signup():
    data = parse_body(SignUp)
    email = data.email.lower()

    if data.role == 'admin' and not current_app.config.get('ALLOW_ADMIN_SIGNUP'):
        abort(400, description='Admin accounts can only be created by an administrator')

    if User.query.filter_by(email=email).first():
        abort(400, description='An account with this email already exists. '
                               'Please use a different email or sign in instead.')

    user = User(
        email=email,
        role=data.role,
        first_name=data.first_name,
        last_name=data.last_name,
        department=data.department,
        student_id=data.student_id,
        profile_image_url=data.profile_image_url
    )
    user.set_password(data.password)
    db.session.add(user)
    db.session.commit()

    login_user(user)
    logger.info(f"New {user.role} account registered: {email}")

    return jsonify({'message': 'Account created successfully', 'user': user.to_dict()}), 201


@bp.route('/signin', methods=['POST'])
def signin():
    data = parse_body(SignIn)
    email = data.email.strip().lower()

    user = User.query.filter_by(email=email).first()

    if not user or not user.check_password(data.password):
        logger.warning(f"Failed sign in for {email}")
        abort(400, description='Invalid credentials')

    if not user.is_active:
        logger.warning(f"Sign in refused for deactivated account {email}")
        abort(403, description='Your account is inactive. Please contact the administration.')

    login_user(user, remember=True)
    return jsonify({'message': 'Sign in successful', 'user': user.to_dict()})


@bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'message': 'Logged out successfully'})


@bp.route('/user')
@login_required
def user():
    return jsonify(current_user.to_dict())
