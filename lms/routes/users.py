from flask import Blueprint, jsonify, request, abort
from flask_login import current_user
from lms import db
from lms.models import User
from lms.models.user import ROLES
from lms.schemas import UserCreate, UserUpdate, parse_body
from lms.utils.decorators import role_required, self_or_roles_required
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('users', __name__, url_prefix='/api/users')


@bp.route('')
@role_required('admin', 'lecturer')
def list_users():
    query = User.query
    role = request.args.get('role')
    if role:
        if role not in ROLES:
            abort(400, description=f'Unknown role: {role}')
        query = query.filter_by(role=role)
    return jsonify([u.to_dict() for u in query.order_by(User.id).all()])


@bp.route('/<int:user_id>')
@self_or_roles_required('admin', param='user_id')
def get_user(user_id):
    user = User.query.get_or_404(user_id, description='User not found')
    return jsonify(user.to_dict())


@bp.route('', methods=['POST'])
@role_required('admin')
def create_user():
    data = parse_body(UserCreate)
    email = data.email.lower()

    if User.query.filter_by(email=email).first():
        abort(400, description='An account with this email already exists')

    user = User(
        email=email,
        role=data.role,
        first_name=data.first_name,
        last_name=data.last_name,
        department=data.department,
        student_id=data.student_id,
        profile_image_url=data.profile_image_url,
        permissions=data.permissions
    )
    user.set_password(data.password)
    db.session.add(user)
    db.session.commit()

    logger.info(f"Admin {current_user.id} created {user.role} account {email}")
    return jsonify(user.to_dict()), 201


@bp.route('/<int:user_id>', methods=['PUT'])
@role_required('admin')
def update_user(user_id):
    user = User.query.get_or_404(user_id, description='User not found')

    body = request.get_json(silent=True) or {}
    if 'role' in body and body['role'] != user.role:
        abort(400, description='A user\'s role cannot be changed after creation')

    changes = parse_body(UserUpdate).model_dump(exclude_unset=True)

    password = changes.pop('password', None)
    if password:
        user.set_password(password)

    if 'email' in changes:
        email = changes.pop('email').lower()
        if email != user.email and User.query.filter_by(email=email).first():
            abort(400, description='An account with this email already exists')
        user.email = email

    if changes.get('is_active') is False and user.id == current_user.id:
        abort(400, description='You cannot deactivate your own account')

    for field, value in changes.items():
        setattr(user, field, value)

    db.session.commit()
    logger.info(f"User {user.id} updated by admin {current_user.id}")
    return jsonify(user.to_dict())


@bp.route('/<int:user_id>', methods=['DELETE'])
@role_required('admin')
def delete_user(user_id):
    user = User.query.get_or_404(user_id, description='User not found')

    if user.id == current_user.id:
        abort(400, description='You cannot deactivate your own account')

    user.is_active = False
    db.session.commit()
    logger.info(f"User {user.id} deactivated by admin {current_user.id}")
    return jsonify({'message': 'User deactivated successfully'})
