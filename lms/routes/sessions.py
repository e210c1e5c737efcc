from flask import Blueprint, jsonify, request, abort
from flask_login import login_required
from lms import db
from lms.models import AcademicSession
from lms.schemas import AcademicSessionCreate, AcademicSessionUpdate, parse_body
from lms.utils.decorators import role_required
from lms.utils.helpers import parse_bool_arg
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('sessions', __name__, url_prefix='/api/sessions')


@bp.route('')
@login_required
def list_sessions():
    query = AcademicSession.query
    if not parse_bool_arg(request.args.get('all', 'false')):
        query = query.filter_by(is_active=True)
    sessions = query.order_by(AcademicSession.start_date.desc()).all()
    return jsonify([s.to_dict() for s in sessions])


@bp.route('/<int:session_id>')
@login_required
def get_session(session_id):
    session = AcademicSession.query.get_or_404(session_id, description='Academic session not found')
    return jsonify(session.to_dict())


@bp.route('', methods=['POST'])
@role_required('admin')
def create_session():
    data = parse_body(AcademicSessionCreate)

    session = AcademicSession(
        name=data.name,
        start_date=data.start_date,
        end_date=data.end_date
    )
    db.session.add(session)
    db.session.flush()

    if data.is_active:
        session.activate()

    db.session.commit()
    logger.info(f"Academic session {session.name} created")
    return jsonify(session.to_dict()), 201


@bp.route('/<int:session_id>', methods=['PUT'])
@role_required('admin')
def update_session(session_id):
    session = AcademicSession.query.get_or_404(session_id, description='Academic session not found')
    changes = parse_body(AcademicSessionUpdate).model_dump(exclude_unset=True)

    start_date = changes.get('start_date', session.start_date)
    end_date = changes.get('end_date', session.end_date)
    if start_date is None or end_date is None:
        abort(400, description='startDate and endDate are required')
    if end_date < start_date:
        abort(400, description='endDate must not be before startDate')

    is_active = changes.pop('is_active', None)
    for field, value in changes.items():
        setattr(session, field, value)

    if is_active:
        session.activate()
    elif is_active is False:
        session.is_active = False

    db.session.commit()
    logger.info(f"Academic session {session.id} updated")
    return jsonify(session.to_dict())
