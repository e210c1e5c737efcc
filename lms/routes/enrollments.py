from flask import Blueprint, jsonify, request, abort
from flask_login import current_user
from lms import db
from lms.models import Enrollment, Course, User, AcademicSession
from lms.schemas import EnrollmentCreate, EnrollmentUpdate, EnrollmentDrop, parse_body
from lms.utils.decorators import role_required
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('enrollments', __name__, url_prefix='/api/enrollments')


def _resolve_student_id(requested_id):
    """Students act only on themselves; admins must name the student."""
    if current_user.role == 'student':
        if requested_id is not None and requested_id != current_user.id:
            abort(403, description='Forbidden')
        return current_user.id
    if requested_id is None:
        abort(400, description='studentId is required')
    return requested_id


@bp.route('')
@role_required('admin', 'lecturer', 'student')
def list_enrollments():
    student_id = request.args.get('studentId', type=int)
    if current_user.role == 'student':
        student_id = _resolve_student_id(student_id)

    enrollments = Enrollment.filtered(
        student_id=student_id,
        course_id=request.args.get('courseId', type=int),
        session_id=request.args.get('sessionId', type=int)
    ).order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc()).all()

    return jsonify([e.to_dict() for e in enrollments])


@bp.route('', methods=['POST'])
@role_required('admin', 'student')
def create_enrollment():
    data = parse_body(EnrollmentCreate)
    student_id = _resolve_student_id(data.student_id)

    student = db.session.get(User, student_id)
    if not student or student.role != 'student':
        abort(400, description='studentId must reference a student')

    course = Course.query.get_or_404(data.course_id, description='Course not found')
    if not course.is_active:
        abort(400, description='This course is not open for enrollment')

    session_id = data.session_id or course.session_id
    if session_id is None:
        abort(400, description='sessionId is required for courses without a session')
    if not db.session.get(AcademicSession, session_id):
        abort(400, description='sessionId must reference an academic session')

    enrollment = Enrollment.query.filter_by(
        student_id=student_id, course_id=course.id, session_id=session_id
    ).first()

    if enrollment:
        if enrollment.status == 'active':
            abort(400, description='Student is already enrolled in this course')
        enrollment.status = 'active'
        db.session.commit()
        logger.info(f"Enrollment {enrollment.id} reactivated for student {student_id}")
        return jsonify(enrollment.to_dict())

    enrollment = Enrollment(student_id=student_id, course_id=course.id, session_id=session_id)
    db.session.add(enrollment)
    db.session.commit()

    logger.info(f"Student {student_id} enrolled in course {course.code}")
    return jsonify(enrollment.to_dict()), 201


@bp.route('/<int:enrollment_id>', methods=['PUT'])
@role_required('admin', 'lecturer')
def update_enrollment(enrollment_id):
    enrollment = Enrollment.query.get_or_404(enrollment_id, description='Enrollment not found')

    if current_user.role == 'lecturer' and not enrollment.course.is_taught_by(current_user):
        abort(403, description='Forbidden')

    data = parse_body(EnrollmentUpdate)
    enrollment.status = data.status
    db.session.commit()

    logger.info(f"Enrollment {enrollment.id} set to {enrollment.status}")
    return jsonify(enrollment.to_dict())


@bp.route('', methods=['DELETE'])
@role_required('admin', 'student')
def drop_enrollment():
    data = parse_body(EnrollmentDrop)
    student_id = _resolve_student_id(data.student_id)

    enrollments = Enrollment.query.filter_by(
        student_id=student_id, course_id=data.course_id, status='active'
    ).all()
    if not enrollments:
        abort(404, description='Enrollment not found')

    for enrollment in enrollments:
        enrollment.status = 'dropped'
    db.session.commit()

    logger.info(f"Student {student_id} dropped course {data.course_id}")
    return jsonify({'message': 'Enrollment dropped successfully'})
