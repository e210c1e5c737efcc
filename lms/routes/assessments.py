from flask import Blueprint, jsonify, request, abort
from flask_login import current_user
from lms import db
from lms.models import Assessment, Course, User, AcademicSession
from lms.schemas import AssessmentCreate, AssessmentUpdate, parse_body
from lms.utils.decorators import role_required
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('assessments', __name__, url_prefix='/api/assessments')


def _require_grader(course):
    if current_user.role == 'lecturer' and not course.is_taught_by(current_user):
        abort(403, description='You can only grade courses you lecture')


def _can_view(assessment):
    if current_user.role == 'admin':
        return True
    if current_user.role == 'student':
        return assessment.student_id == current_user.id
    return assessment.course.is_taught_by(current_user)


@bp.route('')
@role_required('admin', 'lecturer', 'student')
def list_assessments():
    student_id = request.args.get('studentId', type=int)
    course_id = request.args.get('courseId', type=int)

    if current_user.role == 'student':
        if student_id is not None and student_id != current_user.id:
            abort(403, description='Forbidden')
        student_id = current_user.id

    query = Assessment.filtered(
        student_id=student_id,
        course_id=course_id,
        session_id=request.args.get('sessionId', type=int)
    )

    if current_user.role == 'lecturer':
        query = query.join(Course, Assessment.course_id == Course.id).filter(
            Course.lecturer_id == current_user.id
        )

    assessments = query.order_by(Assessment.id).all()
    return jsonify([a.to_dict() for a in assessments])


@bp.route('/<int:assessment_id>')
@role_required('admin', 'lecturer', 'student')
def get_assessment(assessment_id):
    assessment = Assessment.query.get_or_404(assessment_id, description='Assessment not found')
    if not _can_view(assessment):
        abort(403, description='Forbidden')
    return jsonify(assessment.to_dict())


@bp.route('', methods=['POST'])
@role_required('admin', 'lecturer')
def create_assessment():
    data = parse_body(AssessmentCreate)

    student = db.session.get(User, data.student_id)
    if not student or student.role != 'student':
        abort(400, description='studentId must reference a student')

    course = Course.query.get_or_404(data.course_id, description='Course not found')
    _require_grader(course)

    session_id = data.session_id or course.session_id
    if session_id is None:
        abort(400, description='sessionId is required for courses without a session')
    if not db.session.get(AcademicSession, session_id):
        abort(400, description='sessionId must reference an academic session')

    assessment = Assessment(
        student_id=student.id,
        course_id=course.id,
        session_id=session_id,
        attendance=data.attendance,
        assignment=data.assignment,
        mid_exam=data.mid_exam,
        final_exam=data.final_exam
    )
    db.session.add(assessment)
    db.session.commit()

    logger.info(f"Assessment {assessment.id} recorded for student {student.id} in {course.code}: "
                f"{assessment.total_score:.2f} ({assessment.grade})")
    return jsonify(assessment.to_dict()), 201


@bp.route('/<int:assessment_id>', methods=['PUT'])
@role_required('admin', 'lecturer')
def update_assessment(assessment_id):
    assessment = Assessment.query.get_or_404(assessment_id, description='Assessment not found')
    _require_grader(assessment.course)

    changes = parse_body(AssessmentUpdate).model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(assessment, field, value)

    db.session.commit()

    logger.info(f"Assessment {assessment.id} updated: {assessment.total_score:.2f} ({assessment.grade})")
    return jsonify(assessment.to_dict())
