from flask import Blueprint, jsonify, request, abort
from flask_login import login_required, current_user
from lms import db
from lms.models import Course, CourseMaterial, User, AcademicSession, QuizCategory
from lms.schemas import CourseCreate, CourseUpdate, CourseMaterialCreate, parse_body
from lms.utils.decorators import role_required
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('courses', __name__, url_prefix='/api/courses')


def _check_references(lecturer_id, session_id):
    if lecturer_id is not None:
        lecturer = db.session.get(User, lecturer_id)
        if not lecturer or lecturer.role != 'lecturer':
            abort(400, description='lecturerId must reference a lecturer')
    if session_id is not None and not db.session.get(AcademicSession, session_id):
        abort(400, description='sessionId must reference an academic session')


def _require_course_manager(course):
    if current_user.role != 'admin' and not course.is_taught_by(current_user):
        abort(403, description='Forbidden')


@bp.route('')
@login_required
def list_courses():
    query = Course.query
    session_id = request.args.get('sessionId', type=int)
    if session_id:
        query = query.filter_by(session_id=session_id)
    return jsonify([c.to_dict() for c in query.order_by(Course.code).all()])


@bp.route('/<int:course_id>')
@login_required
def get_course(course_id):
    course = Course.query.get_or_404(course_id, description='Course not found')
    return jsonify(course.to_dict())


@bp.route('', methods=['POST'])
@role_required('admin')
def create_course():
    data = parse_body(CourseCreate)

    if Course.query.filter_by(code=data.code).first():
        abort(400, description=f'A course with code {data.code} already exists')
    _check_references(data.lecturer_id, data.session_id)

    course = Course(**data.model_dump())
    db.session.add(course)
    db.session.commit()

    logger.info(f"Course {course.code} created")
    return jsonify(course.to_dict()), 201


@bp.route('/<int:course_id>', methods=['PUT'])
@role_required('admin', 'lecturer')
def update_course(course_id):
    course = Course.query.get_or_404(course_id, description='Course not found')
    _require_course_manager(course)

    changes = parse_body(CourseUpdate).model_dump(exclude_unset=True)

    if current_user.role != 'admin' and 'lecturer_id' in changes:
        abort(403, description='Only administrators can reassign a course')

    code = changes.get('code')
    if code and code != course.code and Course.query.filter_by(code=code).first():
        abort(400, description=f'A course with code {code} already exists')
    _check_references(changes.get('lecturer_id'), changes.get('session_id'))

    for field, value in changes.items():
        setattr(course, field, value)

    db.session.commit()
    logger.info(f"Course {course.code} updated by user {current_user.id}")
    return jsonify(course.to_dict())


@bp.route('/<int:course_id>', methods=['DELETE'])
@role_required('admin')
def delete_course(course_id):
    course = Course.query.get_or_404(course_id, description='Course not found')
    code = course.code
    QuizCategory.query.filter_by(course_id=course.id).update({'course_id': None}, synchronize_session=False)
    db.session.delete(course)
    db.session.commit()
    logger.info(f"Course {code} deleted")
    return jsonify({'message': 'Course deleted successfully'})


@bp.route('/<int:course_id>/materials')
@login_required
def list_materials(course_id):
    course = Course.query.get_or_404(course_id, description='Course not found')
    materials = course.materials.order_by(CourseMaterial.uploaded_at.desc(), CourseMaterial.id.desc()).all()
    return jsonify([m.to_dict() for m in materials])


@bp.route('/<int:course_id>/materials', methods=['POST'])
@role_required('admin', 'lecturer')
def create_material(course_id):
    course = Course.query.get_or_404(course_id, description='Course not found')
    _require_course_manager(course)

    data = parse_body(CourseMaterialCreate)

    material = CourseMaterial(course_id=course.id, uploaded_by=current_user.id, **data.model_dump())
    if material.file_type is None and material.file_url and '.' in material.file_url.rsplit('/', 1)[-1]:
        material.file_type = material.file_url.rsplit('.', 1)[1].lower()

    db.session.add(material)
    db.session.commit()
    logger.info(f"Material '{material.title}' added to course {course.code}")
    return jsonify(material.to_dict()), 201
