from flask import Blueprint, jsonify, request, abort, send_file
from flask_login import current_user
from lms import db
from lms.models import User, Assessment, Enrollment
from lms.utils.decorators import self_or_roles_required
from lms.utils.excel_export import export_grade_report_to_excel
from lms.utils.grading import calculate_gpa
from lms.utils.helpers import utc_now
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('reports', __name__, url_prefix='/api/students')

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _get_student(student_id):
    student = db.session.get(User, student_id)
    if not student or student.role != 'student':
        abort(404, description='Student not found')
    return student


def _student_assessments(student):
    return Assessment.filtered(
        student_id=student.id,
        session_id=request.args.get('sessionId', type=int)
    ).order_by(Assessment.session_id, Assessment.course_id).all()


@bp.route('/<int:student_id>/grade-report')
@self_or_roles_required('admin', 'lecturer')
def grade_report(student_id):
    student = _get_student(student_id)
    assessments = _student_assessments(student)

    return jsonify({
        'student': student.to_dict(),
        'assessments': [a.to_dict() for a in assessments],
        'gpa': calculate_gpa(a.grade for a in assessments),
        'generatedAt': utc_now().isoformat(),
    })


@bp.route('/<int:student_id>/grade-report/export')
@self_or_roles_required('admin', 'lecturer')
def export_grade_report(student_id):
    student = _get_student(student_id)
    assessments = _student_assessments(student)
    gpa = calculate_gpa(a.grade for a in assessments)

    output = export_grade_report_to_excel(student, assessments, gpa)
    filename = f"grade_report_{student.student_id or student.id}_{utc_now().strftime('%Y%m%d')}.xlsx"

    logger.info(f"Grade report exported for student {student.id} by user {current_user.id}")
    return send_file(output, mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)


@bp.route('/<int:student_id>/registration-slip')
@self_or_roles_required('admin', 'lecturer')
def registration_slip(student_id):
    student = _get_student(student_id)
    enrollments = Enrollment.filtered(
        student_id=student.id,
        session_id=request.args.get('sessionId', type=int)
    ).filter_by(status='active').order_by(Enrollment.id).all()

    return jsonify({
        'student': student.to_dict(),
        'enrollments': [
            dict(e.to_dict(), course=e.course.to_dict()) for e in enrollments
        ],
        'totalCredits': sum(e.course.credits or 0 for e in enrollments),
        'generatedAt': utc_now().isoformat(),
    })
