"""Aggregate queries behind the admin dashboard."""
from sqlalchemy import case, func
from lms import db
from lms.models import User, Course, Enrollment, Assessment
from lms.utils.grading import GRADE_POINTS


def get_dashboard_metrics():
    return {
        'totalStudents': User.query.filter_by(role='student').count(),
        'totalLecturers': User.query.filter_by(role='lecturer').count(),
        'totalCourses': Course.query.filter_by(is_active=True).count(),
        'totalEnrollments': Enrollment.query.filter_by(status='active').count(),
    }


def get_grade_distribution():
    rows = db.session.query(
        Assessment.grade,
        func.count(Assessment.id).label('count')
    ).filter(Assessment.grade.isnot(None)).group_by(Assessment.grade).order_by(Assessment.grade).all()

    return [{'grade': row.grade, 'count': row.count} for row in rows]


def _grade_points_expression():
    return case(
        *[(Assessment.grade == grade, points) for grade, points in GRADE_POINTS.items() if points],
        else_=0.0
    )


def get_top_performing_courses(limit=5):
    avg_gpa = func.avg(_grade_points_expression()).label('avg_gpa')
    student_count = func.count(Assessment.student_id).label('student_count')

    rows = db.session.query(Course, avg_gpa, student_count).outerjoin(
        Assessment, Assessment.course_id == Course.id
    ).filter(
        Course.is_active.is_(True)
    ).group_by(Course.id).order_by(avg_gpa.desc(), Course.id).limit(limit).all()

    return [
        {
            'course': course.to_dict(),
            'avgGPA': round(float(gpa or 0), 2),
            'studentCount': count,
        }
        for course, gpa, count in rows
    ]
