from flask import Blueprint, jsonify, request, abort, current_app
from lms.utils.analytics import get_dashboard_metrics, get_grade_distribution, get_top_performing_courses
from lms.utils.decorators import role_required

bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


@bp.route('/metrics')
@role_required('admin')
def metrics():
    return jsonify(get_dashboard_metrics())


@bp.route('/grade-distribution')
@role_required('admin')
def grade_distribution():
    return jsonify(get_grade_distribution())


@bp.route('/top-courses')
@role_required('admin')
def top_courses():
    limit = request.args.get('limit', current_app.config['TOP_COURSES_DEFAULT_LIMIT'], type=int)
    if limit <= 0:
        abort(400, description='limit must be a positive integer')
    return jsonify(get_top_performing_courses(limit))
