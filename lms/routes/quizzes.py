from flask import Blueprint, jsonify, request, abort
from flask_login import login_required, current_user
from lms import db
from lms.models import Quiz, QuizCategory, QuizQuestion, QuizAttempt, Course
from lms.schemas import (QuizCategoryCreate, QuizCreate, QuizUpdate, QuizQuestionCreate,
                         QuizAttemptCreate, QuizAttemptUpdate, parse_body)
from lms.utils.decorators import role_required
from lms.utils.grading import score_quiz_attempt
from lms.utils.helpers import utc_now
import logging
import random

logger = logging.getLogger(__name__)

bp = Blueprint('quizzes', __name__, url_prefix='/api')


def _check_category(category_id):
    if category_id is not None and not db.session.get(QuizCategory, category_id):
        abort(400, description='categoryId must reference a quiz category')


# Categories

@bp.route('/quiz-categories')
@login_required
def list_categories():
    query = QuizCategory.query
    course_id = request.args.get('courseId', type=int)
    if course_id:
        query = query.filter_by(course_id=course_id)
    return jsonify([c.to_dict() for c in query.order_by(QuizCategory.name).all()])


@bp.route('/quiz-categories', methods=['POST'])
@role_required('admin', 'lecturer')
def create_category():
    data = parse_body(QuizCategoryCreate)
    if data.course_id is not None and not db.session.get(Course, data.course_id):
        abort(400, description='courseId must reference a course')

    category = QuizCategory(**data.model_dump())
    db.session.add(category)
    db.session.commit()

    logger.info(f"Quiz category '{category.name}' created")
    return jsonify(category.to_dict()), 201


# Quizzes

@bp.route('/quizzes')
@login_required
def list_quizzes():
    query = Quiz.query.filter_by(is_active=True)
    category_id = request.args.get('categoryId', type=int)
    if category_id:
        query = query.filter_by(category_id=category_id)
    return jsonify([q.to_dict() for q in query.order_by(Quiz.id).all()])


@bp.route('/quizzes/<int:quiz_id>')
@login_required
def get_quiz(quiz_id):
    quiz = Quiz.query.get_or_404(quiz_id, description='Quiz not found')
    return jsonify(quiz.to_dict())


@bp.route('/quizzes', methods=['POST'])
@role_required('admin', 'lecturer')
def create_quiz():
    data = parse_body(QuizCreate)
    _check_category(data.category_id)

    quiz = Quiz(**data.model_dump())
    db.session.add(quiz)
    db.session.commit()

    logger.info(f"Quiz '{quiz.title}' created by user {current_user.id}")
    return jsonify(quiz.to_dict()), 201


@bp.route('/quizzes/<int:quiz_id>', methods=['PUT'])
@role_required('admin', 'lecturer')
def update_quiz(quiz_id):
    quiz = Quiz.query.get_or_404(quiz_id, description='Quiz not found')
    changes = parse_body(QuizUpdate).model_dump(exclude_unset=True)
    _check_category(changes.get('category_id'))

    for field, value in changes.items():
        setattr(quiz, field, value)

    db.session.commit()
    logger.info(f"Quiz {quiz.id} updated by user {current_user.id}")
    return jsonify(quiz.to_dict())


@bp.route('/quizzes/<int:quiz_id>/questions')
@login_required
def list_questions(quiz_id):
    quiz = Quiz.query.get_or_404(quiz_id, description='Quiz not found')
    questions = quiz.questions.all()

    include_answer = quiz.answers_visible_to(current_user)
    if quiz.randomize_questions and current_user.role not in ('admin', 'lecturer'):
        random.shuffle(questions)

    return jsonify([q.to_dict(include_answer=include_answer) for q in questions])


@bp.route('/quizzes/<int:quiz_id>/questions', methods=['POST'])
@role_required('admin', 'lecturer')
def create_question(quiz_id):
    quiz = Quiz.query.get_or_404(quiz_id, description='Quiz not found')
    data = parse_body(QuizQuestionCreate)

    question = QuizQuestion(quiz_id=quiz.id, **data.model_dump())
    if question.order_index is None:
        question.order_index = quiz.questions.count()

    db.session.add(question)
    db.session.commit()

    logger.info(f"Question {question.id} added to quiz {quiz.id}")
    return jsonify(question.to_dict()), 201


# Attempts

def _complete_attempt(attempt, quiz, answers):
    attempt.answers = answers
    attempt.score, attempt.passed = score_quiz_attempt(quiz.questions.all(), answers, quiz.pass_mark)
    attempt.completed_at = utc_now()


@bp.route('/quiz-attempts')
@login_required
def list_attempts():
    user_id = request.args.get('userId', type=int)
    if current_user.role not in ('admin', 'lecturer'):
        if user_id is not None and user_id != current_user.id:
            abort(403, description='Forbidden')
        user_id = current_user.id

    query = QuizAttempt.query
    if user_id:
        query = query.filter_by(user_id=user_id)
    quiz_id = request.args.get('quizId', type=int)
    if quiz_id:
        query = query.filter_by(quiz_id=quiz_id)

    attempts = query.order_by(QuizAttempt.started_at.desc(), QuizAttempt.id.desc()).all()
    return jsonify([a.to_dict() for a in attempts])


@bp.route('/quiz-attempts', methods=['POST'])
@login_required
def create_attempt():
    data = parse_body(QuizAttemptCreate)

    quiz = Quiz.query.get_or_404(data.quiz_id, description='Quiz not found')
    if not quiz.is_active:
        abort(400, description='This quiz is not active')

    if quiz.attempts_allowed and quiz.attempts_used(current_user.id) >= quiz.attempts_allowed:
        abort(400, description='No attempts remaining for this quiz')

    attempt = QuizAttempt(quiz_id=quiz.id, user_id=current_user.id, time_spent=data.time_spent)
    if data.answers is not None:
        _complete_attempt(attempt, quiz, data.answers)

    db.session.add(attempt)
    db.session.commit()

    logger.info(f"User {current_user.id} started attempt {attempt.id} on quiz {quiz.id}")
    return jsonify(attempt.to_dict()), 201


@bp.route('/quiz-attempts/<int:attempt_id>', methods=['PUT'])
@login_required
def update_attempt(attempt_id):
    attempt = QuizAttempt.query.get_or_404(attempt_id, description='Quiz attempt not found')
    if attempt.user_id != current_user.id:
        abort(403, description='Forbidden')
    if attempt.is_completed:
        abort(400, description='This attempt has already been submitted')

    data = parse_body(QuizAttemptUpdate)
    if data.time_spent is not None:
        attempt.time_spent = data.time_spent
    if data.answers is not None:
        _complete_attempt(attempt, attempt.quiz, data.answers)

    db.session.commit()

    if attempt.is_completed:
        logger.info(f"Attempt {attempt.id} submitted: {attempt.score}% "
                    f"({'passed' if attempt.passed else 'failed'})")
    return jsonify(attempt.to_dict())
