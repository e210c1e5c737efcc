"""Grade, GPA and quiz score calculations.

Assessment weights are fixed: attendance 10%, assignment 20%, mid exam 30%,
final exam 40%. A component that has not been entered counts as 0.
"""
from collections import namedtuple

WEIGHTS = {
    'attendance': 0.1,
    'assignment': 0.2,
    'mid_exam': 0.3,
    'final_exam': 0.4,
}

GRADE_THRESHOLDS = (
    (90, 'A'),
    (80, 'B'),
    (70, 'C'),
    (60, 'D'),
)

PASS_MARK = 60

GRADE_POINTS = {
    'A': 4.0,
    'B': 3.0,
    'C': 2.0,
    'D': 1.0,
    'F': 0.0,
}

AUTO_SCORED_TYPES = ('multiple_choice', 'true_false')

GradeResult = namedtuple('GradeResult', ['total_score', 'grade', 'grade_comment'])


def calculate_total_score(attendance=None, assignment=None, mid_exam=None, final_exam=None):
    scores = {
        'attendance': attendance,
        'assignment': assignment,
        'mid_exam': mid_exam,
        'final_exam': final_exam,
    }
    total = sum(float(scores[name] or 0) * weight for name, weight in WEIGHTS.items())
    # stored with two decimals; also absorbs float error at the grade boundaries
    return round(total, 2)


def letter_grade(total_score):
    for threshold, grade in GRADE_THRESHOLDS:
        if total_score >= threshold:
            return grade
    return 'F'


def grade_comment(total_score):
    return 'Pass' if total_score >= PASS_MARK else 'Fail'


def calculate_grade(attendance=None, assignment=None, mid_exam=None, final_exam=None):
    total = calculate_total_score(attendance, assignment, mid_exam, final_exam)
    return GradeResult(total, letter_grade(total), grade_comment(total))


def grade_points(grade):
    return GRADE_POINTS.get(grade, 0.0)


def calculate_gpa(grades):
    """Unweighted mean of grade points; 0.0 when there is nothing to average."""
    grades = list(grades)
    if not grades:
        return 0.0
    return sum(grade_points(g) for g in grades) / len(grades)


def _normalize_answer(value):
    return str(value).strip().lower()


def score_quiz_attempt(questions, answers, pass_mark):
    """Score submitted answers against the auto-scorable questions.

    Returns a ``(score, passed)`` pair where score is a percentage rounded to
    two decimals. Essay questions need manual marking and are left out of
    both the earned and the possible points.
    """
    answers = {str(key): value for key, value in (answers or {}).items()}
    possible = 0
    earned = 0

    for question in questions:
        if question.question_type not in AUTO_SCORED_TYPES:
            continue
        points = question.points or 0
        possible += points
        submitted = answers.get(str(question.id))
        if submitted is None or question.correct_answer is None:
            continue
        if _normalize_answer(submitted) == _normalize_answer(question.correct_answer):
            earned += points

    score = round(earned / possible * 100, 2) if possible else 0.0
    return score, score >= (pass_mark or 0)
