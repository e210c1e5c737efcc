from lms.models.user import User
from lms.models.academic_session import AcademicSession
from lms.models.course import Course
from lms.models.enrollment import Enrollment
from lms.models.assessment import Assessment
from lms.models.news_event import NewsEvent
from lms.models.quiz import QuizCategory, Quiz, QuizQuestion, QuizAttempt
from lms.models.course_material import CourseMaterial

__all__ = [
    'User', 'AcademicSession', 'Course', 'Enrollment', 'Assessment',
    'NewsEvent', 'QuizCategory', 'Quiz', 'QuizQuestion', 'QuizAttempt',
    'CourseMaterial'
]
