"""Request body schemas.

Bodies use camelCase keys on the wire; ``model_dump`` returns the snake_case
attribute names the models use, so validated data can be applied to a row
with ``setattr``.
"""
from datetime import date, datetime
from typing import Any, ClassVar, Dict, List, Literal, Optional, Tuple

from flask import abort, request
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'

Role = Literal['admin', 'lecturer', 'student', 'guest']
EnrollmentStatus = Literal['active', 'dropped', 'completed']
NewsEventType = Literal['news', 'event', 'announcement']
QuestionType = Literal['multiple_choice', 'true_false', 'essay']
ShowAnswers = Literal['immediately', 'after_completion', 'never']


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )


def score_field():
    return Field(None, ge=0, le=100)


class PartialModel(CamelModel):
    """Body of a partial update.

    Fields listed in ``not_null`` may be left out but not sent as ``null``;
    the rest accept ``null`` to clear the stored value.
    """
    not_null: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode='after')
    def check_not_null(self):
        for name in self.not_null:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f'{to_camel(name)} may not be null')
        return self


def parse_body(schema):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        abort(400, description='Request body must be a JSON object')
    return schema.model_validate(data)


def format_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    loc = [str(part) for part in first.get('loc', ())]
    if 'role' in loc:
        return 'Invalid role selected. Please choose Admin, Lecturer, Student or Guest.'
    if loc:
        return f"Validation error: {'.'.join(loc)}: {first['msg']}"
    return f"Validation error: {first['msg']}"


# Auth & users

class SignUp(CamelModel):
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=6)
    role: Role = 'student'
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    student_id: Optional[str] = Field(None, max_length=50)
    profile_image_url: Optional[str] = Field(None, max_length=500)


class SignIn(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserCreate(SignUp):
    permissions: List[str] = []


class UserUpdate(PartialModel):
    not_null = ('email', 'password', 'permissions', 'is_active')

    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    password: Optional[str] = Field(None, min_length=6)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    student_id: Optional[str] = Field(None, max_length=50)
    profile_image_url: Optional[str] = Field(None, max_length=500)
    permissions: Optional[List[str]] = None
    is_active: Optional[bool] = None


# Academic sessions

class AcademicSessionCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    start_date: date
    end_date: date
    is_active: bool = False

    @model_validator(mode='after')
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError('endDate must not be before startDate')
        return self


class AcademicSessionUpdate(PartialModel):
    not_null = ('name', 'start_date', 'end_date', 'is_active')

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None


# Courses

class CourseCreate(CamelModel):
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    credits: int = Field(3, ge=0, le=30)
    department: Optional[str] = Field(None, max_length=100)
    lecturer_id: Optional[int] = None
    session_id: Optional[int] = None
    is_active: bool = True


class CourseUpdate(PartialModel):
    not_null = ('code', 'name', 'credits', 'is_active')

    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    credits: Optional[int] = Field(None, ge=0, le=30)
    department: Optional[str] = Field(None, max_length=100)
    lecturer_id: Optional[int] = None
    session_id: Optional[int] = None
    is_active: Optional[bool] = None


class CourseMaterialCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    file_url: Optional[str] = Field(None, max_length=500)
    file_type: Optional[str] = Field(None, max_length=20)


# Enrollments

class EnrollmentCreate(CamelModel):
    student_id: Optional[int] = None
    course_id: int
    session_id: Optional[int] = None


class EnrollmentUpdate(CamelModel):
    status: EnrollmentStatus


class EnrollmentDrop(CamelModel):
    student_id: Optional[int] = None
    course_id: int


# Assessments

class AssessmentCreate(CamelModel):
    student_id: int
    course_id: int
    session_id: Optional[int] = None
    attendance: Optional[float] = score_field()
    assignment: Optional[float] = score_field()
    mid_exam: Optional[float] = score_field()
    final_exam: Optional[float] = score_field()


class AssessmentUpdate(CamelModel):
    attendance: Optional[float] = score_field()
    assignment: Optional[float] = score_field()
    mid_exam: Optional[float] = score_field()
    final_exam: Optional[float] = score_field()


# News & events

class NewsEventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: Optional[str] = None
    type: NewsEventType
    event_date: Optional[datetime] = None
    is_published: bool = False


class NewsEventUpdate(PartialModel):
    not_null = ('title', 'type', 'is_published')

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = None
    type: Optional[NewsEventType] = None
    event_date: Optional[datetime] = None
    is_published: Optional[bool] = None


# Quizzes

class QuizCategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    course_id: Optional[int] = None


class QuizCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category_id: Optional[int] = None
    pass_mark: int = Field(50, ge=0, le=100)
    time_limit: Optional[int] = Field(None, ge=1)
    attempts_allowed: int = Field(1, ge=1)
    randomize_questions: bool = False
    show_answers: ShowAnswers = 'after_completion'
    is_active: bool = True


class QuizUpdate(PartialModel):
    not_null = ('title', 'pass_mark', 'attempts_allowed', 'randomize_questions', 'show_answers', 'is_active')

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category_id: Optional[int] = None
    pass_mark: Optional[int] = Field(None, ge=0, le=100)
    time_limit: Optional[int] = Field(None, ge=1)
    attempts_allowed: Optional[int] = Field(None, ge=1)
    randomize_questions: Optional[bool] = None
    show_answers: Optional[ShowAnswers] = None
    is_active: Optional[bool] = None


class QuizQuestionCreate(CamelModel):
    question: str = Field(..., min_length=1)
    question_type: QuestionType
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None
    points: int = Field(1, ge=0)
    order_index: Optional[int] = None

    @model_validator(mode='after')
    def check_answer(self):
        if self.question_type == 'multiple_choice':
            if not self.options or len(self.options) < 2:
                raise ValueError('multiple choice questions need at least two options')
            if self.correct_answer is not None and self.correct_answer not in self.options:
                raise ValueError('correctAnswer must be one of the options')
        elif self.question_type == 'true_false' and self.correct_answer is not None:
            if self.correct_answer.lower() not in ('true', 'false'):
                raise ValueError('correctAnswer must be "true" or "false"')
        return self


class QuizAttemptCreate(CamelModel):
    quiz_id: int
    answers: Optional[Dict[str, Any]] = None
    time_spent: Optional[int] = Field(None, ge=0)


class QuizAttemptUpdate(CamelModel):
    answers: Optional[Dict[str, Any]] = None
    time_spent: Optional[int] = Field(None, ge=0)
