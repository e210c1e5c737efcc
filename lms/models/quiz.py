from lms import db
from lms.utils.helpers import utc_now, isoformat


class QuizCategory(db.Model):
    __tablename__ = 'quiz_categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id', ondelete='SET NULL'))
    created_at = db.Column(db.DateTime, default=utc_now)

    quizzes = db.relationship('Quiz', backref='category', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'courseId': self.course_id,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<QuizCategory {self.name}>'


class Quiz(db.Model):
    __tablename__ = 'quizzes'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    category_id = db.Column(db.Integer, db.ForeignKey('quiz_categories.id'))
    pass_mark = db.Column(db.Integer, default=50)
    time_limit = db.Column(db.Integer)
    attempts_allowed = db.Column(db.Integer, default=1)
    randomize_questions = db.Column(db.Boolean, default=False)
    show_answers = db.Column(db.String(20), default='after_completion')
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=utc_now)

    questions = db.relationship('QuizQuestion', backref='quiz', lazy='dynamic',
                                cascade='all, delete-orphan', order_by='QuizQuestion.order_index')
    attempts = db.relationship('QuizAttempt', backref='quiz', lazy='dynamic', cascade='all, delete-orphan')

    def attempts_used(self, user_id):
        return self.attempts.filter_by(user_id=user_id).count()

    def answers_visible_to(self, user):
        if user.role in ('admin', 'lecturer') or self.show_answers == 'immediately':
            return True
        if self.show_answers == 'after_completion':
            return self.attempts.filter(
                QuizAttempt.user_id == user.id,
                QuizAttempt.completed_at.isnot(None)
            ).count() > 0
        return False

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'categoryId': self.category_id,
            'passMark': self.pass_mark,
            'timeLimit': self.time_limit,
            'attemptsAllowed': self.attempts_allowed,
            'randomizeQuestions': self.randomize_questions,
            'showAnswers': self.show_answers,
            'isActive': self.is_active,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Quiz {self.title}>'


class QuizQuestion(db.Model):
    __tablename__ = 'quiz_questions'

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey('quizzes.id'), nullable=False)
    question = db.Column(db.Text, nullable=False)
    question_type = db.Column(db.String(20), nullable=False)
    options = db.Column(db.JSON)
    correct_answer = db.Column(db.Text)
    explanation = db.Column(db.Text)
    points = db.Column(db.Integer, default=1)
    order_index = db.Column(db.Integer)

    def to_dict(self, include_answer=True):
        data = {
            'id': self.id,
            'quizId': self.quiz_id,
            'question': self.question,
            'questionType': self.question_type,
            'options': self.options,
            'points': self.points,
            'orderIndex': self.order_index,
        }
        if include_answer:
            data['correctAnswer'] = self.correct_answer
            data['explanation'] = self.explanation
        return data

    def __repr__(self):
        return f'<QuizQuestion {self.id} of Quiz {self.quiz_id}>'


class QuizAttempt(db.Model):
    __tablename__ = 'quiz_attempts'

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey('quizzes.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    answers = db.Column(db.JSON)
    score = db.Column(db.Float)
    passed = db.Column(db.Boolean)
    started_at = db.Column(db.DateTime, default=utc_now)
    completed_at = db.Column(db.DateTime)
    time_spent = db.Column(db.Integer)

    user = db.relationship('User', backref=db.backref('quiz_attempts', lazy='dynamic'))

    @property
    def is_completed(self):
        return self.completed_at is not None

    def to_dict(self):
        return {
            'id': self.id,
            'quizId': self.quiz_id,
            'userId': self.user_id,
            'answers': self.answers,
            'score': self.score,
            'passed': self.passed,
            'startedAt': isoformat(self.started_at),
            'completedAt': isoformat(self.completed_at),
            'timeSpent': self.time_spent,
        }

    def __repr__(self):
        return f'<QuizAttempt {self.id} User:{self.user_id} Quiz:{self.quiz_id}>'
