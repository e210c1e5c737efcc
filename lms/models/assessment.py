from lms import db
from sqlalchemy import event
from lms.utils.grading import calculate_grade
from lms.utils.helpers import utc_now, isoformat


class Assessment(db.Model):
    __tablename__ = 'assessments'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    session_id = db.Column(db.Integer, db.ForeignKey('academic_sessions.id'), nullable=False)
    attendance = db.Column(db.Float)
    assignment = db.Column(db.Float)
    mid_exam = db.Column(db.Float)
    final_exam = db.Column(db.Float)
    total_score = db.Column(db.Float)
    grade = db.Column(db.String(2))
    grade_comment = db.Column(db.String(20))
    created_at = db.Column(db.DateTime, default=utc_now)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)

    student = db.relationship('User', backref=db.backref('assessments', lazy='dynamic'))
    session = db.relationship('AcademicSession')

    __table_args__ = (
        db.Index('idx_assessment_student_course', 'student_id', 'course_id'),
    )

    def apply_grade(self):
        result = calculate_grade(self.attendance, self.assignment, self.mid_exam, self.final_exam)
        self.total_score = result.total_score
        self.grade = result.grade
        self.grade_comment = result.grade_comment
        return result

    @staticmethod
    def filtered(student_id=None, course_id=None, session_id=None):
        query = Assessment.query
        if student_id:
            query = query.filter_by(student_id=student_id)
        if course_id:
            query = query.filter_by(course_id=course_id)
        if session_id:
            query = query.filter_by(session_id=session_id)
        return query

    def to_dict(self):
        return {
            'id': self.id,
            'studentId': self.student_id,
            'courseId': self.course_id,
            'sessionId': self.session_id,
            'attendance': self.attendance,
            'assignment': self.assignment,
            'midExam': self.mid_exam,
            'finalExam': self.final_exam,
            'totalScore': self.total_score,
            'grade': self.grade,
            'gradeComment': self.grade_comment,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Assessment Student:{self.student_id} Course:{self.course_id} {self.grade}>'


@event.listens_for(Assessment, 'before_insert')
@event.listens_for(Assessment, 'before_update')
def receive_before_save(mapper, connection, target):
    target.apply_grade()
