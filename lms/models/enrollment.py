from lms import db
from lms.utils.helpers import utc_now, isoformat


class Enrollment(db.Model):
    __tablename__ = 'enrollments'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    session_id = db.Column(db.Integer, db.ForeignKey('academic_sessions.id'), nullable=False)
    enrolled_at = db.Column(db.DateTime, default=utc_now)
    status = db.Column(db.String(20), default='active')

    student = db.relationship('User', backref=db.backref('enrollments', lazy='dynamic'))
    session = db.relationship('AcademicSession')

    __table_args__ = (
        db.UniqueConstraint('student_id', 'course_id', 'session_id', name='unique_student_course_session'),
    )

    @staticmethod
    def filtered(student_id=None, course_id=None, session_id=None):
        query = Enrollment.query
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
            'enrolledAt': isoformat(self.enrolled_at),
            'status': self.status,
        }

    def __repr__(self):
        return f'<Enrollment Student:{self.student_id} Course:{self.course_id}>'
