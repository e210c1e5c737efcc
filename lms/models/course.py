from lms import db
from lms.utils.helpers import utc_now, isoformat


class Course(db.Model):
    __tablename__ = 'courses'

    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(50), unique=True, nullable=False)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    credits = db.Column(db.Integer, default=3)
    department = db.Column(db.String(100))
    lecturer_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    session_id = db.Column(db.Integer, db.ForeignKey('academic_sessions.id'))
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=utc_now)

    lecturer = db.relationship('User', backref='courses_as_lecturer', foreign_keys=[lecturer_id])
    enrollments = db.relationship('Enrollment', backref='course', lazy='dynamic', cascade='all, delete-orphan')
    assessments = db.relationship('Assessment', backref='course', lazy='dynamic', cascade='all, delete-orphan')
    materials = db.relationship('CourseMaterial', backref='course', lazy='dynamic', cascade='all, delete-orphan')

    def is_taught_by(self, user):
        return user is not None and self.lecturer_id == user.id

    def to_dict(self):
        return {
            'id': self.id,
            'code': self.code,
            'name': self.name,
            'description': self.description,
            'credits': self.credits,
            'department': self.department,
            'lecturerId': self.lecturer_id,
            'sessionId': self.session_id,
            'isActive': self.is_active,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Course {self.code}>'
