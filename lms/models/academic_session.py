from lms import db
from lms.utils.helpers import utc_now, isoformat


class AcademicSession(db.Model):
    __tablename__ = 'academic_sessions'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    is_active = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=utc_now)

    courses = db.relationship('Course', backref='session', lazy='dynamic')

    def activate(self):
        """Make this the only active session. Caller commits."""
        AcademicSession.query.filter(
            AcademicSession.id != self.id,
            AcademicSession.is_active.is_(True)
        ).update({'is_active': False}, synchronize_session=False)
        self.is_active = True

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'startDate': isoformat(self.start_date),
            'endDate': isoformat(self.end_date),
            'isActive': self.is_active,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<AcademicSession {self.name}>'
