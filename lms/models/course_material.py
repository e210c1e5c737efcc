from lms import db
from lms.utils.helpers import utc_now, isoformat


class CourseMaterial(db.Model):
    __tablename__ = 'course_materials'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    file_url = db.Column(db.String(500))
    file_type = db.Column(db.String(20))
    uploaded_by = db.Column(db.Integer, db.ForeignKey('users.id'))
    uploaded_at = db.Column(db.DateTime, default=utc_now)

    uploader = db.relationship('User', backref='course_materials')

    def to_dict(self):
        return {
            'id': self.id,
            'courseId': self.course_id,
            'title': self.title,
            'description': self.description,
            'fileUrl': self.file_url,
            'fileType': self.file_type,
            'uploadedBy': self.uploaded_by,
            'uploadedAt': isoformat(self.uploaded_at),
        }

    def __repr__(self):
        return f'<CourseMaterial {self.title}>'
