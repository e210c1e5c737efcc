from lms import db
from lms.utils.helpers import utc_now, isoformat

NEWS_EVENT_TYPES = ('news', 'event', 'announcement')


class NewsEvent(db.Model):
    __tablename__ = 'news_events'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text)
    type = db.Column(db.String(20), nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    event_date = db.Column(db.DateTime)
    is_published = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=utc_now)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)

    author = db.relationship('User', backref='news_events')

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'type': self.type,
            'authorId': self.author_id,
            'eventDate': isoformat(self.event_date),
            'isPublished': self.is_published,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<NewsEvent {self.title}>'
