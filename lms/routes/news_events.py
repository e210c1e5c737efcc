from flask import Blueprint, jsonify, request, abort, current_app
from flask_login import current_user
from lms import db
from lms.models import NewsEvent
from lms.models.news_event import NEWS_EVENT_TYPES
from lms.schemas import NewsEventCreate, NewsEventUpdate, parse_body
from lms.utils.decorators import role_required
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('news_events', __name__, url_prefix='/api/news-events')


def _is_editor():
    return current_user.is_authenticated and current_user.role in ('admin', 'lecturer')


@bp.route('')
def list_news_events():
    limit = request.args.get('limit', current_app.config['NEWS_DEFAULT_LIMIT'], type=int)
    if limit <= 0:
        abort(400, description='limit must be a positive integer')

    query = NewsEvent.query.filter_by(is_published=True)

    news_type = request.args.get('type')
    if news_type:
        if news_type not in NEWS_EVENT_TYPES:
            abort(400, description=f'Unknown type: {news_type}')
        query = query.filter_by(type=news_type)

    items = query.order_by(NewsEvent.created_at.desc(), NewsEvent.id.desc()).limit(limit).all()
    return jsonify([item.to_dict() for item in items])


@bp.route('/<int:news_id>')
def get_news_event(news_id):
    item = NewsEvent.query.get_or_404(news_id, description='News event not found')
    if not item.is_published and not _is_editor():
        abort(404, description='News event not found')
    return jsonify(item.to_dict())


@bp.route('', methods=['POST'])
@role_required('admin', 'lecturer')
def create_news_event():
    data = parse_body(NewsEventCreate)

    item = NewsEvent(author_id=current_user.id, **data.model_dump())
    db.session.add(item)
    db.session.commit()

    logger.info(f"{item.type.capitalize()} '{item.title}' created by user {current_user.id}")
    return jsonify(item.to_dict()), 201


@bp.route('/<int:news_id>', methods=['PUT'])
@role_required('admin', 'lecturer')
def update_news_event(news_id):
    item = NewsEvent.query.get_or_404(news_id, description='News event not found')
    changes = parse_body(NewsEventUpdate).model_dump(exclude_unset=True)

    for field, value in changes.items():
        setattr(item, field, value)

    db.session.commit()
    logger.info(f"News event {item.id} updated by user {current_user.id}")
    return jsonify(item.to_dict())


@bp.route('/<int:news_id>', methods=['DELETE'])
@role_required('admin', 'lecturer')
def delete_news_event(news_id):
    item = NewsEvent.query.get_or_404(news_id, description='News event not found')
    db.session.delete(item)
    db.session.commit()
    logger.info(f"News event {news_id} deleted by user {current_user.id}")
    return jsonify({'message': 'News event deleted successfully'})
