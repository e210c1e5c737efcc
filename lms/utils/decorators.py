from functools import wraps
from flask import abort
from flask_login import current_user


def role_required(*roles):
    """Allow the view only for signed-in users whose role is in ``roles``.

    Without a session the request is answered with 401, with the wrong role
    with 403.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401, description='Unauthorized')

            if not current_user.has_role(*roles):
                abort(403, description='Forbidden')

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def self_or_roles_required(*roles, param='student_id'):
    """Like role_required, but also lets a user through to their own record.

    ``param`` names the URL argument holding the user id being accessed.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401, description='Unauthorized')

            if not current_user.has_role(*roles) and kwargs.get(param) != current_user.id:
                abort(403, description='Forbidden')

            return f(*args, **kwargs)
        return decorated_function
    return decorator
