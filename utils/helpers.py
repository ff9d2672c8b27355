import math
from flask import request, current_app
from utils.errors import InvalidInputError


def format_datetime(datetime_obj):
    """Format datetime as ISO 8601, passing None through."""
    if not datetime_obj:
        return None
    return datetime_obj.isoformat()


def percentage(part, whole):
    """Integer percentage of part/whole, rounding halves up (62.5 -> 63).

    Returns 0 when whole is 0.
    """
    if not whole:
        return 0
    return (200 * part + whole) // (2 * whole)


def get_json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return data


def get_pagination_args(default_limit=None):
    """Read `page` and `limit` from the query string."""
    if default_limit is None:
        default_limit = current_app.config["DEFAULT_PAGE_LIMIT"]
    try:
        page = int(request.args.get("page", 1))
        limit = int(request.args.get("limit", default_limit))
    except ValueError:
        raise InvalidInputError("page and limit must be integers")

    if page < 1 or limit < 1:
        raise InvalidInputError("page and limit must be positive")

    return page, min(limit, current_app.config["MAX_PAGE_LIMIT"])


def paginate(query, page, limit):
    """Apply offset/limit to a query; returns (items, pagination block)."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit),
    }
