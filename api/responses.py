from datetime import datetime, timezone

from flask import jsonify


def success_response(data=None, message: str | None = None, status: int = 200):
    """Uniform success envelope: {data, message, statusCode, timestamp}."""
    return jsonify(
        {
            "data": data,
            "message": message,
            "statusCode": status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    ), status
