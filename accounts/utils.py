import uuid

from rest_framework.response import Response
from rest_framework import status as http_status


def error_response(message, errors=None, status_code=http_status.HTTP_400_BAD_REQUEST):
    payload = {"status": "error", "message": message}
    if errors is not None:
        payload["errors"] = errors
    return Response(payload, status=status_code)


def insert_result(instance):
    return {"acknowledged": True, "insertedId": str(instance.pk)}


def update_result(matched, modified):
    return {"acknowledged": True, "matchedCount": matched, "modifiedCount": modified}


def delete_result(deleted):
    return {"acknowledged": True, "deletedCount": deleted}


def parse_id(value):
    """Store ids are UUIDs; anything else addresses no record."""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None
