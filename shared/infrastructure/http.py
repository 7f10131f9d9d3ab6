"""HTTP helpers shared by the API views."""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore

STATUS_BY_CODE = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
}


def error_response(error: Exception) -> Response:
    """Render a refused domain operation as a JSON error response."""

    code = getattr(error, "code", "validation_error")
    payload = error.to_dict() if hasattr(error, "to_dict") else {"code": code, "detail": str(error)}
    return Response(payload, status=STATUS_BY_CODE.get(code, status.HTTP_400_BAD_REQUEST))


def result_response(result, serialize=None, success_status=status.HTTP_200_OK) -> Response:
    """Render a domain Result: the serialized value on success, the error otherwise."""

    if not result.ok:
        return error_response(result.error)
    if result.value is None:
        return Response(status=status.HTTP_204_NO_CONTENT)
    data = serialize(result.value) if serialize else result.value
    return Response(data, status=success_status)
