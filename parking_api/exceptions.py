# parking_api/exceptions.py
"""
Domain errors raised by the service layer.
Each carries the HTTP status the API boundary answers with (see main.py).
"""

from fastapi import status


class ParkingError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(ParkingError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationFailed(ParkingError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(ParkingError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ParkingError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(ParkingError):
    """Double booking, double exit, duplicate unique value, wrong-status transition."""

    status_code = status.HTTP_400_BAD_REQUEST
