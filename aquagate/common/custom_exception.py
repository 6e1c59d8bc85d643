# aquagate/common/custom_exception.py
import traceback
from typing import Optional


class CustomException(Exception):
    """
    Base error for the package.
    When the originating exception is passed as error_detail, its file and line
    are folded into the message so log lines point at the real failure.
    """

    def __init__(self, message: str, error_detail: Optional[BaseException] = None):
        self.error_message = self.get_detailed_error_message(message, error_detail)
        super().__init__(self.error_message)

    @staticmethod
    def get_detailed_error_message(message: str, error_detail: Optional[BaseException]) -> str:
        if error_detail is None:
            return message
        tb = traceback.extract_tb(error_detail.__traceback__)
        if not tb:
            return f"{message} | Error: {error_detail}"
        frame = tb[-1]
        return f"{message} | Error: {error_detail} | File: {frame.filename} | Line: {frame.lineno}"

    def __str__(self):
        return self.error_message


class InvalidInputError(CustomException):
    """Raised when a caller hands the gate a structurally broken transcript or context."""
