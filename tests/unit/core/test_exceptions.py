"""
Unit Tests for Custom Exceptions.
"""

import pytest

from masikip.core.exceptions import (
    ApplicationError,
    BackendStatusError,
    BackendUnavailableError,
    ExternalServiceError,
    NoteTransformError,
    ValidationError,
)


class TestErrorCodes:
    """Each error carries a stable code."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (ApplicationError("boom"), "SYS_INTERNAL_ERROR"),
            (ValidationError(), "VAL_VALIDATION_ERROR"),
            (ExternalServiceError(), "SYS_EXTERNAL_SERVICE_ERROR"),
            (BackendUnavailableError(), "SYS_BACKEND_UNAVAILABLE"),
            (BackendStatusError(404), "SYS_BACKEND_STATUS"),
            (NoteTransformError(), "VAL_MALFORMED_NOTE"),
        ],
    )
    def test_code(self, error, code):
        assert error.code == code
        assert isinstance(error, ApplicationError)

    def test_backend_errors_are_external_service_errors(self):
        assert isinstance(BackendUnavailableError(), ExternalServiceError)
        assert isinstance(BackendStatusError(500), ExternalServiceError)


class TestBackendStatusError:
    """Tests for the status error message."""

    def test_default_message_names_status(self):
        error = BackendStatusError(503)
        assert error.status_code == 503
        assert str(error) == "HTTP error! status: 503"

    def test_custom_message(self):
        assert BackendStatusError(400, "bad").message == "bad"


class TestValidationError:
    def test_details_default_to_empty(self):
        assert ValidationError("bad id").details == {}
