"""
Fixtures for application tests.
"""

import json

import pytest
from starlette.datastructures import FormData


@pytest.fixture
def valid_form_data():
    return {
        "fullName": "Asha Student",
        "aadhaarNumber": "123456789012",
        "email": "asha@test.com",
        "documents": [{"type": "Aadhaar"}, {"type": "Marksheet", "key": "tenth"}],
    }


@pytest.fixture
def build_form(valid_form_data):
    """Build a multipart form for a submission."""

    def _build(files=None, form_data=None, **overrides) -> FormData:
        fields = {
            "courseId": "course-1",
            "formData": json.dumps(form_data if form_data is not None else valid_form_data),
            "educationDetails": json.dumps({"tenth": {"percentage": "91"}}),
            "programType": "UG",
        }
        fields.update(overrides)
        items = [(name, value) for name, value in fields.items() if value is not None]
        items.extend(files or [])
        return FormData(items)

    return _build
