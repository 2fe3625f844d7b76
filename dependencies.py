"""
Dependency injection setup for the submission relay.
The relay and settings are built once in `create_app` and kept on `app.state`.
"""

from typing import Annotated
from fastapi import Depends, Request

from config.config import Settings
from services.submission_relay import SubmissionRelay


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_submission_relay(request: Request) -> SubmissionRelay:
    """Get the application's SubmissionRelay."""
    return request.app.state.submission_relay


SettingsDep = Annotated[Settings, Depends(get_settings)]
SubmissionRelayDep = Annotated[SubmissionRelay, Depends(get_submission_relay)]
