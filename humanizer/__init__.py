"""Humanizer + AI detector: rewrite a text with an LLM and score how AI-written the input looks."""

from humanizer.models import (
    Completed,
    CredentialDeclined,
    Failed,
    Idle,
    Mode,
    Processing,
    Scored,
    Tone,
    Unscored,
    ValidationError,
)
from humanizer.orchestrator import Orchestrator

__all__ = [
    'Completed',
    'CredentialDeclined',
    'Failed',
    'Idle',
    'Mode',
    'Orchestrator',
    'Processing',
    'Scored',
    'Tone',
    'Unscored',
    'ValidationError',
]
