import json
from typing import Optional

from humanizer.models import Completed, Failed, OrchestrationState

EXPORT_MIME = 'text/plain;charset=utf-8'


def export_text(state: OrchestrationState) -> Optional[str]:
    """Humanized text available for copy/download, or None when there is nothing yet."""
    if isinstance(state, (Completed, Failed)):
        return state.humanized_text or None
    return None


def clipboard_snippet(text: str) -> str:
    # json.dumps yields a valid JS string literal; escape '</' so the text cannot close the tag
    literal = json.dumps(text).replace('</', '<\\/')
    return f'<script>navigator.clipboard.writeText({literal});</script>'
