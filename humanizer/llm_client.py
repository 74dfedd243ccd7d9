import logging
from typing import Dict, Any, Optional

import requests

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Non-success reply or transport failure from the completion endpoint."""

    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        if status is None:
            message = f'OpenAI error: {body}'
        else:
            message = f'OpenAI error: {status} {body}'
        super().__init__(message)


class LLMGatewayClient:
    def __init__(self, base_url: str, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f'{self.base_url}/chat/completions'

    def complete(self, payload: Dict[str, Any], credential: str) -> Dict[str, Any]:
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {credential}',
        }
        try:
            response = requests.post(self.url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning('completion request failed: %s', e)
            raise GatewayError(None, str(e)) from e

        if not response.ok:
            logger.warning('completion endpoint returned %s', response.status_code)
            raise GatewayError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(response.status_code, response.text) from e


def completion_text(response: Any) -> str:
    """Return ``choices[0].message.content`` stripped, or '' for any other shape."""
    try:
        content = response['choices'][0]['message']['content']
    except (KeyError, IndexError, TypeError):
        return ''
    if not isinstance(content, str):
        return ''
    return content.strip()
