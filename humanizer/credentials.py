"""Layered lookup of the OpenAI API key.

Sources are consulted in order: the process environment, the persistent
Streamlit secrets file, then the per-session store filled in when the user
types a key into the page.
"""

import os
from typing import Any, Callable, Iterable, MutableMapping, Optional

DEFAULT_KEY_NAME = 'OPENAI_API_KEY'
SESSION_KEY_NAME = 'openai_key'


def _clean(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


class EnvCredentialSource:
    def __init__(self, name: str = DEFAULT_KEY_NAME, environ: Optional[MutableMapping[str, str]] = None):
        self.name = name
        self.environ = os.environ if environ is None else environ

    def get(self) -> Optional[str]:
        return _clean(self.environ.get(self.name))


class SecretsCredentialSource:
    """Reads from a lazily loaded mapping; the loader returns {} when no secrets file exists."""

    def __init__(self, loader: Callable[[], Any], name: str = DEFAULT_KEY_NAME):
        self.loader = loader
        self.name = name

    def get(self) -> Optional[str]:
        return _clean(self.loader().get(self.name))


class SessionCredentialSource:
    def __init__(self, store: MutableMapping[str, Any], name: str = SESSION_KEY_NAME):
        self.store = store
        self.name = name

    def get(self) -> Optional[str]:
        return _clean(self.store.get(self.name))

    def set(self, credential: str):
        self.store[self.name] = credential

    def clear(self):
        self.store.pop(self.name, None)


def resolve_credential(sources: Iterable) -> Optional[str]:
    for source in sources:
        credential = source.get()
        if credential:
            return credential
    return None
