import logging
from typing import Callable, List, Optional, Sequence

from humanizer.config import Settings
from humanizer.credentials import SessionCredentialSource, resolve_credential
from humanizer.json_extract import extract_detection
from humanizer.llm_client import GatewayError, completion_text
from humanizer.models import (
    CredentialDeclined,
    DetectionRequest,
    Idle,
    Mode,
    OrchestrationState,
    Processing,
    Completed,
    Failed,
    RewriteRequest,
    Tone,
    ValidationError,
)
from humanizer.prompts import rewrite_payload, detection_payload

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = 'Pega o escribe un texto primero.'

Listener = Callable[[OrchestrationState], None]


class Orchestrator:
    """Runs one humanize + detect cycle and owns the resulting state.

    The rewrite call and the detection call are issued one after the other
    with the same key. Detection scores the original input, not the rewrite.
    Any gateway failure ends the run in ``Failed``; a rewrite obtained before
    the detection call failed is kept on the ``Failed`` state.
    """

    def __init__(
        self,
        gateway,
        credential_sources: Sequence,
        prompt_credential: Optional[Callable[[], Optional[str]]] = None,
        settings: Optional[Settings] = None,
    ):
        self.gateway = gateway
        self.credential_sources = list(credential_sources)
        self.prompt_credential = prompt_credential
        self.settings = settings or Settings()
        self._state: OrchestrationState = Idle()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> OrchestrationState:
        return self._state

    @property
    def busy(self) -> bool:
        return isinstance(self._state, Processing)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, state: OrchestrationState):
        logger.info('state %s -> %s', type(self._state).__name__, type(state).__name__)
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def reset(self):
        if self.busy:
            return
        if not isinstance(self._state, Idle):
            self._transition(Idle())

    def _credential(self) -> str:
        credential = resolve_credential(self.credential_sources)
        if credential:
            return credential

        supplied = self.prompt_credential() if self.prompt_credential else None
        supplied = supplied.strip() if supplied else ''
        if not supplied:
            raise CredentialDeclined('no API key supplied')

        for source in self.credential_sources:
            if isinstance(source, SessionCredentialSource):
                source.set(supplied)
                break
        return supplied

    def start(self, text: str, tone=Tone.NATURAL, temperature: float = 0.7, mode=Mode.HUMANIZE) -> OrchestrationState:
        if self.busy:
            logger.info('run already in progress, ignoring start')
            return self._state

        if not text or not text.strip():
            raise ValidationError(EMPTY_INPUT_MESSAGE)

        rewrite = RewriteRequest(text, tone, temperature, mode)
        detection = DetectionRequest(text)
        credential = self._credential()

        self._transition(Processing())
        try:
            return self._run(rewrite, detection, credential)
        except Exception as e:
            # never leave the shell locked in Processing
            if self.busy:
                self._transition(Failed(str(e)))
            raise

    def _run(self, rewrite: RewriteRequest, detection: DetectionRequest, credential: str) -> OrchestrationState:
        settings = self.settings

        try:
            response = self.gateway.complete(
                rewrite_payload(rewrite, settings.model, settings.rewrite_max_tokens), credential
            )
        except GatewayError as e:
            self._transition(Failed(str(e)))
            return self._state
        humanized = completion_text(response)

        try:
            response = self.gateway.complete(
                detection_payload(detection, settings.model, settings.detect_max_tokens), credential
            )
        except GatewayError as e:
            self._transition(Failed(str(e), humanized_text=humanized))
            return self._state

        result = extract_detection(completion_text(response))
        self._transition(Completed(humanized, result))
        return self._state
