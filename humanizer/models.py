from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ValidationError(ValueError):
    """Input rejected before any request is made."""


class CredentialDeclined(Exception):
    """The user did not supply an API key when asked for one."""


class Tone(str, Enum):
    NATURAL = 'natural'
    CONVERSATIONAL = 'conversational'
    FORMAL = 'formal'
    YOUTHFUL = 'youthful'

    @property
    def label(self) -> str:
        return _TONE_LABELS[self]


_TONE_LABELS = {
    Tone.NATURAL: 'natural',
    Tone.CONVERSATIONAL: 'conversacional',
    Tone.FORMAL: 'formal',
    Tone.YOUTHFUL: 'juvenil',
}


class Mode(str, Enum):
    HUMANIZE = 'humanize'
    PARAPHRASE = 'paraphrase'


@dataclass(frozen=True)
class RewriteRequest:
    source_text: str
    tone: Tone = Tone.NATURAL
    temperature: float = 0.7
    mode: Mode = Mode.HUMANIZE

    def __post_init__(self):
        if not self.source_text or not self.source_text.strip():
            raise ValidationError('source text is empty')
        # frozen: coerce through object.__setattr__
        object.__setattr__(self, 'tone', Tone(self.tone))
        object.__setattr__(self, 'mode', Mode(self.mode))
        temperature = float(self.temperature)
        if not 0.0 <= temperature <= 1.0:
            raise ValidationError(f'temperature must be within [0, 1], got {temperature}')
        object.__setattr__(self, 'temperature', temperature)


@dataclass(frozen=True)
class DetectionRequest:
    source_text: str


@dataclass(frozen=True)
class Scored:
    probability: int
    explanation: str = ''

    def __post_init__(self):
        if isinstance(self.probability, bool) or not isinstance(self.probability, int):
            raise ValueError(f'probability must be an integer, got {self.probability!r}')
        if not 0 <= self.probability <= 100:
            raise ValueError(f'probability out of range: {self.probability}')

    @property
    def scored(self) -> bool:
        return True


@dataclass(frozen=True)
class Unscored:
    """Detection output that could not be scored; holds the best-effort text."""

    explanation: str = ''

    @property
    def probability(self) -> None:
        return None

    @property
    def scored(self) -> bool:
        return False


DetectionResult = Union[Scored, Unscored]


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Processing:
    pass


@dataclass(frozen=True)
class Completed:
    humanized_text: str
    detection: DetectionResult


@dataclass(frozen=True)
class Failed:
    message: str
    # rewrite output kept when only the detection call failed
    humanized_text: Optional[str] = None


OrchestrationState = Union[Idle, Processing, Completed, Failed]
