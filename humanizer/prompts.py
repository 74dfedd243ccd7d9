from typing import Dict, Any

from humanizer.models import Mode, Tone, RewriteRequest, DetectionRequest


_MODE_INSTRUCTIONS = {
    Mode.HUMANIZE: (
        'Reescribe el siguiente texto para que suene completamente humano, natural, fluido y con '
        'variedad léxica. Corrige errores gramaticales y de estilo, mejora la coherencia, pero '
        'mantén el significado, los hechos y la intención.'
    ),
    Mode.PARAPHRASE: (
        'Parafrasea el siguiente texto con tus propias palabras para que suene humano y natural, '
        'manteniendo exactamente el significado, los hechos y la intención. No añadas ni quites '
        'información.'
    ),
}

REWRITE_TEMPLATE = (
    'Eres un experto en edición de textos. {instruction} Usa un tono: {tone}. '
    'Evita frases que suenen mecanizadas, evita repeticiones y muéstralo en formato final '
    'listo para publicar.\n\n'
    'Texto original:\n"""\n{text}\n"""'
)

DETECTION_TEMPLATE = (
    'Eres un detector experto de texto generado por IA. Lee el texto y evalúa la probabilidad '
    '(0-100) de que haya sido generado por una IA. Da un número entero de 0 a 100 y una '
    'explicación breve (1-2 frases) con las señales usadas para decidir. Devuélvelo en formato '
    'JSON EXACTO, sin texto adicional: {{"probability": 0-100, "explanation": "..."}}\n\n'
    'Texto:\n"""\n{text}\n"""'
)

DETECTION_TEMPERATURE = 0.0


def build_rewrite_prompt(text: str, tone, mode=Mode.HUMANIZE) -> str:
    # str.format does not re-interpret braces inside the substituted text
    return REWRITE_TEMPLATE.format(
        instruction=_MODE_INSTRUCTIONS[Mode(mode)],
        tone=Tone(tone).label,
        text=text,
    )


def build_detection_prompt(text: str) -> str:
    return DETECTION_TEMPLATE.format(text=text)


def _chat_payload(prompt: str, model: str, temperature: float, max_tokens: int) -> Dict[str, Any]:
    return {
        'model': model,
        'messages': [{'role': 'user', 'content': prompt}],
        'temperature': temperature,
        'max_tokens': max_tokens,
    }


def rewrite_payload(request: RewriteRequest, model: str, max_tokens: int) -> Dict[str, Any]:
    prompt = build_rewrite_prompt(request.source_text, request.tone, request.mode)
    return _chat_payload(prompt, model, request.temperature, max_tokens)


def detection_payload(request: DetectionRequest, model: str, max_tokens: int) -> Dict[str, Any]:
    """Detection always runs deterministically, whatever the rewrite temperature."""
    return _chat_payload(build_detection_prompt(request.source_text), model, DETECTION_TEMPERATURE, max_tokens)
