import logging

import streamlit as st
import streamlit.components.v1 as components
from streamlit.errors import StreamlitAPIException

from humanizer.config import configure_logging, load_settings
from humanizer.credentials import EnvCredentialSource, SecretsCredentialSource, SessionCredentialSource
from humanizer.export import EXPORT_MIME, clipboard_snippet, export_text
from humanizer.llm_client import LLMGatewayClient
from humanizer.models import Completed, CredentialDeclined, Failed, Mode, Tone, ValidationError
from humanizer.orchestrator import Orchestrator


settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger('humanizer.app')

st.set_page_config(page_title='Humanizador + Detector de IA', layout='centered')

MODE_LABELS = {
    Mode.HUMANIZE: 'Humanizar y mejorar',
    Mode.PARAPHRASE: 'Parafrasear manteniendo significado',
}
TONE_LABELS = {
    Tone.NATURAL: 'Natural',
    Tone.CONVERSATIONAL: 'Conversacional',
    Tone.FORMAL: 'Formal',
    Tone.YOUTHFUL: 'Juvenil',
}


def load_secrets():
    try:
        return dict(st.secrets)
    except (FileNotFoundError, StreamlitAPIException):
        return {}


def build_orchestrator() -> Orchestrator:
    sources = [
        EnvCredentialSource(),
        SecretsCredentialSource(load_secrets),
        SessionCredentialSource(st.session_state),
    ]
    return Orchestrator(
        gateway=LLMGatewayClient(settings.base_url, timeout=settings.timeout),
        credential_sources=sources,
        prompt_credential=lambda: st.session_state.get('api_key_input'),
        settings=settings,
    )


if 'orchestrator' not in st.session_state:
    st.session_state['orchestrator'] = build_orchestrator()
if 'source_text' not in st.session_state:
    st.session_state['source_text'] = ''

orchestrator = st.session_state['orchestrator']


def clear_all():
    st.session_state['source_text'] = ''
    orchestrator.reset()


def store_api_key():
    # a newly typed key replaces the one kept for this session
    session = SessionCredentialSource(st.session_state)
    typed = (st.session_state.get('api_key_input') or '').strip()
    if typed:
        session.set(typed)
    else:
        session.clear()


st.title('Humanizador avanzado + Detector de IA')

with st.sidebar:
    st.title('Configuración')
    st.caption('La clave solo se pide si no hay OPENAI_API_KEY en el entorno ni en secrets.toml.')
    st.text_input('API Key de OpenAI', type='password', key='api_key_input', on_change=store_api_key)
    st.divider()
    with st.expander('Nota de seguridad'):
        st.write(
            'La clave se guarda solo en la sesión actual del navegador. No publiques esta app con '
            'tu clave: para un despliegue seguro, llama a OpenAI desde un servicio propio que la oculte.'
        )

mode_col, tone_col = st.columns(2)
with mode_col:
    mode = st.selectbox('Modo', list(Mode), format_func=MODE_LABELS.get, key='mode')
with tone_col:
    tone = st.selectbox('Tono', list(Tone), format_func=TONE_LABELS.get, key='tone')
temperature = st.slider('Temperature', min_value=0.0, max_value=1.0, value=0.7, step=0.1, key='temperature')

st.text_area(
    'Texto original',
    height=200,
    placeholder='Pega aquí el texto que quieras humanizar...',
    key='source_text',
)

run_col, copy_col, clear_col, save_col = st.columns(4)
with run_col:
    run_clicked = st.button(
        'Humanizar + Detectar IA',
        type='primary',
        use_container_width=True,
        disabled=orchestrator.busy,
        key='run',
    )
with copy_col:
    copy_clicked = st.button('Copiar resultado', use_container_width=True, key='copy')
with clear_col:
    st.button('Limpiar', use_container_width=True, on_click=clear_all, key='clear')

if run_clicked:
    try:
        with st.spinner('Procesando...'):
            orchestrator.start(st.session_state['source_text'], tone, temperature, mode)
    except ValidationError as e:
        st.warning(str(e))
    except CredentialDeclined:
        logger.info('run aborted, no API key supplied')
        st.info('Introduce tu API Key de OpenAI en la barra lateral para continuar.')

output = export_text(orchestrator.state)

with save_col:
    if output:
        st.download_button(
            'Descargar .txt',
            data=output,
            file_name=settings.export_filename,
            mime=EXPORT_MIME,
            use_container_width=True,
            key='download',
        )
    elif st.button('Descargar .txt', use_container_width=True, key='download_empty'):
        st.warning('No hay texto para descargar.')

if copy_clicked:
    if output:
        components.html(clipboard_snippet(output), height=0)
        st.toast('Copiado al portapapeles.')
    else:
        st.warning('No hay texto para copiar.')

state = orchestrator.state

st.subheader('Resultado')
if isinstance(state, Failed):
    st.error(f'Error: {state.message}')
if output:
    st.text(output)
else:
    st.caption('El texto humanizado aparecerá aquí.')

st.subheader('Detector de IA')
if isinstance(state, Completed) and state.detection.scored:
    st.metric('Probabilidad de texto generado por IA', f'{state.detection.probability}%')
    st.markdown('**Explicación:**')
    st.write(state.detection.explanation)
elif isinstance(state, Completed):
    st.caption('El modelo no devolvió un JSON legible; esta es la respuesta cruda.')
    st.info(state.detection.explanation or 'Sin evaluación.')
else:
    st.caption('Sin evaluación aún.')

st.markdown('---')
st.caption('La detección evalúa el texto ORIGINAL, no el resultado humanizado.')
