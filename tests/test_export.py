from humanizer.export import clipboard_snippet, export_text
from humanizer.models import Completed, Failed, Idle, Processing, Scored, Unscored


def test_export_text_only_when_a_rewrite_exists():
    assert export_text(Idle()) is None
    assert export_text(Processing()) is None
    assert export_text(Failed('OpenAI error: 500 boom')) is None
    assert export_text(Completed('', Unscored(''))) is None


def test_export_text_is_exactly_the_rewrite():
    assert export_text(Completed('Texto final.\n', Scored(3, 'x'))) == 'Texto final.\n'
    assert export_text(Failed('OpenAI error: 429', humanized_text='parcial')) == 'parcial'


def test_clipboard_snippet_escapes_text():
    snippet = clipboard_snippet('dijo "hola"</script><b>')
    assert snippet.startswith('<script>navigator.clipboard.writeText(')
    assert snippet.count('</script>') == 1
    assert '\\"hola\\"' in snippet
