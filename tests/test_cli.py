import json

import pytest
from rich.prompt import Prompt

from snipbox.cli import START_HINT, main
from snipbox.exception_handler import ClipboardError


class _StubClipboard:
    def __init__(self, error=None):
        self.writes = []
        self.error = error

    def write(self, text):
        if self.error is not None:
            raise self.error
        self.writes.append(text)


@pytest.fixture
def store_file(tmp_path):
    return tmp_path / "snippets.json"


def _run(store_file, *args, **kwargs):
    return main(["--no-color", "--file", str(store_file), *args], **kwargs)


def _fail_prompt(*_args, **_kwargs):  # pragma: no cover - only hit on regression
    raise AssertionError("prompt should not be shown")


def test_no_arguments_prints_help_and_hint(capsys):
    assert main([]) == 0

    out = capsys.readouterr().out
    assert "usage:" in out
    assert START_HINT in out


def test_add_with_flags_does_not_prompt(store_file, capsys, monkeypatch):
    monkeypatch.setattr(Prompt, "ask", _fail_prompt)

    code = _run(store_file, "add", "--title", "Loop", "--code", "for(;;){}", "--tags", "c,patterns")

    assert code == 0
    assert 'Snippet "Loop" added with ID: 1' in capsys.readouterr().out
    data = json.loads(store_file.read_text(encoding="utf-8"))
    assert data[0]["tags"] == ["c", "patterns"]


def test_add_prompts_for_missing_fields_and_tags(store_file, monkeypatch):
    asked = []
    answers = {
        "Enter snippet code": "print(1)",
        "Enter tags (comma-separated, optional)": "from-prompt",
    }

    def fake_ask(prompt, **_kwargs):
        asked.append(prompt)
        return answers[prompt]

    monkeypatch.setattr(Prompt, "ask", fake_ask)

    assert _run(store_file, "add", "--title", "One", "--tags", "from-flag") == 0

    assert asked == ["Enter snippet code", "Enter tags (comma-separated, optional)"]
    data = json.loads(store_file.read_text(encoding="utf-8"))
    assert data[0]["title"] == "One"
    assert data[0]["code"] == "print(1)"
    assert data[0]["tags"] == ["from-flag"]


def test_list_renders_records_and_filters_by_tag(store_file, capsys):
    _run(store_file, "add", "--title", "Loop", "--code", "for(;;){}", "--tags", "c,patterns")
    _run(store_file, "add", "--title", "Map", "--code", "arr.map(f)")
    capsys.readouterr()

    assert _run(store_file, "list") == 0
    out = capsys.readouterr().out
    assert "Snippets:" in out
    assert "ID: 1 | Title: Loop" in out
    assert "Code: for(;;){}" in out
    assert "Tags: c, patterns | Created: " in out
    assert "Tags: None | Created: " in out

    assert _run(store_file, "list", "--tag", "c") == 0
    out = capsys.readouterr().out
    assert "Title: Loop" in out
    assert "Title: Map" not in out


def test_list_empty_store(store_file, capsys):
    assert _run(store_file, "list") == 0

    assert "No snippets found." in capsys.readouterr().out


def test_search_is_case_insensitive(store_file, capsys):
    _run(store_file, "add", "--title", "Loop", "--code", "for(;;){}")
    _run(store_file, "add", "--title", "Map", "--code", "arr.map(f)")
    capsys.readouterr()

    assert _run(store_file, "search", "MAP") == 0

    out = capsys.readouterr().out
    assert "Search Results:" in out
    assert "Title: Map" in out
    assert "Title: Loop" not in out


def test_code_with_markup_is_printed_verbatim(store_file, capsys):
    _run(store_file, "add", "--title", "Index", "--code", "xs[bold]")
    capsys.readouterr()

    _run(store_file, "show", "1")

    assert "Code: xs[bold]" in capsys.readouterr().out


def test_show_unknown_id(store_file, capsys):
    assert _run(store_file, "show", "9") == 1

    assert "Snippet with ID 9 not found." in capsys.readouterr().out


def test_copy_uses_clipboard(store_file, capsys):
    _run(store_file, "add", "--title", "Greet", "--code", "echo hi")
    clipboard = _StubClipboard()

    assert _run(store_file, "copy", "1", clipboard=clipboard) == 0

    assert clipboard.writes == ["echo hi"]
    assert 'Snippet "Greet" copied to clipboard!' in capsys.readouterr().out


def test_copy_reports_clipboard_failure(store_file, capsys):
    _run(store_file, "add", "--title", "Greet", "--code", "echo hi")
    clipboard = _StubClipboard(error=ClipboardError("No clipboard helper found"))

    assert _run(store_file, "copy", "1", clipboard=clipboard) == 1

    assert "No clipboard helper found" in capsys.readouterr().err


def test_delete_and_delete_again(store_file, capsys):
    _run(store_file, "add", "--title", "Loop", "--code", "for(;;){}")
    _run(store_file, "add", "--title", "Map", "--code", "arr.map(f)")

    assert _run(store_file, "delete", "1") == 0
    assert 'Snippet "Loop" deleted.' in capsys.readouterr().out

    before = store_file.read_bytes()
    assert _run(store_file, "delete", "1") == 1
    assert "Snippet with ID 1 not found." in capsys.readouterr().out
    assert store_file.read_bytes() == before
    assert [item["id"] for item in json.loads(before)] == [2]


def test_malformed_file_is_reported(store_file, capsys):
    store_file.write_text("not json", encoding="utf-8")

    assert _run(store_file, "list") == 1

    assert "Cannot parse snippets file" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [["search"], ["copy"], ["delete"], ["delete", "abc"]])
def test_missing_or_invalid_positional_is_usage_error(store_file, argv):
    with pytest.raises(SystemExit) as excinfo:
        _run(store_file, *argv)

    assert excinfo.value.code == 2
    assert not store_file.exists()


def test_add_with_closed_stdin_reports_instead_of_crashing(store_file, capsys, monkeypatch):
    def closed_stdin(*_args, **_kwargs):
        raise EOFError

    monkeypatch.setattr(Prompt, "ask", closed_stdin)

    assert _run(store_file, "add", "--title", "Only title") == 1

    err = capsys.readouterr().err
    assert "No input available" in err
    assert "Traceback" not in err
    assert not store_file.exists()
