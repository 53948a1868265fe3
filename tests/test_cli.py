import requests

from aibridge import wiring
from aibridge.cli import generate as cli_generate
from aibridge.cli.generate import main
from aibridge.observability import list_events
from aibridge.prompt import Prompt, system_message
from tests.fakes import EchoClient


def test_dry_run_prints_rendered_prompt(capsys):
    rc = main(["--template", "Hi {name}", "--var", "name=Bob", "--system", "Be nice", "--dry-run"])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == ["[system] Be nice", "[user] Hi Bob"]


def test_generate_prints_first_generation(monkeypatch, capsys):
    echo = EchoClient()
    monkeypatch.setattr(wiring, "get_ai_client", lambda: echo)
    rc = main(["--template", "ping {x}", "--var", "x=1"])
    assert rc == 0
    assert capsys.readouterr().out.strip() == "ping 1"


def test_template_file(tmp_path, capsys):
    f = tmp_path / "t.st"
    f.write_text("From file {v}", encoding="utf-8")
    assert main(["--template-file", str(f), "--var", "v=ok", "--dry-run"]) == 0
    assert "[user] From file ok" in capsys.readouterr().out


def test_missing_variable_exits_2(capsys):
    assert main(["--template", "Hi {name}", "--dry-run"]) == 2
    assert "Template error" in capsys.readouterr().err


def test_system_only_prompt_exits_2(monkeypatch, capsys):
    monkeypatch.setenv("AIBRIDGE_VERTEX_AI_API_KEY", "k")
    monkeypatch.setattr(cli_generate, "build_prompt", lambda args: Prompt(system_message("ctx")))
    assert main(["--template", "x"]) == 2
    assert "No user or assistant" in capsys.readouterr().err


def test_backend_error_exits_1(monkeypatch):
    class Down(EchoClient):
        def generate(self, prompt):
            raise requests.ConnectionError("down")

    monkeypatch.setattr(wiring, "get_ai_client", lambda: Down())
    assert main(["--template", "x"]) == 1


def test_prompt_id_dry_run_uses_packaged_registry(capsys):
    rc = main(["--prompt-id", "joke", "--var", "adjective=dry", "--var", "topic=cats", "--agent", "nobody", "--dry-run"])
    assert rc == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("[system] You are a helpful assistant.")
    assert lines[-1] == "[user] Tell me a dry joke about cats"


def test_prompt_id_generate_is_audited(monkeypatch, capsys):
    echo = EchoClient()
    monkeypatch.setattr(wiring, "get_ai_client", lambda: echo)
    rc = main(["--prompt-id", "summary", "--prompt-version", "1.0.0", "--var", "text=abc", "--agent", "summarizer"])
    assert rc == 0
    assert capsys.readouterr().out.strip() == "Summarize the following text:\nabc"
    assert echo.prompts[0].messages[0].content.startswith("You summarize text faithfully.")
    assert [e["status"] for e in list_events()] == ["start", "ok"]
    assert list_events()[0]["params"]["version"] == "1.0.0"


def test_unknown_prompt_id_exits_2(capsys):
    assert main(["--prompt-id", "no_such_prompt", "--dry-run"]) == 2
    assert "Prompt not found: no_such_prompt" in capsys.readouterr().err


def test_malformed_backend_body_exits_1(monkeypatch, capsys):
    class NoCandidates(EchoClient):
        def generate(self, prompt):
            raise KeyError("candidates")

    monkeypatch.setattr(wiring, "get_ai_client", lambda: NoCandidates())
    assert main(["--template", "x"]) == 1
    assert "Backend error: KeyError" in capsys.readouterr().err
