import pytest

from aibridge import wiring
from tests.fakes import EchoClient


@pytest.fixture
def echo_client() -> EchoClient:
    return EchoClient()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("AIBRIDGE_AUDIT_LOG", str(tmp_path / "audit" / "audit.log.jsonl"))
    for name in (
        "AIBRIDGE_PROVIDER",
        "AIBRIDGE_PROMPTS_DIR",
        "AIBRIDGE_VERTEX_AI_API_KEY",
        "AIBRIDGE_HUGGINGFACE_API_KEY",
        "AIBRIDGE_HUGGINGFACE_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    wiring.reset()
    yield
