from conftest import FakeGateway, FakeModel

from app.cli import main
from assistant.orchestrator import ChatOrchestrator
from assistant.session import SessionStore


def scripted(lines):
    it = iter(lines)

    def _input(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    return _input


def test_cli_chat_loop_until_exit():
    out = []
    store = SessionStore()
    orchestrator = ChatOrchestrator(store, FakeGateway(), llm=FakeModel(reply="Noted!"))
    main(orchestrator, input_fn=scripted(["trip to lisbon", "", "exit", "never read"]), output_fn=out.append)
    assert "Assistant: Noted!\n" in out
    assert out[-1] == "Bye!"
    assert store.get("cli").travel_info.destination == "lisbon"


def test_cli_reports_model_errors_and_continues():
    out = []
    orchestrator = ChatOrchestrator(SessionStore(), FakeGateway(), llm=FakeModel(fail=True))
    main(orchestrator, input_fn=scripted(["hello"]), output_fn=out.append)
    assert any(line.startswith("Error:") for line in out)
    assert out[-1] == "Bye!"
