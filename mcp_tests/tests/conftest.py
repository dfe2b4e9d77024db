import pytest


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool and prompt registration."""

    def __init__(self) -> None:
        self.tools = {}
        self.prompts = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator

    def prompt(self, *, name: str, description: str = ""):
        def _decorator(fn):
            self.prompts[name] = fn
            return fn
        return _decorator


@pytest.fixture
def dummy_mcp():
    return DummyMCP()
