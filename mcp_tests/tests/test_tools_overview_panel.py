import asyncio

import pytest

from core.errors import ExternalServiceError, ValidationError
from core.tree import build_tree
from overview.orchestrator import OverviewOrchestrator
from overview.presentation import ERROR_HEADING, IDLE_HEADING, LOADING_HEADING
from overview.renderers import PlainTextRenderer
from tools import overview_panel as panel_tool


class FakeSource:
    def __init__(self, files):
        self._files = dict(files)

    async def fetch_tree(self):
        return build_tree(self._files)

    async def read_file(self, *, path: str, max_chars: int):
        return self._files[path]


class FakeGenerator:
    def __init__(self, result="## Summary", error=None, gate=None):
        self._result = result
        self._error = error
        self._gate = gate
        self.calls = []

    async def generate_overview(self, document: str) -> str:
        self.calls.append(document)
        if self._gate is not None:
            await self._gate.wait()
        if self._error is not None:
            raise self._error
        return self._result


def _register(monkeypatch, dummy_mcp, generator, files=None):
    captured = {}
    src = FakeSource(files if files is not None else {"a.txt": "x"})

    def fake_get_file_source(source, **kwargs):
        captured["source"] = source
        captured["kwargs"] = kwargs
        return src

    monkeypatch.setattr(panel_tool, "get_file_source", fake_get_file_source)

    orch = OverviewOrchestrator(generator=generator)
    panel_tool.register(
        dummy_mcp,
        orchestrator=orch,
        renderer=PlainTextRenderer(),
        github_client="INJECTED_CLIENT",
    )
    return orch, captured


@pytest.mark.asyncio
async def test_tools_are_registered(monkeypatch, dummy_mcp):
    _register(monkeypatch, dummy_mcp, FakeGenerator())
    assert set(dummy_mcp.tools) == {"start_overview", "get_overview", "close_overview"}


@pytest.mark.asyncio
async def test_get_overview_initially_idle(monkeypatch, dummy_mcp):
    _register(monkeypatch, dummy_mcp, FakeGenerator())
    out = await dummy_mcp.tools["get_overview"]()
    assert IDLE_HEADING in out
    assert "[Generate Overview]" in out


@pytest.mark.asyncio
async def test_start_overview_waits_and_returns_content(monkeypatch, dummy_mcp):
    gen = FakeGenerator(result="## Summary")
    orch, captured = _register(monkeypatch, dummy_mcp, gen)

    out = await dummy_mcp.tools["start_overview"](
        source="github", repo_url="octocat/Hello-World", ref="dev"
    )

    assert "## Summary" in out
    assert captured["source"] == "github"
    assert captured["kwargs"]["repo_url"] == "octocat/Hello-World"
    assert captured["kwargs"]["ref"] == "dev"
    assert captured["kwargs"]["github_client"] == "INJECTED_CLIENT"
    assert len(gen.calls) == 1


@pytest.mark.asyncio
async def test_start_overview_without_wait_shows_loading(monkeypatch, dummy_mcp):
    gate = asyncio.Event()
    orch, _ = _register(monkeypatch, dummy_mcp, FakeGenerator(gate=gate))

    out = await dummy_mcp.tools["start_overview"](source="local", wait=False)
    assert LOADING_HEADING in out

    gate.set()
    await orch.wait()
    assert "## Summary" in await dummy_mcp.tools["get_overview"]()


@pytest.mark.asyncio
async def test_start_overview_reports_failure_in_panel(monkeypatch, dummy_mcp):
    _register(monkeypatch, dummy_mcp, FakeGenerator(error=ExternalServiceError("quota exceeded")))

    out = await dummy_mcp.tools["start_overview"](source="local")

    assert ERROR_HEADING in out
    assert "Failed to generate overview: quota exceeded" in out


@pytest.mark.asyncio
async def test_start_overview_empty_tree_reports_no_files(monkeypatch, dummy_mcp):
    gen = FakeGenerator()
    _register(monkeypatch, dummy_mcp, gen, files={})

    out = await dummy_mcp.tools["start_overview"](source="local")

    assert "No readable files found" in out
    assert gen.calls == []


@pytest.mark.asyncio
async def test_start_overview_validates_missing_repo_url(monkeypatch, dummy_mcp):
    _register(monkeypatch, dummy_mcp, FakeGenerator())

    with pytest.raises(ValidationError):
        await dummy_mcp.tools["start_overview"](source="github", repo_url="   ")


@pytest.mark.asyncio
async def test_close_overview_resets_and_drops_late_result(monkeypatch, dummy_mcp):
    gate = asyncio.Event()
    orch, _ = _register(monkeypatch, dummy_mcp, FakeGenerator(gate=gate))

    await dummy_mcp.tools["start_overview"](source="local", wait=False)
    out = await dummy_mcp.tools["close_overview"]()
    assert IDLE_HEADING in out

    gate.set()
    await asyncio.sleep(0.01)
    assert IDLE_HEADING in await dummy_mcp.tools["get_overview"]()


@pytest.mark.asyncio
async def test_second_start_while_loading_is_ignored(monkeypatch, dummy_mcp):
    gate = asyncio.Event()
    gen = FakeGenerator(gate=gate)
    orch, _ = _register(monkeypatch, dummy_mcp, gen)

    await dummy_mcp.tools["start_overview"](source="local", wait=False)
    await dummy_mcp.tools["start_overview"](source="local", wait=False)

    gate.set()
    await orch.wait()
    assert len(gen.calls) == 1
