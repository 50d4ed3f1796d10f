import asyncio

import pytest

from errors import DrillGenerationError
from utils.ollama import call_llm


class FakeProcess:
    def __init__(self, stdout=b"", stderr=b"", returncode=0, hang=False):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.hang = hang
        self.started = asyncio.Event()
        self.killed = False
        self.waited = False

    async def communicate(self, data):
        self.started.set()
        if self.hang:
            await asyncio.Event().wait()
        return self.stdout, self.stderr

    def kill(self):
        self.killed = True

    async def wait(self):
        self.waited = True
        return -9


@pytest.fixture
def spawn(monkeypatch):
    spawned = []

    def install(process):
        async def fake_exec(*cmd, **kwargs):
            spawned.append(cmd)
            return process

        monkeypatch.setattr("utils.ollama.asyncio.create_subprocess_exec", fake_exec)
        return spawned

    return install


@pytest.mark.asyncio
async def test_call_llm_runs_model_in_json_mode(spawn):
    spawned = spawn(FakeProcess(stdout=b'{"bane": {}}\n'))

    text = await call_llm("prompt", model="llama3.2")

    assert text == '{"bane": {}}'
    assert spawned[0] == ("ollama", "run", "llama3.2", "--format", "json")


@pytest.mark.asyncio
async def test_invalid_utf8_output_is_replaced_not_raised(spawn):
    spawn(FakeProcess(stdout=b'{"bane": "\xff"}'))

    text = await call_llm("prompt")

    assert "\ufffd" in text


@pytest.mark.asyncio
async def test_nonzero_exit_raises_generation_error(spawn):
    spawn(FakeProcess(stderr=b"model not found", returncode=1))

    with pytest.raises(DrillGenerationError) as excinfo:
        await call_llm("prompt")

    assert excinfo.value.details["stderr"] == "model not found"


@pytest.mark.asyncio
async def test_timeout_kills_and_reaps_process(spawn):
    process = FakeProcess(hang=True)
    spawn(process)

    with pytest.raises(DrillGenerationError):
        await call_llm("prompt", timeout=0.01)

    assert process.killed
    assert process.waited


@pytest.mark.asyncio
async def test_cancellation_kills_and_reaps_process(spawn):
    process = FakeProcess(hang=True)
    spawn(process)

    task = asyncio.create_task(call_llm("prompt", timeout=30))
    await process.started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert process.killed
    assert process.waited


@pytest.mark.asyncio
async def test_missing_binary_raises_generation_error(monkeypatch):
    async def no_binary(*cmd, **kwargs):
        raise FileNotFoundError("ollama")

    monkeypatch.setattr("utils.ollama.asyncio.create_subprocess_exec", no_binary)

    with pytest.raises(DrillGenerationError):
        await call_llm("prompt")
