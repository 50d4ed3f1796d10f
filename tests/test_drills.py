import json

import pytest

from errors import DrillGenerationError, InvalidDrillError
from utils.drills import (
    OllamaDrillGenerator,
    build_batch_prompt,
    parse_batch_response,
    parse_drill,
)
from utils.rate_limit import RateLimiter

from conftest import make_drill


def _raw(word, **overrides):
    data = make_drill(word).to_record()
    data.update(overrides)
    return data


def test_parse_drill_accepts_camel_case_payload():
    drill = parse_drill(_raw("alacrity"), word="alacrity")

    assert drill.correct_answer == "alacrity"
    assert drill.to_record()["correctAnswer"] == "alacrity"


def test_parse_drill_snaps_near_miss_answer_to_option():
    drill = parse_drill(_raw("alacrity", correctAnswer="Alacrity."), word="alacrity")

    assert drill.correct_answer == "alacrity"


def test_parse_drill_rejects_answer_far_from_options():
    with pytest.raises(InvalidDrillError) as excinfo:
        parse_drill(_raw("alacrity", correctAnswer="zeal"), word="alacrity")

    assert excinfo.value.details["word"] == "alacrity"
    assert excinfo.value.status_code == 422


@pytest.mark.parametrize(
    "payload",
    [
        "not a drill",
        {"type": "Cloned"},
        _raw("bane", options=["bane"]),
        _raw("bane", content="   "),
    ],
)
def test_parse_drill_rejects_unusable_payloads(payload):
    with pytest.raises(InvalidDrillError):
        parse_drill(payload, word="bane")


def test_prompt_lists_every_word():
    prompt = build_batch_prompt(["alacrity", "bane"])

    assert '"alacrity", "bane"' in prompt
    assert "correctAnswer" in prompt


def test_parse_batch_response_keys_by_lowercase_word():
    text = json.dumps({"Alacrity": _raw("alacrity"), "bane": _raw("bane")})

    drills = parse_batch_response(text, ["alacrity", "Bane"])

    assert set(drills) == {"alacrity", "bane"}


def test_parse_batch_response_drops_missing_and_invalid_entries():
    text = json.dumps({"alacrity": _raw("alacrity"), "bane": {"type": "Cloned"}})

    drills = parse_batch_response(text, ["alacrity", "bane", "cajole"])

    assert list(drills) == ["alacrity"]


def test_parse_batch_response_finds_json_inside_prose():
    text = "Here are your drills:\n" + json.dumps({"bane": _raw("bane")}) + "\nGood luck!"

    assert set(parse_batch_response(text, ["bane"])) == {"bane"}


@pytest.mark.parametrize("text", ["no json here", "{broken", "[1, 2, 3]"])
def test_parse_batch_response_rejects_non_objects(text):
    with pytest.raises(DrillGenerationError):
        parse_batch_response(text, ["bane"])


@pytest.mark.asyncio
async def test_ollama_generator_parses_model_output(monkeypatch):
    prompts = []

    async def fake_call_llm(prompt, model=None, timeout=None, json_format=True):
        prompts.append((prompt, model, timeout))
        return json.dumps({"alacrity": _raw("alacrity")})

    monkeypatch.setattr("utils.drills.call_llm", fake_call_llm)
    generator = OllamaDrillGenerator(limiter=RateLimiter(delay_seconds=0.0))

    drills = await generator.generate_batch(["alacrity", " "])

    assert set(drills) == {"alacrity"}
    assert prompts[0][1] == "llama3.2"
    assert prompts[0][2] == 5


@pytest.mark.asyncio
async def test_ollama_generator_raises_when_nothing_usable(monkeypatch):
    async def fake_call_llm(prompt, model=None, timeout=None, json_format=True):
        return json.dumps({"alacrity": {"type": "Cloned"}})

    monkeypatch.setattr("utils.drills.call_llm", fake_call_llm)
    generator = OllamaDrillGenerator(limiter=RateLimiter(delay_seconds=0.0))

    with pytest.raises(DrillGenerationError):
        await generator.generate_batch(["alacrity"])


def test_parse_drill_rejects_blank_option_without_rewriting():
    with pytest.raises(InvalidDrillError):
        parse_drill(_raw("bane", options=["bane", " ", "lessen", "curse"]), word="bane")
