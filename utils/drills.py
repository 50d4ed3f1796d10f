import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from Levenshtein import ratio as lev_ratio
from pydantic import ValidationError

from config import load_config
from errors import DrillGenerationError, InvalidDrillError
from models.drill import DrillContent
from utils.ollama import call_llm
from utils.rate_limit import RateLimiter

logger = logging.getLogger(__name__)

# Below this similarity a drifted answer is not snapped to an option
ANSWER_MATCH_THRESHOLD = 0.8


def repair_correct_answer(drill: DrillContent) -> DrillContent:
    """Snap correct_answer onto the closest option when the model drifted."""
    if drill.correct_answer in drill.options:
        return drill
    answer = drill.correct_answer.strip().lower()
    best_option = None
    best_score = 0.0
    for option in drill.options:
        score = lev_ratio(answer, option.strip().lower())
        if score > best_score:
            best_option, best_score = option, score
    if best_option is None or best_score < ANSWER_MATCH_THRESHOLD:
        raise InvalidDrillError(
            "Correct answer is not one of the options",
            details={"correctAnswer": drill.correct_answer, "options": drill.options},
        )
    return drill.model_copy(update={"correct_answer": best_option})


def parse_drill(data: Any, word: Optional[str] = None) -> DrillContent:
    """Validate raw drill data; raise InvalidDrillError if it cannot be used."""
    if isinstance(data, DrillContent):
        drill = data
    else:
        if not isinstance(data, dict):
            raise InvalidDrillError("Drill must be an object", word=word)
        try:
            drill = DrillContent.model_validate(data)
        except ValidationError as e:
            raise InvalidDrillError(
                "Drill is missing required fields",
                word=word,
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e
    try:
        return repair_correct_answer(drill)
    except InvalidDrillError as e:
        e.details["word"] = word
        raise


def build_batch_prompt(words: Sequence[str]) -> str:
    word_list = ", ".join(f'"{word}"' for word in words)
    return f"""You write ACT-level vocabulary drills for students aiming at a 34-36 score.

Target words: {word_list}

For each target word write one fill-in-the-blank question:
- "content": a college-level sentence with _____ where the word belongs, whose context makes the target the only precise fit
- "options": four choices, the target word plus three near-synonyms that fail on intensity, register, connotation or collocation
- "correctAnswer": the target word exactly as it appears in "options"
- "explanation": why the target fits and why each distractor does not
- "type": "Cloned"

Respond with a single JSON object whose keys are the target words in lowercase and whose values are the drill objects.
"""


def parse_batch_response(text: str, words: Sequence[str]) -> Dict[str, DrillContent]:
    """Pull the requested words' drills out of a model response."""
    try:
        payload = json.loads(text)
    except ValueError:
        start, end = text.find("{"), text.rfind("}")
        if start < 0 or end <= start:
            raise DrillGenerationError("Model response was not JSON", words=list(words))
        try:
            payload = json.loads(text[start:end + 1])
        except ValueError as e:
            raise DrillGenerationError("Model response was not JSON", words=list(words)) from e
    if not isinstance(payload, dict):
        raise DrillGenerationError("Model response was not a JSON object", words=list(words))
    by_key = {str(key).strip().lower(): value for key, value in payload.items()}
    drills: Dict[str, DrillContent] = {}
    for word in words:
        key = word.strip().lower()
        if key not in by_key:
            logger.warning("Model skipped drill for %r", word)
            continue
        try:
            drills[key] = parse_drill(by_key[key], word=key)
        except InvalidDrillError as e:
            logger.warning("Dropping invalid drill for %r: %s", word, e.details)
    return drills


class DrillGenerator:
    """Interface for anything that can produce drills for a batch of words."""

    async def generate_batch(self, words: Sequence[str]) -> Dict[str, DrillContent]:
        raise NotImplementedError


class OllamaDrillGenerator(DrillGenerator):
    """Generate drills with one local-model call per batch of words."""

    def __init__(
        self,
        model: Optional[str] = None,
        timeout: Optional[int] = None,
        limiter: Optional[RateLimiter] = None,
    ):
        config = load_config()
        self.model = model or config["ollama"]["model"]
        self.timeout = timeout or config["ollama"]["timeout"]
        drills_cfg = config["drills"]
        self.limiter = limiter or RateLimiter(
            max_requests=drills_cfg["rate_limit_per_minute"],
            window_seconds=60.0,
            delay_after=drills_cfg["delay_after"],
            delay_seconds=drills_cfg["delay_seconds"],
        )

    async def generate_batch(self, words: Sequence[str]) -> Dict[str, DrillContent]:
        batch: List[str] = [word for word in words if word and word.strip()]
        if not batch:
            return {}
        await self.limiter.wait_if_needed()
        logger.info("Generating drills for %d words with %s", len(batch), self.model)
        text = await call_llm(build_batch_prompt(batch), model=self.model, timeout=self.timeout)
        drills = parse_batch_response(text, batch)
        if not drills:
            raise DrillGenerationError("Model returned no usable drills", words=batch)
        return drills
