"""
Normalisation of the ``<options> {...}`` block.

Each known key has a mapper that turns whatever the author wrote into a
typed setting. Mappers never raise on bad data: they log and fall back to
the default, so a broken options block degrades to default settings.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from qbank.errors import DuplicateMemberError
from qbank.grader import is_valid_grader_expression
from qbank.json_loader import MISSING, FieldSet, FieldValue, JsonLoader, Mapper
from qbank.pipeline import LogFn

logger = logging.getLogger(__name__)

GradingMethod = Literal["perQuestion", "perAnswer", "custom"]
ExplainMode = Literal["summary", "optional", "always"]

KNOWN_FORMATS = ("legacy", "2", "2.1")
EXPLAIN_MODES = ("summary", "optional", "always")
DEFAULT_TIME_LIMIT_SECS = 60
TIME_LIMIT_STEP = 5

_FALSY_WORDS = {"false", "no", "disabled", "disable", "0"}
_ID_KEY_RE = re.compile(r"[A-Za-z0-9\-+_]+")
_CUSTOM_GRADER_RE = re.compile(r"custom: *(.+)")
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


class ParsedOptions(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    format: str = "legacy"
    markdown_ready: bool = False
    markdown: bool = False
    mathjax_ready: bool = False
    mathjax: bool = False
    grading_method: GradingMethod = "perAnswer"
    custom_grader: Optional[str] = None
    grading_radical: str = "0"
    grading_ppq: int = Field(default=1, alias="gradingPPQ")
    time_limit_enabled: bool = False
    time_limit_secs: int = DEFAULT_TIME_LIMIT_SECS
    repeat_incorrect: bool = False
    display_as_radio: bool = False
    explain: ExplainMode = "optional"
    show_explanations: bool = False
    explanations: Dict[str, str] = Field(default_factory=dict)
    related_links: Dict[str, List[str]] = Field(default_factory=dict)
    explanations_available: bool = False


# --- value helpers ----------------------------------------------------------------


def parse_bool(value: Any) -> bool:
    if not value:
        return False
    if isinstance(value, str) and value.lower() in _FALSY_WORDS:
        return False
    return True


def coerce_int(value: Any) -> Optional[int]:
    """Leading integer of a value, the way a lenient form field reads it."""
    if isinstance(value, bool) or value is None or value is MISSING:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        m = _LEADING_INT_RE.match(value)
        return int(m.group(1)) if m else None
    return None


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def round_to_step(seconds: int, step: int = TIME_LIMIT_STEP) -> int:
    # half-up, not banker's rounding
    return int(math.floor(seconds / step + 0.5)) * step


# --- mappers -----------------------------------------------------------------------


def map_format(value: Any, member: str, log: LogFn) -> FieldValue:
    if not value:
        return FieldValue("legacy")
    if isinstance(value, str) and value in KNOWN_FORMATS:
        return FieldValue(value)
    log(f"Unrecognized format '{value}', treating it as unknown")
    return FieldValue("unknown")


def map_markdown(value: Any, member: str, log: LogFn) -> FieldSet:
    parsed = parse_bool(value)
    return FieldSet({"markdownReady": parsed, "markdown": parsed})


def map_mathjax(value: Any, member: str, log: LogFn) -> FieldSet:
    parsed = parse_bool(value)
    return FieldSet({"mathjaxReady": parsed, "mathjax": parsed})


def map_grading(value: Any, member: str, log: LogFn) -> FieldSet:
    if value in ("perQuestion", "perAnswer"):
        return FieldSet({"gradingMethod": value})
    m = _CUSTOM_GRADER_RE.fullmatch(value) if isinstance(value, str) else None
    if m:
        expr = m.group(1)
        if is_valid_grader_expression(expr):
            return FieldSet({"gradingMethod": "custom", "customGrader": expr})
        log("Custom grader caused an error while being tested")
        return FieldSet({"gradingMethod": "perAnswer"})
    if value:
        log("Grader spec isn't recognized as a valid expression")
    return FieldSet({"gradingMethod": "perAnswer"})


def map_grading_radical(value: Any, member: str, log: LogFn) -> FieldValue:
    return FieldValue("1" if parse_bool(value) else "0")


def map_grading_ppq(value: Any, member: str, log: LogFn) -> FieldSet:
    points = coerce_int(value)
    if points is None or points <= 0:
        if value is not MISSING and value is not None:
            log(f"Invalid gradingPPQ value '{value}', using 1")
        points = 1
    return FieldSet({"gradingPPQ": points})


def map_time_limit(value: Any, member: str, log: LogFn) -> FieldSet:
    seconds = coerce_int(value)
    if seconds is not None and seconds > 0:
        rounded = round_to_step(seconds)
        if rounded > 0:
            return FieldSet({"timeLimitEnabled": True, "timeLimitSecs": rounded})
        log(f"timeLimit value '{value}' rounds to 0 seconds, time limit disabled")
    elif value:
        log(f"Invalid timeLimit value '{value}', time limit disabled")
    return FieldSet({"timeLimitEnabled": False, "timeLimitSecs": DEFAULT_TIME_LIMIT_SECS})


def map_flag(value: Any, member: str, log: LogFn) -> FieldValue:
    return FieldValue(parse_bool(value))


def map_explain(value: Any, member: str, log: LogFn) -> FieldSet:
    lowered = value.lower() if isinstance(value, str) else ""
    if lowered in EXPLAIN_MODES:
        return FieldSet({"explain": lowered, "showExplanations": lowered == "always"})
    if value:
        log(f"Unsupported explanations mode '{value}', falling back to 'optional'")
    return FieldSet({"explain": "optional", "showExplanations": False})


def id_value_mapper(
    block_key: str,
    validate: Callable[[Any, str, LogFn], bool],
    transform: Callable[[Any], Any] = lambda v: v,
) -> Mapper:
    """Mapper for ``{"<question id>": value}`` objects."""

    def mapper(value: Any, member: str, log: LogFn) -> FieldSet:
        if value is MISSING:
            return FieldSet({block_key: {}})
        if not isinstance(value, dict):
            log(f"Invalid {block_key} object (type: {json_type_name(value)})")
            return FieldSet({block_key: {}})

        result: Dict[str, Any] = {}
        for key, raw in value.items():
            if not _ID_KEY_RE.fullmatch(key):
                log(f"Invalid {block_key} key '{key}'")
            elif validate(raw, key, log):
                result[key] = transform(raw)
        return FieldSet({block_key: result})

    return mapper


def _valid_explanation(value: Any, key: str, log: LogFn) -> bool:
    if not isinstance(value, str):
        log(f"Value of explanation '{key}' is not a string")
        return False
    if not value.strip():
        log(f"Value of explanation '{key}' is empty")
        return False
    return True


def _valid_related_link(value: Any, key: str, log: LogFn) -> bool:
    if isinstance(value, list):
        valid = all(isinstance(item, str) for item in value)
        if not valid:
            log(f"Related link '{key}' contains non-string value")
        return valid
    if isinstance(value, str):
        return True
    log(f"Value of related link '{key}' is not an array or string")
    return False


def _as_link_list(value: Any) -> List[str]:
    return list(value) if isinstance(value, list) else [value]


OPTION_MAPPERS: Dict[str, Mapper] = {
    "format": map_format,
    "markdown": map_markdown,
    "mathjax": map_mathjax,
    "grading": map_grading,
    "gradingRadical": map_grading_radical,
    "gradingPPQ": map_grading_ppq,
    "timeLimit": map_time_limit,
    "repeatIncorrect": map_flag,
    "displayAsRadio": map_flag,
    "explain": map_explain,
    "explanations": id_value_mapper("explanations", _valid_explanation),
    "relatedLinks": id_value_mapper("relatedLinks", _valid_related_link, _as_link_list),
}


def _noop(_message: str) -> None:
    return None


class OptionsBlockProcessor:
    def __init__(self, mappers: Optional[Dict[str, Mapper]] = None) -> None:
        self._loader = JsonLoader(mappers or OPTION_MAPPERS)

    def _to_options(self, values: Dict[str, Any]) -> ParsedOptions:
        # mapper output uses the camelCase aliases
        return ParsedOptions.model_validate(values)

    def process(self, text: str, log: LogFn = _noop) -> ParsedOptions:
        try:
            result = self._loader.load(text, log)
            for member in result.unknown:
                log(f"Unknown option {member}")
            return self._to_options(result.values)
        except DuplicateMemberError:
            raise
        except json.JSONDecodeError:
            log("Syntax error in <options> block - parsing failed")
        except Exception as e:
            logger.debug("options block processing failed", exc_info=True)
            log(f"Parsing <options> block failed - {type(e).__name__}")
        return self._to_options(self._loader.load("{}", log).values)
