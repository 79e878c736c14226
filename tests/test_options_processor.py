import json

import pytest

from qbank.options import OptionsBlockProcessor, ParsedOptions, coerce_int, parse_bool, round_to_step

processor = OptionsBlockProcessor()

DEFAULTS = ParsedOptions()


def _process(payload, log=None):
    text = payload if isinstance(payload, str) else json.dumps(payload)
    if log is None:
        return processor.process(text)
    return processor.process(text, log.append)


def test_defaults_for_empty_object():
    log = []
    result = _process({}, log)
    assert result == DEFAULTS
    assert log == []
    assert result.format == "legacy"
    assert result.grading_method == "perAnswer"
    assert result.time_limit_secs == 60
    assert result.explain == "optional"
    assert result.explanations == {} and result.related_links == {}


def test_default_serialisation_names():
    dumped = DEFAULTS.model_dump(by_alias=True)
    assert dumped["gradingPPQ"] == 1
    assert dumped["markdownReady"] is False
    assert dumped["timeLimitSecs"] == 60
    assert dumped["customGrader"] is None


@pytest.mark.parametrize("value", ["legacy", "2", "2.1"])
def test_known_formats(value):
    assert _process({"format": value}).format == value


def test_unknown_format_logged():
    log = []
    assert _process({"format": "2.2"}, log).format == "unknown"
    assert len(log) == 1


@pytest.mark.parametrize("value", ["true", "enabled", "enable", "yes", "1", 1, True])
def test_markdown_truthy(value):
    result = _process({"markdown": value})
    assert result.markdown_ready is True and result.markdown is True


@pytest.mark.parametrize("value", [False, "false", "disabled", "disable", "no", "0", 0, None])
def test_markdown_falsy(value):
    result = _process({"markdown": value})
    assert result.markdown_ready is False and result.markdown is False


def test_mathjax_flag():
    assert _process({"mathjax": "yes"}).mathjax_ready is True
    assert _process({"mathjax": "yes"}).mathjax is True
    assert _process({"mathjax": "no"}).mathjax is False


def test_grading_modes():
    assert _process({"grading": "perQuestion"}).grading_method == "perQuestion"
    assert _process({"grading": "perAnswer"}).grading_method == "perAnswer"
    custom = _process({"grading": "custom: correct / total"})
    assert custom.grading_method == "custom"
    assert custom.custom_grader == "correct / total"


def test_invalid_custom_grader_falls_back():
    log = []
    result = _process({"grading": "custom: notValid(}"}, log)
    assert result.grading_method == "perAnswer"
    assert result.custom_grader is None
    assert log == ["Custom grader caused an error while being tested"]


def test_unrecognized_grading_logged():
    log = []
    assert _process({"grading": "weird"}, log).grading_method == "perAnswer"
    assert log == ["Grader spec isn't recognized as a valid expression"]


def test_grading_radical():
    assert _process({"gradingRadical": "yes"}).grading_radical == "1"
    assert _process({"gradingRadical": "no"}).grading_radical == "0"


@pytest.mark.parametrize("value,expected", [(3, 3), ("4", 4), ("5 points", 5), (2.7, 2)])
def test_grading_ppq(value, expected):
    assert _process({"gradingPPQ": value}).grading_ppq == expected


@pytest.mark.parametrize("value", [0, "abc", -2, True])
def test_grading_ppq_falls_back_to_one(value):
    log = []
    assert _process({"gradingPPQ": value}, log).grading_ppq == 1
    assert len(log) == 1


@pytest.mark.parametrize("value,secs", [(30, 30), (32, 30), (33, 35), ("90", 90), (3, 5)])
def test_time_limit_enabled(value, secs):
    result = _process({"timeLimit": value})
    assert result.time_limit_enabled is True
    assert result.time_limit_secs == secs


@pytest.mark.parametrize("value", [False, 0, None, "", "soon"])
def test_time_limit_disabled(value):
    result = _process({"timeLimit": value})
    assert result.time_limit_enabled is False
    assert result.time_limit_secs == 60


def test_time_limit_rounding_to_zero_disables():
    log = []
    result = _process({"timeLimit": 2}, log)
    assert result.time_limit_enabled is False
    assert result.time_limit_secs == 60
    assert log == ["timeLimit value '2' rounds to 0 seconds, time limit disabled"]


def test_repeat_incorrect_and_display_as_radio():
    assert _process({"repeatIncorrect": True}).repeat_incorrect is True
    assert _process({"repeatIncorrect": "no"}).repeat_incorrect is False
    assert _process({"displayAsRadio": 1}).display_as_radio is True
    assert _process({"displayAsRadio": 0}).display_as_radio is False


@pytest.mark.parametrize("value", ["summary", "optional", "ALWAYS"])
def test_explain_modes(value):
    result = _process({"explain": value})
    assert result.explain == value.lower()
    assert result.show_explanations is (value.lower() == "always")


def test_explain_unsupported_mode():
    log = []
    result = _process({"explain": "sometimes"}, log)
    assert result.explain == "optional"
    assert result.show_explanations is False
    assert log == ["Unsupported explanations mode 'sometimes', falling back to 'optional'"]


def test_explanation_maps():
    result = _process({"explanations": {"1": "test", "A_+-Z": "test2"}})
    assert result.explanations == {"1": "test", "A_+-Z": "test2"}


def test_invalid_explanations_are_dropped_and_logged():
    log = []
    result = _process({"explanations": {"1": "test", "bad": 5, "^regex$": "", "empty": " "}}, log)
    assert result.explanations == {"1": "test"}
    assert "Value of explanation 'bad' is not a string" in log
    assert "Invalid explanations key '^regex$'" in log
    assert "Value of explanation 'empty' is empty" in log


def test_explanations_must_be_an_object():
    log = []
    assert _process({"explanations": ["a"]}, log).explanations == {}
    assert log == ["Invalid explanations object (type: array)"]


def test_related_links():
    result = _process({"relatedLinks": {"1": ["a", "b"], "2": "single"}})
    assert result.related_links == {"1": ["a", "b"], "2": ["single"]}


def test_related_link_single_string_normalised():
    assert _process({"relatedLinks": {"1": "onlylink"}}).related_links == {"1": ["onlylink"]}


def test_invalid_related_links():
    log = []
    result = _process({"relatedLinks": {"1": [0, "ok"], "2": False}}, log)
    assert result.related_links == {}
    assert log == [
        "Related link '1' contains non-string value",
        "Value of related link '2' is not an array or string",
    ]


def test_unknown_keys_only_give_defaults():
    log = []
    result = _process({"colour": "blue", "size": 3}, log)
    assert result == DEFAULTS
    assert log == ["Unknown option colour", "Unknown option size"]


def test_syntax_error_gives_defaults():
    log = []
    result = _process('{"format": "42",}', log)
    assert result == DEFAULTS
    assert "syntax error" in log[0].lower()


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_json_constants_are_syntax_errors(constant):
    log = []
    result = _process(f'{{"gradingPPQ": {constant}, "timeLimit": 30}}', log)
    assert result == DEFAULTS
    assert log == ["Syntax error in <options> block - parsing failed"]


def test_other_failures_name_the_error():
    log = []
    assert _process("[1, 2]", log) == DEFAULTS
    assert log == ["Parsing <options> block failed - TypeMismatchError"]


def test_parse_bool_and_coerce_int_helpers():
    assert parse_bool("Disabled") is False
    assert parse_bool("anything") is True
    assert coerce_int(" 12abc") == 12
    assert coerce_int([1]) is None
    assert round_to_step(62) == 60
    assert round_to_step(63) == 65
    assert round_to_step(2) == 0
