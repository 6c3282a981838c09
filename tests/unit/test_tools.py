import random

import pytest

from flowbot.exceptions import ToolExecutionError, ToolNotFoundError
from flowbot.schemas.turns import ToolInvocation
from flowbot.tools.arithmetic import evaluate, format_number
from flowbot.tools.dispatcher import ToolDispatcher
from flowbot.tools.handlers import CalculatorTool, CodeAnalysisTool, WeatherTool, default_tools


@pytest.fixture
def dispatcher():
    return ToolDispatcher(default_tools(rng=random.Random(7)))


# --- Detection ---

@pytest.mark.parametrize("message, location", [
    ("What is the weather in London?", "London"),
    ("Tell me the temperature for Paris", "Paris"),
    ("Weather at Tokyo please", "Tokyo please"),
])
def test_detects_weather_with_location(dispatcher, message, location):
    invocation = dispatcher.detect(message)
    assert invocation == ToolInvocation(name="weather", params={"location": location})


def test_weather_needs_a_location():
    assert WeatherTool().detect("How is the weather?") is None


@pytest.mark.parametrize("message, expression", [
    ("What is 5 + 3?", "5 + 3"),
    ("Calculate 10 * 20", "10 * 20"),
    ("42 / 6", "42 / 6"),
    ("compute (2 + 3) * 4 for me", "(2 + 3) * 4"),
])
def test_detects_calculator_expression(dispatcher, message, expression):
    invocation = dispatcher.detect(message)
    assert invocation.name == "calculator"
    assert invocation.params == {"expression": expression}


def test_detects_code_block(dispatcher):
    invocation = dispatcher.detect('```python\nprint("hello")\n```')
    assert invocation.name == "code_analysis"
    assert invocation.params == {"code": 'print("hello")\n', "language": "python"}


def test_code_block_without_language():
    params = CodeAnalysisTool().detect("```\nfunction test() {}\n```")
    assert params["language"] == "unknown"


@pytest.mark.parametrize("message", ["Hello world", "analyze code: function() {}", "good morning"])
def test_plain_messages_invoke_nothing(dispatcher, message):
    assert dispatcher.detect(message) is None


# --- Arithmetic ---

@pytest.mark.parametrize("expression, expected", [
    ("5 + 3", 8),
    ("10 / 4", 2.5),
    ("(2 + 3) * 4", 20),
    ("-3 + 1", -2),
    ("1.5 * 2", 3.0),
])
def test_evaluate(expression, expected):
    assert evaluate(expression) == expected


@pytest.mark.parametrize("expression", [
    "__import__('os').system('ls')",
    "2 ** 8",
    "7 % 2",
    "abs(-1)",
    "True + 1",
    "5 +",
    "",
])
def test_evaluate_rejects_anything_else(expression):
    with pytest.raises(ToolExecutionError):
        evaluate(expression)


def test_division_by_zero():
    with pytest.raises(ToolExecutionError, match="Division by zero"):
        evaluate("1 / 0")


def test_format_number():
    assert format_number(20.0) == "20"
    assert format_number(2.5) == "2.5"
    assert format_number(8) == "8"


# --- Handlers ---

def test_calculator_result():
    assert CalculatorTool().run({"expression": "42 / 6"}) == "42 / 6 = 7"


def test_weather_report_is_simulated():
    report = WeatherTool(rng=random.Random(1)).run({"location": "London"})

    location, reading = report.split(": ")
    temperature, condition = reading.split(", ")
    assert location == "London"
    assert 10 <= int(temperature.rstrip("°C")) <= 39
    assert condition in WeatherTool.CONDITIONS


def test_code_analysis_report():
    report = CodeAnalysisTool().run({"code": "x = 1  # one\ny = 2\n", "language": "python"})
    assert report == "Language: python\nLines: 2\nHas Comments: Yes\nComplexity: Low"


def test_code_analysis_counts_fenced_lines(dispatcher):
    invocation = dispatcher.detect("```c\n#include <stdio.h>\nint main() { return 0; }\n```")

    report = CodeAnalysisTool().run(invocation.params)

    # The newline before the closing fence does not add a line; `#` counts as a comment marker.
    assert report == "Language: c\nLines: 2\nHas Comments: Yes\nComplexity: Low"


def test_code_analysis_complexity_buckets():
    assert CodeAnalysisTool._complexity(49) == "Low"
    assert CodeAnalysisTool._complexity(50) == "Medium"
    assert CodeAnalysisTool._complexity(200) == "High"


# --- Dispatcher ---

def test_execute_formats_result(dispatcher):
    reply = dispatcher.execute(ToolInvocation(name="calculator", params={"expression": "5 + 3"}))
    assert reply == "🔢 **Calculation Result**\n5 + 3 = 8"


def test_execute_reports_tool_failure(dispatcher):
    reply = dispatcher.execute(ToolInvocation(name="calculator", params={"expression": "1 / 0"}))
    assert reply == "❌ Calculation Result failed: Division by zero"


def test_unknown_tool(dispatcher):
    with pytest.raises(ToolNotFoundError):
        dispatcher.invoke("web_search", {"query": "python"})

    reply = dispatcher.execute(ToolInvocation(name="web_search", params={}))
    assert reply.startswith("❌ web_search failed")


def test_unexpected_handler_errors_become_execution_errors(dispatcher, mocker):
    mocker.patch.object(CalculatorTool, "run", side_effect=KeyError("expression"))

    with pytest.raises(ToolExecutionError):
        dispatcher.invoke("calculator", {})


def test_duplicate_tool_registration(dispatcher):
    with pytest.raises(ValueError):
        dispatcher.register(CalculatorTool())
