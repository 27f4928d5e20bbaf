"""Unit tests for feature parser"""
import pytest
from feature2docx.parser.feature_parser import FeatureParser, ScenarioRecord, extract_scenarios, feature_title


LOGIN_FEATURE = """Feature: Login

  # Happy path first
  @smoke @regression
  Scenario: Successful login
    Given I am on the login page
    When I enter valid credentials

    Then I should see the dashboard

  @negative
  Scenario Outline: Rejected login
    Given I am on the login page
    When I enter "<user>" and "<password>"
    Then I should see an error
"""


def test_extracts_tags_name_and_steps():
    records = extract_scenarios(LOGIN_FEATURE)

    assert records == [
        ScenarioRecord(
            tags="@smoke @regression",
            name="Successful login",
            steps=(
                "Given I am on the login page",
                "When I enter valid credentials",
                "Then I should see the dashboard",
            ),
        ),
        ScenarioRecord(
            tags="@negative",
            name="Rejected login",
            steps=(
                "Given I am on the login page",
                'When I enter "<user>" and "<password>"',
                "Then I should see an error",
            ),
        ),
    ]


def test_surrounding_whitespace_is_ignored():
    padded = "\n".join(f"   {line}\t " for line in LOGIN_FEATURE.split("\n"))

    assert extract_scenarios(padded) == extract_scenarios(LOGIN_FEATURE)


def test_blank_and_comment_lines_are_transparent():
    lines = LOGIN_FEATURE.split("\n")
    noisy = []
    for line in lines:
        noisy.extend([line, "", "# a comment", "   #indented comment"])

    assert extract_scenarios("\n".join(noisy)) == extract_scenarios(LOGIN_FEATURE)


def test_header_without_steps_is_dropped():
    records = extract_scenarios("Scenario: A\nScenario: B\n  step1")

    assert records == [ScenarioRecord(tags="", name="B", steps=("step1",))]


def test_tag_line_attaches_to_next_scenario():
    records = extract_scenarios("@foo\nScenario: A\n  s1")

    assert records == [ScenarioRecord(tags="@foo", name="A", steps=("s1",))]


def test_tags_carry_over_until_next_tag_line():
    records = extract_scenarios("@foo\nScenario: A\n  s1\nScenario: B\n  s2")

    assert [(r.tags, r.name, r.steps) for r in records] == [
        ("@foo", "A", ("s1",)),
        ("@foo", "B", ("s2",)),
    ]


def test_new_tag_line_replaces_previous_tags():
    text = "@first\n@second\nScenario: A\n  s1\n@third\nScenario: B\n  s2"

    assert [r.tags for r in extract_scenarios(text)] == ["@second", "@third"]


def test_tag_line_closes_open_scenario():
    text = "Scenario: A\n  s1\n@later\n  stray line\nScenario: B\n  s2"

    records = extract_scenarios(text)

    assert records == [
        ScenarioRecord(tags="", name="A", steps=("s1",)),
        ScenarioRecord(tags="@later", name="B", steps=("s2",)),
    ]


@pytest.mark.parametrize("header", [
    "scenario outline: C",
    "Scenario Outline: C",
    "SCENARIO: C",
    "Scenario:C",
])
def test_headers_are_case_insensitive(header):
    records = extract_scenarios(f"{header}\n  s1")

    assert [(r.name, r.steps) for r in records] == [("C", ("s1",))]


def test_name_is_text_after_first_colon():
    records = extract_scenarios("Scenario: Time is 10:30\n  s1")

    assert records[0].name == "Time is 10:30"


def test_scenario_with_empty_name_is_dropped():
    assert extract_scenarios("Scenario:   \n  s1\n  s2") == []


@pytest.mark.parametrize("text", ["", "\n\n", "# only a comment", "Feature: Nothing here\n  just prose"])
def test_no_scenarios(text):
    assert extract_scenarios(text) == []


def test_steps_keep_order_and_duplicates():
    text = "Scenario: Repeat\n  And b\n  Given a\n  And b\n  | x | y |"

    assert extract_scenarios(text)[0].steps == ("And b", "Given a", "And b", "| x | y |")


def test_crlf_line_endings():
    text = "@tag\r\nScenario: Windows\r\n  Given a step\r\n  Then done\r\n"

    records = extract_scenarios(text)

    assert records == [ScenarioRecord(tags="@tag", name="Windows", steps=("Given a step", "Then done"))]


def test_lines_before_first_scenario_are_ignored():
    text = "Feature: Cart\n  As a shopper\n  I want a cart\nScenario: Add\n  When I add an item"

    assert extract_scenarios(text)[0].steps == ("When I add an item",)


def test_record_helpers():
    record = ScenarioRecord(tags="@a  @b", name="N", steps=("one", "two"))

    assert record.tag_list == ["@a", "@b"]
    assert record.steps_text == "one\ntwo"


@pytest.mark.parametrize("filename, title", [
    ("login.feature", "login"),
    ("Login.FEATURE", "Login"),
    ("features/checkout flow.feature", "checkout flow"),
    ("C:\\specs\\cart.feature", "cart"),
    ("notes.txt", "notes.txt"),
])
def test_feature_title(filename, title):
    assert feature_title(filename) == title


def test_parse_file(tmp_path):
    feature_file = tmp_path / "login.feature"
    feature_file.write_text("\ufeff" + LOGIN_FEATURE, encoding="utf-8")

    records = FeatureParser(str(tmp_path)).parse_file("login.feature")

    assert [r.name for r in records] == ["Successful login", "Rejected login"]
    assert records[0].tags == "@smoke @regression"


def test_filter_by_tags():
    records = extract_scenarios(LOGIN_FEATURE)

    assert [r.name for r in FeatureParser.filter_by_tags(records, ["@negative"])] == ["Rejected login"]
    assert [r.name for r in FeatureParser.filter_by_tags(records, ["smoke"])] == ["Successful login"]
    assert FeatureParser.filter_by_tags(records, []) == records
    assert FeatureParser.filter_by_tags(records, ["@missing"]) == []


def test_calls_do_not_share_state():
    first = extract_scenarios("@one\nScenario: A\n  s1\nScenario: Pending")
    second = extract_scenarios("  s2\nScenario: B\n  s3")

    assert first == [ScenarioRecord(tags="@one", name="A", steps=("s1",))]
    assert second == [ScenarioRecord(tags="", name="B", steps=("s3",))]


def test_concurrent_extraction():
    from concurrent.futures import ThreadPoolExecutor

    texts = [f"@t{i}\nScenario: S{i}\n" + "".join(f"  step {i}-{n}\n" for n in range(200)) for i in range(8)]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(extract_scenarios, texts))

    for i, records in enumerate(results):
        assert records == [ScenarioRecord(tags=f"@t{i}", name=f"S{i}",
                                          steps=tuple(f"step {i}-{n}" for n in range(200)))]
