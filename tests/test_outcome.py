"""Tests for reasons and failure rendering."""

from verdict.config import options_override
from verdict.outcome import PASS, Description, Fail
from verdict.reason import Reason


# --- Reason ---


def test_reason_substitutes_positional_arguments():
    assert Reason.capture("{0} minutes is {1}", 20, "enough").render() == "because 20 minutes is enough"


def test_reason_starting_with_because_is_left_alone():
    assert Reason.capture("because {0} should always fail.", "X").render() == "because X should always fail."


def test_reason_with_leading_blanks_is_trimmed_before_the_prefix():
    assert Reason.capture("\r\n{0} should always fail.", "X").render() == "because X should always fail."
    assert Reason.capture("\r\nbecause it is").render() == "because it is"


def test_blank_reason_renders_empty():
    assert Reason.capture("   ").render() == ""


def test_reason_arguments_are_captured_at_attachment():
    items = ["a"]
    reason = Reason.capture("we saw {0}", items)
    items.append("b")
    assert reason.render() == "because we saw ['a']"


def test_reason_keeps_uncopyable_arguments_by_reference():
    import threading

    lock = threading.Lock()
    reason = Reason.capture("held {0}", lock)
    assert reason.arguments[0] is lock


def test_reason_render_is_repeatable():
    reason = Reason.capture("{0} and {1}", 1, [2, 3])
    assert reason.render() == reason.render()


def test_malformed_template_renders_verbatim():
    assert Reason.capture("we need {2}", "a").render() == "because we need {2} (a)"


def test_template_with_bad_attribute_or_index_renders_verbatim():
    assert Reason.capture("{0.missing}", 5).render() == "because {0.missing} (5)"
    assert Reason.capture("{0[1]}", 5).render() == "because {0[1]} (5)"


def test_fail_with_unformattable_reason_still_renders():
    fail = Fail.from_description(
        Description("Expected n to be one of {1}", ", but found 3."),
        Reason.capture("{0.missing}", 5),
    )
    assert fail.render() == "Expected n to be one of {1} because {0.missing} (5), but found 3."


def test_reason_prefix_is_configurable():
    with options_override(reason_prefix="since"):
        assert Reason.capture("it rained").render() == "since it rained"
        assert Reason.capture("since it rained").render() == "since it rained"


# --- Fail ---


def test_fail_inserts_reason_before_tail():
    fail = Fail.from_description(
        Description("Expected value to be one of {1, 2}", ", but found 3."),
        Reason.capture("it's {0}", "true"),
    )
    assert fail.render() == "Expected value to be one of {1, 2} because it's true, but found 3."
    assert fail.summary == "Expected value to be one of {1, 2}, but found 3."


def test_fail_without_reason_renders_summary():
    fail = Fail.from_description(Description("Expected x to have a value"))
    assert fail.render() == "Expected x to have a value."


def test_fail_without_slot_appends_reason_before_period():
    fail = Fail("Expected it to fail.", Reason.capture("it should"))
    assert fail.render() == "Expected it to fail because it should."


def test_aggregate_lists_failures_in_order():
    first = Fail.from_description(Description("first"), Reason.capture("one"))
    second = Fail.from_description(Description("second"))
    aggregated = Fail.aggregate((first, second))
    assert aggregated.render() == "first because one.\nsecond."
    assert aggregated.children == (first, second)


def test_truthiness():
    assert PASS
    assert not Fail("nope")
