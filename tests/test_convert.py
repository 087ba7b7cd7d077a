from __future__ import annotations

import pytest

from slackmd.mrkdwn import markdown_to_mrkdwn


@pytest.mark.parametrize("text", [None, ""])
def test_empty_input(text):
    assert markdown_to_mrkdwn(text) == ""


def test_bold_and_italic_roles():
    text = "Revenue is **up** and *steady*."

    assert markdown_to_mrkdwn(text) == "Revenue is *up* and _steady_."


def test_nested_lists_with_emphasis():
    text = "- *it* and __b__\n  * **a** b\nplain"

    assert markdown_to_mrkdwn(text).splitlines() == ["• _it_ and *b*", "  • *a* b", "plain"]


def test_inline_code_is_unchanged():
    assert markdown_to_mrkdwn("Use `**not bold**` here") == "Use `**not bold**` here"


def test_code_block_is_unchanged():
    text = "```\n**x**\n- y\n[a](http://a.example.com)\n```\n**z**"

    assert markdown_to_mrkdwn(text) == "```\n**x**\n- y\n[a](http://a.example.com)\n```\n*z*"


def test_list_after_inline_code_line():
    assert markdown_to_mrkdwn("`a` - b\n- c") == "`a` - b\n• c"


def test_headings_are_left_alone():
    assert markdown_to_mrkdwn("# Title\nbody") == "# Title\nbody"


def test_links_and_images():
    text = "See [the docs](https://docs.example.com) ![chart](https://x.example.com/c.png)"

    assert markdown_to_mrkdwn(text) == "See <https://docs.example.com|the docs> https://x.example.com/c.png"


def test_img_tag_is_replaced_with_url():
    text = '<img src="https://x.example.com/a.png">Next'

    assert markdown_to_mrkdwn(text) == "https://x.example.com/a.png Next"


def test_link_target_with_underscores_is_preserved():
    text = "[tests](https://github.com/a/b/tree/master/src/__tests__)"

    assert markdown_to_mrkdwn(text) == "<https://github.com/a/b/tree/master/src/__tests__|tests>"


def test_bare_url_with_emphasis_markers_is_preserved():
    text = "Read https://example.com/Smothered*in*hugs.html *now*"

    assert markdown_to_mrkdwn(text) == "Read https://example.com/Smothered*in*hugs.html _now_"


def test_named_links_resolve_across_code_blocks():
    text = (
        "See [docs][d].\n\n"
        "```\n[d]: http://ignored.example.com\n```\n\n"
        "[d]: https://docs.example.com\n"
    )

    assert markdown_to_mrkdwn(text) == (
        "See <https://docs.example.com|docs>.\n\n"
        "```\n[d]: http://ignored.example.com\n```\n\n"
    )


def test_unresolved_named_link_is_left_alone():
    assert markdown_to_mrkdwn("See [docs][missing]") == "See [docs][missing]"


def test_unterminated_code_is_converted_as_text():
    assert markdown_to_mrkdwn("a `b **c**") == "a `b *c*"


def test_converted_output_is_stable():
    once = markdown_to_mrkdwn("- a\n_b_ [y](http://x.example.com)")

    assert once == "• a\n_b_ <http://x.example.com|y>"
    assert markdown_to_mrkdwn(once) == once


def test_failing_span_is_passed_through(monkeypatch, caplog):
    def _boom(text):
        raise RuntimeError("boom")

    monkeypatch.setattr("slackmd.mrkdwn.convert.convert_links", _boom)
    text = "**a** `code` [l](http://x.example.com)"

    assert markdown_to_mrkdwn(text) == text
    assert "Markdown link conversion error" in caplog.text


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello world, nothing to see here.", "Hello world, nothing to see here."),
        ("**bold**", "*bold*"),
        ("*italic*", "_italic_"),
        ("***both***", "*_both_*"),
        ("- item", "• item"),
        ("* item", "• item"),
        ("word * not a list", "word * not a list"),
        ("[label](http://x.test)", "<http://x.test|label>"),
        ("![alt](http://x.test/img.png)", "http://x.test/img.png"),
        ("[a][ref]\n\n[ref]: http://x.test\n", "<http://x.test|a>\n\n"),
        ("a* b *c* d", "a* b _c_ d"),
        ("- x\n```\n- y\n```\n", "• x\n```\n- y\n```\n"),
    ],
)
def test_conversion_examples(text, expected):
    assert markdown_to_mrkdwn(text) == expected


def test_link_definition_after_inline_code_is_kept():
    text = "`x` [d]: http://a.test\n"

    assert markdown_to_mrkdwn(text) == text


def test_link_definition_after_inline_code_line():
    text = "`x` see [l][d]\n[d]: http://a.test\n"

    assert markdown_to_mrkdwn(text) == "`x` see <http://a.test|l>\n"


def test_fence_with_escaped_backticks_inside():
    assert markdown_to_mrkdwn("```\na \\``` b\n```\n**x**") == "```\na \\``` b\n```\n*x*"


def test_multiline_img_tag():
    text = 'Logo: <img\n  alt="x"\n  src="http://a.example.com/i.png"\n> here'

    assert markdown_to_mrkdwn(text) == "Logo: http://a.example.com/i.png here"


def test_emphasis_inside_non_link_angle_brackets():
    assert markdown_to_mrkdwn("a <**b**> c") == "a <*b*> c"


def test_long_line_of_unclosed_underscores_is_fast():
    text = "_a " * 30000

    assert markdown_to_mrkdwn(text) == text
