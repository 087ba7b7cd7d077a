from __future__ import annotations

from slackmd.slack.blocks import format_reply_for_slack, section_blocks


def _texts(blocks):
    return [block["text"]["text"] for block in blocks]


def test_section_blocks_one_per_paragraph():
    blocks = section_blocks("one\n\ntwo\n  \nthree")

    assert [block["type"] for block in blocks] == ["section"] * 3
    assert {block["text"]["type"] for block in blocks} == {"mrkdwn"}
    assert _texts(blocks) == ["one", "two", "three"]


def test_section_blocks_do_not_split_code_blocks():
    text = "a\n```\nx\n\ny\n```"

    assert _texts(section_blocks(text)) == [text]


def test_section_blocks_empty():
    assert section_blocks("") == []
    assert section_blocks("\n\n") == []


def test_section_blocks_split_long_paragraphs_at_lines():
    text = "a" * 10 + "\n" + "b" * 10

    assert _texts(section_blocks(text, max_chars=12)) == ["a" * 10, "b" * 10]


def test_section_blocks_split_long_lines():
    assert _texts(section_blocks("x" * 25, max_chars=10)) == ["x" * 10, "x" * 10, "x" * 5]


def test_format_reply_for_slack_converts_markdown():
    text, blocks = format_reply_for_slack("**Revenue** up")

    assert text == "*Revenue* up"
    assert blocks == [{"type": "section", "text": {"type": "mrkdwn", "text": "*Revenue* up"}}]


def test_format_reply_for_slack_mentions_user_on_newline_in_threads():
    text, _blocks = format_reply_for_slack(
        "All good",
        user_id="U123",
        channel="C123",
        thread_ts="1700000.0001",
    )

    assert text == "<@U123>\nAll good"


def test_format_reply_for_slack_no_mention_without_thread():
    text, _blocks = format_reply_for_slack(
        "All good",
        user_id="U123",
        channel="C123",
        thread_ts=None,
    )

    assert text == "All good"
