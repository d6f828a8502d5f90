"""Tests for merging project entries into a note's section."""

from obsid.sections import heading_level, merge_entry, render_entry


def test_heading_level():
    assert heading_level("# Today") == 1
    assert heading_level("## Projects") == 2
    assert heading_level("### Alpha") == 3
    assert heading_level("#### Deeper") is None
    assert heading_level("#tag") is None
    assert heading_level("plain text") is None
    assert heading_level("") is None


def test_render_entry_strips_trailing_newlines():
    assert render_entry("Alpha", "one\ntwo\n\n") == ["### Alpha", "one", "two", ""]


def test_render_entry_empty_body():
    assert render_entry("Alpha", "") == ["### Alpha", ""]


def test_replaces_existing_entry_and_keeps_next_section():
    doc = ["# Today", "", "## Projects", "", "### Alpha", "old body", "", "## Notes"]

    result = merge_entry(doc, "Projects", "Alpha", "new body")

    assert result == ["# Today", "", "## Projects", "", "### Alpha", "new body", "", "## Notes"]


def test_merge_is_idempotent():
    doc = ["# Today", "", "## Projects", "", "### Beta", "b", "", "## Notes", "- keep me"]

    once = merge_entry(doc, "Projects", "Foo", "line 1\nline 2")
    twice = merge_entry(once, "Projects", "Foo", "line 1\nline 2")

    assert twice == once


def test_empty_document_gets_section_and_entry():
    result = merge_entry([], "Projects", "Foo", "body")

    assert result.count("## Projects") == 1
    assert result.count("### Foo") == 1
    assert result.index("body") == result.index("### Foo") + 1
    assert result.index("### Foo") > result.index("## Projects")


def test_missing_section_is_appended_at_end():
    doc = ["# Saturday, July 19, 2025", "", "Morning notes."]

    result = merge_entry(doc, "Projects", "Foo", "body")

    assert result == [
        "# Saturday, July 19, 2025",
        "",
        "Morning notes.",
        "",
        "## Projects",
        "",
        "### Foo",
        "body",
        "",
    ]


def test_new_entry_goes_before_next_section():
    doc = ["## Projects", "", "### Alpha", "a", "", "## Notes", "- n"]

    result = merge_entry(doc, "Projects", "Beta", "b")

    assert result == ["## Projects", "", "### Alpha", "a", "", "### Beta", "b", "", "## Notes", "- n"]


def test_distinct_entries_do_not_interfere():
    doc = merge_entry([], "Projects", "Foo", "foo 1")
    doc = merge_entry(doc, "Projects", "Bar", "bar 1")
    assert doc.count("### Foo") == 1
    assert doc.count("### Bar") == 1

    updated = merge_entry(doc, "Projects", "Foo", "foo 2")

    assert "foo 2" in updated
    assert "foo 1" not in updated
    assert "bar 1" in updated
    assert updated.index("### Foo") < updated.index("### Bar")

    updated = merge_entry(updated, "Projects", "Bar", "bar 2")

    assert "foo 2" in updated
    assert "bar 2" in updated
    assert "bar 1" not in updated


def test_replacement_stops_at_next_entry():
    doc = ["## Projects", "### Alpha", "a1", "a2", "### Beta", "b", "## Notes"]

    result = merge_entry(doc, "Projects", "Alpha", "new")

    assert result == ["## Projects", "### Alpha", "new", "", "### Beta", "b", "## Notes"]


def test_replacement_keeps_level_four_headings_inside_entry():
    doc = ["## Projects", "### Alpha", "#### Detail", "x", "## Notes"]

    result = merge_entry(doc, "Projects", "Alpha", "new")

    assert result == ["## Projects", "### Alpha", "new", "", "## Notes"]


def test_same_title_in_other_section_is_left_alone():
    doc = ["## Notes", "### Alpha", "a note", "## Projects", ""]

    result = merge_entry(doc, "Projects", "Alpha", "work")

    assert result[:3] == ["## Notes", "### Alpha", "a note"]
    assert result[3:] == ["## Projects", "", "### Alpha", "work", ""]


def test_title_match_is_exact():
    doc = ["## Projects", "### alpha", "lower", "### Alpha v2", "other"]

    result = merge_entry(doc, "Projects", "Alpha", "body")

    assert result == ["## Projects", "### alpha", "lower", "### Alpha v2", "other", "### Alpha", "body", ""]


def test_section_heading_on_last_line():
    result = merge_entry(["# Today", "## Projects"], "Projects", "Foo", "body")

    assert result == ["# Today", "## Projects", "### Foo", "body", ""]


def test_input_list_is_not_modified():
    doc = ["# Today"]

    merge_entry(doc, "Projects", "Foo", "body")

    assert doc == ["# Today"]


def test_custom_section_title():
    doc = ["## Work Log", "", "## Notes"]

    result = merge_entry(doc, "Work Log", "Foo", "body")

    assert result == ["## Work Log", "", "### Foo", "body", "", "## Notes"]
