from __future__ import annotations

from docs_index_keeper.index import IndexRow, insert_rows, parse_table, render_row


def test_inserts_before_archive_sentinel() -> None:
    before = "| Doc | Purpose |\n|-----|---------|\n| [archive/](archive/) | Historical |"
    after = insert_rows(before, [IndexRow(title="foo", path="foo.md", purpose="Foo doc")])

    assert "| [foo](foo.md) | Foo doc |" in after
    assert "| [archive/](archive/) | Historical |" in after
    assert after.index("| [foo](foo.md)") < after.index("| [archive/]")
    assert after.index("| Doc | Purpose |") < after.index("| [foo](foo.md)")


def test_sentinel_insertion_preserves_surrounding_text() -> None:
    before = (
        "# Docs\n\n| Doc | Purpose |\n|-----|---------|\n"
        "| [a](a.md) | A |\n| [archive/](archive/) | Old |\n\nFooter\n"
    )
    after = insert_rows(before, [IndexRow(title="b", path="b.md", purpose="B")])
    offset = before.index("| [archive/]")

    assert after == before[:offset] + "| [b](b.md) | B |\n" + before[offset:]


def test_fallback_to_blank_line_after_header_keeps_rows_intact() -> None:
    before = "| Doc | Purpose |\n|-----|---------|\n| [a](a.md) | A |\n\nMore prose.\n"
    after = insert_rows(before, [IndexRow(title="b", path="b.md", purpose="B")])

    assert after == (
        "| Doc | Purpose |\n|-----|---------|\n| [a](a.md) | A |\n"
        "| [b](b.md) | B |\n\nMore prose.\n"
    )
    assert [row.path for row in parse_table(after)] == ["a.md", "b.md"]


def test_appends_at_end_without_sentinel_or_blank_line() -> None:
    before = "| Doc | Purpose |\n|-----|---------|\n| [a](a.md) | A |"
    after = insert_rows(before, [IndexRow(title="b", path="b.md", purpose="B")])

    assert "| [b](b.md) | B |" in after
    assert "| [a](a.md) | A |\n| [b](b.md) | B |\n" in after
    assert [row.path for row in parse_table(after)] == ["a.md", "b.md"]


def test_rows_keep_their_relative_order() -> None:
    before = "| Doc | Purpose |\n|---|---|\n| [archive/](archive/) | Old |\n"
    rows = [
        IndexRow(title="zeta", path="zeta.md", purpose="Z"),
        IndexRow(title="alpha", path="alpha.md", purpose="A"),
    ]
    after = insert_rows(before, rows)
    assert [row.path for row in parse_table(after)] == ["zeta.md", "alpha.md", "archive/"]


def test_custom_sentinel() -> None:
    before = "| Doc | Purpose |\n|---|---|\n| [misc](misc/) | Misc |\n"
    after = insert_rows(before, [IndexRow(title="b", path="b.md")], sentinel="| [misc]")
    assert after.index("| [b](b.md) | b |") < after.index("| [misc]")


def test_no_rows_returns_text_unchanged() -> None:
    text = "| Doc | Purpose |\n"
    assert insert_rows(text, []) == text


def test_render_row_falls_back_to_title() -> None:
    assert render_row(IndexRow(title="guide", path="guide.md")) == "| [guide](guide.md) | guide |"
    assert (
        render_row(IndexRow(title="guide", path="guide.md", purpose="The Guide"))
        == "| [guide](guide.md) | The Guide |"
    )
