"""Tests for LinkReplacer document rewriting."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fakes.prober import FakeProber
from wikilinks.contracts.link_info import ProbeResult
from wikilinks.engine import LinkReplacer
from wikilinks.ignore_filter import IgnoreFilter
from wikilinks.link_info import LinkInfoResolver


@pytest.fixture
def replacer(wiki_dir: Path, resolver: LinkInfoResolver) -> LinkReplacer:
    return LinkReplacer(wiki_dir, resolver=resolver)


class TestTransform:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("[link](to-a-file.md)", "[link](to-a-file)"),
            ("[link](special:characters-included.md)", "[link](special%3Acharacters-included)"),
            ("[link](special%3Acharacters-included.md)", "[link](special%3Acharacters-included)"),
            ("[link](to-a-file.md#my-headline)", "[link](to-a-file#my-headline)"),
            ("[link](https://search.example.com#somePointer)", "[link](https://search.example.com#somePointer)"),
            ("[link](does:-not-exist.md#some-heading)", "[link](does:-not-exist.md#some-heading)"),
            ("[link](nested/nested-markdown.md)", "[link](nested/nested-markdown)"),
            ("[link](<with space.md>)", "[link](<with%20space>)"),
            ("[link](with%20space.md)", "[link](with%20space)"),
            ("[link](%E0%A4%A)", "[link](%E0%A4%A)"),
        ],
    )
    async def test_links(self, replacer: LinkReplacer, source: str, expected: str) -> None:
        assert await replacer.transform(source) == expected

    @pytest.mark.asyncio
    async def test_non_markdown_targets_untouched(self, replacer: LinkReplacer) -> None:
        source = "[img](image.png) [txt](notes.txt) [fake](disguised.md)\n"
        assert await replacer.transform(source) == source

    @pytest.mark.asyncio
    async def test_reference_definition(self, replacer: LinkReplacer) -> None:
        source = "Read [this][some-reference].\n\n[some-reference]: to-a-file.md#my-headline\n"
        expected = "Read [this][some-reference].\n\n[some-reference]: to-a-file#my-headline\n"
        assert await replacer.transform(source) == expected

    @pytest.mark.asyncio
    async def test_everything_else_is_preserved(self, replacer: LinkReplacer) -> None:
        source = (
            "Title\n"
            "=====\n"
            "\n"
            "* first [link](test.md)\n"
            "* `[code](test.md)`\n"
            "\n"
            "```md\n"
            "[fenced](test.md)\n"
            "```\n"
            "\n"
            "__strong__ and [remote](https://example.com/test.md)"
        )
        expected = source.replace("* first [link](test.md)", "* first [link](test)")
        assert await replacer.transform(source) == expected

    @pytest.mark.asyncio
    async def test_document_without_links(self, replacer: LinkReplacer) -> None:
        source = "# Heading\n\nNo links here.\n"
        assert await replacer.transform(source) == source

    @pytest.mark.asyncio
    async def test_process_link(self, replacer: LinkReplacer) -> None:
        assert await replacer.process_link("test.md?plain=1") == "test?plain=1"
        assert await replacer.process_link("missing.md") == "missing.md"


class TestRewrite:
    @pytest.mark.asyncio
    async def test_reports_rewritten_links(self, replacer: LinkReplacer) -> None:
        result = await replacer.rewrite("[a](test.md) [b](test.md) [c](missing.md)\n")

        assert result.changed
        assert result.rewritten_links == [("test.md", "test"), ("test.md", "test")]
        assert result.text == "[a](test) [b](test) [c](missing.md)\n"

    @pytest.mark.asyncio
    async def test_unchanged_document(self, replacer: LinkReplacer) -> None:
        source = "[c](missing.md)\n"
        result = await replacer.rewrite(source)

        assert not result.changed
        assert result.text == source
        assert result.rewritten_links == []


class TestIgnoreFilter:
    @pytest.mark.asyncio
    async def test_ignored_link_is_not_rewritten(self, wiki_dir: Path, resolver: LinkInfoResolver) -> None:
        replacer = LinkReplacer(wiki_dir, resolver=resolver, ignore_filter=IgnoreFilter({"*.md": "path/to/*.md"}))

        result = await replacer.rewrite("[link](test.md)", "path/to/file.md")

        assert result.text == "[link](test.md)"
        assert result.ignored_links == ["test.md"]

    @pytest.mark.asyncio
    async def test_rule_only_applies_to_matching_files(self, wiki_dir: Path, resolver: LinkInfoResolver) -> None:
        replacer = LinkReplacer(wiki_dir, resolver=resolver, ignore_filter=IgnoreFilter({"*.md": "path/to/*.md"}))

        assert await replacer.transform("[link](test.md)", "elsewhere/file.md") == "[link](test)"


class TestRemoteChecks:
    @pytest.mark.asyncio
    async def test_remote_links_are_not_checked_by_default(self, wiki_dir: Path) -> None:
        prober = FakeProber()
        replacer = LinkReplacer(wiki_dir, resolver=LinkInfoResolver(prober=prober))

        result = await replacer.rewrite("[r](https://example.com/page.md)")

        assert prober.calls == []
        assert result.broken_remote_links == []

    @pytest.mark.asyncio
    async def test_broken_remote_links_are_reported(self, wiki_dir: Path) -> None:
        good = "https://example.com/ok.md"
        prober = FakeProber({good: ProbeResult(status_code=200, real_url=good)})
        replacer = LinkReplacer(wiki_dir, resolver=LinkInfoResolver(prober=prober), check_remote=True)

        source = f"[ok]({good}) [bad](https://example.com/bad.md) [local](test.md)"
        result = await replacer.rewrite(source, "index.md")

        assert sorted(prober.calls) == ["https://example.com/bad.md", good]
        assert result.broken_remote_links == ["https://example.com/bad.md"]
        assert result.text == f"[ok]({good}) [bad](https://example.com/bad.md) [local](test)"


class TestLinksOutsideBase:
    @pytest.mark.asyncio
    async def test_parent_link_does_not_escape_base(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "README.md").write_text("# Readme\n", encoding="utf-8")
        (tmp_path / "docs").mkdir()
        (tmp_path / "docs" / "index.md").write_text("# Docs\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        replacer = LinkReplacer("docs", resolver=LinkInfoResolver())

        assert await replacer.transform("[up](../README.md)") == "[up](../README.md)"
        assert await replacer.transform("[in](../index.md)") == "[in](index)"

    @pytest.mark.asyncio
    async def test_missing_under_base_but_present_in_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "NOTES.md").write_text("# Notes\n", encoding="utf-8")
        (tmp_path / "wiki").mkdir()
        monkeypatch.chdir(tmp_path)

        replacer = LinkReplacer("wiki", resolver=LinkInfoResolver())

        assert await replacer.transform("[n](NOTES.md)") == "[n](NOTES.md)"


class TestEscapedDestinations:
    @pytest.mark.asyncio
    async def test_backslash_and_entity_escapes(self, wiki_dir: Path, resolver: LinkInfoResolver) -> None:
        (wiki_dir / "a_b.md").write_text("# A B\n", encoding="utf-8")
        (wiki_dir / "a&b.md").write_text("# A and B\n", encoding="utf-8")
        replacer = LinkReplacer(wiki_dir, resolver=resolver)

        result = await replacer.transform("[l](a\\_b.md) [m](a&amp;b.md)\n")

        assert result == "[l](a_b) [m](a%26b)\n"

    @pytest.mark.asyncio
    async def test_escaped_reference_definition(self, wiki_dir: Path, resolver: LinkInfoResolver) -> None:
        (wiki_dir / "a_b.md").write_text("# A B\n", encoding="utf-8")
        replacer = LinkReplacer(wiki_dir, resolver=resolver)

        assert await replacer.transform("[ref]\n\n[ref]: a\\_b.md\n") == "[ref]\n\n[ref]: a_b\n"
