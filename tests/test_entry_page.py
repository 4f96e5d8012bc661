"""Tests for the entry page rewrite."""

import os

import pytest

from publish.entry_page import (
    EntryPageBinding,
    EntryPageOutcome,
    parse_start_page,
    rewrite_entry_page,
    rewrite_entry_text,
)

REDIRECT = (
    '<!DOCTYPE html>\n<meta http-equiv="refresh" content="0; url=bar/3.0/index.html">\n'
    '<script>location="bar/3.0/index.html"</script>\n'
    '<a href="foobar/3.0/x.html">other</a> <a href="bar/3.0.1/y.html">patch</a>\n'
)


class TestParseStartPage:
    def test_full_descriptor(self):
        assert parse_start_page("3.0@bar:index.adoc") == EntryPageBinding("3.0", "bar", "index.adoc")

    def test_module_path_kept(self):
        binding = parse_start_page("2.1@foo:ROOT:overview.adoc")
        assert binding.component == "foo"
        assert binding.path == "ROOT:overview.adoc"

    @pytest.mark.parametrize("value", [None, "", "bar::index.adoc", "index.adoc", "@bar:index.adoc", 42])
    def test_unpinned_or_invalid(self, value):
        assert parse_start_page(value) is None


class TestRewriteEntryText:
    def test_only_bounded_segments_replaced(self):
        out = rewrite_entry_text(REDIRECT, EntryPageBinding("3.0", "bar"))
        assert out.count("bar/latest/index.html") == 2
        assert "foobar/3.0/x.html" in out
        assert "bar/3.0.1/y.html" in out


@pytest.fixture
def site(tmp_path):
    root = tmp_path / "site"
    (root / "bar" / "3.0").mkdir(parents=True)
    (root / "index.html").write_text(REDIRECT, encoding="utf-8")
    return root


class TestRewriteEntryPage:
    def test_no_pointer_leaves_page_identical(self, site):
        before = (site / "index.html").read_bytes()
        outcome = rewrite_entry_page(str(site), parse_start_page("3.0@bar:index.adoc"))
        assert outcome is EntryPageOutcome.NO_POINTER
        assert (site / "index.html").read_bytes() == before
        assert not (site / "index.html.bak").exists()

    def test_rewrites_and_backs_up(self, site):
        os.symlink("3.0", site / "bar" / "latest")
        outcome = rewrite_entry_page(str(site), EntryPageBinding("3.0", "bar", "index.adoc"))
        assert outcome is EntryPageOutcome.REWRITTEN
        assert (site / "index.html.bak").read_text(encoding="utf-8") == REDIRECT
        page = (site / "index.html").read_text(encoding="utf-8")
        assert "url=bar/latest/index.html" in page
        assert 'location="bar/latest/index.html"' in page

    def test_second_run_keeps_original_backup(self, site):
        os.symlink("3.0", site / "bar" / "latest")
        binding = EntryPageBinding("3.0", "bar")
        rewrite_entry_page(str(site), binding)
        outcome = rewrite_entry_page(str(site), binding)
        assert outcome is EntryPageOutcome.UNCHANGED
        assert (site / "index.html.bak").read_text(encoding="utf-8") == REDIRECT

    def test_no_binding(self, site):
        assert rewrite_entry_page(str(site), None) is EntryPageOutcome.NO_BINDING

    def test_missing_page(self, site):
        os.symlink("3.0", site / "bar" / "latest")
        (site / "index.html").unlink()
        assert rewrite_entry_page(str(site), EntryPageBinding("3.0", "bar")) is EntryPageOutcome.NO_PAGE

    def test_dangling_pointer_counts_as_missing(self, site):
        os.symlink("9.9", site / "bar" / "latest")
        assert rewrite_entry_page(str(site), EntryPageBinding("3.0", "bar")) is EntryPageOutcome.NO_POINTER
