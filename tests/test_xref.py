"""Tests for pointer cross-reference rewriting."""

from dataclasses import dataclass
from typing import Optional, Union

import pytest

from publish.xref import rewrite_xrefs, resolve_documents
from versioning.models import ComponentResolution, VersionEntry


def entry(label, prerelease=False):
    return VersionEntry(label=label, semver=None, prerelease=prerelease)


@pytest.fixture
def table():
    return {
        "foo": ComponentResolution("foo", stable=entry("2.3.0"), prerelease=entry("2.4.0-rc1", True)),
        "bar": ComponentResolution("bar", stable=entry("1.0")),
    }


@dataclass
class Src:
    path: str
    component: str
    basename: str
    media_type: str = "text/asciidoc"


@dataclass
class Doc:
    src: Src
    contents: Optional[Union[str, bytes]]


def doc(component, text, basename="page.adoc"):
    return Doc(Src(path=f"modules/ROOT/pages/{basename}", component=component, basename=basename), text)


class TestRewriteXrefs:
    def test_reference_example(self, table):
        result = rewrite_xrefs("See xref:latest@foo:intro.adoc[Intro].", table)
        assert "xref:2.3.0@foo:intro.adoc[Intro]" in result.text
        assert "latest@foo" not in result.text
        assert result.rewritten == 1

    def test_dev_uses_prerelease(self, table):
        result = rewrite_xrefs("xref:dev@foo:ROOT:api.adoc#calls[API]", table)
        assert result.text == "xref:2.4.0-rc1@foo:ROOT:api.adoc#calls[API]"

    def test_all_occurrences_rewritten(self, table):
        text = (
            "xref:latest@foo:a.adoc[A] and xref:latest@bar:b.adoc[B]\n"
            "then xref:dev@foo:c.adoc[C], xref:latest@foo:a.adoc[A again]"
        )
        result = rewrite_xrefs(text, table)
        assert result.rewritten == 4
        assert result.text == (
            "xref:2.3.0@foo:a.adoc[A] and xref:1.0@bar:b.adoc[B]\n"
            "then xref:2.4.0-rc1@foo:c.adoc[C], xref:2.3.0@foo:a.adoc[A again]"
        )

    def test_unresolved_left_untouched(self, table):
        text = "xref:dev@bar:x.adoc[X] xref:latest@nope:y.adoc[Y] xref:latest@foo:z.adoc[Z]"
        result = rewrite_xrefs(text, table)
        assert result.text == "xref:dev@bar:x.adoc[X] xref:latest@nope:y.adoc[Y] xref:2.3.0@foo:z.adoc[Z]"
        assert result.unresolved == ["xref:dev@bar:x.adoc", "xref:latest@nope:y.adoc"]

    def test_literal_references_are_noop(self, table):
        text = "xref:2.3.0@foo:intro.adoc[Intro] xref:1.0@bar::index.adoc[]"
        result = rewrite_xrefs(text, table)
        assert result.text == text
        assert not result.changed

    def test_rewrite_is_idempotent(self, table):
        once = rewrite_xrefs("xref:latest@foo:intro.adoc[Intro]", table).text
        assert rewrite_xrefs(once, table).text == once

    @pytest.mark.parametrize("text", [
        "xref:latest@foo:intro.adoc",  # no link text bracket
        "xref:latest@foo[x]",  # no colon after the component
        "xref:newest@foo:intro.adoc[x]",  # unknown pointer
    ])
    def test_out_of_grammar(self, table, text):
        result = rewrite_xrefs(text, table)
        assert result.text == text
        assert result.unresolved == []

    @pytest.mark.parametrize("text", [
        "xref:latest@fo[o:intro.adoc[x]",
        "xref:latest@foo@bar:intro.adoc[x]",
    ])
    def test_unknown_component_shapes_are_unresolved(self, table, text):
        result = rewrite_xrefs(text, table)
        assert result.text == text
        assert result.unresolved == [text[:text.rindex("[")]]

    def test_component_may_contain_spaces(self):
        table = {"my comp": ComponentResolution("my comp", stable=entry("4.0"))}
        result = rewrite_xrefs("xref:latest@my comp:a.adoc[A]", table)
        assert result.text == "xref:4.0@my comp:a.adoc[A]"

    def test_remainder_may_span_lines(self, table):
        result = rewrite_xrefs("xref:latest@foo:intro.adoc\n[x]", table)
        assert result.text == "xref:2.3.0@foo:intro.adoc\n[x]"

    def test_incomplete_reference_does_not_hide_next_one(self, table):
        text = "xref:latest@foo:intro.adoc then xref:latest@bar:b.adoc[B]"
        result = rewrite_xrefs(text, table)
        assert result.text == "xref:latest@foo:intro.adoc then xref:1.0@bar:b.adoc[B]"
        assert result.rewritten == 1


class TestResolveDocuments:
    def test_rewrites_in_place(self, table):
        d = doc("foo", "xref:latest@bar:b.adoc[B]")
        report = resolve_documents([d], table)
        assert d.contents == "xref:1.0@bar:b.adoc[B]"
        assert report.documents_changed == 1
        assert report.references_rewritten == 1

    def test_bytes_stay_bytes(self, table):
        d = doc("foo", "xref:latest@foo:é.adoc[É]".encode("utf-8"))
        resolve_documents([d], table)
        assert d.contents == "xref:2.3.0@foo:é.adoc[É]".encode("utf-8")

    def test_skips_shared_nav_and_unreadable(self, table):
        text = "xref:latest@foo:a.adoc[A]"
        shared = doc("shared", text)
        nav = doc("foo", text, basename="nav.adoc")
        empty = doc("foo", None)
        binary = doc("foo", b"\xff\xfe\x00")
        report = resolve_documents([shared, nav, empty, binary], table)
        assert shared.contents == text
        assert nav.contents == text
        assert report.documents_skipped == 4
        assert report.documents_changed == 0

    def test_failure_does_not_stop_batch(self, table, caplog):
        class Exploding:
            src = Src(path="bad.adoc", component="foo", basename="bad.adoc")

            @property
            def contents(self):
                raise RuntimeError("cannot read")

        good = doc("foo", "xref:latest@foo:a.adoc[A]")
        report = resolve_documents([Exploding(), good], table)
        assert report.documents_failed == 1
        assert good.contents == "xref:2.3.0@foo:a.adoc[A]"
        assert "bad.adoc" in caplog.text

    def test_unresolved_are_reported(self, table, caplog):
        d = doc("bar", "xref:dev@bar:x.adoc[X]")
        report = resolve_documents([d], table)
        assert report.unresolved == [("modules/ROOT/pages/page.adoc", "xref:dev@bar:x.adoc")]
        assert "Unresolved pointer reference" in caplog.text
