"""Unit tests for core/export.py"""

from pathlib import Path

from mdsite.core.export import output_path_for, page_slug, write_page
from mdsite.core.models import RenderedPage
from mdsite.core.parse import parse_document


ROOT = Path("content")


def _doc(text, path="content/posts/2020-01-01-first-post.md"):
    return parse_document(text, Path(path))


def test_slug_prefers_frontmatter_slug():
    doc = _doc("---\nslug: Custom Slug\ntitle: Ignored\n---\n")
    assert page_slug(doc) == "custom-slug"


def test_slug_from_title():
    doc = _doc("---\ntitle: Optics in Scala\n---\n")
    assert page_slug(doc) == "optics-in-scala"


def test_slug_from_stem_without_date_prefix():
    assert page_slug(_doc("# body\n")) == "first-post"


def test_slug_falls_back_when_title_has_no_word_chars():
    doc = _doc("---\ntitle: '!!!'\n---\n", path="content/About Me.md")
    assert page_slug(doc) == "about-me"


def test_output_path_dated_mirrors_source_dir():
    doc = _doc("---\ntitle: Hello World\ndate: 2020-01-01\n---\n")
    assert output_path_for(doc, ROOT) == Path("posts/2020-01-01-hello-world.html")


def test_output_path_undated():
    doc = _doc("---\ntitle: About\n---\n", path="content/about.md")
    assert output_path_for(doc, ROOT) == Path("about.html")


def test_output_path_outside_root_goes_to_top_level():
    doc = _doc("# x\n", path="elsewhere/page.md")
    assert output_path_for(doc, ROOT) == Path("page.html")


def test_output_path_is_deterministic():
    text = "---\ntitle: Same\ndate: 2021-05-06\n---\nBody\n"
    assert output_path_for(_doc(text), ROOT) == output_path_for(_doc(text), ROOT)


def test_write_page_creates_parents(tmp_path):
    page = RenderedPage(
        source=Path("content/posts/a.md"),
        layout="post",
        html="<html></html>",
        content="",
        output_path=Path("posts/2020-01-01-a.html"),
    )
    dest = write_page(page, tmp_path / "_site")
    assert dest == tmp_path / "_site" / "posts" / "2020-01-01-a.html"
    assert dest.read_text(encoding="utf-8") == "<html></html>"
