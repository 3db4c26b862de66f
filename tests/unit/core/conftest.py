"""Shared fixtures for core unit tests"""

import pytest

from mdsite.core.assemble import SiteAssembler


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

1. first
2. second

```python
print("hello")
```

![diagram](img/diagram.png)

See [the docs](https://example.com/docs).
"""

POST_MD = """\
---
layout: post
title: "Hello"
date: 2020-01-01
---
# Hi
"""

DEFAULT_LAYOUT = """\
<html><head><title>{{ site.title }}</title></head>
<body>{{ content }}</body></html>
"""

POST_LAYOUT = """\
<html><head><title>{{ title }}</title></head>
<body><time>{{ date }}</time>
<article>{{ content }}</article>
<p class="excerpt">{{ excerpt }}</p>
<ul class="toc">{% for h in headings %}<li>{{ h.anchor }}</li>{% endfor %}</ul>
<span class="tag">{{ page.tag }}</span></body></html>
"""


@pytest.fixture(name="layout_dir")
def layout_dir_fixture(tmp_path):
    d = tmp_path / "_layouts"
    d.mkdir()
    (d / "default.html").write_text(DEFAULT_LAYOUT)
    (d / "post.html").write_text(POST_LAYOUT)
    return d


@pytest.fixture(name="assembler")
def assembler_fixture(layout_dir):
    return SiteAssembler(layout_dir, default_layout="default", site={"title": "Test Site"})


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="post_md")
def post_md_fixture():
    return POST_MD
