from quickpost.services.markdown_renderer import render


def test_renders_basic_markdown():
    output = render("# Heading\n\nThis is a **bold** text.")

    assert "<h1>Heading</h1>" in output
    assert "<strong>bold</strong>" in output


def test_supports_github_flavored_markdown():
    output = render(
        "# Task List\n"
        "- [x] Completed task\n"
        "- [ ] Incomplete task\n"
        "\n"
        "```javascript\n"
        'console.log("Hello");\n'
        "```\n"
        "\n"
        "| Column 1 | Column 2 |\n"
        "|----------|----------|\n"
        "| Cell 1   | Cell 2   |\n"
        "\n"
        "~~gone~~\n"
    )

    assert "checkbox" in output
    assert "checked" in output
    assert "<table>" in output
    assert "<code" in output
    assert "<s>gone</s>" in output


def test_soft_line_breaks_become_br():
    assert "<br>" in render("first line\nsecond line")


def test_strips_script_blocks_entirely():
    output = render("<script>alert(1)</script>\n# Heading")

    assert "<script>" not in output
    assert "alert" not in output
    assert "<h1" in output


def test_strips_inline_script_and_unclosed_script():
    inline = render("hello <script>alert('inline')</script> world")
    unclosed = render("text\n\n<script>alert('open')")

    assert "alert" not in inline
    assert "hello" in inline and "world" in inline
    assert "alert" not in unclosed


def test_strips_event_handlers_and_javascript_links():
    output = render(
        '<img src="x.png" onerror="steal()">\n\n[click](javascript:alert(1))'
    )

    assert "onerror" not in output
    assert "steal" not in output
    assert 'href="javascript' not in output


def test_drops_disallowed_tags_but_keeps_text():
    output = render('<div class="box">inside</div>')

    assert "<div" not in output
    assert "inside" in output


def test_handles_links():
    output = render("[GitHub](https://github.com)")
    assert '<a href="https://github.com"' in output


def test_handles_images():
    output = render("![Alt text](image.png)")

    assert 'src="image.png"' in output
    assert 'alt="Alt text"' in output
    assert "<img" in output


def test_empty_input():
    assert render("") == ""


def test_strips_style_and_iframe_markup():
    output = render(
        '<style>body { display: none }</style>\n\n<iframe src="https://evil.test"></iframe>\n\nkept'
    )

    assert "display" not in output
    assert "<iframe" not in output
    assert "evil.test" not in output
    assert "kept" in output
