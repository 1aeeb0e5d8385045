def test_preview_renders_sanitized_html(client):
    res = client.post(
        "/api/preview",
        json={"content": "<script>alert(1)</script>\n# Heading\n\n[T](url)"},
    )

    assert res.status_code == 200
    html = res.json()["html"]
    assert "<h1>Heading</h1>" in html
    assert 'href="url"' in html
    assert "alert" not in html


def test_preview_requires_content(client):
    res = client.post("/api/preview", json={})

    assert res.status_code == 400
    assert "content" in res.json()["detail"]
