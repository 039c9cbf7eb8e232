TEMPLATES = {"page.html": "<title>{{ $title$ }}</title>{{ $content$ }} {{ %site% }}"}
PAGES = {"index.md": "title: Home\ntemplate: page.html\n:content:\n# Hello"}


class InlineExecutor:
    """Run background tasks inline (deterministic tests)."""

    def submit(self, fn, *args, **kwargs):
        fn(*args, **kwargs)

        class _Dummy:
            def result(self):
                return None

        return _Dummy()


def test_build_creates_task_and_lists_it(monkeypatch, client):
    from webdotmd.api import routes

    monkeypatch.setattr(routes, "_executor", InlineExecutor())

    resp = client.post(
        "/api/sites/build",
        json={"pages": PAGES, "templates": TEMPLATES, "autofill": {"site": "example.org"}},
    )
    assert resp.status_code == 200
    task_id = resp.json()["task_id"]
    assert task_id

    tasks = client.get("/api/tasks?page=1&size=20").json()
    assert tasks["total"] >= 1
    row = next(t for t in tasks["tasks"] if t["task_id"] == task_id)
    assert row["status"] == "completed"
    assert row["page_count"] == 1


def test_sse_stream_returns_result(monkeypatch, client):
    from webdotmd.api import routes

    monkeypatch.setattr(routes, "_executor", InlineExecutor())
    task_id = client.post(
        "/api/sites/build",
        json={"pages": PAGES, "templates": TEMPLATES, "autofill": {"site": "example.org"}},
    ).json()["task_id"]

    with client.stream("GET", f"/api/tasks/{task_id}/stream") as r:
        assert r.status_code == 200
        body = b"".join(list(r.iter_bytes()))
        text = body.decode("utf-8", errors="replace")
        assert "\"kind\": \"result\"" in text
        assert "PageRendered" in text
        assert "index.html" in text


def test_sse_stream_seeded_failure(client):
    from webdotmd.services import site_builder

    site_builder._task_store["testtask"] = {
        "status": "failed",
        "events": [{"kind": "error", "data": {"message": "Template not found: x"}}],
        "result": {"status": "failed", "failure_reason": "Template not found: x"},
    }
    with client.stream("GET", "/api/tasks/testtask/stream") as r:
        text = b"".join(list(r.iter_bytes())).decode("utf-8")
    assert "Template not found: x" in text


def test_sse_stream_404(client):
    r = client.get("/api/tasks/nope/stream")
    assert r.status_code == 404


def test_parse_document_endpoint(client):
    resp = client.post(
        "/api/documents/parse",
        json={"text": "template: page.html\n:content:\nSome text: [link text](coolpage.com). Cool."},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["metadata"] == {"template": "page.html"}
    assert data["elements"] == [
        {"type": "text", "text": "Some text: "},
        {"type": "link", "text": "link text", "target": "coolpage.com"},
        {"type": "text", "text": ". Cool."},
    ]


def test_parse_document_bad_metadata(client):
    resp = client.post("/api/documents/parse", json={"text": "title: x\n:content:\nbody"})
    assert resp.status_code == 400
    assert "template" in resp.json()["detail"]


def test_scan_template_endpoint(client):
    resp = client.post("/api/templates/scan", json={"content": "a{{ $x$ }}b{{ %hello% }}"})
    assert resp.status_code == 200
    placeholders = resp.json()["placeholders"]
    assert placeholders == [
        {"name": "x", "is_autofill": False, "relative_span": [1, 9], "absolute_span": [1, 10]},
        {"name": "hello", "is_autofill": True, "relative_span": [1, 13], "absolute_span": [11, 24]},
    ]


def test_render_endpoint(client):
    resp = client.post("/api/render", json={"pages": PAGES, "templates": TEMPLATES, "autofill": {"site": "s"}})
    assert resp.status_code == 200
    assert resp.json()["pages"] == {"index.html": '<title>Home</title><h1 id="hello">Hello</h1> s'}


def test_render_endpoint_missing_autofill(client):
    resp = client.post("/api/render", json={"pages": PAGES, "templates": TEMPLATES})
    assert resp.status_code == 422
    assert resp.json()["detail"].endswith(": site")


def test_render_endpoint_with_values(client):
    templates = {"page.html": "<title>{{ $title$ }} - {{ $site_name$ }}</title>{{ $content$ }}"}
    pages = {
        "index.md": "title: Home\ntemplate: page.html\n:content:\nhi",
        "about.md": "title: About\nsite_name: Own\ntemplate: page.html\n:content:\nme",
    }
    resp = client.post("/api/render", json={"pages": pages, "templates": templates, "values": {"site_name": "Docs"}})
    assert resp.status_code == 200
    assert resp.json()["pages"] == {
        "index.html": "<title>Home - Docs</title>hi",
        "about.html": "<title>About - Own</title>me",
    }
