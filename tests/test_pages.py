def test_home_page_renders(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "<title>AI SDLC MCP</title>" in r.text
    assert "Welcome to AI SDLC MCP" in r.text
    assert 'href="/health"' in r.text


def test_home_page_has_navigation(client):
    r = client.get("/")
    assert '<a href="/">Home</a>' in r.text
    assert '<a href="/pictures">Pictures</a>' in r.text


def test_home_page_uses_configured_app_name(tmp_path):
    from fastapi.testclient import TestClient

    from picturebox.config import Settings
    from picturebox.main import create_app

    app = create_app(Settings(app_name="Gallery <Demo>", upload_dir=str(tmp_path / "up")))
    with TestClient(app) as client:
        r = client.get("/")
    assert "Welcome to Gallery &lt;Demo&gt;" in r.text


def test_pages_share_container_styling(client):
    home = client.get("/").text
    pictures = client.get("/pictures").text
    assert 'class="container"' in home
    assert 'class="container"' in pictures
    assert "border-radius: 20px;" in home
    assert "border-radius: 20px;" in pictures
