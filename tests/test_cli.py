import httpx
import pytest
from typer.testing import CliRunner

from store2.cli import doctor
from store2.cli import main as cli
from store2.client import StoreClient
from store2.core.config import ClientConfig

from conftest import BASE_URL

PIN = "AD8CCDD5F9"

runner = CliRunner()


@pytest.fixture
def patched(api, monkeypatch):
    def make_client(*_args):
        return StoreClient(
            ClientConfig(base_url=BASE_URL, user="token"),
            transport=httpx.MockTransport(api.handler),
        )

    monkeypatch.setattr(cli, "make_client", make_client)
    monkeypatch.setattr(doctor, "make_client", make_client)
    return api


def test_catalogs(patched):
    patched.add("GET", "/catalogs", fixture="catalogs.search.success")
    result = runner.invoke(cli.app, ["catalogs", "--take", "2"])
    assert result.exit_code == 0, result.output
    assert "3 catalogs found" in result.output
    assert PIN in result.output
    assert patched.last.url.query == b"take=2"


def test_catalog(patched):
    patched.add("GET", f"/catalogs/{PIN}", fixture="catalogs.get.success")
    result = runner.invoke(cli.app, ["catalog", PIN])
    assert result.exit_code == 0, result.output
    assert "Office supplies" in result.output
    assert "120" in result.output


def test_catalog_not_found_exits_2(patched):
    result = runner.invoke(cli.app, ["catalog", "NOPE"])
    assert result.exit_code == 2
    assert "404" in result.output


def test_download(patched, tmp_path):
    patched.add("GET", f"/catalogs/{PIN}/work/products/scroll", fixture="products.scroll.page1")
    patched.add("GET", f"/catalogs/{PIN}/work/products/scroll", fixture="products.scroll.page2")
    out = tmp_path / "catalog.csv"

    result = runner.invoke(cli.app, ["download", PIN, "--area", "work", "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert "Downloaded 3 products" in result.output
    lines = out.read_bytes().decode("utf-8").split("\r\n")
    assert lines[0].startswith("Supplier SKU;Name;Price")
    assert lines[1] == "1000;Product 1000;19.50;1.00;EUR;PCE;Acme;A-1000;4006381333931"
    assert lines[3] == "3000;Product 3000;7.00;10.00;EUR;BOX;;;"


def test_publish(patched):
    patched.add("POST", f"/catalogs/{PIN}/publish", fixture="catalogs.publish.success")
    patched.add("GET", f"/catalogs/{PIN}/publish/status", fixture="catalogs.publish.status.busy")
    patched.add("GET", f"/catalogs/{PIN}/publish/status", fixture="catalogs.publish.status.done")

    result = runner.invoke(cli.app, ["publish", PIN, "--interval", "0"])

    assert result.exit_code == 0, result.output
    assert "Done" in result.output
    assert [r.method for r in patched.requests] == ["POST", "GET", "GET"]


def test_upload(patched, tmp_path):
    patched.add("POST", f"/catalogs/{PIN}/work/products", fixture="products.create.success")
    patched.add("DELETE", f"/catalogs/{PIN}/work/products/1000")
    infile = tmp_path / "upload.csv"
    infile.write_text("MODE;SPN;NAME;PRICE;ORDER_UNIT\nC;1000;Pen;1.5;PCE\nD;1000;;;\n", encoding="utf-8")

    result = runner.invoke(cli.app, ["upload", PIN, "-i", str(infile)])

    assert result.exit_code == 0, result.output
    assert "Applied 2 rows" in result.output
    assert "Line      3  D 1000" in result.output
    assert [r.method for r in patched.requests] == ["POST", "DELETE"]


def test_upload_invalid_file_exits_2(patched):
    result = runner.invoke(cli.app, ["upload", PIN], input="MODE;SPN;COLOUR\n")
    assert result.exit_code == 2
    assert "COLOUR" in result.output
    assert patched.requests == []


def test_upload_server_error_exits_2(patched):
    patched.add("POST", f"/catalogs/{PIN}/work/products", status=400, fixture="products.create.blank_spn")
    result = runner.invoke(cli.app, ["upload", PIN], input="MODE;SPN;NAME;PRICE;ORDER_UNIT\nC;1;Pen;1;PCE\n")
    assert result.exit_code == 2
    assert "SPN must not be blank" in result.output


def test_doctor_run(patched, monkeypatch):
    monkeypatch.setenv("STORE_URL", BASE_URL)
    monkeypatch.setenv("STORE_USER", "token")
    patched.add("HEAD", "/")
    patched.add("GET", "/", fixture="me.success")

    result = runner.invoke(cli.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "jane@acme.example" in result.output


def test_doctor_configure(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    written = {}

    def fake_write(values, env_path=None):
        written.update(values)
        return tmp_path / ".env"

    monkeypatch.setattr(doctor, "write_user_env_vars", fake_write)
    result = runner.invoke(
        cli.app, ["doctor", "configure"], input=f"{BASE_URL}\ntoken\nsecret\n"
    )

    assert result.exit_code == 0, result.output
    assert written == {"STORE_URL": BASE_URL, "STORE_USER": "token", "STORE_PASSWORD": "secret"}
