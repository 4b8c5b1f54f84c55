import json

from tools.cli import main


def test_render_prints_result(capsys) -> None:
    assert main(["render", "monopoly"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["results"]["monopoly_price"] == 125


def test_render_rejects_bad_values(capsys) -> None:
    assert main(["render", "supply-demand", "--set", "demandSlope=4"]) == 2
    assert "Demand Slope" in capsys.readouterr().err


def test_render_rejects_malformed_assignment(capsys) -> None:
    assert main(["render", "supply-demand", "--set", "demandSlope"]) == 2


def test_render_writes_exports(tmp_path, capsys) -> None:
    code = main([
        "render", "tax-incidence",
        "--set", "taxAmount=40",
        "--out-dir", str(tmp_path),
        "--png", "--csv", "--embed", "--pdf",
    ])
    assert code == 0
    assert (tmp_path / "economic-graph.png").read_bytes().startswith(b"\x89PNG")
    assert "taxAmount,40" in (tmp_path / "economic_graph_data.csv").read_text()
    assert (tmp_path / "economic-graph-embed.html").exists()
    assert (tmp_path / "economic-graph.pdf").read_bytes().startswith(b"%PDF")


def test_list(capsys) -> None:
    assert main(["list"]) == 0
    assert "tax-incidence: Tax Incidence" in capsys.readouterr().out
