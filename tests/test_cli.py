import json

from duckweb.__main__ import main


def test_tools_command_prints_definitions(tmp_path, capsys) -> None:
    code = main(["--config", str(tmp_path / "config.json"), "tools"])

    definitions = json.loads(capsys.readouterr().out)
    assert code == 0
    assert [d["function"]["name"] for d in definitions] == ["search", "fetch_content"]


def test_search_command(monkeypatch, tmp_path, capsys) -> None:
    seen: dict = {}

    async def fake_search(**kwargs):
        seen.update(kwargs)
        return (
            '<div class="result"><a class="result__a" href="https://example.com">Example</a>'
            '<a class="result__snippet">Snippet</a></div>'
        )

    monkeypatch.setattr("duckweb.agent.tools.websearch.service.search_duckduckgo", fake_search)

    code = main(["--config", str(tmp_path / "config.json"), "search", "example", "-n", "3"])

    out = capsys.readouterr().out
    assert code == 0
    assert "1. Example" in out
    assert seen["query"] == "example"


def test_fetch_command_reports_errors(tmp_path, capsys) -> None:
    code = main(["--config", str(tmp_path / "config.json"), "fetch", "ftp://example.com"])

    assert code == 1
    assert capsys.readouterr().out.startswith("Error: invalid URL")
