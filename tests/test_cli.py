"""Tests for the command line entry point."""

import orjson
import pytest

from tascreen.__main__ import main


@pytest.fixture
def data_file(tmp_path, make_security, rising_closes):
    securities = [
        make_security(1, rising_closes, name="Riser"),
        make_security(2, [100.0 + i for i in range(19)], name="Short"),
    ]
    path = tmp_path / "securities.json"
    path.write_bytes(orjson.dumps([s.model_dump(by_alias=True) for s in securities]))
    return path


class TestCLI:
    """Tests for main()."""

    def test_list_presets(self, capsys):
        assert main(["--list-presets"]) == 0

        out = capsys.readouterr().out
        assert "oversold" in out
        assert "breakout_candidate" in out

    def test_preset_run_to_stdout(self, data_file, capsys):
        assert main(["--data", str(data_file), "--preset", "overbought"]) == 0

        results = orjson.loads(capsys.readouterr().out)
        assert [r["securityId"] for r in results] == [1]
        assert results[0]["matchedFilters"] == ["RSI (14) über 70"]
        assert set(results[0]["currentValues"]) >= {"change1d", "change5d", "change20d"}
        assert results[0]["change1d"] == results[0]["currentValues"]["change1d"]

    def test_filters_file_to_output(self, data_file, tmp_path):
        filters_path = tmp_path / "filters.json"
        filters_path.write_bytes(orjson.dumps([
            {"id": "p", "indicator": "price", "condition": "above", "value": 0},
            {"id": "off", "indicator": "price", "condition": "below", "value": 0, "enabled": False},
        ]))
        output = tmp_path / "out.json"

        code = main([
            "--data", str(data_file),
            "--filters", str(filters_path),
            "--locale", "en",
            "--output", str(output),
        ])

        assert code == 0
        results = orjson.loads(output.read_bytes())
        assert len(results) == 1
        assert results[0]["matchedFilters"] == ["Price above 0"]

    def test_missing_data(self):
        assert main(["--preset", "oversold"]) == 2

    def test_no_filters(self, data_file):
        assert main(["--data", str(data_file)]) == 2

    def test_unknown_preset(self, data_file):
        assert main(["--data", str(data_file), "--preset", "nope"]) == 2

    def test_invalid_data(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_bytes(b'{"not": "a list"}')

        assert main(["--data", str(path), "--preset", "oversold"]) == 2
