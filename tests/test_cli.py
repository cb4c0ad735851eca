from __future__ import annotations

import json

import pytest

from rental_insights import cli
from rental_insights.config import Settings

CSV_TEXT = (
    "id,price,bedrooms,review_scores_rating,host_id,host_name\n"
    "1,$100,2,4.5,h1,Alice\n"
    "2,$200,4,3.0,h1,Alice\n"
    "3,$350,3,4.9,h2,Bob\n"
)


def _settings(**overrides) -> Settings:
    values = {
        "listings_data_path": None,
        "export_path": "results.json",
        "strict_zero_bounds": False,
        "log_level": "INFO",
    }
    values.update(overrides)
    return Settings(**values)


def _answers(*replies: str):
    queue = list(replies)
    asked: list[str] = []

    def ask(question: str) -> str:
        asked.append(question)
        return queue.pop(0)

    ask.asked = asked  # type: ignore[attr-defined]
    return ask


@pytest.fixture()
def dataset(tmp_path):
    path = tmp_path / "listings.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    return path


def test_parse_decimal_bound() -> None:
    assert cli.parse_decimal_bound("150") == 150.0
    assert cli.parse_decimal_bound(" 99.5 dollars") == 99.5
    assert cli.parse_decimal_bound("") is None
    assert cli.parse_decimal_bound("abc") is None
    assert cli.parse_decimal_bound("0") is None


def test_parse_rooms_bound() -> None:
    assert cli.parse_rooms_bound("3") == 3
    assert cli.parse_rooms_bound("2.7") == 2
    assert cli.parse_rooms_bound("") is None
    assert cli.parse_rooms_bound("0") is None


def test_interactive_session_prompts_for_everything(dataset, tmp_path, capsys) -> None:
    output = tmp_path / "results.json"
    ask = _answers(str(dataset), "150", "", "", "", "", "", "yes", str(output))
    args = cli.build_parser().parse_args([])

    cli.run(args, _settings(), ask=ask)

    out = capsys.readouterr().out
    assert "Loaded 3 listings." in out
    assert "Filtered 2 listings based on your criteria." in out
    assert "ID: 2, Price: $200" in out
    assert "Average Price per Room: $83.33" in out
    assert "Host: Alice | Listings: 1" in out
    assert f"Results exported to {output}" in out
    assert ask.asked[0].startswith("Please enter the name of the CSV file")
    assert json.loads(output.read_text(encoding="utf-8"))["statistics"] == {
        "totalListings": 2,
        "averagePricePerRoom": "83.33",
    }


def test_flags_skip_prompts(dataset, tmp_path, capsys) -> None:
    output = tmp_path / "out.json"
    args = cli.build_parser().parse_args(
        ["--file", str(dataset), "--min-review-score", "4", "--export", str(output)]
    )

    cli.run(args, _settings(), ask=_answers())

    out = capsys.readouterr().out
    assert "Filtered 2 listings based on your criteria." in out
    assert output.exists()


def test_declining_export_writes_nothing(dataset, tmp_path, capsys) -> None:
    args = cli.build_parser().parse_args(["--file", str(dataset), "--max-price", "50"])

    cli.run(args, _settings(), ask=_answers("no"))

    out = capsys.readouterr().out
    assert "Average Price per Room: $NaN" in out
    assert "No host data available for ranking." in out
    assert list(tmp_path.iterdir()) == [dataset]


def test_data_path_falls_back_to_settings(dataset, capsys) -> None:
    args = cli.build_parser().parse_args(["--no-input"])

    cli.run(args, _settings(listings_data_path=str(dataset)), ask=_answers())

    assert "Filtered 3 listings based on your criteria." in capsys.readouterr().out


def test_main_reports_errors_and_exits_nonzero(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.delenv("LISTINGS_DATA_PATH", raising=False)
    bad = tmp_path / "listings.parquet"
    bad.write_text("x", encoding="utf-8")

    code = cli.main(["--no-input", "--file", str(bad)])

    assert code == 1
    assert "An error occurred: UnsupportedDatasetError" in capsys.readouterr().err


def test_main_without_dataset_in_no_input_mode(monkeypatch, capsys) -> None:
    monkeypatch.delenv("LISTINGS_DATA_PATH", raising=False)

    assert cli.main(["--no-input"]) == 1
    assert "No dataset given" in capsys.readouterr().err
