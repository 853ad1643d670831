from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

import main
from tests.helpers.csv_rows import KRAKEN_FIELDNAMES, SUBSCAN_FIELDNAMES, csv_bytes, ledger_row, subscan_row


def _subscan_file(path: Path, *dates: datetime | str) -> Path:
    path.write_bytes(csv_bytes(SUBSCAN_FIELDNAMES, [subscan_row(ts=ts, amount="1.25") for ts in dates]))
    return path


def test_subscan_to_bitcoin_tax(tmp_path: Path) -> None:
    source = _subscan_file(tmp_path / "subscan.csv", datetime(2021, 2, 1), datetime(2021, 5, 1))
    target = tmp_path / "output.csv"

    main.main([str(source), str(target), "-i", "subscan", "--coin", "DOT", "-y", "2021", "-q", "Q1"])

    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines == ["Date,Action,Account,Symbol,Volume", "2021-02-01 00:00:00,INCOME,DOT STAKING,DOT,1.25"]


def test_kraken_to_bitcoin_tax(tmp_path: Path) -> None:
    source = tmp_path / "kraken.csv"
    source.write_bytes(
        csv_bytes(
            KRAKEN_FIELDNAMES,
            [
                ledger_row(ts=datetime(2021, 4, 2), tx_type="staking", asset="DOT.S", amount="0.3"),
                ledger_row(ts=datetime(2021, 4, 2), tx_type="staking", asset="KSM.S", amount="0.02"),
                ledger_row(ts=datetime(2021, 4, 3), tx_type="deposit", asset="EUR", amount="100"),
            ],
        )
    )
    target = tmp_path / "output.csv"

    main.main([str(source), str(target), "-i", "kraken", "--coin", "DOT", "-y", "2021", "-q", "Q2"])

    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[1:] == [
        "2021-04-02 00:00:00,INCOME,DOT STAKING,DOT,0.3",
        "2021-04-02 00:00:00,INCOME,KSM STAKING,KSM,0.02",
    ]


def test_parse_error_exits_non_zero_without_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _subscan_file(tmp_path / "subscan.csv", datetime(2021, 2, 1), "2021-02-31 00:00:00")
    target = tmp_path / "output.csv"

    with pytest.raises(SystemExit) as exc_info:
        main.main([str(source), str(target), "-y", "2021"])

    assert exc_info.value.code == 1
    assert not target.exists()
    assert "subscan:3" in capsys.readouterr().err


def test_configuration_error_is_reported_before_reading_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "does-not-exist.csv"
    target = tmp_path / "output.csv"

    with pytest.raises(SystemExit) as exc_info:
        main.main([str(missing), str(target), "-o", "turbotax"])

    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert "output_format" in err
    assert "does-not-exist" not in err
    assert not target.exists()


def test_missing_input_file_is_io_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "does-not-exist.csv"

    with pytest.raises(SystemExit) as exc_info:
        main.main([str(missing), str(tmp_path / "output.csv")])

    assert exc_info.value.code == 1
    assert "does-not-exist.csv" in capsys.readouterr().err


def test_settings_provide_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TAXMAT_DEFAULT_COIN", "KSM")
    monkeypatch.setenv("TAXMAT_DEFAULT_OUTPUT_FORMAT", "cointracking")
    source = _subscan_file(tmp_path / "subscan.csv", datetime(2021, 7, 7))
    target = tmp_path / "output.csv"

    main.main([str(source), str(target)])

    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("Type,Buy Amount,Buy Currency")
    assert lines[1].startswith("Income,1.25,KSM,0,USD")


def test_invalid_log_level_setting_exits_with_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("TAXMAT_LOG_LEVEL", "loud")
    source = _subscan_file(tmp_path / "subscan.csv", datetime(2021, 7, 7))
    target = tmp_path / "output.csv"

    with pytest.raises(SystemExit) as exc_info:
        main.main([str(source), str(target)])

    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("error: invalid settings: log_level")
    assert not target.exists()
