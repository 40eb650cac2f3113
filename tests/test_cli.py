import datetime as dt
import logging

import pytest
from typer.testing import CliRunner

from conftest import FakeProvider
from premium_checker import cli
from premium_checker.data_models import ChainLink, OptionsChainQuote
from premium_checker.yahoo_client import expiry_label, expiry_token

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logging.getLogger("premium_checker").handlers.clear()


def _quote(kind):
    exp = dt.date.today() + dt.timedelta(days=20)
    rows = [ChainLink(expirygroup=expiry_label(exp))]
    if kind == "put":
        rows.append(ChainLink(strike="95.00", p_Bid="3.00", expiryDate=expiry_token(exp)))
    else:
        rows += [
            ChainLink(strike="110.00", c_Bid="2.00", c_Ask="2.10", expiryDate=expiry_token(exp)),
            ChainLink(strike="113.00", c_Bid="0.90", c_Ask="1.00", expiryDate=expiry_token(exp)),
        ]
    return OptionsChainQuote(rows=rows, current_price=100.0)


def test_puts_command(tmp_path, monkeypatch):
    f = tmp_path / "put.txt"
    f.write_text("AAA,0.99\n")
    monkeypatch.setattr(cli, "make_provider", lambda s: FakeProvider({"AAA": _quote("put")}))
    result = runner.invoke(cli.app, ["puts", str(f), "--min-roi", "10"])
    assert result.exit_code == 0, result.output
    assert "Found 1 put opportunities" in result.output


def test_spreads_command(tmp_path, monkeypatch):
    f = tmp_path / "creditspread.txt"
    f.write_text("AAA,1.05\n")
    monkeypatch.setattr(cli, "make_provider", lambda s: FakeProvider({"AAA": _quote("call")}))
    result = runner.invoke(cli.app, ["spreads", str(f)])
    assert result.exit_code == 0, result.output
    assert "Found 1 optimal credit spread opportunities" in result.output
