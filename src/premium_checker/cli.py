"""
Console entry point: ``premium-checker puts FILE`` / ``premium-checker spreads FILE``.

FILE holds ``SYMBOL,THRESHOLD`` lines. For puts the threshold is the max
strike, for spreads the min short strike, both relative to current price.
"""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from premium_checker.config import Settings, load_settings
from premium_checker.data_models import AnalysisResult
from premium_checker.inputs import parse_credit_spread_params, parse_put_params
from premium_checker.logging_utils import setup_logging
from premium_checker.scanner import make_provider, scan_call_credit_spreads, scan_puts

app = typer.Typer(add_completion=False, help="Rank put sales and call credit spreads by annualized ROI.")
console = Console()


def _signed(x: float, digits: int = 3) -> str:
    color = "green" if x > 0 else "red"
    return f"[{color}]{x:.{digits}f}%[/{color}]"


def _settings(**overrides) -> Settings:
    return load_settings(**{k: v for k, v in overrides.items() if v is not None})


def put_table(results: list[AnalysisResult]) -> Table:
    table = Table(title="Put candidates")
    for col in ["Ticker", "Current", "Strike", "Exp Date", "D2Exp", "Bid", "Diff", "ROI", "Annual ROI"]:
        table.add_column(col, justify="left" if col in ("Ticker", "Exp Date") else "right")
    for r in results:
        table.add_row(
            r.ticker, f"{r.current_price:.2f}", f"{r.strike_price:.2f}", r.exp_date_str,
            str(r.days_to_expiration), f"{r.bid:.2f}",
            _signed(r.percentage_from_strike), _signed(r.roi), _signed(r.annualized_roi, 2),
        )
    return table


def spread_table(results: list[AnalysisResult]) -> Table:
    table = Table(title="Call credit spreads")
    for col in ["Ticker", "Current", "Strike", "Long Strike", "Exp Date", "D2Exp",
                "Net Credit", "Width %", "ROI", "Annual ROI"]:
        table.add_column(col, justify="left" if col in ("Ticker", "Exp Date") else "right")
    for r in results:
        table.add_row(
            r.ticker, f"{r.current_price:.2f}", f"{r.strike_price:.2f}", f"{(r.long_strike or 0):.2f}",
            r.exp_date_str, str(r.days_to_expiration), f"{r.bid:.4f}",
            f"{(r.spread_width_percent or 0) * 100:.1f}%", f"{r.roi:.2f}%", f"{r.annualized_roi:.2f}%",
        )
    return table


@app.command("puts")
def puts_cmd(
    input_file: str = typer.Argument("data/put.txt", help="SYMBOL,MAX_STRIKE lines"),
    max_days: Optional[int] = typer.Option(None, "--max-days", help="Max days to expiration"),
    min_roi: Optional[float] = typer.Option(None, "--min-roi", help="Min annualized ROI (%)"),
    cherries: Optional[bool] = typer.Option(None, "--cherries/--all", help="Only show cherries"),
    cherry_mode: Optional[str] = typer.Option(None, "--cherry-mode", help="grouped|sequential"),
    threshold_mode: Optional[str] = typer.Option(None, "--threshold-mode", help="multiplier|absolute"),
    roi_strategy: Optional[str] = typer.Option(None, "--roi-strategy", help="compound|apy|leveraged"),
    source: Optional[str] = typer.Option(None, "--source", help="nasdaq|yahoo"),
    workers: Optional[int] = typer.Option(None, "--workers", help="Tickers fetched in parallel"),
):
    """Put sales above the annualized-ROI cutoff, best first."""
    settings = _settings(
        put_max_days_to_exp=max_days, min_annualized_roi=min_roi, cherries_only=cherries,
        cherry_mode=cherry_mode, threshold_mode=threshold_mode, roi_strategy=roi_strategy,
        quote_source=source, workers=workers,
    )
    setup_logging(settings.log_level, settings.log_file)
    results = scan_puts(parse_put_params(input_file), make_provider(settings), settings)
    console.print(put_table(results))
    console.print(f"\nFound {len(results)} put opportunities.")


@app.command("spreads")
def spreads_cmd(
    input_file: str = typer.Argument("data/creditspread.txt", help="SYMBOL,MIN_STRIKE lines"),
    max_days: Optional[int] = typer.Option(None, "--max-days", help="Max days to expiration"),
    min_roi: Optional[float] = typer.Option(None, "--min-roi", help="Min annualized ROI (%)"),
    cherries: Optional[bool] = typer.Option(None, "--cherries/--all", help="Only show cherries"),
    cherry_mode: Optional[str] = typer.Option(None, "--cherry-mode", help="grouped|sequential"),
    threshold_mode: Optional[str] = typer.Option(None, "--threshold-mode", help="multiplier|absolute"),
    best_by_strike: bool = typer.Option(True, "--best-by-strike/--all-expiries",
                                        help="One row per ticker and short strike"),
    source: Optional[str] = typer.Option(None, "--source", help="nasdaq|yahoo"),
    workers: Optional[int] = typer.Option(None, "--workers", help="Tickers fetched in parallel"),
):
    """Call credit spreads over several widths, best per strike, best first."""
    settings = _settings(
        spread_max_days_to_exp=max_days, min_annualized_roi=min_roi, cherries_only=cherries,
        cherry_mode=cherry_mode, threshold_mode=threshold_mode, quote_source=source, workers=workers,
    )
    setup_logging(settings.log_level, settings.log_file)
    console.print(f"Testing multiple spread widths with minimum annualized ROI of {settings.min_annualized_roi}%")
    results = scan_call_credit_spreads(
        parse_credit_spread_params(input_file), make_provider(settings), settings,
        best_by_strike=best_by_strike,
    )
    console.print(spread_table(results))
    console.print(f"\nFound {len(results)} optimal credit spread opportunities.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
