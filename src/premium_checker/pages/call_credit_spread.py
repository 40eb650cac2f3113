import streamlit as st

from premium_checker.config import load_settings
from premium_checker.data_models import TickerInput
from premium_checker.report import results_to_frame
from premium_checker.scanner import make_provider, scan_call_credit_spreads

# language helper
def tr(cn: str, en: str) -> str:
    return cn if st.session_state.get("lang_mode", "English") == "中文" else en

st.set_page_config(page_title="Call Credit Spread", layout="wide")
st.title(tr("📈 看涨信用价差筛选", "📈 Call Credit Spread Screener"))

tickers_text = st.text_input(tr("股票代码（逗号分隔）", "Tickers (comma separated)"), "NVDA")
min_strike_pct = st.slider(tr("最低卖出行权价（现价的 %）", "Min Short Strike (% of spot)"),
                           100.0, 200.0, 120.0, 1.0)
max_days = st.slider(tr("最长到期天数", "Max Days to Expiration"), 1, 365, 200, 1)
min_roi = st.slider(tr("最小年化收益率（%）", "Min Annualized ROI (%)"), 0.0, 100.0, 15.0, 0.5)
best_by_strike = st.checkbox(tr("每个行权价只保留一条", "One row per short strike"), value=True)
source = st.selectbox(tr("数据源", "Quote source"), ["nasdaq", "yahoo"])

if st.button(tr("获取价差候选", "Get Credit Spread Suggestions")):
    symbols = [s.strip().upper() for s in tickers_text.split(",") if s.strip()]
    if not symbols:
        st.stop()
    settings = load_settings(spread_max_days_to_exp=max_days, min_annualized_roi=min_roi, quote_source=source)
    inputs = [TickerInput(symbol=s, strike_threshold=min_strike_pct / 100.0) for s in symbols]
    with st.spinner(tr("正在测试多个价差宽度…", "Testing multiple spread widths...")):
        results = scan_call_credit_spreads(inputs, make_provider(settings), settings, best_by_strike=best_by_strike)

    out = results_to_frame(results, spreads=True)
    if out.empty:
        st.info(tr("没有满足条件的价差。", "No spread passed the filters."))
    else:
        out["spread_width_percent"] = (out["spread_width_percent"] * 100).round(1)
        out = out.round({"bid": 4, "max_risk": 2, "percentage_from_strike": 2, "roi": 2, "annualized_roi": 2})
        st.dataframe(out.rename(columns={
            "ticker": tr("代码", "Ticker"),
            "current_price": tr("现价", "Current"),
            "strike_price": tr("卖出行权价", "Strike"),
            "long_strike": tr("买入行权价", "Long Strike"),
            "exp_date_str": tr("到期日", "Exp Date"),
            "days_to_expiration": tr("剩余天数", "DTE"),
            "bid": tr("净收权利金", "Net Credit"),
            "max_risk": tr("最大风险", "Max Risk"),
            "spread_width_percent": tr("宽度（%）", "Width (%)"),
            "percentage_from_strike": tr("距现价（%）", "Diff (%)"),
            "roi": tr("单期收益率（%）", "ROI (%)"),
            "annualized_roi": tr("年化（%）", "Annualized (%)"),
        }), use_container_width=True, hide_index=True)
        st.caption(tr(f"共 {len(out)} 条。", f"Found {len(out)} optimal credit spread opportunities."))
