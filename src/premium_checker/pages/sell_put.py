import streamlit as st

from premium_checker.config import load_settings
from premium_checker.data_models import TickerInput
from premium_checker.report import results_to_frame
from premium_checker.scanner import make_provider, scan_puts

# language helper (read from session if available)
def tr(cn: str, en: str) -> str:
    return cn if st.session_state.get("lang_mode", "English") == "中文" else en

st.set_page_config(page_title="Sell Put", layout="wide")
st.title(tr("📉 卖出看跌合约筛选", "📉 Sell Put Screener"))

tickers_text = st.text_input(
    tr("股票代码（逗号分隔）", "Tickers (comma separated)"),
    "NVDA,AAPL",
    help=tr("例如 NVDA、AAPL、TSLA 等", "e.g., NVDA, AAPL, TSLA"),
)
max_strike_pct = st.slider(tr("最高行权价（现价的 %）", "Max Strike (% of spot)"), 50.0, 100.0, 90.0, 1.0)
max_days = st.slider(tr("最长到期天数", "Max Days to Expiration"), 1, 120, 45, 1)
min_roi = st.slider(tr("最小年化收益率（%）", "Min Annualized ROI (%)"), 0.0, 100.0, 15.0, 0.5)
roi_strategy = st.selectbox(tr("年化方式", "Annualization"), ["compound", "apy", "leveraged"])
cherries_only = st.checkbox(tr("只看樱桃", "Cherries only"), value=False)
source = st.selectbox(tr("数据源", "Quote source"), ["nasdaq", "yahoo"])

st.caption(tr("樱桃 = 同一到期日中，比前一档更接近现价且权利金更高的合约。",
              "Cherry = closer to the money and a higher bid than the previous strike of the same expiry."))

if st.button(tr("获取推荐合约", "Get Sell Put Suggestions")):
    symbols = [s.strip().upper() for s in tickers_text.split(",") if s.strip()]
    if not symbols:
        st.stop()
    settings = load_settings(
        put_max_days_to_exp=max_days, min_annualized_roi=min_roi, roi_strategy=roi_strategy,
        cherries_only=cherries_only, quote_source=source,
    )
    inputs = [TickerInput(symbol=s, strike_threshold=max_strike_pct / 100.0) for s in symbols]
    with st.spinner(tr("正在获取期权链…", "Fetching option chains...")):
        results = scan_puts(inputs, make_provider(settings), settings)

    out = results_to_frame(results)
    if out.empty:
        st.info(tr("没有满足条件的合约，试试调低最小年化或放宽行权价。",
                   "Nothing passed. Try a lower minimum ROI or a higher max strike."))
    else:
        out = out.round({"percentage_from_strike": 2, "roi": 2, "annualized_roi": 2})
        st.dataframe(out.rename(columns={
            "ticker": tr("代码", "Ticker"),
            "current_price": tr("现价", "Current"),
            "strike_price": tr("行权价", "Strike"),
            "exp_date_str": tr("到期日", "Exp Date"),
            "days_to_expiration": tr("剩余天数", "DTE"),
            "bid": tr("买价", "Bid"),
            "percentage_from_strike": tr("距现价（%）", "Diff (%)"),
            "roi": tr("单期收益率（%）", "ROI (%)"),
            "annualized_roi": tr("年化（%）", "Annualized (%)"),
        }), use_container_width=True, hide_index=True)
