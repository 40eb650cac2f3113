import streamlit as st

st.set_page_config(page_title="Option Premium Checker", layout="wide")

# Global language selector (stored in session state so pages can read it)
LANG_OPTIONS = ["English", "中文"]
if "lang_mode" not in st.session_state:
    st.session_state["lang_mode"] = LANG_OPTIONS[0]

st.sidebar.selectbox(
    "Language / 语言",
    LANG_OPTIONS,
    index=LANG_OPTIONS.index(st.session_state["lang_mode"]),
    key="lang_mode",
)


def tr(cn: str, en: str) -> str:
    return cn if st.session_state.get("lang_mode") == "中文" else en


st.title(tr("期权权利金筛选器", "Option Premium Checker"))

st.markdown(tr(
    """
    1. **卖出看跌 (Sell Put)** – 按年化收益率筛选卖出看跌合约，可只看“樱桃”
    2. **看涨信用价差 (Call Credit Spread)** – 多个价差宽度中挑出年化最高的组合

    请在左侧导航栏选择页面进入。语言设置将保存在会话中，供各页面使用。
    """,
    """
    Welcome!
    1. **Sell Put** – Puts above a minimum annualized ROI, optionally cherries only
    2. **Call Credit Spread** – Best annualized spread per strike across several widths

    Use the left navigation to open a page. Your language preference is stored in the session.
    """
))
