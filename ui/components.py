from typing import Any, Dict, List

import pandas as pd
import streamlit as st


def metric_row(metrics: List[Dict[str, Any]]):
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        col.metric(m["label"], m["value"])


def render_table(title: str, data: List[Dict[str, Any]], columns: List[str]):
    st.markdown(f"**{title}**")
    if not data:
        st.info("Sem dados")
        return
    df = pd.DataFrame(data)
    st.dataframe(df[columns], use_container_width=True, hide_index=True)


def headline(caption: str, value: str, size: str = "3rem", muted: bool = False):
    color = "gray" if muted else "inherit"
    st.caption(caption)
    st.markdown(
        f"<h3 style='text-align:center;font-size:{size};font-weight:800;color:{color}'>{value}</h3>",
        unsafe_allow_html=True,
    )


def number_field(label: str, key: str, value: float, step: float, on_change, args=()):
    """Number input bound to session state; ``on_change`` receives the widget key first."""
    if key not in st.session_state:
        st.session_state[key] = float(value)
    return st.number_input(
        label,
        min_value=0.0,
        step=step,
        key=key,
        on_change=on_change,
        args=(key, *args),
    )


def error(msg: str):
    st.error(msg)
