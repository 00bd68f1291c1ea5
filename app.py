"""Streamlit UI for restaurant seating with CSV previews and validations."""
from __future__ import annotations

# Add src to sys.path so restaurant_seating can be found
import sys
import os
import io
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

import pandas as pd
import streamlit as st

from restaurant_seating.loader import load_events, load_tables
from restaurant_seating.manager import GroupNotSeatedError, SeatingManager
from restaurant_seating.replay import (
    format_ratio,
    occupancy_summary,
    replay,
    seating_frame,
    waiting_frame,
)

# -----------------------------
# Helpers
# -----------------------------

def uploadedfile_to_df(uploaded_file) -> pd.DataFrame | None:
    """Read a Streamlit UploadedFile or file-like object into a DataFrame."""
    if uploaded_file is None:
        return None
    if hasattr(uploaded_file, "read"):
        uploaded_file.seek(0)
        return pd.read_csv(io.StringIO(uploaded_file.read().decode("utf-8")), dtype=str)
    return pd.read_csv(uploaded_file, dtype=str)

def df_to_csvio(df: pd.DataFrame) -> io.StringIO:
    """Serialize a DataFrame to a StringIO CSV buffer positioned at start."""
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    buf.seek(0)
    return buf

def validate_columns(df: pd.DataFrame, required: list[str], file_label: str) -> bool:
    """Check required columns and show an error if any are missing."""
    missing = [col for col in required if col not in df.columns]
    if missing:
        st.error(f"Error in {file_label}: missing columns: {', '.join(missing)}")
        return False
    return True

def build_and_replay(tables_df: pd.DataFrame, events_df: pd.DataFrame, strict: bool):
    """Run loaders, build the manager, and replay the events."""
    tables = load_tables(df_to_csvio(tables_df))
    operations = load_events(df_to_csvio(events_df))
    return replay(SeatingManager(tables), operations, strict=strict)

# -----------------------------
# Sidebar options
# -----------------------------

st.sidebar.header("Replay Options")
strict = st.sidebar.checkbox(
    "Stop on invalid departures",
    value=False,
    help="Abort the replay when a group leaves without being seated.",
)

# -----------------------------
# Main UI and previews
# -----------------------------

st.title("Restaurant Seating")

_tables_file = st.file_uploader("Tables CSV", type="csv")
_events_file = st.file_uploader("Events CSV", type="csv")

tables_valid = events_valid = False

if _tables_file is not None:
    tables_df = uploadedfile_to_df(_tables_file)
    st.subheader("Tables preview")
    st.dataframe(tables_df, use_container_width=True)
    tables_valid = validate_columns(tables_df, ["capacity"], "tables.csv")

if _events_file is not None:
    events_df = uploadedfile_to_df(_events_file)
    st.subheader("Events preview")
    st.dataframe(events_df, use_container_width=True)
    events_valid = validate_columns(events_df, ["action", "group"], "events.csv")

# -----------------------------
# Run button
# -----------------------------

run_disabled = not (tables_valid and events_valid)
run_clicked = st.button("Replay events", disabled=run_disabled, key="replay_button")

# -----------------------------
# Replay
# -----------------------------

if run_clicked and not run_disabled:
    try:
        result = build_and_replay(
            uploadedfile_to_df(_tables_file),
            uploadedfile_to_df(_events_file),
            strict=strict,
        )
    except (ValueError, GroupNotSeatedError) as e:
        st.error(f"Input validation error: {e}")
        st.stop()

    manager = result.manager
    counts = manager.occupancy()
    ratio = occupancy_summary(manager)["occupancy_ratio"].iloc[0]

    cols = st.columns(4)
    cols[0].metric("Tables", counts["tables"])
    cols[1].metric("Occupied", counts["occupied"])
    cols[2].metric("Waiting", counts["waiting"])
    cols[3].metric("Occupancy", format_ratio(ratio))

    st.subheader("Timeline")
    st.dataframe(result.timeline, use_container_width=True)

    seating_df = seating_frame(manager)
    st.subheader("Seated groups")
    st.dataframe(seating_df, use_container_width=True)

    st.subheader("Waiting list")
    st.dataframe(waiting_frame(manager), use_container_width=True)

    st.download_button(
        "Download seating as CSV",
        seating_df.to_csv(index=False).encode("utf-8"),
        file_name="seating.csv",
    )
