import pandas as pd
import streamlit as st


def card_header(title, info=None):
    """
    Renders the header of a dashboard tile.
    Args:
        title: The title of the card (e.g. "DRIVER STANDINGS")
        info: Optional help text shown next to the title.
    """
    col1, col2 = st.columns([4, 1])
    with col1:
        st.markdown(f"**{title}**")
    with col2:
        if info:
            st.caption("ℹ️", help=info)


def no_data(message="No data for this selection."):
    st.markdown(f"<div style='padding:1rem; color:#888'>{message}</div>", unsafe_allow_html=True)


# ------------------------------------------------------
# TABLE FRAMES
# ------------------------------------------------------
def standings_frame(table):
    return pd.DataFrame([
        {"Pos": r.position, "Driver": r.driver_name, "Points": r.points, "Wins": r.wins,
         "Selected": r.is_highlighted, "driver_id": r.driver_id}
        for r in table.rows
    ])


def highlight_selected(frame, flag="Selected"):
    """Styler that tints the selected driver's row."""
    def _row(row):
        return ["background-color: rgba(56, 125, 255, 0.2); font-weight: bold" if row[flag] else ""] * len(row)
    return frame.style.apply(_row, axis=1)


def _arrow(delta):
    if delta is None: return "Pit"
    if delta > 0: return f"▲ {delta}"
    if delta < 0: return f"▼ {abs(delta)}"
    return "-"


def circuit_grid_frame(view):
    return pd.DataFrame([
        {"Driver": r.driver_name, "Start": "Pit" if r.pit_lane_start else r.start, "Finish": r.finish,
         "+/-": _arrow(r.delta), "driver_id": r.driver_id}
        for r in view.rows
    ])


def tally_frame(tallies, metric, label):
    return pd.DataFrame([{"Driver": t.surname, label: getattr(t, metric)} for t in tallies])


def fastest_lap_frame(records):
    return pd.DataFrame([{"Driver": r.code, "Race": r.race_name, "Speed (km/h)": r.speed} for r in records])


def pit_stop_frame(records):
    return pd.DataFrame([
        {"Driver": r.code, "Race": r.race_name, "Lap": r.lap, "Stop (s)": round(r.duration_s, 3)}
        for r in records
    ])


# ------------------------------------------------------
# CLICK SELECTION
# ------------------------------------------------------
def clicked_point_id(event):
    """customdata id of the first clicked plotly point, or None."""
    points = (event or {}).get("selection", {}).get("points", [])
    for point in points:
        value = point.get("customdata")
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if value is not None:
            return str(value)
    return None


def clicked_row_id(event, frame, column="driver_id"):
    """Id column of the selected dataframe row, or None."""
    rows = (event or {}).get("selection", {}).get("rows", [])
    if not rows or rows[0] >= len(frame):
        return None
    return frame.iloc[rows[0]][column]
