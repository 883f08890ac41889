import streamlit as st

# --- CORE IMPORTS ---
try:
    from gridlens.config import ALL, DATA_DIR
    from gridlens.dashboard import Dashboard, available_years
    from gridlens.data_manager import DataManager
    from gridlens.performance_matrix import MatrixMode
    from ui.charts import matrix_figure, trajectory_figure, world_map_figure
    from ui.layout_factory import (card_header, circuit_grid_frame, clicked_point_id, clicked_row_id,
                                   fastest_lap_frame, highlight_selected, no_data, pit_stop_frame,
                                   standings_frame, tally_frame)
except ImportError as e:
    st.error(f"⚠️ CORE MODULE MISSING: {e}")
    st.stop()

# ------------------------------------------------------
# 1. PAGE CONFIGURATION
# ------------------------------------------------------
st.set_page_config(layout="wide", page_title="GridLens", page_icon="🏎️")

st.markdown("""
<style>
    html, body, [class*="css"] {
        background-color: #0e1117;
        color: #e2e8f0;
    }
    div[data-testid="stVerticalBlock"] > div[style*="background-color"] {
        background: #1e293b;
        border: 1px solid #334155;
        border-radius: 8px;
        padding: 15px;
    }
</style>
""", unsafe_allow_html=True)


# ------------------------------------------------------
# 2. DATA + STATE INITIALIZATION
# ------------------------------------------------------
@st.cache_resource(show_spinner="Loading dataset...")
def get_data_manager(data_dir):
    dm = DataManager(data_dir)
    dm.load()
    return dm


dm = get_data_manager(DATA_DIR)
if not dm.is_ready:
    st.error(f"❌ Dataset unavailable: {dm.error}")
    st.stop()

if 'dashboard' not in st.session_state: st.session_state.dashboard = Dashboard(dm.store)
dash = st.session_state.dashboard


def _sync_filters(view):
    st.session_state.sel_circuit = view.selection.circuit
    st.session_state.sel_driver = view.selection.driver


def _on_year():
    _sync_filters(dash.set_year(st.session_state.sel_year))


def _on_circuit():
    dash.set_circuit(st.session_state.sel_circuit)


def _on_driver():
    dash.set_driver(st.session_state.sel_driver)


def _on_reset():
    _sync_filters(dash.reset_filters())


# Click-to-select: a map marker toggles its circuit, a driver row or dot toggles the driver
def _on_map_click():
    circuit_id = clicked_point_id(st.session_state.map_click)
    if circuit_id:
        _sync_filters(dash.toggle_circuit(circuit_id))


def _on_scatter_click():
    driver_id = clicked_point_id(st.session_state.scatter_click)
    if driver_id:
        _sync_filters(dash.toggle_driver(driver_id))


def _on_row_click(key, frame):
    def _callback():
        driver_id = clicked_row_id(st.session_state[key], frame)
        if driver_id:
            _sync_filters(dash.toggle_driver(driver_id))
    return _callback


view = dash.recompute()

# ------------------------------------------------------
# 3. SIDEBAR (FILTERS)
# ------------------------------------------------------
with st.sidebar:
    st.title("🏎️ GridLens")
    st.caption("SEASON EXPLORER")
    st.markdown("---")

    years = available_years(dm.store)
    st.selectbox("Season", years, index=years.index(view.selection.year) if view.selection.year in years else 0,
                 key="sel_year", on_change=_on_year)

    circuit_labels = {ALL: "All Circuits", **{o.value: o.label for o in view.circuit_options}}
    st.selectbox("Circuit", list(circuit_labels), format_func=circuit_labels.get,
                 key="sel_circuit", on_change=_on_circuit)

    driver_labels = {ALL: "All Drivers", **{o.value: o.label for o in view.driver_options}}
    st.selectbox("Driver", list(driver_labels), format_func=driver_labels.get,
                 key="sel_driver", on_change=_on_driver)

    st.button("↺ Reset Filters", use_container_width=True, on_click=_on_reset)

if not view.has_data:
    no_data(f"No races recorded for {view.selection.year}.")
    st.stop()

# ------------------------------------------------------
# 4. MAP + STANDINGS
# ------------------------------------------------------
col_map, col_std = st.columns([1.6, 1], gap="medium")

with col_map:
    with st.container(border=True):
        card_header("🗺️ SEASON CALENDAR", "Grand Prix locations. With a driver picked, grey marks races without points.")
        st.plotly_chart(world_map_figure(view.markers), use_container_width=True,
                        key="map_click", on_select=_on_map_click, selection_mode="points")

with col_std:
    with st.container(border=True):
        race = view.standings.race
        card_header("🏆 DRIVER STANDINGS", f"After round {race.round}: {race.name}" if race else None)
        if view.standings.is_empty:
            no_data()
        else:
            standings = standings_frame(view.standings)
            st.dataframe(highlight_selected(standings), hide_index=True, use_container_width=True, height=420,
                         column_config={"Selected": None, "driver_id": None},
                         key="standings_click", on_select=_on_row_click("standings_click", standings),
                         selection_mode="single-row")

# ------------------------------------------------------
# 5. TRAJECTORY + PERFORMANCE MATRIX
# ------------------------------------------------------
col_traj, col_mat = st.columns(2, gap="medium")

with col_traj:
    with st.container(border=True):
        card_header("📈 CHAMPIONSHIP TRAJECTORY", "Cumulative points of the top 3 and the selected driver.")
        highlight = [r.round for r in view.races if r.circuit_id == view.selection.circuit]
        if view.trajectories:
            st.plotly_chart(trajectory_figure(view.trajectories, highlight), use_container_width=True)
        else:
            no_data()

with col_mat:
    with st.container(border=True):
        matrix = view.matrix
        card_header(f"🎯 PERFORMANCE MATRIX · {matrix.mode.value.replace('_', ' + ')}",
                    "Start vs finish. Green gained places, red lost them.")
        if matrix.is_empty:
            no_data("No race data for this circuit/year." if matrix.mode is MatrixMode.CIRCUIT
                    else "No historical data for this selection.")
        elif matrix.mode is MatrixMode.CIRCUIT:
            grid = circuit_grid_frame(matrix)
            st.dataframe(grid, hide_index=True, use_container_width=True, height=360,
                         column_config={"driver_id": None},
                         key="grid_click", on_select=_on_row_click("grid_click", grid),
                         selection_mode="single-row")
        elif matrix.mode is MatrixMode.SEASON:
            st.plotly_chart(matrix_figure(matrix), use_container_width=True,
                            key="scatter_click", on_select=_on_scatter_click, selection_mode="points")
        else:
            st.plotly_chart(matrix_figure(matrix), use_container_width=True)

# ------------------------------------------------------
# 6. INSIGHT LISTS
# ------------------------------------------------------
st.markdown("#### 📊 Season Insights")
ins = view.insights
lists = [
    ("⬆️ TOP OVERTAKERS", tally_frame(ins.gained, "gained", "Pos Gained")),
    ("⬇️ POSITIONS LOST", tally_frame(ins.lost, "lost", "Pos Lost")),
    ("💥 MOST CRASHES", tally_frame(ins.crashes, "crashes", "Crashes")),
    ("⚡ FASTEST LAPS", fastest_lap_frame(ins.fastest_laps)),
    ("🟣 FASTEST LAP AWARDS", tally_frame(ins.fastest_lap_leaders, "fastest_lap_count", "Fastest Laps")),
    ("🔧 QUICKEST PIT STOPS", pit_stop_frame(ins.quickest_pit_stops)),
]
for row_start in range(0, len(lists), 3):
    for col, (title, frame) in zip(st.columns(3), lists[row_start:row_start + 3]):
        with col:
            with st.container(border=True):
                card_header(title)
                if frame.empty: no_data()
                else: st.dataframe(frame, hide_index=True, use_container_width=True)
