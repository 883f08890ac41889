# ui/charts.py

import plotly.graph_objects as go

from gridlens.performance_matrix import MatrixMode

F1_RED = "#E10600"
GAIN = "#00D2BE"
SELECTED = "#387DFF"
NEUTRAL = "#888888"
BG = "#0e1117"


def _dark(fig, height=360):
    fig.update_layout(height=height, template="plotly_dark", paper_bgcolor=BG, plot_bgcolor=BG,
                      margin=dict(l=10, r=10, t=30, b=10), showlegend=False)
    return fig


def _delta_color(delta):
    if delta > 0: return GAIN
    if delta < 0: return F1_RED
    return NEUTRAL


# ==========================================
# 1. WORLD MAP
# ==========================================
def world_map_figure(markers):
    colors, sizes, opacity, hover = [], [], [], []
    for m in markers:
        if m.is_selected: colors.append(SELECTED)
        elif m.scored is False: colors.append("#444444")
        else: colors.append(F1_RED)
        sizes.append(16 if m.is_selected else 9)
        opacity.append(0.25 if m.dimmed else 1.0)

        text = f"<b>{m.name}</b><br>{m.location}, {m.country}"
        if m.driver_result:
            text += f"<br>Position: {m.driver_result.position}<br>Points: {m.driver_result.points:g}"
        hover.append(text)

    fig = go.Figure(go.Scattergeo(
        lon=[m.lng for m in markers], lat=[m.lat for m in markers],
        customdata=[m.circuit_id for m in markers],
        mode="markers", hovertext=hover, hoverinfo="text",
        marker=dict(color=colors, size=sizes, opacity=opacity, line=dict(color="#ffffff", width=1)),
    ))
    fig.update_geos(projection_type="natural earth", showcountries=True, countrycolor="#334155",
                    showland=True, landcolor="#1e293b", bgcolor=BG, showocean=False)
    return _dark(fig, height=420)


# ==========================================
# 2. POINTS TRAJECTORY
# ==========================================
def trajectory_figure(trajectories, highlight_rounds=()):
    fig = go.Figure()
    for rnd in highlight_rounds:
        fig.add_vrect(x0=rnd - 0.5, x1=rnd + 0.5, fillcolor=F1_RED, opacity=0.15, line_width=0)

    for t in trajectories:
        color = SELECTED if t.is_selected else (NEUTRAL if t.in_top else "#444444")
        fig.add_trace(go.Scatter(
            x=[p.round for p in t.series], y=[p.points for p in t.series],
            name=t.code, mode="lines+markers" if t.is_selected else "lines",
            line=dict(color=color, width=3 if t.is_selected else 1.5, shape="spline"),
        ))
        if t.series:
            fig.add_annotation(x=t.series[-1].round, y=t.total, text=t.code, xanchor="left",
                               showarrow=False, font=dict(color=color, size=10))

    fig.update_layout(xaxis=dict(title="Race Round", dtick=1), yaxis=dict(title="Total Points", gridcolor="#334155"))
    return _dark(fig)


# ==========================================
# 3. PERFORMANCE MATRIX
# ==========================================
def _season_scatter(view):
    pts = view.points
    max_val = max([20.0] + [max(p.avg_start, p.avg_finish) for p in pts])
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=[max_val + 1, 1], y=[max_val + 1, 1], mode="lines",
                             line=dict(color="#999999", dash="dash"), hoverinfo="skip"))
    fig.add_trace(go.Scatter(
        x=[p.avg_start for p in pts], y=[p.avg_finish for p in pts],
        mode="markers", customdata=[p.driver_id for p in pts],
        text=[f"<b>{p.driver_name}</b><br>Avg Start: {p.avg_start:.1f}<br>Avg Finish: {p.avg_finish:.1f}" for p in pts],
        hoverinfo="text",
        marker=dict(size=10, color=[GAIN if p.gained else F1_RED for p in pts], opacity=0.8),
    ))
    fig.update_layout(xaxis=dict(title="Avg Starting Position (Grid)", autorange="reversed"),
                      yaxis=dict(title="Avg Finishing Position", autorange="reversed"))
    return fig


def _driver_delta(view):
    fig = go.Figure()
    for p in view.points:
        fig.add_trace(go.Scatter(x=[p.round, p.round], y=[p.start, p.finish], mode="lines",
                                 line=dict(color=_delta_color(p.delta), width=2), hoverinfo="skip"))
    fig.add_trace(go.Scatter(
        x=[p.round for p in view.points], y=[p.start for p in view.points], mode="markers",
        marker=dict(size=7, color="#222222", line=dict(color=NEUTRAL, width=1.5)),
        text=[f"Start: P{p.start}" for p in view.points], hoverinfo="text",
    ))
    fig.add_trace(go.Scatter(
        x=[p.round for p in view.points], y=[p.finish for p in view.points], mode="markers",
        marker=dict(size=10, color=[_delta_color(p.delta) for p in view.points]),
        text=[f"<b>{p.circuit_name}</b><br>Start: P{p.start} → Finish: P{p.finish}" for p in view.points],
        hoverinfo="text",
    ))
    fig.update_layout(xaxis=dict(title="Race Round", tickmode="array", tickvals=list(view.rounds)),
                      yaxis=dict(title="Position (1st is Top)", range=[20.5, 0.5]))
    return fig


def _driver_history(view):
    entries = view.entries
    fig = go.Figure(go.Scatter(
        x=[e.year for e in entries], y=[e.finish for e in entries], mode="lines+markers",
        line=dict(color=SELECTED, width=2),
        text=[f"<b>{e.year}</b><br>Start: {e.start}<br>Finish: {e.finish}" for e in entries],
        hoverinfo="text",
    ))
    fig.update_layout(title=f"{view.driver_name} @ {view.circuit_name}: History",
                      xaxis=dict(title="Season", dtick=1), yaxis=dict(range=[22, 0.5]))
    return fig


_MATRIX_FIGURES = {
    MatrixMode.SEASON: _season_scatter,
    MatrixMode.DRIVER: _driver_delta,
    MatrixMode.DRIVER_CIRCUIT: _driver_history,
}


def matrix_figure(view):
    """Plotly figure for chart-shaped modes, None for the circuit grid table."""
    builder = _MATRIX_FIGURES.get(view.mode)
    if builder is None or view.is_empty:
        return None
    return _dark(builder(view))
